"""Local Media Storage — generated names, on-disk writes, error mapping.

Invariants:
    - Only a sane extension of the client filename survives
    - save() writes the bytes under root and returns <prefix>/<name>
    - OSError surfaces as StorageError
    - discard() removes only files under root
"""

import re

import pytest

from app.core.errors import StorageError
from app.infrastructure.media_storage import LocalMediaStorage, generate_filename


class _FakeUpload:
    def __init__(self, filename, data):
        self.filename = filename
        self._data = data

    async def read(self, size: int = -1) -> bytes:
        return self._data


def test_generate_filename_keeps_extension_lowercased():
    name = generate_filename("Photo.JPG", now_ms=1700000000000)
    assert re.fullmatch(r"1700000000000-[0-9a-f]{8}\.jpg", name)


@pytest.mark.parametrize("original", [
    "../../etc/passwd", None, "", "noext", "evil.ph p", "x." + "a" * 20,
])
def test_generate_filename_drops_unsafe_extension(original):
    name = generate_filename(original, now_ms=1)
    assert re.fullmatch(r"1-[0-9a-f]{8}", name)


def test_generate_filename_is_unique_within_same_millisecond():
    assert generate_filename("a.png", now_ms=1) != generate_filename("a.png", now_ms=1)


async def test_save_writes_file_and_returns_url(tmp_path):
    storage = LocalMediaStorage(tmp_path / "uploads", "/uploads/")

    url = await storage.save(_FakeUpload("tee.png", b"data"))

    assert url.startswith("/uploads/") and url.endswith(".png")
    assert (tmp_path / "uploads" / url.rsplit("/", 1)[1]).read_bytes() == b"data"


async def test_save_maps_os_error_to_storage_error(tmp_path):
    blocker = tmp_path / "uploads"
    blocker.write_text("not a directory")
    storage = LocalMediaStorage(blocker)

    with pytest.raises(StorageError):
        await storage.save(_FakeUpload("tee.png", b"data"))


async def test_discard_removes_saved_file(tmp_path):
    storage = LocalMediaStorage(tmp_path, "/uploads")
    url = await storage.save(_FakeUpload("tee.png", b"data"))

    await storage.discard(url)

    assert list(tmp_path.iterdir()) == []


@pytest.mark.parametrize("url", [
    "/uploads/../secret.txt", "/elsewhere/secret.txt", "/uploads/", "/uploads/..",
])
async def test_discard_ignores_foreign_urls(tmp_path, url):
    root = tmp_path / "uploads"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("keep")
    (root / "secret.txt").write_text("keep")

    await LocalMediaStorage(root, "/uploads").discard(url)

    assert (tmp_path / "secret.txt").exists()
    assert (root / "secret.txt").exists()
