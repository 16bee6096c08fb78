"""Local Media Storage — persists uploaded pictures on disk under a public directory.

Invariants:
    - Stored names are generated (<epoch-ms>-<8 hex><ext>); the client filename
      contributes only its extension, so no path from the client reaches the disk
    - save() returns the relative URL (<url_prefix>/<name>) that records store
    - discard() only removes names under root; foreign or traversing URLs are ignored
    - Disk writes run in a worker thread; the event loop never blocks on IO
    - OSError mapped to StorageError (core/errors.py)

Design Decisions:
    - Implements core MediaStorage protocol: routes depend on the protocol via
      get_media_storage, tests override it with a tmp_path instance
    - Upload directory created lazily on first save, not at import
"""

import asyncio
import logging
import re
import time
import uuid
from pathlib import Path

from app.config import get_settings
from app.core.errors import StorageError
from app.core.repository_protocols import MediaStorage, UploadLike

logger = logging.getLogger(__name__)

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def generate_filename(original: str | None, now_ms: int | None = None) -> str:
    """Build a collision-resistant stored name keeping only a sane extension."""
    suffix = Path(original or "").suffix.lower()
    if not _SAFE_SUFFIX.match(suffix):
        suffix = ""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{uuid.uuid4().hex[:8]}{suffix}"


class LocalMediaStorage:
    """Writes uploads to `root` and serves them from `url_prefix`."""

    def __init__(self, root: str | Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    async def save(self, upload: UploadLike) -> str:
        data = await upload.read()
        name = generate_filename(upload.filename)
        try:
            await asyncio.to_thread(self._write, name, data)
        except OSError as e:
            logger.error(f"Failed to write upload {name}: {e}")
            raise StorageError("could not write file") from e
        logger.info(f"Stored upload {name} ({len(data)} bytes)")
        return f"{self.url_prefix}/{name}"

    async def discard(self, url: str) -> None:
        prefix, _, name = url.rpartition("/")
        if prefix != self.url_prefix or not name or name in (".", ".."):
            return
        await asyncio.to_thread((self.root / name).unlink, missing_ok=True)
        logger.info(f"Discarded orphaned upload {name}")

    def _write(self, name: str, data: bytes) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        (self.root / name).write_bytes(data)


def get_media_storage() -> MediaStorage:
    """FastAPI dependency for the configured media storage."""
    settings = get_settings()
    return LocalMediaStorage(settings.upload_dir, settings.upload_url_prefix)
