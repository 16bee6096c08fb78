"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - File persistence accessed only through MediaStorage
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Storage treated as an external capability: local disk today, an object
      store later, without touching route code
"""

from typing import Protocol


class UploadLike(Protocol):
    """Structural contract for an incoming file (FastAPI UploadFile fits)."""
    filename: str | None

    async def read(self, size: int = -1) -> bytes: ...


class MediaStorage(Protocol):
    """Contract for uploaded-media persistence — implemented by shell."""
    async def save(self, upload: UploadLike) -> str:
        """Persist the upload and return the relative URL stored in records."""
        ...

    async def discard(self, url: str) -> None:
        """Remove media whose record was never written; unknown URLs are ignored."""
        ...
