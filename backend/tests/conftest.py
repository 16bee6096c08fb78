"""Root conftest — shared test configuration."""

import os
import tempfile

# Ensure tests never talk to a real database or reuse a production secret
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-secret-not-for-production")
os.environ.setdefault("LOG_FORMAT", "text")
# Not created here: the app must create its own upload directory on startup
os.environ.setdefault(
    "UPLOAD_DIR", os.path.join(tempfile.mkdtemp(prefix="shirtshop-"), "uploads"),
)
