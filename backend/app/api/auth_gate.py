"""Auth Gate — bearer-token dependency that yields the caller's Identity.

Invariants:
    - No Authorization bearer credential → MissingTokenError (401); a non-Bearer
      scheme (e.g. Basic) counts as no credential
    - Credential present but bad signature / expired / malformed claims → InvalidTokenError (403)
    - Valid credential → Identity handed to the handler as a parameter
    - Never touches the database: rejection happens before any store access

Design Decisions:
    - HTTPBearer(auto_error=False): FastAPI's own error would collapse 401/403
      into one status; we need the split
    - Identity is a return value, not request.state: handlers declare it explicitly
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings
from app.core.domain_types import Identity
from app.core.errors import MissingTokenError
from app.core.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Resolve the verified caller or reject the request."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    identity = decode_access_token(
        credentials.credentials,
        settings.access_token_secret,
        algorithm=settings.access_token_algorithm,
    )
    logger.debug("Authenticated request", extra={"user_id": identity.id})
    return identity
