"""Security Primitives — password hashing and bearer token issue/verify.

Invariants:
    - Passwords are stored only as one-way hashes; verify_password never raises on a bad hash
    - Tokens are HS256-signed and carry exactly {id, email, iat, exp}
    - decode_access_token returns an Identity or raises InvalidTokenError — never a partial claims dict

Design Decisions:
    - passlib pbkdf2_sha256 over bcrypt: pure-python backend, no native build (ADR: slim container)
    - python-jose for JWT: verifies signature and exp in one call
    - `now` injectable on issue: tests pin the clock instead of sleeping past expiry
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.domain_types import Identity, UserId
from app.core.errors import InvalidTokenError

PWD_CONTEXT = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return PWD_CONTEXT.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return PWD_CONTEXT.verify(password, hashed)
    except (ValueError, TypeError):
        # unrecognized or corrupt hash in the row
        return False


def issue_access_token(
    identity: Identity,
    secret: str,
    *,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=20),
    now: datetime | None = None,
) -> str:
    """Sign a time-limited token asserting the caller's identity."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        **identity.to_claims(),
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_access_token(
    token: str, secret: str, *, algorithm: str = "HS256",
) -> Identity:
    """Verify signature + expiry and return the embedded identity."""
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise InvalidTokenError() from e

    user_id = claims.get("id")
    email = claims.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidTokenError()
    return Identity(id=UserId(user_id), email=email)
