"""Auth Routes — registration and login (the only unauthenticated writes).

Invariants:
    - Duplicate email → DuplicateEmailError, no row inserted
    - Password stored only as a one-way hash
    - Login: unknown email → 404, wrong password → 401, otherwise a fresh token
    - Token claims carry the stored user id and email

Design Decisions:
    - Check-then-insert plus IntegrityError catch: the unique index settles races
      between two concurrent registrations with the same email
    - Hashing/verification run in a worker thread: pbkdf2 is CPU-bound and would
      stall every other request on the loop
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import Identity, UserId
from app.core.errors import (
    DuplicateEmailError, InvalidCredentialsError, ResourceNotFoundError,
)
from app.core.security import hash_password, issue_access_token, verify_password
from app.infrastructure.database import get_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest, MessageResponse, RegisterRequest, TokenResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post(
    "/register", response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create an account; rejects an email that is already registered."""
    result = await db.execute(select(User.id).where(User.email == body.email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(body.email)

    hashed = await asyncio.to_thread(hash_password, body.password)
    user = User(
        email=body.email, password=hashed, name=body.name,
        age=body.age, gender=body.gender,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateEmailError(body.email)

    logger.info("User registered", extra={"user_id": user.id})
    return MessageResponse(message="ลงทะเบียนผู้ใช้สำเร็จ")


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email + password for a bearer token."""
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    if user is None:
        raise ResourceNotFoundError("User", body.email, message="ไม่พบผู้ใช้")

    matches = await asyncio.to_thread(verify_password, body.password, user.password)
    if not matches:
        raise InvalidCredentialsError()

    token = issue_access_token(
        Identity(id=UserId(user.id), email=user.email),
        settings.access_token_secret,
        algorithm=settings.access_token_algorithm,
        expires_in=settings.access_token_ttl,
    )
    logger.info("User logged in", extra={"user_id": user.id})
    return TokenResponse(token=token)
