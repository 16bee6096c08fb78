"""Profile Routes — the caller's own account: update (multipart) and read.

Invariants:
    - Both routes act on Identity.id only; no user id is accepted from the client
    - name and email are always written; number/age/gender/picture only when supplied
    - Email collision is checked before the picture is stored; a picture whose
      UPDATE fails is discarded, so no file outlives a rejected request
    - Email collision with another account → DuplicateEmailError (400)
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth_gate import require_identity
from app.core.domain_types import Identity
from app.core.errors import (
    DuplicateEmailError, InputValidationError, ResourceNotFoundError,
)
from app.core.partial_update import build_partial_update
from app.core.repository_protocols import MediaStorage
from app.infrastructure.database import get_db
from app.infrastructure.media_storage import get_media_storage
from app.models.user import User
from app.schemas.auth import AccountResponse, MessageResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["profile"])


@router.post("/updateProfile", response_model=MessageResponse)
async def update_profile(
    identity: Identity = Depends(require_identity),
    name: str = Form(...),
    email: str = Form(...),
    number: str | None = Form(None),
    age: int | None = Form(None, ge=0, le=150),
    gender: str | None = Form(None),
    profile_picture: UploadFile | None = File(None, alias="profilePicture"),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Update the caller's profile; unset optional fields keep their value."""
    name, email = name.strip(), email.strip()
    if not name or not email:
        raise InputValidationError(
            "กรุณากรอกชื่อและอีเมลให้ครบถ้วน", field="name" if not name else "email",
        )

    taken = await db.scalar(
        select(User.id).where(User.email == email, User.id != identity.id),
    )
    if taken is not None:
        raise DuplicateEmailError(email)

    picture = None
    if profile_picture is not None and profile_picture.filename:
        picture = await storage.save(profile_picture)

    stmt = build_partial_update(
        User, User.id == identity.id,
        required={"name": name, "email": email},
        optional={
            "number": number, "age": age, "gender": gender, "picture": picture,
        },
    )
    try:
        await db.execute(stmt)
        await db.commit()
    except Exception as e:
        if picture is not None:
            await storage.discard(picture)
        if isinstance(e, IntegrityError):
            await db.rollback()
            raise DuplicateEmailError(email) from e
        raise

    logger.info("Profile updated", extra={"user_id": identity.id})
    return MessageResponse(message="อัปเดตข้อมูลสำเร็จ")


@router.get("/account", response_model=AccountResponse)
async def get_account(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """Return the caller's stored profile."""
    result = await db.execute(select(User).where(User.id == identity.id))
    user = result.scalar_one_or_none()
    if user is None:
        raise ResourceNotFoundError("User", str(identity.id), message="ไม่พบผู้ใช้")
    return AccountResponse.model_validate(user)
