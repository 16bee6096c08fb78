"""Post Routes — owner CRUD on posts plus the public shirts listing.

Invariants:
    - Every write is scoped `WHERE id = :post_id AND user_id = :caller`
    - A write that matches no row is a silent no-op (200 / 204), never a leak of
      whether the post exists for someone else
    - Image is only replaced on update when a new file is supplied
    - A stored image that ends up referenced by no row (failed write, or an
      update that matched nothing) is discarded before responding
    - /shirts is the only unauthenticated read

Design Decisions:
    - HTTP field `namepost` maps to column `title`; to_dict() owns the mapping
    - Newest first for both listings
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth_gate import require_identity
from app.core.domain_types import Identity
from app.core.partial_update import build_partial_update
from app.core.repository_protocols import MediaStorage
from app.infrastructure.database import get_db
from app.infrastructure.media_storage import get_media_storage
from app.models.post import Post
from app.schemas.auth import MessageResponse
from app.schemas.post import PostCreatedResponse, PostResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["posts"])


async def _store_optional(
    upload: UploadFile | None, storage: MediaStorage,
) -> str | None:
    if upload is None or not upload.filename:
        return None
    return await storage.save(upload)


@router.post(
    "/posts", response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    identity: Identity = Depends(require_identity),
    namepost: str = Form(..., max_length=255),
    description: str = Form(...),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Create a post owned by the caller."""
    image_url = await _store_optional(image, storage)
    post = Post(
        title=namepost, description=description,
        image=image_url, user_id=identity.id,
    )
    db.add(post)
    try:
        await db.commit()
    except Exception:
        if image_url is not None:
            await storage.discard(image_url)
        raise
    logger.info("Post created", extra={"user_id": identity.id, "post_id": post.id})
    return PostCreatedResponse(message="สร้างโพสต์สำเร็จ", post_id=post.id)


@router.get("/posts", response_model=list[PostResponse])
async def list_own_posts(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's posts."""
    result = await db.execute(
        select(Post).where(Post.user_id == identity.id).order_by(Post.id.desc()),
    )
    return [PostResponse(**p.to_dict()) for p in result.scalars().all()]


@router.put("/posts/{post_id}", response_model=MessageResponse)
async def update_post(
    post_id: int,
    identity: Identity = Depends(require_identity),
    namepost: str = Form(..., max_length=255),
    description: str = Form(...),
    image: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Update one of the caller's posts; other users' posts are left untouched."""
    image_url = await _store_optional(image, storage)
    stmt = build_partial_update(
        Post, Post.id == post_id, Post.user_id == identity.id,
        required={"title": namepost, "description": description},
        optional={"image": image_url},
    )
    try:
        result = await db.execute(stmt)
        await db.commit()
    except Exception:
        if image_url is not None:
            await storage.discard(image_url)
        raise
    if result.rowcount == 0:
        if image_url is not None:
            await storage.discard(image_url)
        logger.warning(
            "Post update matched no rows",
            extra={"user_id": identity.id, "post_id": post_id},
        )
    return MessageResponse(message="อัปเดตโพสต์สำเร็จ")


@router.delete(
    "/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(
    post_id: int,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """Delete one of the caller's posts (no-op when not owned)."""
    result = await db.execute(
        delete(Post).where(Post.id == post_id, Post.user_id == identity.id),
    )
    await db.commit()
    logger.info(
        f"Post delete removed {result.rowcount} row(s)",
        extra={"user_id": identity.id, "post_id": post_id},
    )


@router.get("/shirts", response_model=list[PostResponse])
async def list_shirts(db: AsyncSession = Depends(get_db)):
    """Public listing of every post."""
    result = await db.execute(select(Post).order_by(Post.id.desc()))
    return [PostResponse(**p.to_dict()) for p in result.scalars().all()]
