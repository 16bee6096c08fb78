"""Cart Routes — add, list, and remove shirts in the caller's cart.

Invariants:
    - Every statement filters on Identity.id; the cart of another user is unreachable
    - Add is a single INSERT ... SELECT from posts: 0 rows inserted ⇔ shirt not found
    - Duplicate entries for the same shirt are allowed (no uniqueness)
    - Remove deletes every entry of that shirt for the caller; 204 even when none matched

Design Decisions:
    - INSERT ... SELECT over check-then-insert: existence check and write are one
      statement, so a concurrently deleted post can't leave a dangling entry
    - Core insert on the table: ORM unit-of-work not needed for a set-based insert
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import Integer, delete, insert, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.auth_gate import require_identity
from app.core.domain_types import Identity
from app.core.errors import ResourceNotFoundError
from app.infrastructure.database import get_db
from app.models.cart_entry import CartEntry
from app.models.post import Post
from app.schemas.auth import MessageResponse
from app.schemas.cart import CartAddRequest, CartItemResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cart", tags=["cart"])


@router.post(
    "", response_model=MessageResponse, status_code=status.HTTP_201_CREATED,
)
async def add_to_cart(
    body: CartAddRequest,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """Put a shirt in the caller's cart."""
    stmt = insert(CartEntry.__table__).from_select(
        ["user_id", "shirt_id"],
        select(literal(int(identity.id), Integer), Post.id).where(
            Post.id == body.shirt_id,
        ),
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        await db.rollback()
        raise ResourceNotFoundError(
            "Shirt", str(body.shirt_id), message="ไม่พบเสื้อ",
        )
    await db.commit()
    logger.info(
        "Shirt added to cart",
        extra={"user_id": identity.id, "shirt_id": body.shirt_id},
    )
    return MessageResponse(message="เพิ่มสินค้าลงตะกร้าสำเร็จ")


@router.get("", response_model=list[CartItemResponse])
async def list_cart(
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's cart with each shirt's details."""
    result = await db.execute(
        select(
            CartEntry.id, CartEntry.shirt_id,
            Post.title, Post.description, Post.image,
        )
        .join(Post, Post.id == CartEntry.shirt_id)
        .where(CartEntry.user_id == identity.id)
        .order_by(CartEntry.id),
    )
    return [
        CartItemResponse(
            id=row.id, shirt_id=row.shirt_id, namepost=row.title,
            description=row.description, image=row.image,
        )
        for row in result.all()
    ]


@router.delete(
    "/{shirt_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_from_cart(
    shirt_id: int,
    identity: Identity = Depends(require_identity),
    db: AsyncSession = Depends(get_db),
):
    """Remove a shirt from the caller's cart (no-op when absent)."""
    result = await db.execute(
        delete(CartEntry).where(
            CartEntry.user_id == identity.id, CartEntry.shirt_id == shirt_id,
        ),
    )
    await db.commit()
    logger.info(
        f"Cart remove deleted {result.rowcount} row(s)",
        extra={"user_id": identity.id, "shirt_id": shirt_id},
    )
