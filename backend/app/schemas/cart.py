"""Cart Schemas — add-to-cart body and cart listing rows.

Invariants:
    - shirtId is a positive integer (camelCase on the wire, snake_case in code)
"""

from pydantic import BaseModel, ConfigDict, Field


class CartAddRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    shirt_id: int = Field(alias="shirtId", gt=0)


class CartItemResponse(BaseModel):
    id: int
    shirt_id: int
    namepost: str
    description: str
    image: str | None = None
