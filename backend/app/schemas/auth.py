"""Auth & Account Schemas — registration, login, and account payloads.

Invariants:
    - email, password, name are required and non-blank on register
    - email is whitespace-stripped on both register and login, so the stored
      address is the one login looks up
    - password never appears in any response model
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)
    name: str = Field(min_length=1, max_length=255)
    age: int | None = Field(None, ge=0, le=150)
    gender: str | None = Field(None, max_length=32)

    @field_validator("email", "name")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        return v.strip()


class TokenResponse(BaseModel):
    token: str


class MessageResponse(BaseModel):
    message: str


class AccountResponse(BaseModel):
    """Profile as shown on the account screen."""
    model_config = ConfigDict(from_attributes=True)

    email: str
    name: str
    picture: str | None = None
    number: str | None = None
    age: int | None = None
    gender: str | None = None
