from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from . import DocumentOut, ORMModel, UserType


class UserBase(ORMModel):
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=20)
    avatar: Optional[str] = None
    user_type: UserType = UserType.USER


class UserCreate(UserBase):
    # bcrypt only looks at the first 72 bytes
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("phone")
    def validate_phone(cls, v):
        digits = v.replace("+", "", 1).replace(" ", "").replace("-", "")
        if not digits.isdigit():
            raise ValueError("Phone number may only contain digits, spaces, dashes and a leading +")
        return v


class UserOut(UserBase, DocumentOut):
    user_id: str


class AuthenticatedUserOut(UserOut):
    token: str
    refresh_token: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPairOut(BaseModel):
    token: str
    refresh_token: str
    token_type: str = "bearer"
