from __future__ import annotations
from datetime import date
from typing import Optional, Set

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr
    login: str = Field(..., min_length=1, pattern=r"^\S+$")
    name: Optional[str] = None
    birthday: date


class UserCreateRequest(UserBase):
    pass


class UserUpdateRequest(UserBase):
    id: int = Field(..., ge=1)


class User(UserBase):
    id: Optional[int] = None
    friends: Set[int] = Field(default_factory=set)
