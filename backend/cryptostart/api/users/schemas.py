"""Pydantic request/response schemas for Users API."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreateIn(BaseModel):
    email: EmailStr
    name: str | None = None
    password: str | None = Field(default=None, min_length=8)
    roles: List[str] = Field(default_factory=lambda: ["AUTHOR"])


class UserUpdateIn(BaseModel):
    name: str | None = None
    password: str | None = Field(default=None, min_length=8)
    roles: List[str] | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: EmailStr
    name: str | None
    roles: List[str]
