"""Pydantic schemas for token exchange."""
from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class TokenIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
