"""Pydantic schemas for sign-up, sign-in and session responses."""

import re

from pydantic import BaseModel, Field, field_validator

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def _normalise_email(v: str) -> str:
    v = v.strip()
    if not _EMAIL_RE.match(v):
        raise ValueError("Invalid email address")
    return v.lower()


class SignUpRequest(BaseModel):
    name: str = Field(..., min_length=3, max_length=200)
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalise_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Name is required")
        if "," in v:
            raise ValueError("Name cannot contain commas")
        return v


class SignInRequest(BaseModel):
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _normalise_email(v)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ExistsResponse(BaseModel):
    exists: bool
