"""Authentication-related Pydantic schemas."""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request to create a new account."""
    email: EmailStr
    password: str = Field(min_length=1)
    first_name: str
    last_name: str
    account_type: Literal["student", "employer", "administrator"]


class LoginRequest(BaseModel):
    """Request to log in with email and password."""
    email: str
    password: str


class AuthResponse(BaseModel):
    """Response after successful registration or login.

    ``uuid`` is the bearer token for every authenticated call.
    """
    success: bool = True
    uuid: str
    account_type: str


class AuthFailureResponse(BaseModel):
    success: bool = False
    error: str
