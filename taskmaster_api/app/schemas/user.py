"""
Pydantic models for user data.

``UserRead`` is the public view of an account and deliberately has no
password field, so a stored hash can never leak through a response.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictStr


class UserCredentials(BaseModel):
    """Body of the login and registration requests."""

    username: Optional[StrictStr] = Field(None, examples=["demo"])
    password: Optional[StrictStr] = Field(None, examples=["password123"])


class UserRead(BaseModel):
    id: int
    username: str

    model_config = {
        "from_attributes": True,
    }


class UserEnvelope(BaseModel):
    user: UserRead


class AuthResponse(BaseModel):
    """Returned by a successful login or registration."""

    success: bool = True
    token: str
    user: UserRead
