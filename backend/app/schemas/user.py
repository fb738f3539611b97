"""
DevConnector Backend - Account Schemas
======================================

What:  Request bodies for registration and login, and the token / current-user
       responses.
Why lenient request fields: required-field and format checks happen in
       AuthService so every missing field is reported together, in the same
       400 shape as the rest of the API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str = Field(description="Signed JWT to send as 'Authorization: Bearer <token>'")


class UserSummary(BaseModel):
    """Owner fields populated into profile responses."""
    id: str
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """Current user, without the password hash."""
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime

    model_config = {"from_attributes": True}
