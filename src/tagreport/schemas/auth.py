"""
Authentication schemas
"""

from typing import Optional

from pydantic import BaseModel, Field

from .enums import UserRole


class TokenPayload(BaseModel):
    """Claims carried by an access token"""
    user_id: int = Field(..., description="User identifier")
    username: str = Field(..., description="Username")
    role: UserRole = Field(UserRole.TECHNICIAN, description="Role at time of login")
    jti: Optional[str] = Field(None, description="JWT ID for the revocation list")
    exp: Optional[int] = Field(None, description="Expiration timestamp")


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class LoginResponse(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
    user_id: int
    role: UserRole


class RegisterRequest(BaseModel):
    """Self-registration always creates a technician account"""
    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class APIResponse(BaseModel):
    status: str
    message: Optional[str] = None
