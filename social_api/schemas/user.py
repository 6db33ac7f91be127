# ============================================================================
# FILE: social_api/schemas/user.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for user registration (presence is checked by the auth service)"""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    """Schema for user login; username also accepts an email"""
    username: Optional[str] = None
    password: Optional[str] = None

class UserPublic(BaseModel):
    """Public view of a user, without the password hash"""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class CurrentUser(BaseModel):
    """Authenticated caller resolved from the bearer token"""
    id: str
    username: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True
        alias_generator = to_camel
        populate_by_name = True

class AuthResponse(BaseModel):
    """Register/login response"""
    message: str
    token: str
    user: UserPublic

class ProfileResponse(BaseModel):
    message: str
    user: UserPublic
