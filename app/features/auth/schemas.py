from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class LoginRequest(BaseModel):
    """Login request schema."""
    
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """User response schema."""
    
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: str
    organization_id: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class LoginResponse(BaseModel):
    """Login response schema."""
    
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class SeenFlagResponse(BaseModel):
    """State of a per-user dismissal flag."""
    
    flag: str
    seen: bool
