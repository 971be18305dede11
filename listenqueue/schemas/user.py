# ============================================================================
# FILE: listenqueue/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field, StrictBool, StrictInt, StrictStr
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: StrictStr = Field(..., min_length=3, max_length=32)
    email: EmailStr
    password: StrictStr = Field(..., min_length=6)

class UserLogin(BaseModel):
    """Schema for user login"""
    username: StrictStr
    password: StrictStr

class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    username: str
    slug: str
    role: int
    banned_until: Optional[datetime] = None
    exiled: bool = False
    created_at: datetime

    class Config:
        from_attributes = True

class Token(BaseModel):
    """Schema for JWT token response"""
    access_token: str
    token_type: str = "JWT"

class BanRequest(BaseModel):
    """Ban for `time` milliseconds; 0 lifts the ban"""
    time: StrictInt = Field(..., ge=0)
    exiled: StrictBool = False

class MuteRequest(BaseModel):
    """Mute for `time` milliseconds; 0 unmutes"""
    time: StrictInt = Field(..., ge=0)

class MuteResponse(BaseModel):
    muted: bool

class RoleChange(BaseModel):
    role: StrictInt

class UsernameChange(BaseModel):
    username: StrictStr = Field(..., min_length=3, max_length=32)

class StatusChange(BaseModel):
    status: StrictInt

class StatusResponse(BaseModel):
    user_id: int
    status: int
