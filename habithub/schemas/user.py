# ============================================================================
# FILE: habithub/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=20)

class UserLogin(BaseModel):
    """Schema for user login"""
    username: str = Field(..., min_length=3, max_length=20)
    password: str = Field(..., min_length=8, max_length=20)

class UserUpdate(BaseModel):
    """Schema for profile update; all fields optional"""
    username: Optional[str] = Field(default=None, min_length=3, max_length=20)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8, max_length=20)

class UserResponse(BaseModel):
    """User without password hash"""
    user_id: int
    username: str
    email: str
    created_at: Optional[datetime] = None
    habit_id: Optional[int] = None
    habit_frequency: Optional[int] = None
    habit_name: Optional[str] = None

    class Config:
        from_attributes = True

class UserMessageResponse(BaseModel):
    message: str
    user: UserResponse

class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserResponse

class DeletedUser(BaseModel):
    user_id: int

class UserDeleteResponse(BaseModel):
    message: str
    user: DeletedUser

class AvailabilityResponse(BaseModel):
    available: bool
