# backend/schemas/user.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests; a requested role is never honoured
class UserCreate(UserBase):
    password: str = Field(min_length=1)
    name: Optional[str] = None
    role: Optional[str] = None

# Output schema for user profile details
class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: str
    name: Optional[str] = None

# Schema for login/register responses
class AuthResponse(BaseModel):
    token: str
    user: UserResponse
