from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from hostelhub.models.enums import Role


class UserRegister(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)   # bcrypt limit
    role: Role
    hostel: Optional[str] = None
    block: Optional[str] = None
    room: Optional[str] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    hostel: Optional[str]
    block: Optional[str]
    room: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
