from datetime import datetime
from pydantic import BaseModel, ConfigDict

from typing import Optional


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "a@x.com",
                    "password": "123456",
                    "first_name": "A",
                    "last_name": "B",
                    "phone": "0812345678"
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str
    membership_id: str
    member_level: str
    points: int
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse


class MembershipResponse(BaseModel):
    membership_id: str
    member_level: str
    points: int
    member_since: str
    full_name: str
    email: str
    phone: str


class ErrorResponse(BaseModel):
    error: str
