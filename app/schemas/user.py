from pydantic import Field
from typing import List, Optional
from datetime import datetime
from app.models.user import Role
from app.schemas.common import CamelModel, RequestModel


class LoginRequest(RequestModel):
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "password": "myPassword123"
            }
        }


class RegisterRequest(RequestModel):
    email: Optional[str] = Field(None, max_length=255, description="User email address")
    name: Optional[str] = Field(None, max_length=100, description="First name")
    surname: Optional[str] = Field(None, max_length=100, description="Last name")
    password: Optional[str] = Field(None, description="Password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "name": "John",
                "surname": "Doe",
                "password": "myPassword123"
            }
        }


class UpdateRoleRequest(RequestModel):
    # Kept as a plain string so an off-enum value is reported as an invalid role
    role: Optional[str] = Field(None, description="USER or ADMIN")


class UpdatePasswordRequest(RequestModel):
    password: Optional[str] = Field(None, description="New password (minimum 6 characters)")


class UserPublic(CamelModel):
    id: int
    email: str
    name: str
    surname: str
    role: Role


class AdminUser(UserPublic):
    created_at: datetime


class LoginResponse(CamelModel):
    success: bool = True
    token: str
    user: UserPublic


class RegisterResponse(CamelModel):
    success: bool = True
    message: str
    user: UserPublic


class UserListResponse(CamelModel):
    success: bool = True
    users: List[AdminUser]
