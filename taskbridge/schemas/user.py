# taskbridge/schemas/user.py
from pydantic import EmailStr
from typing import Optional
from datetime import datetime

from taskbridge.models.user import Role
from taskbridge.schemas.common import CamelModel


class UserCreate(CamelModel):
    name: str
    email: EmailStr
    password: str
    role: Role = Role.USER


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserBasic(CamelModel):
    id: int
    name: str
    email: str
    role: Role


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: Role
    suspended: bool
    available: bool
    availability_status: Optional[str] = None
    created_at: datetime


class RoleUpdate(CamelModel):
    role: Role


class AvailabilityUpdate(CamelModel):
    available: Optional[bool] = None
    status: Optional[str] = None


class PasswordResetRequest(CamelModel):
    email: str


class PasswordResetCode(CamelModel):
    message: str
    code: str


class PasswordReset(CamelModel):
    email: str
    otp: str
    password: str
