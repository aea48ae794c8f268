from datetime import datetime

from pydantic import EmailStr, Field

from nodues.models.user import Role
from nodues.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role
    name: str = Field(..., min_length=1)
    roll_no: str | None = None
    course: str | None = None
    year: str | None = None
    department: str | None = None


class LoginRequest(CamelModel):
    # Any identifier is accepted; an unknown one fails as bad credentials
    email: str
    password: str


class UserOut(CamelModel):
    id: int
    email: str
    role: Role
    name: str
    roll_no: str | None = None
    course: str | None = None
    year: str | None = None
    department: str | None = None
    created_at: datetime | None = None


class RegisterResponse(CamelModel):
    message: str
    user: UserOut


class LoginResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserOut
