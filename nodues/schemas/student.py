from pydantic import EmailStr, Field

from nodues.schemas.auth import UserOut
from nodues.schemas.common import CamelModel


class StudentCreateRequest(CamelModel):
    """Role is always forced to student."""

    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1)
    roll_no: str | None = None
    course: str | None = None
    year: str | None = None
    department: str | None = None


class StudentCreateResponse(CamelModel):
    message: str
    student: UserOut


class StudentSummary(CamelModel):
    id: int
    name: str
    email: str
    roll_no: str | None = None
    course: str | None = None
    year: str | None = None
