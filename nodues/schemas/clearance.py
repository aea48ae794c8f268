from datetime import datetime

from pydantic import Field, field_validator

from nodues.models.clearance import ClearanceStatus, Department, DepartmentStatus
from nodues.schemas.common import CamelModel
from nodues.schemas.student import StudentSummary


class DepartmentUpdateRequest(CamelModel):
    status: DepartmentStatus
    comment: str | None = None


class DepartmentEntryOut(CamelModel):
    status: DepartmentStatus
    comment: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = Field(None, serialization_alias="approvedDate")


class ClearanceOut(CamelModel):
    id: int
    student_id: int
    status: ClearanceStatus
    submitted_at: datetime | None = Field(None, serialization_alias="submittedDate")
    departments: dict[str, DepartmentEntryOut]
    student: StudentSummary | None = None

    @field_validator("departments", mode="before")
    @classmethod
    def _key_by_department(cls, value):
        # ORM rows arrive as a list; the wire format is keyed by department name
        if isinstance(value, dict):
            return value
        by_key = {Department(entry.department): entry for entry in value}
        return {dept.value: by_key[dept] for dept in Department if dept in by_key}


class ClearanceUpdateResponse(CamelModel):
    message: str
    clearance: ClearanceOut
