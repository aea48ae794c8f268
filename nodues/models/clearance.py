from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from nodues.models.base import Base


class Department(str, Enum):
    library = "library"
    hostel = "hostel"
    accounts = "accounts"
    lab = "lab"
    department = "department"
    placement = "placement"


class DepartmentStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class ClearanceStatus(str, Enum):
    pending = "pending"
    completed = "completed"


class Clearance(Base):
    __tablename__ = "clearances"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    status = Column(String, nullable=False, default=ClearanceStatus.pending.value)
    submitted_at = Column(DateTime, default=datetime.utcnow)

    student = relationship("User")
    departments = relationship(
        "DepartmentClearance",
        back_populates="clearance",
        order_by="DepartmentClearance.id",
        cascade="all, delete-orphan",
    )

    def department(self, key: Department) -> "DepartmentClearance":
        for entry in self.departments:
            if entry.department == key:
                return entry
        raise KeyError(key.value)

    def recompute_status(self) -> str:
        approved = {
            entry.department for entry in self.departments
            if entry.status == DepartmentStatus.approved.value
        }
        if approved == set(Department):
            self.status = ClearanceStatus.completed.value
        else:
            self.status = ClearanceStatus.pending.value
        return self.status


class DepartmentClearance(Base):
    __tablename__ = "clearance_departments"
    __table_args__ = (UniqueConstraint("clearance_id", "department"),)

    id = Column(Integer, primary_key=True, index=True)
    clearance_id = Column(Integer, ForeignKey("clearances.id"), nullable=False)
    department = Column(SAEnum(Department, native_enum=False, length=20), nullable=False)
    status = Column(String, nullable=False, default=DepartmentStatus.pending.value)
    comment = Column(String, nullable=True)
    approved_by = Column(String, nullable=True)
    approved_at = Column(DateTime, nullable=True)

    clearance = relationship("Clearance", back_populates="departments")
