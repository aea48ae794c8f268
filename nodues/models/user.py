from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String

from nodues.models.base import Base


class Role(str, Enum):
    student = "student"
    staff = "staff"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, index=True)  # student/staff/admin
    name = Column(String, nullable=False)
    roll_no = Column(String, nullable=True)
    course = Column(String, nullable=True)
    year = Column(String, nullable=True)
    department = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
