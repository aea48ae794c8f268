from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from nodues.models.base import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    file_name = Column(String, nullable=False)
    file_type = Column(String, nullable=True)  # free-text tag, e.g. "id-card", "fee-receipt"
    file_path = Column(String, nullable=False)
    uploaded_at = Column(DateTime, default=datetime.utcnow)
