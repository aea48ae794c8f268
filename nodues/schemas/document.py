from datetime import datetime

from pydantic import Field

from nodues.schemas.common import CamelModel


class DocumentOut(CamelModel):
    id: int
    student_id: int
    file_name: str
    file_type: str | None = None
    file_path: str
    uploaded_at: datetime | None = Field(None, serialization_alias="uploadDate")


class DocumentUploadResponse(CamelModel):
    message: str
    document: DocumentOut
