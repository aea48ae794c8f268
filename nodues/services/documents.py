from fastapi import UploadFile
from sqlalchemy.orm import Session

from nodues.core.exceptions import NoFile
from nodues.core.logging_config import get_logger
from nodues.models.document import Document
from nodues.services.storage import FileSink

logger = get_logger(__name__)


def create_document(
    db: Session,
    sink: FileSink,
    student_id: int,
    file: UploadFile | None,
    file_type: str | None,
) -> Document:
    if file is None or not file.filename:
        raise NoFile()

    location = sink.save(file.file, file.filename)
    doc = Document(
        student_id=student_id,
        file_name=file.filename,
        file_type=file_type,
        file_path=location,
    )
    try:
        db.add(doc)
        db.commit()
    except Exception:
        db.rollback()
        sink.delete(location)
        raise
    db.refresh(doc)
    logger.info("Student %s uploaded %s (%s) as document %s", student_id, doc.file_name, file_type, doc.id)
    return doc


def list_documents(db: Session, student_id: int) -> list[Document]:
    return (
        db.query(Document)
        .filter(Document.student_id == student_id)
        .order_by(Document.id)
        .all()
    )


def get_document(db: Session, document_id: int) -> Document | None:
    return db.get(Document, document_id)


def delete_document(db: Session, sink: FileSink, doc: Document) -> None:
    """Delete the metadata row, then the stored bytes."""
    doc_id, location = doc.id, doc.file_path
    try:
        db.delete(doc)
        db.commit()
    except Exception:
        db.rollback()
        raise
    try:
        sink.delete(location)
    except OSError:
        logger.exception("Document %s deleted but stored file %s could not be removed", doc_id, location)
        raise
    logger.info("Deleted document %s (%s)", doc_id, location)
