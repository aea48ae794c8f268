from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from nodues.core.exceptions import InvalidDepartment, NotFound
from nodues.core.logging_config import get_logger
from nodues.models.clearance import Clearance, ClearanceStatus, Department, DepartmentStatus
from nodues.services.students import page_bounds

logger = get_logger(__name__)


def parse_department(key: str) -> Department:
    try:
        return Department(key)
    except ValueError as exc:
        raise InvalidDepartment(key) from exc


def _query(db: Session):
    return db.query(Clearance).options(
        joinedload(Clearance.departments),
        joinedload(Clearance.student),
    )


def get_by_student(db: Session, student_id: int) -> Clearance:
    clearance = _query(db).filter(Clearance.student_id == student_id).first()
    if clearance is None:
        raise NotFound("Clearance")
    return clearance


def list_all(db: Session, page: int | None = None, limit: int | None = None) -> list[Clearance]:
    offset, limit = page_bounds(page, limit)
    # Page over ids first; joinedload on a collection would skew offset/limit
    ids = [
        row.id
        for row in db.query(Clearance.id).order_by(Clearance.id).offset(offset).limit(limit)
    ]
    if not ids:
        return []
    return _query(db).filter(Clearance.id.in_(ids)).order_by(Clearance.id).all()


def update_department(
    db: Session,
    student_id: int,
    department: str,
    status: DepartmentStatus,
    comment: str | None,
    approver_name: str | None,
) -> Clearance:
    """
    Overwrite one department's sub-record and recompute the overall status.

    The sub-record is replaced wholesale: a comment not supplied on this call
    is cleared. The overall status is ``completed`` only while all six
    departments are approved, so a later rejection reverts it to ``pending``.
    """
    key = parse_department(department)
    clearance = get_by_student(db, student_id)

    entry = clearance.department(key)
    entry.status = DepartmentStatus(status).value
    entry.comment = comment
    entry.approved_by = approver_name
    entry.approved_at = datetime.utcnow()

    previous = clearance.status
    clearance.recompute_status()
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(clearance)

    logger.info(
        "Clearance %s: %s set to %s by %s",
        student_id, key.value, entry.status, approver_name,
    )
    if previous != clearance.status:
        logger.info("Clearance %s: status %s -> %s", student_id, previous, clearance.status)
    return clearance


def count_completed(db: Session) -> int:
    return db.query(Clearance).filter(Clearance.status == ClearanceStatus.completed.value).count()
