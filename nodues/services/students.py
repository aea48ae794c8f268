from sqlalchemy.orm import Session

from nodues.models.user import Role, User
from nodues.schemas.student import StudentCreateRequest
from nodues.services.auth import create_user

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def page_bounds(page: int | None, limit: int | None) -> tuple[int, int]:
    """Return (offset, limit) for a 1-based page, clamping the size to MAX_PAGE_SIZE."""
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else DEFAULT_PAGE_SIZE
    limit = min(limit, MAX_PAGE_SIZE)
    return (page - 1) * limit, limit


def list_students(db: Session, page: int | None = None, limit: int | None = None) -> list[User]:
    offset, limit = page_bounds(page, limit)
    return (
        db.query(User)
        .filter(User.role == Role.student.value)
        .order_by(User.id)
        .offset(offset)
        .limit(limit)
        .all()
    )


def add_student(db: Session, payload: StudentCreateRequest) -> User:
    return create_user(db, role=Role.student, **payload.model_dump())


def count_students(db: Session) -> int:
    return db.query(User).filter(User.role == Role.student.value).count()
