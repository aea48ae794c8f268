from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from nodues.core.database import get_db
from nodues.core.exceptions import ConflictError, InvalidCredentials, InvalidToken, Unauthenticated
from nodues.core.logging_config import get_logger
from nodues.core.security import (
    Identity,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from nodues.models.clearance import Clearance, Department, DepartmentClearance
from nodues.models.user import Role, User
from nodues.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserOut

logger = get_logger(__name__)

_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# Checked against for unknown emails; every failed login runs one bcrypt verify
_DUMMY_HASH = hash_password("not-a-real-password")


def new_clearance(student: User) -> Clearance:
    return Clearance(
        student=student,
        departments=[DepartmentClearance(department=dept) for dept in Department],
    )


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    role: Role,
    name: str,
    roll_no: str | None = None,
    course: str | None = None,
    year: str | None = None,
    department: str | None = None,
) -> User:
    """Create a user and, for students, their clearance record in one transaction."""
    if db.query(User).filter(User.email == email).first():
        raise ConflictError()
    user = User(
        email=email,
        hashed_password=hash_password(password),
        role=Role(role).value,
        name=name,
        roll_no=roll_no,
        course=course,
        year=year,
        department=department,
    )
    db.add(user)
    if user.role == Role.student.value:
        db.add(new_clearance(user))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError() from exc
    except Exception:
        db.rollback()
        raise
    db.refresh(user)
    logger.info("Created %s user %s (id=%s)", user.role, user.email, user.id)
    return user


def register_user(db: Session, payload: RegisterRequest) -> User:
    return create_user(db, **payload.model_dump())


def create_admin(db: Session, email: str, password: str, name: str) -> User:
    return create_user(db, email=email, password=password, role=Role.admin, name=name)


def login_user(db: Session, payload: LoginRequest) -> LoginResponse:
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None:
        verify_password(payload.password, _DUMMY_HASH)
        logger.warning("Login failed for %s: unknown email", payload.email)
        raise InvalidCredentials()
    if not verify_password(payload.password, user.hashed_password):
        logger.warning("Login failed for %s: bad password", payload.email)
        raise InvalidCredentials()
    logger.info("Login succeeded for %s", user.email)
    return LoginResponse(
        token=create_access_token(user.id, user.email, user.role),
        user=UserOut.model_validate(user),
    )


def get_current_identity(token: str | None = Depends(_oauth2_scheme)) -> Identity:
    if not token:
        raise Unauthenticated()
    try:
        return decode_access_token(token)
    except InvalidToken:
        logger.warning("Rejected invalid or expired token")
        raise


def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    user = db.get(User, identity.id)
    if user is None:
        raise InvalidToken()
    return user
