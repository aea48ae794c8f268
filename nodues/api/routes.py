from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile
from sqlalchemy.orm import Session

from nodues.core.database import get_db
from nodues.core.security import Identity
from nodues.models.user import User
from nodues.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserOut
from nodues.schemas.clearance import ClearanceOut, ClearanceUpdateResponse, DepartmentUpdateRequest
from nodues.schemas.common import MessageResponse
from nodues.schemas.document import DocumentOut, DocumentUploadResponse
from nodues.schemas.stats import StatsOut
from nodues.schemas.student import StudentCreateRequest, StudentCreateResponse
from nodues.services.auth import get_current_identity, get_current_user, login_user, register_user
from nodues.services.clearances import get_by_student, list_all, update_department
from nodues.services.documents import create_document, delete_document, get_document, list_documents
from nodues.services.policy import Action, authorize
from nodues.services.stats import compute_stats
from nodues.services.storage import FileSink, get_file_sink
from nodues.services.students import DEFAULT_PAGE_SIZE, add_student, list_students

router = APIRouter(prefix="/api")

# Largest id or page the database integer columns can take
_MAX_INT = 2**31 - 1


# ── Auth ──────────────────────────────────────────────────────────────────────

@router.post("/auth/register", response_model=RegisterResponse, status_code=201)
def register_endpoint(payload: RegisterRequest, db: Session = Depends(get_db)):
    user = register_user(db, payload)
    return {"message": "User registered successfully", "user": user}


@router.post("/auth/login", response_model=LoginResponse)
def login_endpoint(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_user(db, payload)


@router.get("/me", response_model=UserOut)
def me_endpoint(current_user: User = Depends(get_current_user)):
    return current_user


# ── Students ──────────────────────────────────────────────────────────────────

@router.get("/students", response_model=list[UserOut])
def list_students_endpoint(
    page: int = Query(1, le=_MAX_INT, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, capped at 200"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.list_students)
    return list_students(db, page, limit)


@router.post("/students", response_model=StudentCreateResponse, status_code=201)
def add_student_endpoint(
    payload: StudentCreateRequest,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.add_student)
    student = add_student(db, payload)
    return {"message": "Student added successfully", "student": student}


# ── Clearances ────────────────────────────────────────────────────────────────
# NOTE: /clearances/my-clearance MUST be registered before /clearances/{student_id}.

@router.get("/clearances/my-clearance", response_model=ClearanceOut)
def my_clearance_endpoint(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return get_by_student(db, identity.id)


@router.get("/clearances", response_model=list[ClearanceOut])
def list_clearances_endpoint(
    page: int = Query(1, le=_MAX_INT, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, capped at 200"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.view_all_clearances)
    return list_all(db, page, limit)


@router.get("/clearances/{student_id}", response_model=ClearanceOut)
def get_clearance_endpoint(
    student_id: int = Path(..., le=_MAX_INT),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.view_clearance, owner_id=student_id)
    return get_by_student(db, student_id)


def _update_department(
    student_id: int,
    department: str,
    payload: DepartmentUpdateRequest,
    identity: Identity,
    db: Session,
) -> dict:
    authorize(identity, Action.update_clearance)
    approver = db.get(User, identity.id)
    clearance = update_department(
        db,
        student_id,
        department,
        payload.status,
        payload.comment,
        approver.name if approver else identity.email,
    )
    return {"message": "Clearance updated successfully", "clearance": clearance}


@router.put("/clearances/{student_id}/{department}", response_model=ClearanceUpdateResponse)
def update_department_endpoint(
    payload: DepartmentUpdateRequest,
    student_id: int = Path(..., le=_MAX_INT),
    department: str = Path(...),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return _update_department(student_id, department, payload, identity, db)


# Alias used by the staff dashboard
@router.post(
    "/clearances/{student_id}/departments/{department}",
    response_model=ClearanceUpdateResponse,
)
def update_department_alias_endpoint(
    payload: DepartmentUpdateRequest,
    student_id: int = Path(..., le=_MAX_INT),
    department: str = Path(...),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return _update_department(student_id, department, payload, identity, db)


# ── Documents ─────────────────────────────────────────────────────────────────
# NOTE: /documents/my-documents MUST be registered before /documents/{student_id}.

@router.post("/documents/upload", response_model=DocumentUploadResponse, status_code=201)
def upload_document_endpoint(
    file: UploadFile | None = File(None),
    file_type: str | None = Form(None, alias="fileType"),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    sink: FileSink = Depends(get_file_sink),
):
    document = create_document(db, sink, identity.id, file, file_type)
    return {"message": "Document uploaded successfully", "document": document}


@router.get("/documents/my-documents", response_model=list[DocumentOut])
def my_documents_endpoint(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return list_documents(db, identity.id)


@router.get("/documents/{student_id}", response_model=list[DocumentOut])
def student_documents_endpoint(
    student_id: int = Path(..., le=_MAX_INT),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.view_documents, owner_id=student_id)
    return list_documents(db, student_id)


@router.delete("/documents/{document_id}", response_model=MessageResponse)
def delete_document_endpoint(
    document_id: int = Path(..., le=_MAX_INT),
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
    sink: FileSink = Depends(get_file_sink),
):
    document = get_document(db, document_id)
    if document is not None:
        authorize(identity, Action.delete_document, owner_id=document.student_id)
        delete_document(db, sink, document)
    return {"message": "Document deleted successfully"}


# ── Stats ─────────────────────────────────────────────────────────────────────

@router.get("/stats", response_model=StatsOut)
def stats_endpoint(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    authorize(identity, Action.view_stats)
    return compute_stats(db)
