"""
Role-based access rules.

Every route calls :func:`authorize` before reading or writing data. The
``can_*`` predicates are pure and can be evaluated on their own.
"""

from enum import Enum

from nodues.core.exceptions import Forbidden
from nodues.core.security import Identity
from nodues.models.user import Role

_STAFF_ROLES = {Role.staff.value, Role.admin.value}


class Action(str, Enum):
    list_students = "list_students"
    add_student = "add_student"
    view_clearance = "view_clearance"
    update_clearance = "update_clearance"
    view_all_clearances = "view_all_clearances"
    view_stats = "view_stats"
    view_documents = "view_documents"
    delete_document = "delete_document"


def _is_staff(role: str) -> bool:
    return role in _STAFF_ROLES


def can_list_students(role: str) -> bool:
    return _is_staff(role)


def can_add_student(role: str) -> bool:
    return _is_staff(role)


def can_view_clearance(role: str, requester_id: int, target_id: int | None) -> bool:
    return _is_staff(role) or requester_id == target_id


def can_update_clearance(role: str) -> bool:
    return _is_staff(role)


def can_view_all_clearances(role: str) -> bool:
    return role == Role.admin.value


def can_view_stats(role: str) -> bool:
    return role == Role.admin.value


def can_view_documents(role: str, requester_id: int, owner_id: int | None) -> bool:
    return _is_staff(role) or requester_id == owner_id


def can_delete_document(role: str, requester_id: int, owner_id: int | None) -> bool:
    return _is_staff(role) or requester_id == owner_id


def is_allowed(identity: Identity, action: Action, owner_id: int | None = None) -> bool:
    role = identity.role
    if action == Action.list_students:
        return can_list_students(role)
    if action == Action.add_student:
        return can_add_student(role)
    if action == Action.view_clearance:
        return can_view_clearance(role, identity.id, owner_id)
    if action == Action.update_clearance:
        return can_update_clearance(role)
    if action == Action.view_all_clearances:
        return can_view_all_clearances(role)
    if action == Action.view_stats:
        return can_view_stats(role)
    if action == Action.view_documents:
        return can_view_documents(role, identity.id, owner_id)
    if action == Action.delete_document:
        return can_delete_document(role, identity.id, owner_id)
    return False


def authorize(identity: Identity, action: Action, owner_id: int | None = None) -> None:
    if not is_allowed(identity, action, owner_id):
        raise Forbidden()
