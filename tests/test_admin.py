import pytest

from nodues.core.exceptions import ConflictError
from nodues.models.clearance import Clearance
from nodues.services.auth import create_admin


def test_create_admin(db_session):
    user = create_admin(db_session, "registrar@example.com", "s3cret-pass", "Registrar")

    assert user.role == "admin"
    assert db_session.query(Clearance).count() == 0


def test_create_admin_twice_conflicts(db_session):
    create_admin(db_session, "registrar@example.com", "s3cret-pass", "Registrar")

    with pytest.raises(ConflictError):
        create_admin(db_session, "registrar@example.com", "other-pass", "Registrar")
