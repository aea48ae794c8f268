from nodues.models.clearance import Clearance
from nodues.models.user import Role
from nodues.services.students import MAX_PAGE_SIZE, page_bounds


def _student_payload(register_payload, **fields):
    payload = register_payload("student", **fields)
    del payload["role"]
    return payload


def test_staff_lists_only_students(client, student, other_student, staff, staff_headers):
    response = client.get("/api/students", headers=staff_headers)

    assert response.status_code == 200
    emails = [s["email"] for s in response.json()]
    assert emails == [student.email, other_student.email]
    assert all("hashedPassword" not in s for s in response.json())


def test_student_cannot_list_students(client, student_headers):
    response = client.get("/api/students", headers=student_headers)

    assert response.status_code == 403


def test_list_students_requires_token(client):
    response = client.get("/api/students")

    assert response.status_code == 401


def test_list_students_paginates(client, make_user, admin_headers):
    created = [make_user() for _ in range(3)]

    response = client.get("/api/students?page=2&limit=2", headers=admin_headers)

    assert [s["id"] for s in response.json()] == [created[2].id]


def test_page_bounds_defaults_and_cap():
    assert page_bounds(None, None) == (0, 50)
    assert page_bounds(3, 10) == (20, 10)
    assert page_bounds(0, -5) == (0, 50)
    assert page_bounds(1, 1000) == (0, MAX_PAGE_SIZE)


def test_staff_adds_student_with_clearance(client, db_session, staff_headers, register_payload):
    payload = _student_payload(register_payload, rollNo="R9", course="MCA", year="2")

    response = client.post("/api/students", json=payload, headers=staff_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Student added successfully"
    assert body["student"]["role"] == "student"
    assert body["student"]["rollNo"] == "R9"
    assert db_session.query(Clearance).filter(Clearance.student_id == body["student"]["id"]).count() == 1


def test_add_student_forces_student_role(client, admin_headers, register_payload):
    payload = _student_payload(register_payload)
    payload["role"] = Role.admin.value

    response = client.post("/api/students", json=payload, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["student"]["role"] == "student"


def test_add_student_duplicate_email(client, student, staff_headers, register_payload):
    payload = _student_payload(register_payload, email=student.email)

    response = client.post("/api/students", json=payload, headers=staff_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "CONFLICT"


def test_student_cannot_add_student(client, student_headers, register_payload):
    response = client.post("/api/students", json=_student_payload(register_payload), headers=student_headers)

    assert response.status_code == 403


def test_oversized_page_is_rejected(client, staff_headers):
    response = client.get("/api/students?page=100000000000000000000&limit=10", headers=staff_headers)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_add_student_accepts_numeric_year(client, staff_headers, register_payload):
    payload = _student_payload(register_payload, year=3)

    response = client.post("/api/students", json=payload, headers=staff_headers)

    assert response.status_code == 201
    assert response.json()["student"]["year"] == "3"
