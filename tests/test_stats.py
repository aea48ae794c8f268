from nodues.models.clearance import Department
from nodues.services.clearances import update_department
from nodues.services.stats import compute_stats


def test_stats_counts_completed_and_pending(client, db_session, student, other_student, admin_headers):
    for department in Department:
        update_department(db_session, student.id, department.value, "approved", None, "Clerk")

    response = client.get("/api/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {
        "totalStudents": 2,
        "completedClearances": 1,
        "pendingClearances": 1,
    }


def test_stats_is_admin_only(client, staff_headers, student_headers):
    assert client.get("/api/stats", headers=staff_headers).status_code == 403
    assert client.get("/api/stats", headers=student_headers).status_code == 403


def test_stats_ignore_staff_accounts(db_session, staff, admin):
    stats = compute_stats(db_session)

    assert stats.total_students == 0
    assert stats.pending_clearances == 0
