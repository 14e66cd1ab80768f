from fastapi.testclient import TestClient
from coursehub.models.progress import ProgressRecord

from tests.helpers.asserts import api_call, assert_error


def _watch(course, module, lesson, watched=True):
    return {"course_id": course.id, "module_id": module.id, "lesson_id": lesson.id, "watched": watched}


def test_student_records_and_reads_progress(client: TestClient, student_user, student_headers, enroll, course_with_lessons):
    course, module, (l1, l2) = course_with_lessons
    enroll(student_user, course)

    record = api_call(client, "PUT", f"/progress/{student_user.id}", headers=student_headers, json=_watch(course, module, l1)).json()["data"]
    assert record["watched"] is True
    assert record["lesson_id"] == l1.id

    again = api_call(client, "PUT", f"/progress/{student_user.id}", headers=student_headers, json=_watch(course, module, l1)).json()["data"]
    assert again["id"] == record["id"]

    records = api_call(client, "GET", f"/progress/{student_user.id}", headers=student_headers).json()["data"]
    assert len(records) == 1

    completion = api_call(client, "GET", f"/progress/{student_user.id}/courses/{course.id}", headers=student_headers).json()["data"]
    assert completion == {
        "user_id": student_user.id,
        "course_id": course.id,
        "total_lessons": 2,
        "watched_lessons": 1,
        "percentage": 50,
        "eligible": False,
    }


def test_progress_requires_active_enrollment(client: TestClient, student_user, student_headers, course_with_lessons):
    course, module, (l1, _) = course_with_lessons

    r = client.put(f"/progress/{student_user.id}", headers=student_headers, json=_watch(course, module, l1))
    assert_error(r, 403, "FORBIDDEN")


def test_progress_of_another_user_is_forbidden(client: TestClient, user_factory, auth_headers, enroll, course_with_lessons):
    course, module, (l1, _) = course_with_lessons
    owner, other = user_factory(), user_factory()
    enroll(owner, course)

    assert_error(client.get(f"/progress/{owner.id}", headers=auth_headers(other)), 403, "FORBIDDEN")
    assert_error(client.put(f"/progress/{owner.id}", headers=auth_headers(other), json=_watch(course, module, l1)), 403, "FORBIDDEN")
    assert_error(client.get(f"/progress/{owner.id}/courses/{course.id}", headers=auth_headers(other)), 403, "FORBIDDEN")


def test_mismatched_lesson_path(client: TestClient, student_user, student_headers, enroll, course_with_lessons, module_factory, lesson_factory):
    course, module, _ = course_with_lessons
    enroll(student_user, course)
    other_module = module_factory(course, title="Other")
    stray = lesson_factory(other_module)

    r = client.put(f"/progress/{student_user.id}", headers=student_headers, json=_watch(course, module, stray))
    assert_error(r, 404, "NOT_FOUND")


def test_unknown_course(client: TestClient, student_user, student_headers):
    r = client.put(f"/progress/{student_user.id}", headers=student_headers, json={
        "course_id": 999, "module_id": 1, "lesson_id": 1, "watched": True,
    })
    assert_error(r, 404, "NOT_FOUND")
    assert_error(client.get(f"/progress/{student_user.id}/courses/999", headers=student_headers), 404, "NOT_FOUND")


def test_admin_course_report(client: TestClient, admin_headers, student_headers, student_user, enroll, course_with_lessons):
    course, module, (l1, l2) = course_with_lessons
    enroll(student_user, course)
    for lesson in (l1, l2):
        api_call(client, "PUT", f"/progress/{student_user.id}", headers=student_headers, json=_watch(course, module, lesson))

    report = api_call(client, "GET", f"/progress/admin/courses/{course.id}", headers=admin_headers).json()["data"]

    assert report == [{"user_id": student_user.id, "full_name": "Sam Student", "percentage": 100}]
    assert_error(client.get(f"/progress/admin/courses/{course.id}", headers=student_headers), 403, "FORBIDDEN")


def test_admin_progress_for_unknown_user_is_not_found(client: TestClient, db_session, admin_headers, course_with_lessons):
    course, module, (l1, _) = course_with_lessons

    r = client.put("/progress/987654", headers=admin_headers, json=_watch(course, module, l1))
    assert_error(r, 404, "NOT_FOUND")
    assert db_session.query(ProgressRecord).filter_by(user_id=987654).count() == 0

    r = client.get(f"/progress/987654/courses/{course.id}", headers=admin_headers)
    assert_error(r, 404, "NOT_FOUND")
