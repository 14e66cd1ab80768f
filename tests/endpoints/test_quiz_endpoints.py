from fastapi.testclient import TestClient

from coursehub.core.constants import EnrollmentStatusEnum
from coursehub.models.quiz_response import QuizResponse
from tests.helpers.asserts import api_call, assert_error


def _quiz(client, headers, module):
    return api_call(client, "POST", "/quizzes", headers=headers, json={
        "module_id": module.id,
        "question": "Capital of France?",
        "options": ["Paris", "Lyon", "Nice"],
        "correct_answer": "Paris",
        "min_score": 7.5,
    }).json()["data"]


def test_admin_sees_correct_answer_on_create(client: TestClient, admin_headers, course_factory, module_factory):
    quiz = _quiz(client, admin_headers, module_factory(course_factory()))
    assert quiz["correct_answer"] == "Paris"
    assert quiz["order"] == 1


def test_quiz_validation(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    one_option = client.post("/quizzes", headers=admin_headers, json={
        "module_id": module.id, "question": "?", "options": ["A"], "correct_answer": "A", "min_score": 1,
    })
    answer_missing = client.post("/quizzes", headers=admin_headers, json={
        "module_id": module.id, "question": "?", "options": ["A", "B"], "correct_answer": "C", "min_score": 1,
    })
    assert_error(one_option, 422, "VALIDATION_ERROR")
    assert_error(answer_missing, 422, "VALIDATION_ERROR")


def test_enrolled_student_answers(client: TestClient, db_session, admin_headers, student_user, student_headers, course_factory, module_factory, enroll):
    course = course_factory()
    quiz = _quiz(client, admin_headers, module_factory(course))
    enroll(student_user, course)

    right = client.post(f"/quizzes/{quiz['id']}/responses", headers=student_headers, json={"answer": "Paris"})
    wrong = client.post(f"/quizzes/{quiz['id']}/responses", headers=student_headers, json={"answer": "Nice"})

    assert right.status_code == 201
    assert right.json()["data"] == {"is_correct": True, "score": 7.5}
    assert wrong.json()["data"] == {"is_correct": False, "score": 0.0}
    assert db_session.query(QuizResponse).filter_by(user_id=student_user.id).count() == 2


def test_answer_needs_active_enrollment(client: TestClient, admin_headers, student_user, student_headers, course_factory, module_factory, enroll):
    course = course_factory()
    quiz = _quiz(client, admin_headers, module_factory(course))
    enroll(student_user, course, EnrollmentStatusEnum.INACTIVE)

    r = client.post(f"/quizzes/{quiz['id']}/responses", headers=student_headers, json={"answer": "Paris"})
    assert_error(r, 403, "FORBIDDEN")


def test_admin_without_enrollment_cannot_answer(client: TestClient, admin_headers, course_factory, module_factory):
    quiz = _quiz(client, admin_headers, module_factory(course_factory()))

    r = client.post(f"/quizzes/{quiz['id']}/responses", headers=admin_headers, json={"answer": "Paris"})
    assert_error(r, 403, "FORBIDDEN")


def test_delete_quiz_removes_responses(client: TestClient, db_session, admin_headers, student_user, student_headers, course_factory, module_factory, enroll):
    course = course_factory()
    quiz = _quiz(client, admin_headers, module_factory(course))
    enroll(student_user, course)
    api_call(client, "POST", f"/quizzes/{quiz['id']}/responses", headers=student_headers, json={"answer": "Paris"})

    api_call(client, "DELETE", f"/quizzes/{quiz['id']}", headers=admin_headers)

    assert db_session.query(QuizResponse).count() == 0
    assert_error(client.post(f"/quizzes/{quiz['id']}/responses", headers=student_headers, json={"answer": "Paris"}), 404, "NOT_FOUND")
