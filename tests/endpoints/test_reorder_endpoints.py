import pytest
from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error


def _items(*ids):
    return {"items": [{"id": i} for i in ids]}


def _create(client, headers, path, payload, count):
    return [
        api_call(client, "POST", path, headers=headers, json={**payload, "title": f"{path[1:]}-{i}"}).json()["data"]["id"]
        for i in range(count)
    ]


def test_reorder_modules(client: TestClient, admin_headers, course_factory):
    course = course_factory()
    ids = _create(client, admin_headers, "/modulos", {"course_id": course.id}, 3)

    r = api_call(client, "PUT", f"/courses/{course.id}/reorder-modulos", headers=admin_headers, json=_items(*reversed(ids)))

    assert r.json()["data"] == [
        {"id": ids[2], "order": 1}, {"id": ids[1], "order": 2}, {"id": ids[0], "order": 3}
    ]
    detail = api_call(client, "GET", f"/courses/{course.id}").json()["data"]
    assert [m["id"] for m in detail["modules"]] == list(reversed(ids))


@pytest.mark.parametrize("kind,path", [
    ("lessons", "/lessons"),
    ("foruns", "/foruns"),
])
def test_reorder_module_content(client: TestClient, admin_headers, course_factory, module_factory, kind, path):
    course = course_factory()
    module = module_factory(course)
    a, b, c = _create(client, admin_headers, path, {"module_id": module.id}, 3)

    r = api_call(
        client, "PUT", f"/courses/{course.id}/modulos/{module.id}/reorder-{kind}",
        headers=admin_headers, json=_items(b, c, a),
    )

    assert [(item["id"], item["order"]) for item in r.json()["data"]] == [(b, 1), (c, 2), (a, 3)]


def test_reorder_quizzes(client: TestClient, admin_headers, course_factory, module_factory):
    course = course_factory()
    module = module_factory(course)
    quiz = {"module_id": module.id, "options": ["a", "b"], "correct_answer": "a", "min_score": 1}
    ids = [
        api_call(client, "POST", "/quizzes", headers=admin_headers, json={**quiz, "question": f"Q{i}"}).json()["data"]["id"]
        for i in range(2)
    ]

    r = api_call(
        client, "PUT", f"/courses/{course.id}/modulos/{module.id}/reorder-quizzes",
        headers=admin_headers, json=_items(ids[1], ids[0]),
    )
    assert [item["id"] for item in r.json()["data"]] == [ids[1], ids[0]]


def test_incomplete_list_conflicts_and_changes_nothing(client: TestClient, admin_headers, course_factory, module_factory):
    course = course_factory()
    module = module_factory(course)
    a, b, c = _create(client, admin_headers, "/lessons", {"module_id": module.id}, 3)

    r = client.put(
        f"/courses/{course.id}/modulos/{module.id}/reorder-lessons", headers=admin_headers, json=_items(c, a)
    )

    body = assert_error(r, 409, "CONFLICT")
    assert body["error"]["details"]["missing"] == [b]
    lessons = api_call(client, "GET", f"/courses/{course.id}").json()["data"]["modules"][0]["lessons"]
    assert [(lesson["id"], lesson["order"]) for lesson in lessons] == [(a, 1), (b, 2), (c, 3)]


def test_module_must_belong_to_course(client: TestClient, admin_headers, course_factory, module_factory):
    course, other = course_factory(), course_factory()
    module = module_factory(other)

    r = client.put(f"/courses/{course.id}/modulos/{module.id}/reorder-lessons", headers=admin_headers, json=_items())
    assert_error(r, 404, "NOT_FOUND")


def test_unknown_kind(client: TestClient, admin_headers, course_factory, module_factory):
    course = course_factory()
    module = module_factory(course)

    r = client.put(f"/courses/{course.id}/modulos/{module.id}/reorder-widgets", headers=admin_headers, json=_items())
    assert_error(r, 404, "NOT_FOUND")


def test_reorder_needs_admin(client: TestClient, student_headers, course_factory, module_factory):
    course = course_factory()
    module = module_factory(course)

    r = client.put(f"/courses/{course.id}/reorder-modulos", headers=student_headers, json=_items(module.id))
    assert_error(r, 403, "FORBIDDEN")


def test_malformed_body(client: TestClient, admin_headers, course_factory):
    course = course_factory()
    r = client.put(f"/courses/{course.id}/reorder-modulos", headers=admin_headers, json={"items": [{"id": "x"}]})
    assert_error(r, 422, "VALIDATION_ERROR")
