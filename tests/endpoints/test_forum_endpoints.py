from fastapi.testclient import TestClient

from coursehub.core.constants import EnrollmentStatusEnum
from tests.helpers.asserts import api_call, assert_error


def _forum(client, headers, module, title="General", **extra):
    return api_call(client, "POST", "/foruns", headers=headers, json={"module_id": module.id, "title": title, **extra}).json()["data"]


def test_forum_takes_course_from_module(client: TestClient, admin_headers, course_factory, module_factory):
    course = course_factory()
    forum = _forum(client, admin_headers, module_factory(course))

    assert forum["course_id"] == course.id
    assert forum["order"] == 1


def test_forum_insert_position(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    first = _forum(client, admin_headers, module, "First")
    front = _forum(client, admin_headers, module, "Front", order=1)

    forums = api_call(client, "GET", "/foruns", headers=admin_headers).json()["data"]
    assert [(f["id"], f["order"]) for f in forums] == [(front["id"], 1), (first["id"], 2)]


def test_forum_listing_follows_enrollment(client: TestClient, admin_headers, student_user, student_headers, course_factory, module_factory, enroll):
    mine, other, dropped = course_factory(), course_factory(), course_factory()
    visible = _forum(client, admin_headers, module_factory(mine), "Mine")
    _forum(client, admin_headers, module_factory(other), "Theirs")
    _forum(client, admin_headers, module_factory(dropped), "Dropped")
    enroll(student_user, mine)
    enroll(student_user, dropped, EnrollmentStatusEnum.CANCELLED)

    student_view = api_call(client, "GET", "/foruns", headers=student_headers).json()["data"]
    admin_view = api_call(client, "GET", "/foruns", headers=admin_headers).json()["data"]

    assert [f["id"] for f in student_view] == [visible["id"]]
    assert len(admin_view) == 3


def test_forum_management_needs_admin(client: TestClient, admin_headers, student_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    forum = _forum(client, admin_headers, module)

    assert_error(client.post("/foruns", headers=student_headers, json={"module_id": module.id, "title": "Mine"}), 403, "FORBIDDEN")
    assert_error(client.delete(f"/foruns/{forum['id']}", headers=student_headers), 403, "FORBIDDEN")
    assert_error(client.get("/foruns"), 401, "UNAUTHORIZED")


def test_forum_in_missing_module(client: TestClient, admin_headers):
    assert_error(client.post("/foruns", headers=admin_headers, json={"module_id": 999, "title": "Lost"}), 404, "NOT_FOUND")


def test_delete_forum_closes_gap(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    first = _forum(client, admin_headers, module, "First")
    second = _forum(client, admin_headers, module, "Second")

    api_call(client, "DELETE", f"/foruns/{first['id']}", headers=admin_headers)

    remaining = api_call(client, "GET", "/foruns", headers=admin_headers).json()["data"]
    assert [(f["id"], f["order"]) for f in remaining] == [(second["id"], 1)]
    assert_error(client.delete(f"/foruns/{first['id']}", headers=admin_headers), 404, "NOT_FOUND")
