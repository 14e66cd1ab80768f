from fastapi.testclient import TestClient

from coursehub.services.storage import storage_service
from tests.helpers.asserts import api_call, assert_error


def test_module_crud(client: TestClient, admin_headers, course_factory):
    course = course_factory()

    first = api_call(client, "POST", "/modulos", headers=admin_headers, json={"course_id": course.id, "title": "One"}).json()["data"]
    front = api_call(client, "POST", "/modulos", headers=admin_headers, json={"course_id": course.id, "title": "Zero", "order": 1}).json()["data"]
    renamed = api_call(client, "PUT", f"/modulos/{first['id']}", headers=admin_headers, json={"title": "Uno"}).json()["data"]

    assert front["order"] == 1
    assert renamed["title"] == "Uno"
    assert renamed["order"] == 2

    api_call(client, "DELETE", f"/modulos/{front['id']}", headers=admin_headers)
    modules = api_call(client, "GET", f"/courses/{course.id}").json()["data"]["modules"]
    assert [(m["id"], m["order"]) for m in modules] == [(first["id"], 1)]


def test_module_needs_existing_course(client: TestClient, admin_headers):
    r = client.post("/modulos", headers=admin_headers, json={"course_id": 404, "title": "Lost"})
    assert_error(r, 404, "NOT_FOUND")


def test_order_must_be_positive(client: TestClient, admin_headers, course_factory):
    course = course_factory()
    r = client.post("/modulos", headers=admin_headers, json={"course_id": course.id, "title": "Bad", "order": 0})
    assert_error(r, 400, "BAD_REQUEST")


def test_lesson_lifecycle(client: TestClient, admin_headers, student_headers, course_factory, module_factory):
    module = module_factory(course_factory())

    lesson = api_call(client, "POST", "/lessons", headers=admin_headers, json={"module_id": module.id, "title": "Intro"}).json()["data"]
    assert lesson["order"] == 1

    updated = api_call(client, "PUT", f"/lessons/{lesson['id']}", headers=admin_headers, json={"title": "Welcome"}).json()["data"]
    assert updated["title"] == "Welcome"

    assert_error(client.delete(f"/lessons/{lesson['id']}", headers=student_headers), 403, "FORBIDDEN")
    api_call(client, "DELETE", f"/lessons/{lesson['id']}", headers=admin_headers)
    assert_error(client.delete(f"/lessons/{lesson['id']}", headers=admin_headers), 404, "NOT_FOUND")


def test_lesson_in_missing_module(client: TestClient, admin_headers):
    r = client.post("/lessons", headers=admin_headers, json={"module_id": 999, "title": "Orphan"})
    assert_error(r, 404, "NOT_FOUND")


def test_video_upload_and_delete(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())

    r = client.post(
        "/videos", headers=admin_headers,
        data={"module_id": str(module.id), "title": "Walkthrough"},
        files={"file": ("walkthrough.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
    )
    assert r.status_code == 201, r.text
    video = r.json()["data"]
    stored = storage_service.path_for(video["url"])
    assert stored.exists()

    api_call(client, "DELETE", f"/videos/{video['id']}", headers=admin_headers)
    assert not stored.exists()


def test_video_requires_file(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    r = client.post("/videos", headers=admin_headers, data={"module_id": str(module.id), "title": "Nothing"})
    assert_error(r, 400, "BAD_REQUEST")


def test_video_in_missing_module_keeps_no_file(client: TestClient, admin_headers, upload_dir):
    r = client.post(
        "/videos", headers=admin_headers,
        data={"module_id": "999", "title": "Lost"},
        files={"file": ("lost.mp4", b"data", "video/mp4")},
    )
    assert_error(r, 404, "NOT_FOUND")
    assert list(upload_dir.iterdir()) == []


def test_live_session_lifecycle(client: TestClient, admin_headers, course_factory, module_factory):
    module = module_factory(course_factory())
    payload = {
        "module_id": module.id, "title": "Office hours", "meeting_link": "https://meet.test/x",
        "scheduled_at": "2026-12-01T15:00:00", "password": "secret",
    }

    session = api_call(client, "POST", "/liveSessions", headers=admin_headers, json=payload).json()["data"]
    assert session["password"] == "secret"
    api_call(client, "DELETE", f"/liveSessions/{session['id']}", headers=admin_headers)

    invalid = client.post("/liveSessions", headers=admin_headers, json={**payload, "scheduled_at": "tomorrow"})
    assert_error(invalid, 422, "VALIDATION_ERROR")


def test_upload_assignments(client: TestClient, admin_headers, user_factory, auth_headers, course_factory, module_factory, enroll):
    course = course_factory()
    module = module_factory(course)
    enrolled, outsider = user_factory(), user_factory()
    enroll(enrolled, course)

    r = client.post(
        "/uploads", headers=admin_headers,
        data={"module_id": str(module.id), "title": "Worksheet", "instructions": "Fill it in"},
        files={"file": ("sheet.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert r.status_code == 201, r.text
    upload = r.json()["data"]

    listed = api_call(client, "GET", f"/uploads/{module.id}", headers=auth_headers(enrolled)).json()["data"]
    assert [u["id"] for u in listed] == [upload["id"]]
    assert_error(client.get(f"/uploads/{module.id}", headers=auth_headers(outsider)), 403, "FORBIDDEN")
    assert api_call(client, "GET", f"/uploads/{module.id}", headers=admin_headers).json()["data"]

    api_call(client, "DELETE", f"/uploads/{upload['id']}", headers=admin_headers)
    assert not storage_service.path_for(upload["url"]).exists()
