import sys
import os
import tempfile
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="coursehub-uploads-"))

import uuid
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from coursehub.core.constants import EnrollmentStatusEnum, RoleEnum
from coursehub.core.database import Base
from coursehub.core.security import get_password_hash
from coursehub.crud.content import lesson as crud_lesson
from coursehub.crud.course import course as crud_course
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.crud.module import module as crud_module
from coursehub.crud.user import user as crud_user
from coursehub.schemas.user import UserContext
from coursehub.services.auth import auth_service
from coursehub.services.storage import storage_service
from coursehub.utils import deps as deps_utils

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture(scope="function")
def database_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    directory = tmp_path / "uploads"
    directory.mkdir()
    monkeypatch.setattr(storage_service, "base_dir", directory)
    return directory

@pytest.fixture(scope="function")
def client(db_session):
    def _get_db():
        yield db_session

    def _get_transactional_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    main.app.dependency_overrides[deps_utils.get_db] = _get_db
    main.app.dependency_overrides[deps_utils.get_transactional_db] = _get_transactional_db
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db_session):
    def _user_factory(role=RoleEnum.STUDENT, full_name=None, email=None, password=DEFAULT_PASSWORD):
        user = crud_user.create(
            db_session,
            obj_in={
                "full_name": full_name or f"Test {role.value.title()} {uuid.uuid4().hex[:4]}",
                "email": email or f"{role.value}-{uuid.uuid4().hex[:8]}@test.com",
                "hashed_password": get_password_hash(password),
                "role": role,
            },
        )
        db_session.commit()
        return user
    return _user_factory

@pytest.fixture
def admin_user(user_factory):
    return user_factory(RoleEnum.ADMIN, full_name="Ada Admin")

@pytest.fixture
def student_user(user_factory):
    return user_factory(RoleEnum.STUDENT, full_name="Sam Student")

@pytest.fixture
def context_for():
    def _context_for(user):
        return UserContext(id=user.id, email=user.email, role=user.role, name=user.full_name)
    return _context_for

@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = auth_service.issue_token(user).access_token
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers

@pytest.fixture
def admin_headers(admin_user, auth_headers):
    return auth_headers(admin_user)

@pytest.fixture
def student_headers(student_user, auth_headers):
    return auth_headers(student_user)


@pytest.fixture
def course_factory(db_session):
    def _course_factory(title=None, **fields):
        course = crud_course.create(
            db_session,
            obj_in={
                "title": title or f"Course {uuid.uuid4().hex[:6]}",
                "duration": "40h",
                "price": 99.9,
                **fields,
            },
        )
        db_session.commit()
        return course
    return _course_factory

@pytest.fixture
def module_factory(db_session):
    def _module_factory(course, title=None, order=None):
        if order is None:
            order = len(crud_module.get_by_course(db_session, course_id=course.id)) + 1
        module = crud_module.create(
            db_session,
            obj_in={"course_id": course.id, "title": title or f"Module {order}", "order": order},
        )
        db_session.commit()
        return module
    return _module_factory

@pytest.fixture
def lesson_factory(db_session):
    def _lesson_factory(module, title=None, order=None):
        if order is None:
            order = len(crud_lesson.get_by_module(db_session, module_id=module.id)) + 1
        lesson = crud_lesson.create(
            db_session,
            obj_in={"module_id": module.id, "title": title or f"Lesson {order}", "order": order},
        )
        db_session.commit()
        return lesson
    return _lesson_factory

@pytest.fixture
def enroll(db_session):
    def _enroll(user, course, status=EnrollmentStatusEnum.ACTIVE):
        enrollment = crud_enrollment.create(
            db_session, obj_in={"user_id": user.id, "course_id": course.id, "status": status}
        )
        db_session.commit()
        return enrollment
    return _enroll

@pytest.fixture
def course_with_lessons(course_factory, module_factory, lesson_factory):
    """Course C with module M holding lessons L1 and L2."""
    course = course_factory(title="Intro to Testing")
    module = module_factory(course, title="Basics")
    lessons = [lesson_factory(module, title="L1"), lesson_factory(module, title="L2")]
    return course, module, lessons
