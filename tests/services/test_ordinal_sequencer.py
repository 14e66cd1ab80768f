import threading
import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from coursehub.core.constants import ContentKindEnum
from coursehub.core.database import Base
from coursehub.core.exceptions import ConflictError, InternalError, ValidationError
from coursehub.models.content import Lesson, Video
from coursehub.models.course import Course
from coursehub.models.module import Module
from coursehub.schemas.content import LessonCreate
from coursehub.services.content import content_service
from coursehub.services.ordinal import ordinal_service


def _orders(db_session, model, **filters):
    rows = db_session.query(model).filter_by(**filters).order_by(model.order, model.id).all()
    return [(row.id, row.order) for row in rows]


def _add_lessons(db_session, context, module, count):
    return [
        content_service.create_lesson(db_session, LessonCreate(module_id=module.id, title=f"L{i}"), context)
        for i in range(1, count + 1)
    ]


def test_next_order_appends_after_existing_siblings(db_session, course_factory, module_factory, lesson_factory):
    course = course_factory()
    module = module_factory(course)
    assert ordinal_service.next_order(db_session, ContentKindEnum.LESSONS, module.id) == 1
    lesson_factory(module)
    lesson_factory(module)
    assert ordinal_service.next_order(db_session, ContentKindEnum.LESSONS, module.id) == 3
    # Other scopes are independent
    assert ordinal_service.next_order(db_session, ContentKindEnum.VIDEOS, module.id) == 1


def test_created_items_are_numbered_densely(db_session, admin_user, context_for, course_factory, module_factory):
    module = module_factory(course_factory())
    lessons = _add_lessons(db_session, context_for(admin_user), module, 4)

    assert [lesson.order for lesson in lessons] == [1, 2, 3, 4]


def test_explicit_order_inserts_and_shifts_siblings(db_session, admin_user, context_for, course_factory, module_factory):
    context = context_for(admin_user)
    module = module_factory(course_factory())
    first, second, third = _add_lessons(db_session, context, module, 3)

    inserted = content_service.create_lesson(
        db_session, LessonCreate(module_id=module.id, title="Inserted", order=2), context
    )

    assert inserted.order == 2
    assert _orders(db_session, Lesson, module_id=module.id) == [
        (first.id, 1), (inserted.id, 2), (second.id, 3), (third.id, 4)
    ]


def test_explicit_order_past_the_end_is_clamped(db_session, admin_user, context_for, course_factory, module_factory):
    context = context_for(admin_user)
    module = module_factory(course_factory())
    _add_lessons(db_session, context, module, 2)

    lesson = content_service.create_lesson(
        db_session, LessonCreate(module_id=module.id, title="Far", order=50), context
    )
    assert lesson.order == 3


def test_order_below_one_is_rejected(db_session, course_factory, module_factory):
    module = module_factory(course_factory())
    with pytest.raises(ValidationError):
        ordinal_service.place(db_session, ContentKindEnum.LESSONS, module.id, 0)


def test_reorder_assigns_positions_from_the_list(db_session, admin_user, context_for, course_factory, module_factory):
    module = module_factory(course_factory())
    a, b, c = _add_lessons(db_session, context_for(admin_user), module, 3)

    ordinal_service.reorder(db_session, ContentKindEnum.LESSONS, module.id, [c.id, a.id, b.id])
    db_session.commit()

    assert _orders(db_session, Lesson, module_id=module.id) == [(c.id, 1), (a.id, 2), (b.id, 3)]


@pytest.mark.parametrize("mutation", ["omit", "foreign", "duplicate"])
def test_invalid_reorder_writes_nothing(db_session, admin_user, context_for, course_factory, module_factory, mutation):
    context = context_for(admin_user)
    course = course_factory()
    module = module_factory(course)
    other_module = module_factory(course)
    a, b, c = _add_lessons(db_session, context, module, 3)
    (foreign,) = _add_lessons(db_session, context, other_module, 1)
    db_session.commit()
    before = _orders(db_session, Lesson, module_id=module.id)

    ids = {
        "omit": [c.id, a.id],
        "foreign": [c.id, a.id, b.id, foreign.id],
        "duplicate": [c.id, c.id, a.id, b.id],
    }[mutation]

    with pytest.raises(ConflictError):
        ordinal_service.reorder(db_session, ContentKindEnum.LESSONS, module.id, ids)

    db_session.commit()
    assert _orders(db_session, Lesson, module_id=module.id) == before
    assert _orders(db_session, Lesson, module_id=other_module.id) == [(foreign.id, 1)]


def test_reorder_modules_within_course(db_session, course_factory, module_factory):
    course = course_factory()
    first, second = module_factory(course), module_factory(course)
    other_course_module = module_factory(course_factory())

    ordinal_service.reorder(db_session, ContentKindEnum.MODULES, course.id, [second.id, first.id])
    db_session.commit()

    assert _orders(db_session, Module, course_id=course.id) == [(second.id, 1), (first.id, 2)]
    with pytest.raises(ConflictError):
        ordinal_service.reorder(
            db_session, ContentKindEnum.MODULES, course.id, [second.id, first.id, other_course_module.id]
        )


def test_reorder_store_failure_rolls_back(db_session, monkeypatch, admin_user, context_for, course_factory, module_factory):
    module = module_factory(course_factory())
    a, b = _add_lessons(db_session, context_for(admin_user), module, 2)
    db_session.commit()

    def _failing_flush(*args, **kwargs):
        raise SQLAlchemyError("disk full")

    with monkeypatch.context() as patched:
        patched.setattr(db_session, "flush", _failing_flush)
        with pytest.raises(InternalError):
            ordinal_service.reorder(db_session, ContentKindEnum.LESSONS, module.id, [b.id, a.id])

    assert _orders(db_session, Lesson, module_id=module.id) == [(a.id, 1), (b.id, 2)]


def test_delete_closes_the_gap(db_session, admin_user, context_for, course_factory, module_factory):
    context = context_for(admin_user)
    module = module_factory(course_factory())
    a, b, c = _add_lessons(db_session, context, module, 3)

    content_service.delete_lesson(db_session, b.id, context)
    db_session.commit()

    assert _orders(db_session, Lesson, module_id=module.id) == [(a.id, 1), (c.id, 2)]


def test_order_stays_dense_across_mixed_operations(db_session, admin_user, context_for, course_factory, module_factory):
    context = context_for(admin_user)
    module = module_factory(course_factory())
    lessons = _add_lessons(db_session, context, module, 3)
    content_service.create_lesson(db_session, LessonCreate(module_id=module.id, title="front", order=1), context)
    content_service.delete_lesson(db_session, lessons[1].id, context)
    ids = [lesson_id for lesson_id, _ in _orders(db_session, Lesson, module_id=module.id)]
    ordinal_service.reorder(db_session, ContentKindEnum.LESSONS, module.id, list(reversed(ids)))
    db_session.commit()

    orders = [order for _, order in _orders(db_session, Lesson, module_id=module.id)]
    assert orders == list(range(1, len(orders) + 1))
    assert _orders(db_session, Video, module_id=module.id) == []


def test_concurrent_creates_in_one_scope_get_distinct_orders(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'ordinal.db'}",
        connect_args={"check_same_thread": False, "timeout": 10},
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    with SessionLocal() as setup:
        course = Course(title="Concurrency", duration="1h", price=0)
        setup.add(course)
        setup.flush()
        module = Module(course_id=course.id, title="M1", order=1)
        setup.add(module)
        setup.flush()
        module_id = module.id
        setup.commit()

    first_placed = threading.Event()
    errors = []

    def create_lesson(title, wait_for=None, signal=None):
        db = SessionLocal()
        try:
            if wait_for is not None:
                wait_for.wait(5)
            order = ordinal_service.place(db, ContentKindEnum.LESSONS, module_id)
            if signal is not None:
                signal.set()
                # Hold the scope while the other session tries to place
                time.sleep(0.3)
            db.add(Lesson(module_id=module_id, title=title, order=order))
            db.commit()
        except Exception as e:
            errors.append(e)
            db.rollback()
        finally:
            db.close()

    first = threading.Thread(target=create_lesson, args=("A",), kwargs={"signal": first_placed})
    second = threading.Thread(target=create_lesson, args=("B",), kwargs={"wait_for": first_placed})
    first.start()
    second.start()
    first.join(15)
    second.join(15)

    try:
        assert errors == []
        with SessionLocal() as check:
            orders = [row.order for row in check.query(Lesson).filter_by(module_id=module_id).all()]
        assert sorted(orders) == [1, 2]
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
