import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from coursedesk.core.exceptions import ConflictError, NotFoundError
from coursedesk.crud.course import course as crud_course
from coursedesk.crud.lesson import lesson as crud_lesson
from coursedesk.crud.module import module as crud_module
from coursedesk.models.course import Course, course_tags
from coursedesk.models.lesson import Lesson
from coursedesk.models.module import Module
from coursedesk.services.course_writer import course_writer


def _tag_rows(db):
    return set(db.execute(select(course_tags.c.course_id, course_tags.c.tag_id)).all())

def _two_module_tree():
    return [
        {"title": "Intro", "order": 0, "lessons": [
            {"title": "Welcome", "order": 0},
            {"title": "Setup", "order": 1},
        ]},
        {"title": "Basics", "order": 1, "lessons": [
            {"title": "First steps", "order": 0},
        ]},
    ]


def test_create_fans_out_one_row_per_node(db_session, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    t1, t2 = tag_factory(), tag_factory()

    course_id = course_writer.create(db_session, course_form(instructor.id, tag_ids=[t1.id, t2.id]))

    assert db_session.query(Course).count() == 1
    modules = crud_module.get_by_course(db_session, course_id=course_id)
    assert len(modules) == 1
    assert modules[0].course_id == course_id
    assert modules[0].order == 0
    lessons = crud_lesson.get_by_module(db_session, module_id=modules[0].id)
    assert len(lessons) == 1
    assert lessons[0].module_id == modules[0].id
    assert lessons[0].order == 0
    assert _tag_rows(db_session) == {(course_id, t1.id), (course_id, t2.id)}

def test_create_accepts_camel_case_lesson_fields(db_session, instructor_factory, course_form):
    instructor = instructor_factory()
    modules = [{"title": "M", "order": 0, "lessons": [
        {"title": "L", "order": 0, "videoUrl": "https://example.com/v", "content": "text"},
    ]}]

    course_writer.create(db_session, course_form(instructor.id, modules=modules))

    lesson = db_session.query(Lesson).one()
    assert lesson.video_url == "https://example.com/v"
    assert lesson.content == "text"

def test_create_starts_at_version_one(db_session, instructor_factory, course_form):
    instructor = instructor_factory()
    course_id = course_writer.create(db_session, course_form(instructor.id))
    assert db_session.get(Course, course_id).version == 1

def test_create_collapses_repeated_tag_ids(db_session, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    tag = tag_factory()

    course_id = course_writer.create(db_session, course_form(instructor.id, tag_ids=[tag.id, tag.id]))

    assert _tag_rows(db_session) == {(course_id, tag.id)}

def test_create_with_unknown_instructor_inserts_nothing(db_session, course_form):
    with pytest.raises(NotFoundError):
        course_writer.create(db_session, course_form("missing-instructor"))
    assert db_session.query(Course).count() == 0

def test_create_with_unknown_tag_inserts_nothing(db_session, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    tag = tag_factory()

    with pytest.raises(NotFoundError) as exc_info:
        course_writer.create(db_session, course_form(instructor.id, tag_ids=[tag.id, "missing-tag"]))

    assert exc_info.value.details == {"tag_ids": ["missing-tag"]}
    assert db_session.query(Course).count() == 0
    assert db_session.query(Module).count() == 0

def test_create_rolls_back_when_a_late_step_fails(db_session, instructor_factory, tag_factory, course_form, monkeypatch):
    instructor = instructor_factory()
    tag = tag_factory()

    def failing_add_tags(*args, **kwargs):
        raise OperationalError("INSERT INTO course_tags", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud_course, "add_tags", failing_add_tags)

    with pytest.raises(OperationalError):
        course_writer.create(db_session, course_form(instructor.id, tag_ids=[tag.id]))

    assert db_session.query(Course).count() == 0
    assert db_session.query(Module).count() == 0
    assert db_session.query(Lesson).count() == 0

def test_modules_sharing_an_order_value_keep_their_own_lessons(db_session, instructor_factory, course_form):
    instructor = instructor_factory()
    modules = [
        {"title": "A", "order": 0, "lessons": [{"title": "A1", "order": 0}]},
        {"title": "B", "order": 0, "lessons": [{"title": "B1", "order": 0}, {"title": "B2", "order": 1}]},
    ]

    course_writer.create(db_session, course_form(instructor.id, modules=modules))

    by_title = {m.title: m for m in db_session.query(Module).all()}
    assert [lesson.title for lesson in by_title["A"].lessons] == ["A1"]
    assert [lesson.title for lesson in by_title["B"].lessons] == ["B1", "B2"]


def test_replace_rewrites_the_whole_tree(db_session, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    old_tag, new_tag = tag_factory(), tag_factory()
    course_id = course_writer.create(
        db_session, course_form(instructor.id, tag_ids=[old_tag.id], modules=_two_module_tree())
    )
    old_module_ids = {m.id for m in db_session.query(Module).all()}
    old_lesson_ids = {lesson.id for lesson in db_session.query(Lesson).all()}
    assert len(old_module_ids) == 2
    assert len(old_lesson_ids) == 3

    course_writer.replace(
        db_session,
        course_id,
        course_form(
            instructor.id,
            title="Renamed",
            price=25,
            tag_ids=[new_tag.id],
            modules=[{"title": "Only", "order": 0, "lessons": [{"title": "Only lesson", "order": 0}]}],
        ),
    )

    modules = crud_module.get_by_course(db_session, course_id=course_id)
    lessons = crud_lesson.get_by_course(db_session, course_id=course_id)
    assert crud_module.count_by_course(db_session, course_id=course_id) == 1
    assert len(modules) == 1
    assert len(lessons) == 1
    assert modules[0].id not in old_module_ids
    assert lessons[0].id not in old_lesson_ids
    assert lessons[0].module_id == modules[0].id
    assert crud_course.get_tag_ids(db_session, course_id=course_id) == [new_tag.id]

    course = db_session.get(Course, course_id)
    assert course.title == "Renamed"
    assert course.price == 25
    assert course.version == 2

def test_replace_can_move_course_to_another_instructor(db_session, instructor_factory, course_form):
    first, second = instructor_factory(), instructor_factory()
    course_id = course_writer.create(db_session, course_form(first.id))

    course_writer.replace(db_session, course_id, course_form(second.id))

    assert db_session.get(Course, course_id).instructor_id == second.id

def test_replace_unknown_course_raises_not_found(db_session, instructor_factory, course_form):
    instructor = instructor_factory()
    with pytest.raises(NotFoundError):
        course_writer.replace(db_session, "missing-course", course_form(instructor.id))

def test_replace_with_stale_version_is_rejected(db_session, instructor_factory, course_form):
    instructor = instructor_factory()
    course_id = course_writer.create(db_session, course_form(instructor.id, modules=_two_module_tree()))

    course_writer.replace(db_session, course_id, course_form(instructor.id, version=1))

    with pytest.raises(ConflictError) as exc_info:
        course_writer.replace(
            db_session, course_id, course_form(instructor.id, version=1, modules=_two_module_tree())
        )

    assert exc_info.value.details == {"expected_version": 1, "current_version": 2}
    assert db_session.query(Module).count() == 1

def test_replace_failure_keeps_previous_content(db_session, instructor_factory, tag_factory, course_form, monkeypatch):
    instructor = instructor_factory()
    tag = tag_factory()
    course_id = course_writer.create(
        db_session, course_form(instructor.id, tag_ids=[tag.id], modules=_two_module_tree())
    )

    def failing_add_tags(*args, **kwargs):
        raise OperationalError("INSERT INTO course_tags", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud_course, "add_tags", failing_add_tags)

    with pytest.raises(OperationalError):
        course_writer.replace(db_session, course_id, course_form(instructor.id, title="Lost", tag_ids=[tag.id]))

    course = db_session.get(Course, course_id)
    assert course.title == "A"
    assert course.version == 1
    assert db_session.query(Module).count() == 2
    assert db_session.query(Lesson).count() == 3
    assert _tag_rows(db_session) == {(course_id, tag.id)}

def test_deleting_a_course_cascades_to_children(db_session, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    tag = tag_factory()
    course_id = course_writer.create(
        db_session, course_form(instructor.id, tag_ids=[tag.id], modules=_two_module_tree())
    )

    crud_course.delete(db_session, id=course_id)

    assert db_session.query(Module).count() == 0
    assert db_session.query(Lesson).count() == 0
    assert _tag_rows(db_session) == set()
    assert db_session.get(type(tag), tag.id) is not None
