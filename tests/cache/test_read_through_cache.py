"""Read-through and invalidation behaviour of the entity access services."""
import pytest

from coursedesk.core.exceptions import NotFoundError
from coursedesk.crud.course import course as crud_course
from coursedesk.crud.instructor import instructor as crud_instructor
from coursedesk.crud.tag import tag as crud_tag
from coursedesk.schemas.instructor import InstructorFormData
from coursedesk.schemas.tag import TagFormData


def _count_calls(monkeypatch, target, name):
    calls = {"count": 0}
    original = getattr(target, name)

    def counting(*args, **kwargs):
        calls["count"] += 1
        return original(*args, **kwargs)

    monkeypatch.setattr(target, name, counting)
    return calls


def test_second_list_read_is_served_from_cache(db_session, services, instructor_factory, monkeypatch):
    instructor_factory(name="Ada")
    calls = _count_calls(monkeypatch, crud_instructor, "get_multi")

    first = services.instructor.get_all_instructors(db_session)
    second = services.instructor.get_all_instructors(db_session)

    assert first == second
    assert [i.name for i in first] == ["Ada"]
    assert calls["count"] == 1

def test_use_cache_false_reaches_the_store(db_session, services, tag_factory, monkeypatch):
    tag_factory(name="python")
    calls = _count_calls(monkeypatch, crud_tag, "get_multi")

    services.tag.get_all_tags(db_session)
    services.tag.get_all_tags(db_session, use_cache=False)

    assert calls["count"] == 2

def test_fresh_read_refreshes_the_cached_entry(db_session, services, tag_factory):
    tag_factory(name="python")
    services.tag.get_all_tags(db_session)

    tag_factory(name="rust")
    assert len(services.tag.get_all_tags(db_session)) == 1
    assert len(services.tag.get_all_tags(db_session, use_cache=False)) == 2
    assert len(services.tag.get_all_tags(db_session)) == 2

def test_fresh_read_of_a_removed_course_drops_the_cached_detail(db_session, services, instructor_factory, course_form):
    instructor = instructor_factory()
    course = services.course.create_course(db_session, course_form(instructor.id))
    assert services.course.get_course(db_session, course.id).id == course.id

    crud_course.delete(db_session, id=course.id)

    with pytest.raises(NotFoundError):
        services.course.get_course(db_session, course.id, use_cache=False)
    with pytest.raises(NotFoundError):
        services.course.get_course(db_session, course.id)

def test_mutating_a_returned_list_leaves_the_cache_intact(db_session, services, tag_factory):
    tag_factory(name="python")

    tags = services.tag.get_all_tags(db_session)
    tags.append("junk")
    tags[0].name = "changed"

    cached = services.tag.get_all_tags(db_session)
    assert [t.name for t in cached] == ["python"]

def test_mutating_a_cached_detail_leaves_the_cache_intact(db_session, services, tag_factory):
    tag = tag_factory(name="python")

    services.tag.get_tag(db_session, tag.id).name = "changed"

    assert services.tag.get_tag(db_session, tag.id).name == "python"

def test_expired_list_entry_is_reloaded(db_session, services, clock, instructor_factory, monkeypatch):
    instructor_factory()
    calls = _count_calls(monkeypatch, crud_instructor, "get_multi")

    services.instructor.get_all_instructors(db_session)
    clock.advance(5 * 60 * 1000 + 1)
    services.instructor.get_all_instructors(db_session)

    assert calls["count"] == 2

def test_courses_by_instructor_uses_shorter_ttl(db_session, services, clock, instructor_factory, course_form, monkeypatch):
    instructor = instructor_factory()
    services.course.create_course(db_session, course_form(instructor.id))
    calls = _count_calls(monkeypatch, crud_course, "get_by_instructor")

    services.course.get_courses_by_instructor(db_session, instructor.id)
    clock.advance(2 * 60 * 1000)
    services.course.get_courses_by_instructor(db_session, instructor.id)
    assert calls["count"] == 1

    clock.advance(1)
    services.course.get_courses_by_instructor(db_session, instructor.id)
    assert calls["count"] == 2

def test_detail_reads_are_keyed_by_id(db_session, services, tag_factory):
    first = tag_factory(name="a")
    second = tag_factory(name="b")

    assert services.tag.get_tag(db_session, first.id).name == "a"
    assert services.tag.get_tag(db_session, second.id).name == "b"
    assert f'tag_{{"id":"{first.id}"}}' in services.cache.keys()

def test_instructor_create_clears_instructor_list(db_session, services):
    services.instructor.get_all_instructors(db_session)
    assert "instructors_all" in services.cache.keys()

    services.instructor.create_instructor(db_session, InstructorFormData(name="Ada", email="ada@example.com"))

    assert "instructors_all" not in services.cache.keys()
    assert [i.name for i in services.instructor.get_all_instructors(db_session)] == ["Ada"]

def test_instructor_update_clears_course_listing(db_session, services, instructor_factory, course_form):
    instructor = instructor_factory(name="Old Name")
    services.course.create_course(db_session, course_form(instructor.id))
    services.course.get_all_courses(db_session)
    assert "courses_all" in services.cache.keys()

    services.instructor.update_instructor(
        db_session, instructor.id, InstructorFormData(name="New Name", email=instructor.email)
    )

    assert "courses_all" not in services.cache.keys()
    courses = services.course.get_all_courses(db_session)
    assert courses[0].instructor.name == "New Name"

def test_tag_update_clears_course_listing(db_session, services, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    tag = tag_factory(name="before")
    services.course.create_course(db_session, course_form(instructor.id, tag_ids=[tag.id]))
    services.course.get_all_courses(db_session)

    services.tag.update_tag(db_session, tag.id, TagFormData(name="after", description="x"))

    courses = services.course.get_all_courses(db_session)
    assert [t.name for t in courses[0].tags] == ["after"]

def test_course_write_clears_instructor_and_tag_caches(db_session, services, instructor_factory, tag_factory, course_form):
    instructor = instructor_factory()
    tag = tag_factory()
    assert services.instructor.get_all_instructors(db_session)[0].course_count == 0
    assert services.tag.get_all_tags(db_session)[0].usage_count == 0

    services.course.create_course(db_session, course_form(instructor.id, tag_ids=[tag.id]))

    assert services.cache.size() == 0
    assert services.instructor.get_all_instructors(db_session)[0].course_count == 1
    assert services.tag.get_all_tags(db_session)[0].usage_count == 1
