import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Settings are read at import time; keep the app off the real database file
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from coursedesk.core.cache import CacheStore
from coursedesk.core.database import Base
from coursedesk.crud.instructor import instructor as crud_instructor
from coursedesk.crud.tag import tag as crud_tag
from coursedesk.schemas.course import CourseFormData
from coursedesk.utils import deps as deps_utils
from coursedesk.utils.service_registry import ServiceRegistry
import coursedesk.models  # noqa: F401
import main


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


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

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def cache(clock):
    return CacheStore(clock=clock)

@pytest.fixture
def services(cache):
    return ServiceRegistry(cache=cache)

@pytest.fixture(scope="function")
def client(db_session, services):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_transactional_db] = lambda: db_session
    main.app.dependency_overrides[deps_utils.get_services] = lambda: services
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def instructor_factory(db_session):
    def _instructor_factory(name="Test Instructor", email=None, bio=None):
        instructor_data = {
            "name": name,
            "email": email or f"instructor-{uuid.uuid4().hex[:8]}@example.com",
            "bio": bio,
        }
        return crud_instructor.create(db_session, obj_in=instructor_data)
    return _instructor_factory

@pytest.fixture
def tag_factory(db_session):
    def _tag_factory(name=None, description="Test tag"):
        tag_data = {
            "name": name or f"tag-{uuid.uuid4().hex[:8]}",
            "description": description,
        }
        return crud_tag.create(db_session, obj_in=tag_data)
    return _tag_factory

@pytest.fixture
def course_form():
    """Build a CourseFormData; modules default to one module holding one lesson."""
    def _course_form(instructor_id, tag_ids=(), modules=None, **fields):
        if modules is None:
            modules = [{"title": "M1", "order": 0, "lessons": [{"title": "L1", "order": 0}]}]
        data = {
            "title": "A",
            "description": "d",
            "price": 10,
            "instructor_id": instructor_id,
            "tag_ids": list(tag_ids),
            "modules": modules,
        }
        data.update(fields)
        return CourseFormData(**data)
    return _course_form
