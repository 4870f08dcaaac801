from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hackhub.api.dependencies import get_db
from hackhub.core.database import build_engine, init_db
from hackhub.core.security import create_access_token
from hackhub.core.time_utils import utcnow
from hackhub.main import app
from hackhub.models import Event, EventStatus, User, UserRole


@pytest.fixture
def engine():
    # One shared in-memory database per test
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: UserRole = UserRole.PARTICIPANT, **fields) -> User:
        counter["n"] += 1
        fields.setdefault("email", f"user{counter['n']}@example.com")
        fields.setdefault("first_name", f"User{counter['n']}")
        user = User(role=role.value, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def organizer(make_user):
    return make_user(UserRole.ORGANIZER)


@pytest.fixture
def make_event(db, organizer):
    def _make_event(**fields) -> Event:
        now = utcnow()
        fields.setdefault("title", "Spring Hack")
        fields.setdefault("description", "Build something in 48 hours")
        fields.setdefault("organizer_id", organizer.id)
        fields.setdefault("status", EventStatus.UPCOMING.value)
        fields.setdefault("start_date", now + timedelta(days=7))
        fields.setdefault("end_date", now + timedelta(days=9))
        fields.setdefault("registration_deadline", now + timedelta(days=5))
        event = Event(**fields)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    return _make_event


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User, **claims) -> dict:
        token = create_access_token({"sub": user.id, **claims})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
