import os
import uuid
from datetime import datetime, timezone

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlmodel import Session

from reclaim.db.db import build_engine, create_db_and_tables, get_session
from reclaim.main import app
from reclaim.models.found_item import FoundItem
from reclaim.models.lost_item import LostItem
from reclaim.models.user import User
from reclaim.utils.auth_helper import ALGORITHM


@pytest.fixture
def engine(tmp_path):
    # File backed so that worker threads get their own connections
    engine = build_engine(f"sqlite:///{tmp_path / 'reclaim-test.db'}")
    create_db_and_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session):
    def factory(name="Alex"):
        user = User(
            public_id=uuid.uuid4().hex,
            name=name,
            email=f"{name.lower()}@example.com",
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return factory


@pytest.fixture
def make_found_item(session):
    def factory(reporter, **overrides):
        fields = {
            "title": "Black umbrella",
            "category": "others",
            "description": "Folding umbrella with a wooden handle",
            "location": "Library, 2nd floor",
            "date": datetime.now(timezone.utc),
            "contact_email": "finder@example.com",
            "contact_phone": "555-0100",
            "security_question": "What is engraved on the handle?",
        }
        fields.update(overrides)

        item = FoundItem(user_id=reporter.id, **fields)
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    return factory


@pytest.fixture
def make_lost_item(session):
    def factory(owner, **overrides):
        fields = {
            "title": "Umbrella",
            "category": "others",
            "description": "Lost my umbrella somewhere near the library",
            "location": "Library",
            "date": datetime.now(timezone.utc),
            "contact_email": "owner@example.com",
            "contact_phone": "555-0199",
        }
        fields.update(overrides)

        item = LostItem(user_id=owner.id, **fields)
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    return factory


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def factory(user):
        token = jwt.encode({"sub": user.public_id}, os.environ["JWT_SECRET"], algorithm=ALGORITHM)
        return {"Authorization": f"Bearer {token}"}

    return factory
