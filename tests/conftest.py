import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789-abcdefghijklmnop")
os.environ.setdefault("AWS_S3_BUCKET", "ecometrics-test")
os.environ.setdefault("AWS_REGION", "us-east-1")

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.activities.activities_model import Activity, ActivityStatus
from api.activities.evidence_model import Evidence
from api.user.user_model import User, UserRole
from config.database import build_engine, get_db
from config.points_config import ActivityType
from database.init_db import init_db, seed_badges
from helpers.s3_helper import StoredFile, determine_file_type, generate_unique_key
from helpers.s3_helper import get_storage
from helpers.token_helper import create_user_token
from main import app

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeStorage:
    """In-memory stand-in for S3Service."""

    def __init__(self):
        self.objects = {}
        self.deleted = []
        self.fail_delete_keys = set()
        self.fail_upload_after = None

    def upload_evidence(self, data, file_name, content_type):
        if self.fail_upload_after is not None and len(self.objects) >= self.fail_upload_after:
            raise RuntimeError("S3 unavailable")
        key = generate_unique_key(file_name, "activity-evidence/")
        self.objects[key] = data
        return StoredFile(
            file_key=key,
            file_type=determine_file_type(content_type),
            file_name=file_name,
            file_size=len(data),
            format=file_name.rsplit(".", 1)[-1].lower(),
        )

    def delete_file(self, file_key):
        if file_key in self.fail_delete_keys:
            return False
        self.objects.pop(file_key, None)
        self.deleted.append(file_key)
        return True

    def get_public_url(self, file_key):
        if not file_key:
            return None
        return f"https://ecometrics-test.s3.us-east-1.amazonaws.com/{file_key}"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    with factory() as db:
        seed_badges(db)
    return factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    def _make_user(name="Ana Verde", role=UserRole.USER, points=0, level=1, user_type="INDIVIDUAL", email=None):
        with session_factory() as s:
            user = User(
                name=name,
                email=email or f"{uuid.uuid4().hex[:8]}@example.com",
                role=role,
                user_type=user_type,
                points=points,
                level=level,
            )
            s.add(user)
            s.commit()
            s.refresh(user)
            s.expunge(user)
        return user
    return _make_user


@pytest.fixture
def make_activity(session_factory, storage):
    """Insert an activity directly, bypassing the submission pipeline."""
    def _make_activity(user, points, activity_type=ActivityType.RECYCLING, quantity=2.0, evidence_count=1):
        with session_factory() as s:
            activity = Activity(
                user_id=user.id,
                title="Recycled cardboard boxes",
                description="Took a full bag to the recycling point",
                type=activity_type,
                quantity=quantity,
                unit="kg",
                points=points,
                date=datetime(2026, 10, 1, tzinfo=timezone.utc),
                status=ActivityStatus.PENDING_REVIEW,
            )
            for i in range(evidence_count):
                stored = storage.upload_evidence(PNG_BYTES, f"photo{i}.png", "image/png")
                activity.evidence.append(Evidence(
                    file_key=stored.file_key,
                    file_type=stored.file_type,
                    file_name=stored.file_name,
                    file_size=stored.file_size,
                    format=stored.format,
                ))
            s.add(activity)
            s.commit()
            activity_id = activity.id
            keys = [ev.file_key for ev in activity.evidence]
            evidence_ids = [ev.id for ev in activity.evidence]
        return activity_id, keys, evidence_ids
    return _make_activity


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}
    return _auth_headers


def activity_form(**overrides):
    form = {
        "title": "Recycled plastic bottles",
        "description": "Sorted and dropped off at the municipal center",
        "type": "RECYCLING",
        "quantity": "2",
        "unit": "kg",
        "date": "2026-10-01T10:00:00Z",
    }
    form.update(overrides)
    return form


def evidence_files(count=1, content_type="image/png", data=PNG_BYTES):
    return [("evidence", (f"photo{i}.png", data, content_type)) for i in range(count)]
