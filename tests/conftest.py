import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from unileave import models  # noqa: F401
from unileave.database import enable_sqlite_foreign_keys, get_db
from unileave.db.base import Base
from unileave.main import app
from unileave.services.staff_service import StaffService

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture()
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def TestingSessionLocal(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(TestingSessionLocal):
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(TestingSessionLocal):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_staff(db):
    """Create a staff member through the service; keyword overrides win."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "id": f"staff-{n}",
            "name": f"Staff Member {n}",
            "email": f"staff{n}@uni.edu.ng",
            "department": "Computer Science",
            "position": "Lecturer",
            "total_leave": 30,
            "password": "password123",
        }
        data.update(overrides)
        staff, _ = StaffService(db).create_staff(data)
        return staff

    return _make
