"""
Test configuration and fixtures.

Provides:
- A fresh SQLite file per test (so concurrent sessions really are separate)
- Demo accounts for each role
- JWT minting and a TestClient wired to the test database
"""
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from taskbridge.database import Base, get_db
from taskbridge.main import app
from taskbridge.models import User, Role
from taskbridge.schemas.task import TaskCreate
from taskbridge.services import task_service
from taskbridge.utils.security import create_access_token, hash_password

TEST_PASSWORD = "password123"


# =============================================================================
# Database
# =============================================================================

@pytest.fixture()
def session_factory(tmp_path: Path) -> Generator[sessionmaker, None, None]:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'taskbridge-test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Accounts
# =============================================================================

@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
    def _make(email: str, role: Role = Role.USER, name: str = None, suspended: bool = False) -> User:
        user = User(
            name=name or email.split("@")[0].title(),
            email=email,
            hashed_password=hash_password(TEST_PASSWORD),
            role=role,
            suspended=suspended,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@test.com", Role.ADMIN, name="System Admin")


@pytest.fixture()
def manager(make_user) -> User:
    return make_user("manager@test.com", Role.MANAGER, name="Mia Manager")


@pytest.fixture()
def other_manager(make_user) -> User:
    return make_user("manager2@test.com", Role.MANAGER, name="Max Manager")


@pytest.fixture()
def requester(make_user) -> User:
    return make_user("user@test.com", Role.USER, name="Uma User")


@pytest.fixture()
def make_task(db: Session) -> Callable[..., object]:
    def _make(owner: User, title: str = "Laptop won't boot", **overrides):
        data = TaskCreate(
            title=title,
            description=overrides.pop("description", "Black screen after the update"),
            priority=overrides.pop("priority", None),
            category=overrides.pop("category", None),
            deadline=overrides.pop("deadline", date.today() + timedelta(days=3)),
        )
        return task_service.create_task(db, owner, data)

    return _make


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture()
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": user.email, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}
