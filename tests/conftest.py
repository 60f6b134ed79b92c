# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")

from duet.core.security import create_access_token
from duet.db.session import Base, build_engine
from duet.db.session import get_db as app_get_session
from duet.main import app as fastapi_app
from duet.models import User
from duet.schemas.user import UserRegister
from duet.services import identity

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits become savepoints inside one outer transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autoflush=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits escaped.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _register(db: Session, username: str, first_name: str, *, is_admin: bool = False) -> User:
    payload = UserRegister(
        username=username,
        password=TEST_PASSWORD,
        first_name=first_name,
        last_name="Tester",
        gmail_address=f"{username}@example.com",
    )
    return identity.register_user(db, payload, is_admin=is_admin)


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.username, is_admin=user.is_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice(db_session: Session) -> User:
    """Create and return the primary test user."""
    return _register(db_session, "alice", "Alice")


@pytest.fixture()
def bob(db_session: Session) -> User:
    """Create and return the secondary test user."""
    return _register(db_session, "bob", "Bob")


@pytest.fixture()
def carol(db_session: Session) -> User:
    """A third user with no relationship to alice or bob."""
    return _register(db_session, "carol", "Carol")


@pytest.fixture()
def admin(db_session: Session) -> User:
    return _register(db_session, "root", "Admin", is_admin=True)


@pytest.fixture()
def alice_auth(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_auth(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_auth(carol: User) -> dict[str, str]:
    return auth_headers(carol)


@pytest.fixture()
def admin_auth(admin: User) -> dict[str, str]:
    return auth_headers(admin)
