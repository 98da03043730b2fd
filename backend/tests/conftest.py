import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("DEV_AUTH_ENABLED", "true")

from invites_api.db.base import Base
from invites_api.db.session import get_db
from invites_api.main import app
from invites_api.models import WorkspaceRecord


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine) -> Session:
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def client(db_session: Session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_workspace(db_session: Session):
    def _make(
        workspace_id: str = "ws-1",
        owner_id: str = "u1",
        members: dict | None = None,
        member_names: dict | None = None,
        invite_enabled: bool = True,
        invite_role: str | None = "editor",
    ) -> WorkspaceRecord:
        record = WorkspaceRecord(
            id=workspace_id,
            owner_id=owner_id,
            members=members or {},
            member_names=member_names or {},
            invite_enabled=invite_enabled,
            invite_role=invite_role,
        )
        db_session.add(record)
        db_session.commit()
        return record

    return _make
