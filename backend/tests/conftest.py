from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from helpdesk.core.security import create_session_token  # noqa: E402
from helpdesk.db.base import Base  # noqa: E402
from helpdesk.models.reference import Area, ProblemType, Project  # noqa: E402
from helpdesk.models.user_role import UserRoleRecord  # noqa: E402

SOPORTE = 4
MARKETING = 1


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    db = factory()
    db.add_all(
        [
            Area(id=MARKETING, name="Marketing"),
            Area(id=SOPORTE, name="Soporte"),
            Project(id=9, name="CRM"),
            ProblemType(id=3, name="Bug"),
            UserRoleRecord(user_id="admin-1", role="admin"),
            UserRoleRecord(user_id="worker-1", role="worker", area_id=SOPORTE),
            UserRoleRecord(user_id="worker-2", role="trabajador", area_id=MARKETING),
        ]
    )
    db.commit()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from helpdesk.db.session import get_db
    from helpdesk.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def auth_headers():
    def _headers(user_id: str, email: str | None = None) -> dict[str, str]:
        token = create_session_token(user_id, email or f"{user_id}@example.com")
        return {"Authorization": f"Bearer {token}"}

    return _headers
