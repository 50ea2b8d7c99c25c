import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-team-api")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from app.database import get_db
from app.models.base import Base
from app.config import settings
from app.core.role_catalog import default_policy
from app.models.member import Member
from app.models.role import Department, MemberStatus, TeamRole
from app.repositories.team_member_repository import TeamMemberRepository
from app.repositories.user_repository import UserRepository
# Import all model classes to ensure they're registered with SQLAlchemy
from app.models.user import User
from app.models.tenant import Tenant
from app.models.team_member import TeamMember
# Import FastAPI app AFTER model imports
from app.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_member(
    member_id: str,
    role: TeamRole,
    manager_id: str | None = None,
    full_name: str | None = None,
    department: Department = Department.ENGINEERING,
    status: MemberStatus = MemberStatus.ACTIVE,
    email: str = "",
) -> Member:
    """Hand-built member snapshot with its role's default policy"""
    return Member(
        id=member_id,
        full_name=full_name or f"Member {member_id}",
        role=role,
        department=department,
        manager_id=manager_id,
        status=status,
        policy=default_policy(role),
        email=email,
    )


@pytest.fixture
def scenario_members():
    """CEO(1) -> director(2) -> manager(3) -> senior(4)"""
    return [
        make_member("1", TeamRole.CEO),
        make_member("2", TeamRole.DIRECTOR, manager_id="1"),
        make_member("3", TeamRole.MANAGER, manager_id="2"),
        make_member("4", TeamRole.SENIOR, manager_id="3"),
    ]


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(
    user_id: str = "test-user-123", tenant_id: int | None = None, expired: bool = False
) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim
        tenant_id: Tenant ID to embed in 'tenant_id' claim (omitted if None)
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": user_id, "exp": exp, "iat": datetime.now(UTC)}
    if tenant_id is not None:
        payload["tenant_id"] = tenant_id

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def _headers(user_id: str, tenant_id: int) -> dict:
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id, tenant_id=tenant_id)}"}


@pytest.fixture
def agency(db_session):
    """Agency tenant"""
    tenant = Tenant(name="Acme Agency")
    db_session.add(tenant)
    db_session.commit()
    db_session.refresh(tenant)
    return tenant


def _add_member(db_session, tenant, auth_user_id, full_name, role, department, manager=None):
    user = UserRepository(db_session).get_or_create_by_auth_id(auth_user_id)
    return TeamMemberRepository(db_session).create(TeamMember(
        tenant_id=tenant.id,
        user_id=user.id,
        full_name=full_name,
        email=f"{auth_user_id}@acme.test",
        role=role,
        department=department,
        manager_id=manager.id if manager else None,
        status=MemberStatus.ACTIVE,
        permissions=default_policy(role).model_dump(mode="json"),
    ))


@pytest.fixture
def org(db_session, agency):
    """
    Seeded hierarchy:

        ceo (test-user-123)
        └── director (director-user)
            ├── manager (manager-user)
            │   └── senior (senior-user)
            └── junior (junior-user, sales)
    """
    ceo = _add_member(
        db_session, agency, "test-user-123", "Carla Souza", TeamRole.CEO, Department.OPERATIONS
    )
    director = _add_member(
        db_session, agency, "director-user", "Diego Lima", TeamRole.DIRECTOR,
        Department.ENGINEERING, manager=ceo,
    )
    manager = _add_member(
        db_session, agency, "manager-user", "Marina Alves", TeamRole.MANAGER,
        Department.ENGINEERING, manager=director,
    )
    senior = _add_member(
        db_session, agency, "senior-user", "Sergio Reis", TeamRole.SENIOR,
        Department.ENGINEERING, manager=manager,
    )
    junior = _add_member(
        db_session, agency, "junior-user", "Julia Prado", TeamRole.JUNIOR,
        Department.SALES, manager=director,
    )
    return {
        "ceo": ceo,
        "director": director,
        "manager": manager,
        "senior": senior,
        "junior": junior,
    }


@pytest.fixture
def ceo_headers(agency, org):
    return _headers("test-user-123", agency.id)


@pytest.fixture
def director_headers(agency, org):
    return _headers("director-user", agency.id)


@pytest.fixture
def manager_headers(agency, org):
    return _headers("manager-user", agency.id)


@pytest.fixture
def senior_headers(agency, org):
    return _headers("senior-user", agency.id)
