import os

# Must be set before connext.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEND_EMAILS"] = "false"
os.environ["FRONTEND_URL"] = "http://frontend.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from connext.core.security import create_access_token, get_password_hash
from connext.db.database import Base, get_db
from connext.main import app
from connext.models import Expert, Project, ProjectExpert, User, UserRole, VettingQuestion

TEST_PASSWORD = "password123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, role: UserRole, email: str = None, full_name: str = None, **kwargs) -> User:
    user = User(
        email=email or f"{role.value}@mirae.com",
        full_name=full_name or f"{role.value.upper()} User",
        role=role,
        hashed_password=get_password_hash(TEST_PASSWORD),
        **kwargs,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    token = create_access_token(subject=user.email, user_id=user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(db):
    return make_user(db, UserRole.ADMIN)


@pytest.fixture
def pm(db):
    return make_user(db, UserRole.PM)


@pytest.fixture
def ra(db):
    return make_user(db, UserRole.RA, full_name="Rita Recruiter")


@pytest.fixture
def finance(db):
    return make_user(db, UserRole.FINANCE)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def pm_headers(pm):
    return auth_headers(pm)


@pytest.fixture
def ra_headers(ra):
    return auth_headers(ra)


@pytest.fixture
def finance_headers(finance):
    return auth_headers(finance)


@pytest.fixture
def project(db, pm):
    project = Project(
        name="Battery Technology Market Analysis",
        industry="Energy",
        client_name="McKinsey & Company",
        created_by_pm_id=pm.id,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def vetting_question(db, project):
    question = VettingQuestion(
        project_id=project.id,
        question="How many years have you worked with lithium-ion cells?",
        order_index=1,
        is_required=True,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def make_expert(db, email: str = "james.chen@email.com", **kwargs) -> Expert:
    data = {
        "name": "Dr. James Chen",
        "expertise": "Battery Technology",
        "industry": "Energy",
        "company": "Tesla",
    }
    data.update(kwargs)
    expert = Expert(email=email, **data)
    db.add(expert)
    db.commit()
    db.refresh(expert)
    return expert


@pytest.fixture
def expert(db):
    return make_expert(db)


@pytest.fixture
def assignment(db, project, expert):
    assignment = ProjectExpert(project_id=project.id, expert_id=expert.id)
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment
