"""
HostelHub - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['JWT_SECRET'] = 'test-jwt-secret-for-testing-only'
os.environ['OPENAI_API_KEY'] = ''

from hostelhub.main import app
from hostelhub.api.deps import get_db
from hostelhub.core.auth import Actor, create_access_token, hash_password
from hostelhub.core.database import Base
from hostelhub.models.enums import Role
from hostelhub.models.user import User

test_engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope='function')
def db() -> Generator[Session, None, None]:
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """Test client sharing the test session"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_user(db: Session, name: str, email: str, role: Role = Role.STUDENT,
              hostel: str = 'Hostel A', block: str = 'B1', room: str = '101') -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password('password123'),
        role=role,
        hostel=hostel,
        block=block,
        room=room,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    return {'Authorization': f'Bearer {create_access_token(user)}'}


@pytest.fixture
def student(db: Session) -> User:
    return make_user(db, 'Asha Rao', 'asha@campus.edu')


@pytest.fixture
def other_student(db: Session) -> User:
    return make_user(db, 'Ravi Kumar', 'ravi@campus.edu', hostel='Hostel B', block='C2', room='204')


@pytest.fixture
def manager(db: Session) -> User:
    return make_user(db, 'Warden Office', 'warden@campus.edu', role=Role.MANAGEMENT,
                     hostel=None, block=None, room=None)


@pytest.fixture
def student_actor(student: User) -> Actor:
    return Actor.from_user(student)


@pytest.fixture
def other_actor(other_student: User) -> Actor:
    return Actor.from_user(other_student)


@pytest.fixture
def manager_actor(manager: User) -> Actor:
    return Actor.from_user(manager)


@pytest.fixture
def student_headers(student: User) -> dict:
    return headers_for(student)


@pytest.fixture
def other_headers(other_student: User) -> dict:
    return headers_for(other_student)


@pytest.fixture
def manager_headers(manager: User) -> dict:
    return headers_for(manager)


def issue_payload(**overrides) -> dict:
    payload = {
        'title': 'Leaking tap in washroom',
        'description': 'The tap on the second floor washroom keeps dripping all night.',
        'category': 'PLUMBING',
        'priority': 'MEDIUM',
    }
    payload.update(overrides)
    return payload


def hours_after(base: datetime, hours: float) -> datetime:
    return base + timedelta(hours=hours)
