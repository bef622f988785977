"""
Pytest configuration and fixtures for AssetVerse tests
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_SECRET_KEY", "test-secret")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from assetverse.config import settings
from assetverse.database import Base, enable_sqlite_foreign_keys, get_db
from assetverse.main import app
from assetverse.models.asset import Asset, ProductType
from assetverse.models.user import User, UserRole

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_token(email, expires_in=timedelta(hours=1)):
    """Mint an ID token the way the identity provider would."""
    claims = {
        "email": email,
        "sub": email,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, settings.AUTH_SECRET_KEY, algorithm=settings.AUTH_ALGORITHM)


def auth_headers(email):
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
def db_session():
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client whose requests share the test's session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_hr(db_session):
    def _make_hr(email="hr@acme.com", company_name="Acme", package_limit=5, current_employees=0):
        hr = User(
            email=email,
            name="Helen HR",
            role=UserRole.HR,
            company_name=company_name,
            company_logo="https://img.example.com/acme.png",
            subscription="basic",
            package_limit=package_limit,
            current_employees=current_employees,
        )
        db_session.add(hr)
        db_session.commit()
        return hr
    return _make_hr


@pytest.fixture
def make_employee(db_session):
    def _make_employee(email="emp1@mail.com", name="Eve Employee"):
        employee = User(email=email, name=name, role=UserRole.EMPLOYEE)
        db_session.add(employee)
        db_session.commit()
        return employee
    return _make_employee


@pytest.fixture
def make_asset(db_session):
    def _make_asset(hr, quantity=1, name="Laptop", product_type=ProductType.RETURNABLE):
        asset = Asset(
            product_name=name,
            product_image="https://img.example.com/laptop.png",
            product_type=product_type.value,
            product_quantity=quantity,
            available_quantity=quantity,
            hr_email=hr.email,
            company_name=hr.company_name,
        )
        db_session.add(asset)
        db_session.commit()
        return asset
    return _make_asset


@pytest.fixture
def hr(make_hr):
    return make_hr()


@pytest.fixture
def employee(make_employee):
    return make_employee()


@pytest.fixture
def asset(make_asset, hr):
    return make_asset(hr)
