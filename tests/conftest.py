"""Pytest configuration and fixtures."""

import os
import tempfile

# Must be set before database/storage are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="listing-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storage
from database import build_engine, get_session
from models import Base, User
from models.user import ROLE_ADMIN, ROLE_OWNER, ROLE_USER
from schemas.property import ImageUpload
from services.listing_command import ListingCommandEngine
from services.session_store import SessionStore


DEFAULT_DETAILS = {
    "apartment": {"rooms": 2, "bathrooms": 1, "kitchen": True, "carpet_area": 900},
    "bungalow": {"bedrooms": 3, "bathrooms": 2, "garden": True, "total_area": 2400},
    "commercial": {"floors": 4, "total_area": 12000, "lift_available": True},
    "land": {"area": 5000, "zone": "R1"},
}


def image(name: str = "photo.jpg", size: int = 64, content_type: str = "image/jpeg") -> ImageUpload:
    """Small fake image payload."""
    return ImageUpload(filename=name, content_type=content_type, data=b"\xff\xd8" + b"x" * (size - 2))


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch) -> str:
    """Point image storage at a per-test directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(storage, "UPLOAD_DIR", str(path))
    return str(path)


def _add_user(db, name: str, email: str, role: str) -> User:
    user = User(name=name, email=email, phone="555-0100", role=role)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def owner(db) -> User:
    """Site owner (may delete listings and change roles)."""
    return _add_user(db, "Olivia Owner", "owner@example.com", ROLE_OWNER)


@pytest.fixture
def admin(db) -> User:
    return _add_user(db, "Adam Admin", "admin@example.com", ROLE_ADMIN)


@pytest.fixture
def member(db) -> User:
    """Regular marketplace user."""
    return _add_user(db, "Uma User", "user@example.com", ROLE_USER)


@pytest.fixture
def make_listing(db, member):
    """Factory creating a listing through the command engine."""

    def _make(
        property_type: str = "apartment",
        price=250000,
        status: str = "available",
        title: str = "Sea-facing flat",
        address: str = "12 Marine Drive",
        details: dict = None,
        images=None,
        owner_id=None,
    ):
        return ListingCommandEngine.create_listing(
            db,
            owner_id=owner_id if owner_id is not None else member.user_id,
            title=title,
            price=price,
            status=status,
            address=address,
            property_type=property_type,
            type_details=details if details is not None else DEFAULT_DETAILS.get(property_type, {}),
            images=images or [],
        )

    return _make


@pytest.fixture
def client(db):
    """API client sharing the test database session."""
    from main import app

    def _override_session():
        yield db

    app.dependency_overrides[get_session] = _override_session
    app.state.session_store = SessionStore()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
