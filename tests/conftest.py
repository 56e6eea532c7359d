import os

# Settings are read at import time; point them at an in-memory database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["APP_ENV"] = "test"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

import fueltrack.models  # noqa: F401
from fueltrack.database import Base, SessionLocal, engine
from fueltrack.main import create_app
from fueltrack.models.trip import Trip, TripStatus, FuelType
from fueltrack.models.user import User, RoleName
from fueltrack.services.notification_service import ConnectionManager
from fueltrack.utils.clock import utcnow
from fueltrack.utils.security import create_access_token, hash_password

TEST_PASSWORD = "Secret123"


class RecordingNotifier(ConnectionManager):
    """ConnectionManager that also remembers every broadcast it was asked to send."""

    def __init__(self):
        super().__init__()
        self.events: list[tuple[str, object]] = []

    async def broadcast(self, event, payload):
        self.events.append((event.value, payload))
        return await super().broadcast(event, payload)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    application = create_app()
    application.state.notifier = notifier
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def make_user(db, username: str, role: RoleName = RoleName.USER, active: bool = True) -> User:
    user = User(username=username, password=hash_password(TEST_PASSWORD), role=role, isActive=active)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


@pytest.fixture
def admin(db):
    return make_user(db, "admin", RoleName.ADMIN)


@pytest.fixture
def operator(db):
    return make_user(db, "operator")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def user_headers(operator):
    return auth_headers(operator)


def make_trip(db, **overrides) -> Trip:
    now = utcnow()
    fields = {
        "driverName": "Carlos Mendoza",
        "truckPlate": "TRK-001",
        "origin": "Barranquilla",
        "destination": "Cartagena",
        "fuelType": FuelType.DIESEL,
        "quantityLiters": 12000,
        "departureAt": now + timedelta(hours=2),
        "status": TripStatus.IN_TRANSIT,
        "createdAt": now,
        "updatedAt": now,
    }
    fields.update(overrides)
    trip = Trip(**fields)
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


def trip_payload(**overrides) -> dict:
    payload = {
        "driverName": "María González",
        "truckPlate": "TRK-002",
        "origin": "Bogotá",
        "destination": "Medellín",
        "fuelType": "gasoline",
        "quantityLiters": 100,
        "departureAt": (utcnow() + timedelta(hours=1)).isoformat(),
    }
    payload.update(overrides)
    return payload
