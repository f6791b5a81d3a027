"""Pytest configuration for the faulty asset tracker tests."""
import os

# Point both services at throwaway databases before anything imports the engines
os.environ.setdefault("AUTH_DATABASE_URL", "sqlite://")
os.environ.setdefault("ASSET_DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-for-pytest-only")

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.auth import create_access_token
from shared.core.database import AuthBase, Base, get_asset_db, get_auth_db
from shared.core.schemas import UserToken

from asset_service.app.main import app as asset_app
from asset_service.app.models.faulty_assets import FaultyAsset
from asset_service.app.schemas.faulty_assets_schemas import FaultyAssetCreate
from auth_service.app.main import app as auth_app
from auth_service.app.services import userservices


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class InMemoryAuditSink:
    """Collects audit calls without touching the database."""

    def __init__(self):
        self.entries = []

    def record(self, asset_id, action, principal):
        self.entries.append((asset_id, action, principal.name if principal else None))


class FailingAuditSink:
    def record(self, asset_id, action, principal):
        raise RuntimeError("audit store unavailable")


@pytest.fixture
def asset_session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(asset_session_factory):
    session = asset_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def auth_session_factory():
    engine = _memory_engine()
    AuthBase.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = factory()
    try:
        userservices.seed_roles(session)
    finally:
        session.close()

    yield factory
    AuthBase.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def auth_db(auth_session_factory):
    session = auth_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def asset_client(asset_session_factory):
    def override_get_db():
        session = asset_session_factory()
        try:
            yield session
        finally:
            session.close()

    asset_app.dependency_overrides[get_asset_db] = override_get_db
    with TestClient(asset_app) as client:
        yield client
    asset_app.dependency_overrides.clear()


@pytest.fixture
def auth_client(auth_session_factory):
    def override_get_db():
        session = auth_session_factory()
        try:
            yield session
        finally:
            session.close()

    auth_app.dependency_overrides[get_auth_db] = override_get_db
    with TestClient(auth_app) as client:
        yield client
    auth_app.dependency_overrides.clear()


@pytest.fixture
def employee():
    return UserToken(user_id="2", name="employee@example.com", roles=["Employee"])


@pytest.fixture
def admin():
    return UserToken(user_id="1", name="admin@example.com", roles=["Admin"])


@pytest.fixture
def employee_headers():
    token = create_access_token(2, "employee@example.com", ["Employee"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_access_token(1, "admin@example.com", ["Admin"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_asset():
    """Build a valid create payload, overriding any field by keyword."""

    def _make(**overrides):
        values = {
            "category": "Laptop",
            "asset_name": "ThinkPad T14",
            "ticket_id": "INC-1001",
            "serial_no": "SN-1001",
            "asset_tag": "A-100",
            "branch": "Head Office",
            "date_received": datetime(2026, 1, 24, 9, 30),
            "received_by": "IT Desk",
            "vendor": "Lenovo Service",
            "fault_reported": "Screen flickers",
            "vendor_pickup_date": None,
            "repair_cost": None,
            "status": "Pending",
        }
        values.update(overrides)
        return FaultyAssetCreate(**values)

    return _make


@pytest.fixture
def asset_json():
    def _make(**overrides):
        body = {
            "category": "Printer",
            "assetName": "HP LaserJet",
            "ticketId": "INC-2001",
            "serialNo": "S1",
            "assetTag": "T1",
            "branch": "Branch 7",
            "dateReceived": "2026-01-24T10:00:00",
            "receivedBy": "Front Desk",
            "vendor": "HP Care",
            "faultReported": "Paper jam on every print",
            "vendorPickupDate": None,
            "repairCost": None,
            "status": "Pending",
        }
        body.update(overrides)
        return body

    return _make


@pytest.fixture
def insert_raw_asset(db):
    """Insert a row directly, bypassing the service and its audit trail."""

    def _insert(asset_tag, serial_no, status="Pending", repair_cost=None):
        asset = FaultyAsset(
            category="Laptop",
            asset_name="Dell Latitude",
            ticket_id=f"INC-{asset_tag}",
            serial_no=serial_no,
            asset_tag=asset_tag,
            branch="Head Office",
            date_received=datetime(2026, 1, 20),
            received_by="IT Desk",
            vendor="Dell",
            fault_reported="No power",
            repair_cost=Decimal(str(repair_cost)) if repair_cost is not None else None,
            status=status,
        )
        db.add(asset)
        db.commit()
        return asset

    return _insert


@pytest.fixture
def memory_sink():
    return InMemoryAuditSink()


@pytest.fixture
def failing_sink():
    return FailingAuditSink()
