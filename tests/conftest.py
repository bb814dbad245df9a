"""
Shared fixtures: the whole app runs against an in-memory SQLite database
that is recreated for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

import storefront.data.models  # noqa: F401
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models.product import ProductModel
from storefront.main import app


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def products():
    """Three products created a day apart: Keyboard (oldest), Mouse, Monitor (newest)."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    rows = [
        ProductModel(name="Keyboard", description="Mechanical", price=Decimal("100.00"), image="/kb.jpg", created_at=base),
        ProductModel(name="Mouse", description="Wireless", price=Decimal("50.00"), image="/mouse.jpg", created_at=base + timedelta(days=1)),
        ProductModel(name="Monitor", description="27 inch", price=Decimal("899.00"), image=None, created_at=base + timedelta(days=2)),
    ]
    db = SessionLocal()
    try:
        db.add_all(rows)
        db.commit()
        return {p.name: p.id for p in rows}
    finally:
        db.close()
