"""Shared test fixtures."""
import os

# Must be set before salon_booking is imported: config is read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_API_TOKEN"] = "test-admin-token"
os.environ["CLOSED_WEEKDAYS"] = "6"
os.environ["BUSINESS_OPEN_TIME"] = "07:00"
os.environ["BUSINESS_CLOSE_TIME"] = "18:00"
os.environ["SLOT_INTERVAL_MINUTES"] = "30"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from salon_booking.database import Base, SessionLocal, engine
from salon_booking.domain.bookings.service import business_today
from salon_booking.main import app
from salon_booking.utils.blob_storage import BlobStorage, get_blob_storage

PUBLIC_BASE_URL = "https://media.example.com"
ADMIN_TOKEN = "test-admin-token"


class FakeS3Client:
    """Stands in for the boto3 R2 client."""

    def __init__(self):
        self.objects = {}
        self.fail_put = False

    def put_object(self, Bucket, Key, Body, ContentType, **kwargs):
        if self.fail_put:
            raise RuntimeError("R2 unavailable")
        self.objects[Key] = {"Bucket": Bucket, "Body": Body, "ContentType": ContentType}

    def delete_object(self, Bucket, Key):
        self.objects.pop(Key, None)


@pytest.fixture(autouse=True)
def db_session():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def storage(s3_client):
    return BlobStorage(client=s3_client, bucket="test-bucket", public_base_url=PUBLIC_BASE_URL)


@pytest.fixture
def client(storage):
    """FastAPI test client with blob storage swapped for the fake bucket."""
    app.dependency_overrides[get_blob_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def open_day():
    """A future date the studio is open (Sundays are closed)."""
    day = business_today() + timedelta(days=1)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


@pytest.fixture
def sunday():
    day = business_today() + timedelta(days=1)
    while day.weekday() != 6:
        day += timedelta(days=1)
    return day
