"""
Test configuration and fixtures
"""

import os

# Set test environment variables BEFORE importing app modules
os.environ["MONGO_URI"] = "mongodb://localhost:27017"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_JSON"] = "false"

import mongomock  # noqa: E402
import pytest  # noqa: E402

from listing_service.models import NewListing, NewOwner  # noqa: E402
from listing_service.repositories import MongoListingRepository  # noqa: E402


@pytest.fixture(scope="function")
def mongo_client():
    """Create a fresh in-memory MongoDB client for each test"""
    client = mongomock.MongoClient(tz_aware=True)
    try:
        yield client
    finally:
        client.close()


@pytest.fixture(scope="function")
def repository(mongo_client):
    """Repository bound to the in-memory client"""
    return MongoListingRepository(mongo_client)


@pytest.fixture
def jane_doe():
    """Sample owner input"""
    return NewOwner(name="Jane Doe", email="jane@example.com", phone="555-0100")


@pytest.fixture
def apartment():
    """Sample listing input factory"""

    def _make(owner_id: str) -> NewListing:
        return NewListing(
            owner_id=owner_id,
            description="2BR apartment",
            location="Downtown",
        )

    return _make
