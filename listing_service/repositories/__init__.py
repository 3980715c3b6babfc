"""
Repository layer - Data access abstractions.

This layer provides interfaces for owner and listing persistence,
hiding the document store from API-facing code.
"""

from .listing_repository import IListingRepository
from .mongo_repository import (
    DATABASE_NAME,
    LISTING_COLLECTION,
    OPERATION_TIMEOUT_SECONDS,
    OWNER_COLLECTION,
    MongoListingRepository,
    parse_object_id,
)

__all__ = [
    "IListingRepository",
    "MongoListingRepository",
    "parse_object_id",
    "DATABASE_NAME",
    "OWNER_COLLECTION",
    "LISTING_COLLECTION",
    "OPERATION_TIMEOUT_SECONDS",
]
