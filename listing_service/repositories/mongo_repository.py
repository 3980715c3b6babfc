"""
MongoDB implementation of the listing repository.

Owners and listings live in one collection each inside the ``listings-db``
database. Every call is a single round-trip bounded by a fixed timeout.
"""

from contextlib import closing
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, TypeVar

import pymongo
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from ..domain.exceptions import (
    DatabaseConnectionException,
    DocumentDecodeException,
    EntityNotFoundException,
    InvalidIdentifierException,
    ListingNotFoundException,
    OwnerNotFoundException,
    redact_uri,
)
from ..logging_config import get_logger
from ..models import Listing, ListingStatus, NewListing, NewOwner, Owner
from .listing_repository import IListingRepository

logger = get_logger(__name__)

DATABASE_NAME = "listings-db"
OWNER_COLLECTION = "owner"
LISTING_COLLECTION = "listing"
OPERATION_TIMEOUT_SECONDS = 10

T = TypeVar("T")


def parse_object_id(identifier: str, entity: Optional[str] = None) -> ObjectId:
    """
    Convert a hex string into an ObjectId.

    Args:
        identifier: 24-character hex string
        entity: Entity name used in the error message

    Returns:
        The parsed ObjectId

    Raises:
        InvalidIdentifierException: If identifier is not a valid ObjectId
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifierException(str(identifier), entity)
    try:
        return ObjectId(identifier)
    except (InvalidId, TypeError):
        raise InvalidIdentifierException(identifier, entity) from None


def _utc(value: datetime) -> datetime:
    """Normalize a stored datetime to an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _now_millis() -> datetime:
    """Current UTC time truncated to the store's millisecond resolution."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MongoListingRepository(IListingRepository):
    """MongoDB implementation for owner and listing persistence."""

    def __init__(self, client: MongoClient, database_name: str = DATABASE_NAME):
        """
        Initialize repository.

        Args:
            client: Connected MongoDB client, owned by this repository
            database_name: Logical database holding both collections
        """
        self.client = client
        self.database_name = database_name

    @classmethod
    def connect(cls, uri: str) -> "MongoListingRepository":
        """
        Connect to MongoDB and verify the server answers a ping.

        Args:
            uri: MongoDB connection string

        Returns:
            Repository bound to the new client

        Raises:
            DatabaseConnectionException: If the client cannot be created,
                authentication fails or the ping does not succeed in time
        """
        client = None
        try:
            client = MongoClient(uri, tz_aware=True)
            with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
                client.admin.command("ping")
        except (PyMongoError, ValueError, TypeError) as e:
            logger.error(
                "MongoDB connection failed", uri=redact_uri(uri), error=str(e)
            )
            if client is not None:
                client.close()
            raise DatabaseConnectionException(uri, str(e)) from e

        logger.info("Connected to MongoDB", uri=redact_uri(uri))
        return cls(client)

    def close(self) -> None:
        """Release the client and its connection pool."""
        self.client.close()

    def __enter__(self) -> "MongoListingRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _collection(self, name: str) -> Collection:
        return self.client[self.database_name][name]

    def create_owner(self, new_owner: NewOwner) -> Owner:
        """Insert an owner document and echo it back with its identifier."""
        document = new_owner.model_dump()
        inserted_id = self._insert(OWNER_COLLECTION, document)
        return Owner(id=str(inserted_id), **new_owner.model_dump())

    def create_listing(self, new_listing: NewListing) -> Listing:
        """Insert a listing document stamped with creation time and status."""
        created_at = _now_millis()
        document = {
            **new_listing.model_dump(),
            "created_at": created_at,
            "status": ListingStatus.NOT_STARTED.value,
        }
        inserted_id = self._insert(LISTING_COLLECTION, document)
        return Listing(
            id=str(inserted_id),
            created_at=created_at,
            status=ListingStatus.NOT_STARTED,
            **new_listing.model_dump(),
        )

    def get_owners(self) -> List[Owner]:
        """Scan the owner collection."""
        return self._scan(OWNER_COLLECTION, self._map_to_owner)

    def get_listings(self) -> List[Listing]:
        """Scan the listing collection."""
        return self._scan(LISTING_COLLECTION, self._map_to_listing)

    def get_owner(self, owner_id: str) -> Owner:
        """Find an owner by its hex identifier."""
        return self._find_by_id(
            OWNER_COLLECTION,
            owner_id,
            self._map_to_owner,
            OwnerNotFoundException,
        )

    def get_listing(self, listing_id: str) -> Listing:
        """Find a listing by its hex identifier."""
        return self._find_by_id(
            LISTING_COLLECTION,
            listing_id,
            self._map_to_listing,
            ListingNotFoundException,
        )

    def count(self, collection_name: str) -> int:
        """Count documents in one of the repository's collections."""
        with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
            return self._collection(collection_name).count_documents({})

    def _insert(self, collection_name: str, document: dict) -> ObjectId:
        try:
            with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
                result = self._collection(collection_name).insert_one(document)
        except PyMongoError as e:
            logger.error("Insert failed", collection=collection_name, error=str(e))
            raise

        logger.debug(
            "Document inserted",
            collection=collection_name,
            document_id=str(result.inserted_id),
        )
        return result.inserted_id

    def _scan(
        self, collection_name: str, mapper: Callable[[Mapping[str, Any]], T]
    ) -> List[T]:
        # A malformed document aborts the whole scan; nothing partial is returned.
        try:
            with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
                with closing(self._collection(collection_name).find({})) as cursor:
                    return [mapper(document) for document in cursor]
        except PyMongoError as e:
            logger.error("Scan failed", collection=collection_name, error=str(e))
            raise
        except DocumentDecodeException as e:
            logger.error(
                "Scan aborted on malformed document",
                collection=collection_name,
                document_id=e.details["document_id"],
                reason=e.details["reason"],
            )
            raise

    def _find_by_id(
        self,
        collection_name: str,
        identifier: str,
        mapper: Callable[[Mapping[str, Any]], T],
        not_found: type[EntityNotFoundException],
    ) -> T:
        object_id = parse_object_id(identifier, not_found.entity)
        try:
            with pymongo.timeout(OPERATION_TIMEOUT_SECONDS):
                document = self._collection(collection_name).find_one(
                    {"_id": object_id}
                )
        except PyMongoError as e:
            logger.error(
                "Lookup failed",
                collection=collection_name,
                document_id=identifier,
                error=str(e),
            )
            raise

        if document is None:
            raise not_found(identifier)
        return mapper(document)

    def _map_to_owner(self, document: Mapping[str, Any]) -> Owner:
        """Map a stored owner document to the Owner model."""
        try:
            return Owner(
                id=str(document["_id"]),
                name=document["name"],
                email=document["email"],
                phone=document["phone"],
            )
        except (KeyError, ValidationError) as e:
            raise DocumentDecodeException(
                OWNER_COLLECTION, _document_id(document), _reason(e)
            ) from e

    def _map_to_listing(self, document: Mapping[str, Any]) -> Listing:
        """
        Map a stored listing document to the Listing model.

        Documents written without ``created_at`` or ``status`` fall back to the
        ObjectId's generation time and the initial status.
        """
        try:
            object_id = document["_id"]
            created_at = document.get("created_at")
            if created_at is None and isinstance(object_id, ObjectId):
                created_at = object_id.generation_time
            if isinstance(created_at, datetime):
                created_at = _utc(created_at)

            return Listing(
                id=str(object_id),
                owner_id=document["owner_id"],
                description=document["description"],
                location=document["location"],
                created_at=created_at,
                status=document.get("status", ListingStatus.NOT_STARTED.value),
            )
        except (KeyError, ValidationError) as e:
            raise DocumentDecodeException(
                LISTING_COLLECTION, _document_id(document), _reason(e)
            ) from e


def _document_id(document: Mapping[str, Any]) -> Optional[str]:
    object_id = document.get("_id")
    return None if object_id is None else str(object_id)


def _reason(error: Exception) -> str:
    if isinstance(error, KeyError):
        return f"missing field {error.args[0]!r}"
    return str(error)
