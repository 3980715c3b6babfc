"""
Custom exceptions for the listing service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, GraphQL, database driver).
"""

from typing import Optional
from urllib.parse import urlsplit, urlunsplit


class ListingServiceException(Exception):
    """Base exception for all listing service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


def redact_uri(uri: str) -> str:
    """Strip the password from a connection URI so it can be logged."""
    try:
        parts = urlsplit(uri)
    except ValueError:
        return "<unparseable uri>"
    if parts.password is None:
        return uri
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username}:***@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


class DatabaseConnectionException(ListingServiceException):
    """Raised when the document store cannot be reached at startup."""

    def __init__(self, uri: str, reason: Optional[str] = None):
        safe_uri = redact_uri(uri)
        message = f"Cannot connect to MongoDB at {safe_uri}"
        if reason:
            message += f": {reason}"
        super().__init__(message=message, details={"uri": safe_uri, "reason": reason})


class InvalidIdentifierException(ListingServiceException):
    """Raised when an identifier string is not a valid ObjectId."""

    def __init__(self, identifier: str, entity: Optional[str] = None):
        message = f"Invalid identifier: {identifier!r}"
        if entity:
            message = f"Invalid {entity} identifier: {identifier!r}"
        super().__init__(
            message=message, details={"identifier": identifier, "entity": entity}
        )


class EntityNotFoundException(ListingServiceException):
    """Raised when no document matches a lookup by identifier."""

    entity = "entity"

    def __init__(self, identifier: str):
        message = f"{self.entity.capitalize()} not found: {identifier}"
        super().__init__(
            message=message, details={"entity": self.entity, "identifier": identifier}
        )


class OwnerNotFoundException(EntityNotFoundException):
    """Raised when an owner lookup matches nothing."""

    entity = "owner"


class ListingNotFoundException(EntityNotFoundException):
    """Raised when a listing lookup matches nothing."""

    entity = "listing"


class DocumentDecodeException(ListingServiceException):
    """Raised when a stored document cannot be mapped to its domain model."""

    def __init__(self, collection: str, document_id: Optional[str], reason: str):
        message = f"Cannot decode document {document_id} from '{collection}': {reason}"
        super().__init__(
            message=message,
            details={
                "collection": collection,
                "document_id": document_id,
                "reason": reason,
            },
        )
