"""
Listing service startup.

Connects to MongoDB once, verifies the connection and reports collection
sizes. A service without its database has no degraded mode, so a failed
connection ends the process.
"""

import sys
from typing import Optional

from .config import Settings, settings
from .domain.exceptions import DatabaseConnectionException
from .logging_config import get_logger, setup_logging
from .repositories import LISTING_COLLECTION, OWNER_COLLECTION, MongoListingRepository

logger = get_logger(__name__)


def connect_or_exit(uri: str) -> MongoListingRepository:
    """
    Connect the repository, terminating the process on failure.

    Args:
        uri: MongoDB connection string

    Returns:
        Connected repository
    """
    try:
        return MongoListingRepository.connect(uri)
    except DatabaseConnectionException as e:
        logger.critical("Database unavailable, shutting down", **e.details)
        raise SystemExit(1) from e


def main(config: Optional[Settings] = None) -> int:
    """Run the startup connection check."""
    config = config or settings
    setup_logging(config.LOG_LEVEL, config.SERVICE_NAME, config.LOG_JSON)

    logger.info("Starting Listing Service", service=config.SERVICE_NAME)
    with connect_or_exit(config.MONGO_URI) as repository:
        logger.info(
            "Listing Service ready",
            owners=repository.count(OWNER_COLLECTION),
            listings=repository.count(LISTING_COLLECTION),
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
