"""
Listing repository interface (Abstract Base Class).

Defines the contract for owner and listing persistence and retrieval
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import Listing, NewListing, NewOwner, Owner


class IListingRepository(ABC):
    """
    Abstract repository interface for owners and listings.

    Implementations are constructed once at startup and shared by all
    request handlers, so they must be safe for concurrent use.
    """

    @abstractmethod
    def create_owner(self, new_owner: NewOwner) -> Owner:
        """
        Persist a new owner.

        Args:
            new_owner: User-supplied owner fields

        Returns:
            The stored owner with its assigned identifier
        """
        pass

    @abstractmethod
    def create_listing(self, new_listing: NewListing) -> Listing:
        """
        Persist a new listing in the ``not started`` state.

        Args:
            new_listing: User-supplied listing fields

        Returns:
            The stored listing with identifier, creation time and status
        """
        pass

    @abstractmethod
    def get_owners(self) -> List[Owner]:
        """
        Return every stored owner.

        Returns:
            All owners, possibly empty
        """
        pass

    @abstractmethod
    def get_listings(self) -> List[Listing]:
        """
        Return every stored listing.

        Returns:
            All listings, possibly empty
        """
        pass

    @abstractmethod
    def get_owner(self, owner_id: str) -> Owner:
        """
        Find an owner by identifier.

        Args:
            owner_id: Hex-encoded identifier

        Returns:
            The matching owner

        Raises:
            InvalidIdentifierException: If owner_id is malformed
            OwnerNotFoundException: If no owner has this identifier
        """
        pass

    @abstractmethod
    def get_listing(self, listing_id: str) -> Listing:
        """
        Find a listing by identifier.

        Args:
            listing_id: Hex-encoded identifier

        Returns:
            The matching listing

        Raises:
            InvalidIdentifierException: If listing_id is malformed
            ListingNotFoundException: If no listing has this identifier
        """
        pass
