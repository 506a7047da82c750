"""Abstract Places service protocol."""

from abc import ABC, abstractmethod

from app.schemas.place import Place, PlaceDetails


class PlacesServiceProtocol(ABC):
    """Interface for Places API lookups."""

    DEFAULT_TYPE_FILTER: str = "restaurant|cafe|bar|museum|park|shopping_mall|gym|library|movie_theater"

    @abstractmethod
    async def nearby(
        self,
        lat: float,
        lng: float,
        radius_meters: int = 1500,
        keyword: str | None = None,
    ) -> list[Place]:
        """Search places around a coordinate.

        Args:
            lat: Latitude of the search centre
            lng: Longitude of the search centre
            radius_meters: Search radius
            keyword: Free-text keyword; without one the default type filter applies

        Returns:
            Normalised places, at most the configured result cap
        """
        raise NotImplementedError

    @abstractmethod
    async def details(self, place_id: str) -> PlaceDetails | None:
        """Look up contact details for a place.

        Args:
            place_id: Google Places ID

        Returns:
            Place details or None
        """
        raise NotImplementedError
