from typing import Optional
import logging

from src.exceptions import UpstreamUnavailable
from src.maps.directions import DirectionsService
from src.routes.journey_service import JourneyResolver
from src.routes.schemas import RouteMapResponse

logger = logging.getLogger(__name__)


class RouteMapService:
    """Resolves a journey and decorates it with driving directions"""

    def __init__(self, resolver: JourneyResolver, directions: Optional[DirectionsService] = None):
        self.resolver = resolver
        self.directions = directions or DirectionsService()

    def get_route_with_map(
        self,
        from_name: str,
        to_name: str,
        user_lat: Optional[float] = None,
        user_lng: Optional[float] = None
    ) -> RouteMapResponse:
        journey = self.resolver.resolve_journey(from_name, to_name)

        response = RouteMapResponse(
            route=journey.stations,
            total_price=journey.total_price,
            legs=journey.legs
        )

        # Path from the user's position to the first station
        if user_lat and user_lng:
            first_lng, first_lat = journey.stations[0].location.coordinates
            try:
                approach = self.directions.get_route(user_lng, user_lat, first_lng, first_lat)
                response.path = approach.geometry
                response.distance = approach.distance
                response.duration = approach.duration
            except UpstreamUnavailable as exc:
                logger.warning("Skipping approach route to %s: %s", journey.stations[0].name, exc.detail)

        for current, following in zip(journey.stations, journey.stations[1:]):
            from_lng, from_lat = current.location.coordinates
            to_lng, to_lat = following.location.coordinates
            try:
                segment = self.directions.get_route(from_lng, from_lat, to_lng, to_lat)
            except UpstreamUnavailable as exc:
                logger.warning("Skipping driving route %s -> %s: %s", current.name, following.name, exc.detail)
                continue
            response.distance += segment.distance
            response.duration += segment.duration

        return response
