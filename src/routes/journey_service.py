from datetime import datetime
from typing import List, Optional
import logging

from src.exceptions import BadRequest, InvalidState, NotFound, StationLookupError
from src.geo import haversine_distance
from src.models import Route, Station
from src.naming import canonical_station_name
from src.routes.fare_service import NightFarePolicy, calculate_fare
from src.routes.schemas import Journey, JourneyResponse, RouteLeg
from src.routes.service import GraphProvider, ShortestPathResolver, StoreGraphProvider
from src.routes.store import RouteStore
from src.stations.service import station_to_schema
from src.stations.store import StationStore

logger = logging.getLogger(__name__)

# Leg prices are floats; smaller gaps are rounding noise
PRICE_TOLERANCE = 1e-6


class JourneyResolver:
    """Resolves journeys and fares between two named stations.

    Journey resolution falls back from the same-station case, to the route
    record joining the two stations, to a distance-based estimate. Fare
    lookup tries the stored route first, then the cheapest path through the
    route graph, and applies the night fare.
    """

    def __init__(
        self,
        stations: StationStore,
        routes: RouteStore,
        graph_provider: Optional[GraphProvider] = None,
        path_resolver: Optional[ShortestPathResolver] = None,
        night_policy: Optional[NightFarePolicy] = None
    ):
        self.stations = stations
        self.routes = routes
        self.graph_provider = graph_provider or StoreGraphProvider(routes)
        self.path_resolver = path_resolver or ShortestPathResolver()
        self.night_policy = night_policy or NightFarePolicy()

    def resolve_journey(self, from_name: str, to_name: str) -> Journey:
        from_name, to_name = self._canonical_pair(from_name, to_name)
        logger.info("Calculating journey from %s to %s", from_name, to_name)

        if from_name == to_name:
            station = self.stations.find_by_name(from_name)
            if station is None:
                raise NotFound(f"Station '{from_name}' not found")
            return Journey(stations=[station_to_schema(station)], total_price=0.0, legs=[])

        route = self.routes.find_between(from_name, to_name)
        if route is None:
            return self._estimate_journey(from_name, to_name)

        if route.is_direct_route:
            from_station = self._require_station(from_name)
            to_station = self._require_station(to_name)
            return Journey(
                stations=[station_to_schema(from_station), station_to_schema(to_station)],
                total_price=route.price,
                legs=[RouteLeg(from_station=from_name, to_station=to_name, price=route.price)]
            )

        if route.intermediate_stations:
            return self._multi_hop_journey(route, from_name, to_name)

        raise InvalidState(f"Route {route.id} has neither a direct flag nor intermediate stations")

    def resolve_fare(self, from_name: str, to_name: str, now: Optional[datetime] = None) -> JourneyResponse:
        from_name, to_name = self._canonical_pair(from_name, to_name)

        route = self.routes.find_one(from_name, to_name)
        if route is not None:
            response = JourneyResponse(
                route=[from_name, to_name],
                total_price=route.price,
                legs=[RouteLeg(from_station=from_name, to_station=to_name, price=route.price)]
            )
        else:
            graph = self.graph_provider.get_graph()
            result = self.path_resolver.find_path(graph, from_name, to_name)
            if result is None:
                raise NotFound("No route found")
            response = JourneyResponse(route=result.path, total_price=result.total_price, legs=result.legs)

        return self.night_policy.apply(response, now)

    def _canonical_pair(self, from_name: str, to_name: str):
        from_name = canonical_station_name(from_name)
        to_name = canonical_station_name(to_name)
        if not from_name or not to_name:
            raise BadRequest("Both 'from' and 'to' parameters are required")
        return from_name, to_name

    def _require_station(self, name: str) -> Station:
        station = self.stations.find_by_name(name)
        if station is None:
            raise StationLookupError(f"Error fetching station details for '{name}'")
        return station

    def _estimate_journey(self, from_name: str, to_name: str) -> Journey:
        """No stored route: price the trip by great-circle distance"""
        from_station = self._require_station(from_name)
        to_station = self._require_station(to_name)

        distance = haversine_distance(
            from_station.latitude, from_station.longitude,
            to_station.latitude, to_station.longitude
        )
        fare = calculate_fare(distance)
        logger.info("No route between %s and %s; estimated %.2f km at fare %.2f", from_name, to_name, distance, fare)

        return Journey(
            stations=[station_to_schema(from_station), station_to_schema(to_station)],
            total_price=fare,
            legs=[RouteLeg(from_station=from_name, to_station=to_name, price=fare)]
        )

    def _multi_hop_journey(self, route: Route, from_name: str, to_name: str) -> Journey:
        from_station = self._require_station(from_name)
        to_station = self._require_station(to_name)

        intermediates = []
        for name in route.intermediate_stations:
            station = self.stations.find_by_name(canonical_station_name(name))
            if station is None:
                raise StationLookupError(f"Error fetching intermediate station details for '{name}'")
            intermediates.append(station)

        # Stored routes may run to -> from; walk the stops in the requested direction
        if canonical_station_name(route.from_station) != from_name:
            intermediates.reverse()

        stations: List[Station] = [from_station] + intermediates + [to_station]

        legs: List[RouteLeg] = []
        unknown_legs: List[int] = []
        total_known_price = 0.0

        for current, following in zip(stations, stations[1:]):
            logger.debug("Looking for route between %s and %s", current.name, following.name)
            segment = self.routes.find_segment(current.name, following.name)
            if segment is not None:
                legs.append(RouteLeg(from_station=current.name, to_station=following.name, price=segment.price))
                total_known_price += segment.price
            else:
                unknown_legs.append(len(legs))
                legs.append(RouteLeg(from_station=current.name, to_station=following.name, price=0.0))

        logger.debug(
            "Total known price: %f, unknown segments: %d, route price: %f",
            total_known_price, len(unknown_legs), route.price
        )

        if unknown_legs:
            price_per_unknown = (route.price - total_known_price) / len(unknown_legs)
            for index in unknown_legs:
                legs[index].price = price_per_unknown

        calculated_total = sum(leg.price for leg in legs)
        if abs(calculated_total - route.price) > PRICE_TOLERANCE:
            logger.warning(
                "Calculated total (%f) does not match route price (%f) for %s -> %s",
                calculated_total, route.price, from_name, to_name
            )

        return Journey(
            stations=[station_to_schema(station) for station in stations],
            total_price=route.price,
            legs=legs
        )
