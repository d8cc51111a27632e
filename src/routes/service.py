from typing import Dict, Iterable, List, NamedTuple, Optional, Protocol
import heapq
import itertools
import logging

from src.exceptions import BadRequest, Conflict, NotFound
from src.models import Route
from src.naming import canonical_station_name
from src.routes.schemas import RouteBase, RouteLeg
from src.routes.store import RouteStore
from src.routes.validation import RouteValidator

logger = logging.getLogger(__name__)

# station name -> neighbor station name -> segment price
Graph = Dict[str, Dict[str, float]]


class PathResult(NamedTuple):
    path: List[str]
    total_price: float
    legs: List[RouteLeg]


class RouteGraphBuilder:
    """Builds the undirected, price-weighted station graph from route records"""

    def build(self, routes: Iterable[Route]) -> Graph:
        graph: Graph = {}
        for route in routes:
            from_name = canonical_station_name(route.from_station)
            to_name = canonical_station_name(route.to_station)

            self._add_edge(graph, from_name, to_name, route.price)

            intermediates = [canonical_station_name(name) for name in (route.intermediate_stations or [])]
            if not route.is_direct_route and intermediates:
                # Route price spread evenly over every hop of the chain
                segment_price = route.price / (len(intermediates) + 1)
                chain = [from_name] + intermediates + [to_name]
                for current, following in zip(chain, chain[1:]):
                    self._add_edge(graph, current, following, segment_price)

        return graph

    @staticmethod
    def _add_edge(graph: Graph, station_a: str, station_b: str, price: float):
        # First writer wins in each direction
        graph.setdefault(station_a, {}).setdefault(station_b, price)
        graph.setdefault(station_b, {}).setdefault(station_a, price)


class GraphProvider(Protocol):
    """Source of the route graph used for path search"""

    def get_graph(self) -> Graph: ...


class StoreGraphProvider:
    """Rebuilds the graph from every stored route on each call"""

    def __init__(self, routes: RouteStore, builder: Optional[RouteGraphBuilder] = None):
        self.routes = routes
        self.builder = builder or RouteGraphBuilder()

    def get_graph(self) -> Graph:
        return self.builder.build(self.routes.find_all())


class ShortestPathResolver:
    """Minimum-price path search (Dijkstra) over a route graph"""

    def find_path(self, graph: Graph, source: str, destination: str) -> Optional[PathResult]:
        if source == destination:
            return PathResult(path=[source], total_price=0.0, legs=[])

        if source not in graph or destination not in graph:
            return None

        distances: Dict[str, float] = {source: 0.0}
        previous: Dict[str, str] = {}
        visited = set()
        # Insertion counter keeps ties in a stable order
        counter = itertools.count()
        frontier = [(0.0, next(counter), source)]

        while frontier:
            current_distance, _, current = heapq.heappop(frontier)
            if current in visited:
                continue
            visited.add(current)

            if current == destination:
                break

            for neighbor, price in graph.get(current, {}).items():
                if neighbor in visited:
                    continue
                new_distance = current_distance + price
                if new_distance < distances.get(neighbor, float("inf")):
                    distances[neighbor] = new_distance
                    previous[neighbor] = current
                    heapq.heappush(frontier, (new_distance, next(counter), neighbor))

        if destination not in distances:
            return None

        path = [destination]
        legs: List[RouteLeg] = []
        current = destination
        while current != source:
            prev = previous[current]
            path.insert(0, prev)
            legs.insert(0, RouteLeg(from_station=prev, to_station=current, price=graph[prev][current]))
            current = prev

        return PathResult(path=path, total_price=distances[destination], legs=legs)


class RouteService:
    """Route administration: validated create, update and delete"""

    def __init__(self, routes: RouteStore, validator: Optional[RouteValidator] = None):
        self.routes = routes
        self.validator = validator or RouteValidator()

    def list_routes(self) -> List[Route]:
        return self.routes.find_all()

    def create_route(self, route_data: RouteBase) -> Route:
        fields = self._validated_fields(route_data)

        if self.routes.exists(fields["from_station"], fields["to_station"]):
            raise Conflict("Route already exists")

        route = self.routes.create(Route(**fields))
        logger.info("Created route %s -> %s (id=%s)", route.from_station, route.to_station, route.id)
        return route

    def update_route(self, route_id: int, route_data: RouteBase) -> Route:
        fields = self._validated_fields(route_data)

        route = self.routes.find_by_id(route_id)
        if route is None:
            raise NotFound("Route not found")

        existing = self.routes.find_one(fields["from_station"], fields["to_station"])
        if existing is not None and existing.id != route.id:
            raise Conflict("Route already exists")

        for key, value in fields.items():
            setattr(route, key, value)
        return self.routes.update(route)

    def delete_route(self, route_id: int) -> None:
        route = self.routes.find_by_id(route_id)
        if route is None:
            raise NotFound("Route not found")
        self.routes.delete(route)
        logger.info("Deleted route %s -> %s (id=%s)", route.from_station, route.to_station, route_id)

    def _validated_fields(self, route_data: RouteBase) -> dict:
        errors = self.validator.validate_route(route_data)
        if errors:
            raise BadRequest("; ".join(error.error_message for error in errors))

        intermediates = []
        if not route_data.is_direct_route:
            intermediates = [canonical_station_name(name) for name in route_data.intermediate_stations]

        return {
            "from_station": canonical_station_name(route_data.from_station),
            "to_station": canonical_station_name(route_data.to_station),
            "price": route_data.price,
            "is_direct_route": route_data.is_direct_route,
            "intermediate_stations": intermediates,
        }
