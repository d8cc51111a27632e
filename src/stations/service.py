from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
import logging

from src.exceptions import BadRequest, Conflict, NotFound
from src.models import Station
from src.naming import base_station_name, canonical_station_name
from src.stations import schemas
from src.stations.store import StationStore

if TYPE_CHECKING:
    from src.routes.store import RouteStore

logger = logging.getLogger(__name__)


def station_to_schema(station: Station) -> schemas.Station:
    """API representation of a stored station"""
    return schemas.Station(
        id=station.id,
        name=station.name,
        image=station.image,
        location=schemas.Location(
            type=station.location_type or "Point",
            coordinates=station.coordinates
        ),
        connected_routes=list(station.connected_routes or []),
        created_at=station.created_at,
        updated_at=station.updated_at
    )


class StationService:
    """Station administration, nearest-station search and the places index"""

    def __init__(self, stations: StationStore, routes: Optional["RouteStore"] = None):
        self.stations = stations
        self.routes = routes

    def list_stations(self) -> List[Station]:
        return self.stations.find_all()

    def get_station(self, station_id: int) -> Station:
        station = self.stations.find_by_id(station_id)
        if station is None:
            raise NotFound("Station not found")
        return station

    def create_station(self, station_data: schemas.StationCreate) -> Station:
        name = self._validate(station_data)

        if self.stations.find_by_name(name) is not None:
            raise Conflict(f"Station '{name}' already exists")

        longitude, latitude = station_data.location.coordinates
        station = Station(
            name=name,
            image=station_data.image,
            location_type=station_data.location.type or "Point",
            longitude=longitude,
            latitude=latitude,
            connected_routes=list(station_data.connected_routes)
        )
        station = self.stations.create(station)
        logger.info("Created station %s (id=%s)", station.name, station.id)
        return station

    def update_station(self, station_id: int, station_data: schemas.StationUpdate) -> Station:
        name = self._validate(station_data)
        station = self.get_station(station_id)

        duplicate = self.stations.find_by_name(name)
        if duplicate is not None and duplicate.id != station.id:
            raise Conflict(f"Station '{name}' already exists")

        longitude, latitude = station_data.location.coordinates
        station.name = name
        station.image = station_data.image
        station.location_type = station_data.location.type or "Point"
        station.longitude = longitude
        station.latitude = latitude
        return self.stations.update(station)

    def delete_station(self, station_id: int) -> None:
        station = self.get_station(station_id)

        if self.routes is not None and self.routes.count_referencing(station.name) > 0:
            raise Conflict("Cannot delete station: it is referenced by existing routes")

        self.stations.delete(station)
        logger.info("Deleted station %s (id=%s)", station.name, station_id)

    def find_nearest(self, lat: float, lng: float) -> Tuple[Station, float]:
        if not lat or not lng:
            raise BadRequest("Invalid coordinates")

        nearest = self.stations.find_nearest(lat, lng)
        if nearest is None:
            raise NotFound("No stations found")
        return nearest

    def get_places(self) -> Dict[str, schemas.Place]:
        """Stations keyed by display name (without the " Station" suffix)"""
        places = {}
        for station in self.stations.find_all():
            places[base_station_name(station.name)] = schemas.Place(
                stations=[station.name],
                location=station.coordinates,
                connected=list(station.connected_routes or [])
            )
        logger.info("Fetched %d places", len(places))
        return places

    @staticmethod
    def _validate(station_data: schemas.StationBase) -> str:
        name = canonical_station_name(station_data.name)
        if not name or len(station_data.location.coordinates) != 2:
            raise BadRequest("Invalid station data")
        return name
