from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from src.database import get_db, parse_id
from src.routes.store import SqlRouteStore
from src.stations.schemas import (
    NearestStation, PlacesResult, Station, StationCreate, StationList, StationUpdate
)
from src.stations.service import StationService, station_to_schema
from src.stations.store import SqlStationStore

router = APIRouter()


def get_station_service(db: Session = Depends(get_db)) -> StationService:
    return StationService(SqlStationStore(db), SqlRouteStore(db))


@router.get("/stations", response_model=StationList)
def get_stations(service: StationService = Depends(get_station_service)):
    """List all stations"""
    return StationList(stations=[station_to_schema(s) for s in service.list_stations()])


@router.get("/stations/{station_id}", response_model=Station)
def get_station(station_id: str, service: StationService = Depends(get_station_service)):
    """Get station details by ID"""
    return station_to_schema(service.get_station(parse_id(station_id)))


@router.post("/stations", response_model=Station, status_code=status.HTTP_201_CREATED)
def create_station(
    station_data: StationCreate,
    service: StationService = Depends(get_station_service)
):
    """Create a station; the name is stored in canonical form"""
    return station_to_schema(service.create_station(station_data))


@router.put("/stations/{station_id}")
def update_station(
    station_id: str,
    station_data: StationUpdate,
    service: StationService = Depends(get_station_service)
):
    """Update a station's name, image and location"""
    service.update_station(parse_id(station_id), station_data)
    return {"message": "Station updated successfully"}


@router.delete("/stations/{station_id}")
def delete_station(station_id: str, service: StationService = Depends(get_station_service)):
    """Delete a station that no route references"""
    service.delete_station(parse_id(station_id))
    return {"message": "Station deleted successfully"}


@router.get("/nearest-station", response_model=NearestStation)
def find_nearest_station(
    lat: Optional[float] = Query(None, description="Latitude"),
    lng: Optional[float] = Query(None, description="Longitude"),
    service: StationService = Depends(get_station_service)
):
    """Find the station closest to the given coordinates"""
    station, distance = service.find_nearest(lat, lng)
    return NearestStation(station=station_to_schema(station), distance_meters=distance)


@router.get("/places", response_model=PlacesResult)
def get_places(service: StationService = Depends(get_station_service)):
    """Stations keyed by display name for the map UI"""
    return PlacesResult(places=service.get_places())
