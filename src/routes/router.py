from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from src.database import get_db, parse_id
from src.maps.directions import DirectionsService
from src.maps.service import RouteMapService
from src.models import Route as RouteModel
from src.routes.journey_service import JourneyResolver
from src.routes.schemas import (
    Journey, JourneyResponse, Route, RouteCreate, RouteList, RouteMapResponse, RouteUpdate
)
from src.routes.service import RouteService
from src.routes.store import SqlRouteStore
from src.stations.store import SqlStationStore

router = APIRouter()


def get_route_service(db: Session = Depends(get_db)) -> RouteService:
    return RouteService(SqlRouteStore(db))


def get_journey_resolver(db: Session = Depends(get_db)) -> JourneyResolver:
    return JourneyResolver(SqlStationStore(db), SqlRouteStore(db))


def get_directions_service() -> DirectionsService:
    return DirectionsService()


def route_to_schema(route: RouteModel) -> Route:
    return Route(
        id=route.id,
        from_station=route.from_station,
        to_station=route.to_station,
        price=route.price,
        is_direct_route=route.is_direct_route,
        intermediate_stations=list(route.intermediate_stations or []) or None
    )


@router.get("/routes", response_model=RouteList)
def get_routes(service: RouteService = Depends(get_route_service)):
    """List all route records"""
    return RouteList(routes=[route_to_schema(r) for r in service.list_routes()])


@router.post("/routes", response_model=Route, status_code=status.HTTP_201_CREATED)
def add_route(route_data: RouteCreate, service: RouteService = Depends(get_route_service)):
    """Create a route; (from, to) pairs must be unique"""
    return route_to_schema(service.create_route(route_data))


@router.put("/routes/{route_id}")
def update_route(
    route_id: str,
    route_data: RouteUpdate,
    service: RouteService = Depends(get_route_service)
):
    """Replace a route's stations, price and intermediate stops"""
    service.update_route(parse_id(route_id), route_data)
    return {"message": "Route updated successfully"}


@router.delete("/routes/{route_id}")
def delete_route(route_id: str, service: RouteService = Depends(get_route_service)):
    """Delete a route"""
    service.delete_route(parse_id(route_id))
    return {"message": "Route deleted successfully"}


@router.get("/route", response_model=JourneyResponse)
def get_route(
    from_station: str = Query("", alias="from", description="Origin station"),
    to_station: str = Query("", alias="to", description="Destination station"),
    resolver: JourneyResolver = Depends(get_journey_resolver)
):
    """Fare lookup: stored route or cheapest graph path, night fare applied"""
    return resolver.resolve_fare(from_station, to_station)


@router.get("/journey", response_model=Journey)
def calculate_journey(
    from_station: str = Query("", alias="from", description="Origin station"),
    to_station: str = Query("", alias="to", description="Destination station"),
    resolver: JourneyResolver = Depends(get_journey_resolver)
):
    """Journey with per-leg prices; falls back to a distance-based estimate"""
    return resolver.resolve_journey(from_station, to_station)


@router.get("/route-map", response_model=RouteMapResponse)
def get_route_with_map(
    from_station: str = Query("", alias="from", description="Origin station or place"),
    to_station: str = Query("", alias="to", description="Destination station or place"),
    user_lat: Optional[float] = Query(None, description="User latitude"),
    user_lng: Optional[float] = Query(None, description="User longitude"),
    resolver: JourneyResolver = Depends(get_journey_resolver),
    directions: DirectionsService = Depends(get_directions_service)
):
    """Journey decorated with driving distance, duration and geometry"""
    service = RouteMapService(resolver, directions)
    return service.get_route_with_map(from_station, to_station, user_lat, user_lng)
