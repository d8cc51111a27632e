from pydantic import BaseModel, Field
from typing import List, Optional, Any
from src.stations.schemas import Station

class RouteBase(BaseModel):
    """Route record as submitted by the admin dashboard"""
    from_station: str = Field("", alias="from")
    to_station: str = Field("", alias="to")
    price: float = 0
    is_direct_route: bool = Field(False, alias="isDirectRoute")
    intermediate_stations: Optional[List[str]] = Field(None, alias="intermediateStations")

    class Config:
        populate_by_name = True

class RouteCreate(RouteBase):
    pass

class RouteUpdate(RouteBase):
    pass

class Route(RouteBase):
    id: int

    class Config:
        populate_by_name = True
        from_attributes = True

class RouteList(BaseModel):
    routes: List[Route]

class RouteLeg(BaseModel):
    """One priced segment between two consecutive stations"""
    from_station: str = Field(alias="from")
    to_station: str = Field(alias="to")
    price: float

    class Config:
        populate_by_name = True

class Journey(BaseModel):
    """Resolved journey: visited stations, total price and per-leg breakdown"""
    stations: List[Station]
    total_price: float
    legs: List[RouteLeg]

class JourneyResponse(BaseModel):
    """Fare lookup result, night fare applied"""
    route: List[str]
    total_price: float = Field(alias="totalPrice")
    legs: List[RouteLeg]
    is_night: bool = Field(False, alias="isNight")

    class Config:
        populate_by_name = True

class RouteMapResponse(BaseModel):
    """Journey decorated with driving geometry, distance and duration"""
    route: List[Station]
    path: Optional[Any] = None
    total_price: float
    distance: float = 0.0
    duration: float = 0.0
    legs: List[RouteLeg]

class RouteValidationError(BaseModel):
    """Route validation error details"""
    error_code: str
    error_message: str
    field: Optional[str] = None
