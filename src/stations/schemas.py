from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

class Location(BaseModel):
    """GeoJSON point; coordinates are [longitude, latitude]"""
    type: str = "Point"
    coordinates: List[float] = []

class StationBase(BaseModel):
    name: str = ""
    image: Optional[str] = None
    location: Location = Field(default_factory=Location)

class StationCreate(StationBase):
    connected_routes: List[str] = []

class StationUpdate(StationBase):
    pass

class Station(StationBase):
    id: int
    connected_routes: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StationList(BaseModel):
    stations: List[Station]

class NearestStation(BaseModel):
    station: Station
    distance_meters: float

class Place(BaseModel):
    stations: List[str]
    location: List[float]
    connected: List[str] = []

class PlacesResult(BaseModel):
    places: Dict[str, Place]
