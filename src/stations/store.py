from typing import List, Optional, Protocol, Tuple
from sqlalchemy.orm import Session
from src.database import store_errors
from src.geo import haversine_distance
from src.models import Station


class StationStore(Protocol):
    """Station collection consumed by the journey resolver and the admin API"""

    def find_by_name(self, name: str) -> Optional[Station]: ...

    def find_by_id(self, station_id: int) -> Optional[Station]: ...

    def find_all(self) -> List[Station]: ...

    def find_nearest(self, lat: float, lng: float) -> Optional[Tuple[Station, float]]: ...

    def create(self, station: Station) -> Station: ...

    def update(self, station: Station) -> Station: ...

    def delete(self, station: Station) -> None: ...


class SqlStationStore:
    """StationStore backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_name(self, name: str) -> Optional[Station]:
        with store_errors("find station by name"):
            return self.db.query(Station).filter(Station.name == name).first()

    def find_by_id(self, station_id: int) -> Optional[Station]:
        with store_errors("find station by id"):
            return self.db.query(Station).filter(Station.id == station_id).first()

    def find_all(self) -> List[Station]:
        with store_errors("list stations"):
            return self.db.query(Station).order_by(Station.id).all()

    def find_nearest(self, lat: float, lng: float) -> Optional[Tuple[Station, float]]:
        """Closest station to (lat, lng) and its distance in meters"""
        nearest = None
        for station in self.find_all():
            distance_km = haversine_distance(lat, lng, station.latitude, station.longitude)
            if nearest is None or distance_km < nearest[1]:
                nearest = (station, distance_km)

        if nearest is None:
            return None
        return nearest[0], nearest[1] * 1000.0

    def create(self, station: Station) -> Station:
        with store_errors("create station"):
            self.db.add(station)
            self.db.commit()
            self.db.refresh(station)
        return station

    def update(self, station: Station) -> Station:
        with store_errors("update station"):
            self.db.commit()
            self.db.refresh(station)
        return station

    def delete(self, station: Station) -> None:
        with store_errors("delete station"):
            self.db.delete(station)
            self.db.commit()
