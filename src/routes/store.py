from typing import List, Optional, Protocol
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.database import store_errors
from src.exceptions import Conflict
from src.models import Route
from src.naming import base_station_name, canonical_station_name


class RouteStore(Protocol):
    """Route collection consumed by the journey resolver and the admin API"""

    def find_one(self, from_station: str, to_station: str, direct_only: bool = False) -> Optional[Route]: ...

    def find_between(self, station_a: str, station_b: str) -> Optional[Route]: ...

    def find_segment(self, station_a: str, station_b: str) -> Optional[Route]: ...

    def find_all(self) -> List[Route]: ...

    def find_by_id(self, route_id: int) -> Optional[Route]: ...

    def exists(self, from_station: str, to_station: str) -> bool: ...

    def count_referencing(self, station_name: str) -> int: ...

    def create(self, route: Route) -> Route: ...

    def update(self, route: Route) -> Route: ...

    def delete(self, route: Route) -> None: ...


class SqlRouteStore:
    """RouteStore backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, from_station: str, to_station: str, direct_only: bool = False) -> Optional[Route]:
        """Route stored exactly as from_station -> to_station"""
        with store_errors("find route"):
            query = self.db.query(Route).filter(
                Route.from_station == from_station,
                Route.to_station == to_station
            )
            if direct_only:
                query = query.filter(Route.is_direct_route == True)
            return query.order_by(Route.id).first()

    def find_between(self, station_a: str, station_b: str) -> Optional[Route]:
        """Route connecting the two stations in either stored order"""
        with store_errors("find route between stations"):
            return self.db.query(Route).filter(
                or_(
                    and_(Route.from_station == station_a, Route.to_station == station_b),
                    and_(Route.from_station == station_b, Route.to_station == station_a)
                )
            ).order_by(Route.id).first()

    def find_segment(self, station_a: str, station_b: str) -> Optional[Route]:
        """Direct route covering one segment, in either order, with or without the name suffix"""
        canonical_a, canonical_b = canonical_station_name(station_a), canonical_station_name(station_b)
        base_a, base_b = base_station_name(station_a), base_station_name(station_b)

        with store_errors("find segment route"):
            return self.db.query(Route).filter(
                Route.is_direct_route == True,
                or_(
                    and_(Route.from_station == canonical_a, Route.to_station == canonical_b),
                    and_(Route.from_station == canonical_b, Route.to_station == canonical_a),
                    and_(Route.from_station == base_a, Route.to_station == base_b),
                    and_(Route.from_station == base_b, Route.to_station == base_a)
                )
            ).order_by(Route.id).first()

    def find_all(self) -> List[Route]:
        with store_errors("list routes"):
            return self.db.query(Route).order_by(Route.id).all()

    def find_by_id(self, route_id: int) -> Optional[Route]:
        with store_errors("find route by id"):
            return self.db.query(Route).filter(Route.id == route_id).first()

    def exists(self, from_station: str, to_station: str) -> bool:
        return self.find_one(from_station, to_station) is not None

    def count_referencing(self, station_name: str) -> int:
        """Number of routes naming the station as an endpoint or intermediate stop"""
        names = {canonical_station_name(station_name), base_station_name(station_name)}
        count = 0
        for route in self.find_all():
            stops = [route.from_station, route.to_station] + list(route.intermediate_stations or [])
            if any(stop in names for stop in stops):
                count += 1
        return count

    def create(self, route: Route) -> Route:
        with store_errors("create route"):
            self.db.add(route)
            self._commit_unique()
            self.db.refresh(route)
        return route

    def update(self, route: Route) -> Route:
        with store_errors("update route"):
            self._commit_unique()
            self.db.refresh(route)
        return route

    def _commit_unique(self) -> None:
        # A concurrent writer may claim the (from, to) pair after exists() passed
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Route already exists")

    def delete(self, route: Route) -> None:
        with store_errors("delete route"):
            self.db.delete(route)
            self.db.commit()
