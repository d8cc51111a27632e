"""
pytest configuration: every test runs against a fresh in-memory SQLite database
"""
import os

# Must be set before src.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from src.database import Base, SessionLocal, engine
from src.models import Route, Station
from src.naming import canonical_station_name
from src.routes.fare_service import NightFarePolicy
from src.routes.journey_service import JourneyResolver
from src.routes.store import SqlRouteStore
from src.stations.store import SqlStationStore


@pytest.fixture
def db_session():
    """Database session on freshly created tables"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_client(db_session):
    """FastAPI test client sharing the in-memory database"""
    from src.main import app
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def station_store(db_session):
    return SqlStationStore(db_session)


@pytest.fixture
def route_store(db_session):
    return SqlRouteStore(db_session)


@pytest.fixture
def day_policy():
    """Night window that never matches"""
    return NightFarePolicy(start_hour=25, end_hour=26)


@pytest.fixture
def night_policy():
    """Night window covering the whole day"""
    return NightFarePolicy(start_hour=0, end_hour=24)


@pytest.fixture
def resolver(station_store, route_store, day_policy):
    return JourneyResolver(station_store, route_store, night_policy=day_policy)


@pytest.fixture
def add_station(db_session):
    """Insert a station; name is canonicalized unless raw=True"""
    def _add(name, lng=38.75, lat=9.0, raw=False, connected=None):
        station = Station(
            name=name if raw else canonical_station_name(name),
            location_type="Point",
            longitude=lng,
            latitude=lat,
            connected_routes=connected or []
        )
        db_session.add(station)
        db_session.commit()
        db_session.refresh(station)
        return station
    return _add


@pytest.fixture
def add_route(db_session):
    """Insert a route; names are canonicalized unless raw=True"""
    def _add(from_name, to_name, price, intermediates=None, direct=None, raw=False):
        intermediates = intermediates or []
        convert = (lambda n: n) if raw else canonical_station_name
        route = Route(
            from_station=convert(from_name),
            to_station=convert(to_name),
            price=price,
            is_direct_route=(not intermediates) if direct is None else direct,
            intermediate_stations=[convert(n) for n in intermediates]
        )
        db_session.add(route)
        db_session.commit()
        db_session.refresh(route)
        return route
    return _add


@pytest.fixture
def sample_network(add_station, add_route):
    """A small Addis Ababa network: Bole - Megenagna - Piassa - Merkato"""
    stations = {
        "Bole": add_station("Bole", 38.7993, 8.9942),
        "Megenagna": add_station("Megenagna", 38.8018, 9.0205),
        "Arat Kilo": add_station("Arat Kilo", 38.7614, 9.0335),
        "Piassa": add_station("Piassa", 38.7519, 9.0376),
        "Merkato": add_station("Merkato", 38.7372, 9.0327),
    }
    add_route("Bole", "Megenagna", 20.0)
    add_route("Megenagna", "Piassa", 30.0, intermediates=["Arat Kilo"])
    add_route("Piassa", "Merkato", 10.0)
    return stations
