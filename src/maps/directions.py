"""
Driving directions from an OSRM-compatible routing service.

Used only to decorate journey maps; callers treat UpstreamUnavailable as
"leave the fields empty".
"""
import logging
from typing import Any, NamedTuple, Optional

import requests

from src.config import settings
from src.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


class DrivingRoute(NamedTuple):
    distance: float  # meters
    duration: float  # seconds
    geometry: Any  # GeoJSON LineString


class DirectionsService:
    """Client for the OSRM ``/route/v1/driving`` endpoint"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None, session=None):
        self.base_url = (base_url or settings.OSRM_BASE_URL).rstrip("/")
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout
        self.session = session or requests.Session()

    def get_route(self, from_lng: float, from_lat: float, to_lng: float, to_lat: float) -> DrivingRoute:
        url = (
            f"{self.base_url}/route/v1/driving/"
            f"{from_lng:f},{from_lat:f};{to_lng:f},{to_lat:f}"
        )
        params = {"overview": "full", "geometries": "geojson"}

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as exc:
            raise UpstreamUnavailable("Directions service timed out") from exc
        except (requests.RequestException, ValueError) as exc:
            raise UpstreamUnavailable(f"Directions service failed: {exc}") from exc

        routes = data.get("routes") or []
        if data.get("code", "Ok") != "Ok" or not routes:
            raise UpstreamUnavailable(f"Directions service returned no route ({data.get('code')})")

        best = routes[0]
        return DrivingRoute(
            distance=float(best.get("distance", 0.0)),
            duration=float(best.get("duration", 0.0)),
            geometry=best.get("geometry")
        )
