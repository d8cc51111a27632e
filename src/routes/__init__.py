"""
Route and Fare Module

This module provides route administration and fare resolution for the taxi
network. It includes:

- Route CRUD with uniqueness of (from, to) station pairs
- Fare lookup over stored routes and the cheapest path through the route graph
- Journey calculation with per-leg prices for multi-hop routes
- Distance-based fare estimation when no route is stored
- Night fare surcharge on the fare lookup path

Key Components:
- service.py: Route graph builder, shortest-path search and route administration
- journey_service.py: Journey and fare resolution
- fare_service.py: Fare brackets and night fare policy
- store.py: Route store protocol and SQLAlchemy implementation
- validation.py: Route record validation
- router.py: FastAPI endpoints
- schemas.py: Pydantic models for request/response structures
"""

from .router import router
from .service import RouteGraphBuilder, ShortestPathResolver, RouteService, StoreGraphProvider
from .journey_service import JourneyResolver
from .fare_service import NightFarePolicy, calculate_fare
from .validation import RouteValidator
from .schemas import (
    RouteCreate, RouteUpdate, Route, RouteLeg, Journey, JourneyResponse,
    RouteMapResponse, RouteValidationError
)

__all__ = [
    "router",
    "RouteGraphBuilder",
    "ShortestPathResolver",
    "RouteService",
    "StoreGraphProvider",
    "JourneyResolver",
    "NightFarePolicy",
    "calculate_fare",
    "RouteValidator",
    "RouteCreate",
    "RouteUpdate",
    "Route",
    "RouteLeg",
    "Journey",
    "JourneyResponse",
    "RouteMapResponse",
    "RouteValidationError"
]
