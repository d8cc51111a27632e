from typing import List
from src.naming import canonical_station_name
from src.routes.schemas import RouteBase, RouteValidationError

class RouteValidator:
    """Validates route records before they are stored"""

    def validate_route(self, route: RouteBase) -> List[RouteValidationError]:
        """Validate a route create/update payload"""
        errors = []

        if not canonical_station_name(route.from_station):
            errors.append(RouteValidationError(
                error_code="MISSING_FROM_STATION",
                error_message="Origin station is required",
                field="from"
            ))

        if not canonical_station_name(route.to_station):
            errors.append(RouteValidationError(
                error_code="MISSING_TO_STATION",
                error_message="Destination station is required",
                field="to"
            ))

        if route.price <= 0:
            errors.append(RouteValidationError(
                error_code="INVALID_PRICE",
                error_message="Price must be greater than zero",
                field="price"
            ))

        if route.is_direct_route:
            return errors

        intermediates = route.intermediate_stations or []
        if not intermediates:
            errors.append(RouteValidationError(
                error_code="MISSING_INTERMEDIATE_STATIONS",
                error_message="Non-direct route must have intermediate stations",
                field="intermediateStations"
            ))
            return errors

        seen = {canonical_station_name(route.from_station)}
        for name in intermediates:
            canonical = canonical_station_name(name)
            if not canonical:
                errors.append(RouteValidationError(
                    error_code="INVALID_INTERMEDIATE_STATION",
                    error_message="Invalid intermediate station",
                    field="intermediateStations"
                ))
                return errors
            if canonical in seen:
                errors.append(RouteValidationError(
                    error_code="DUPLICATE_STATION",
                    error_message="Duplicate stations in route",
                    field="intermediateStations"
                ))
                return errors
            seen.add(canonical)

        if canonical_station_name(route.to_station) in seen:
            errors.append(RouteValidationError(
                error_code="DUPLICATE_STATION",
                error_message="Duplicate stations in route",
                field="to"
            ))

        return errors
