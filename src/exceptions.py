"""
Domain errors raised by the services.

Each error carries the HTTP status the API answers with; the exception
handler registered in ``src.main`` turns them into JSON responses.
"""


class TaxiFareError(Exception):
    """Base class for every error surfaced by the fare services"""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class BadRequest(TaxiFareError):
    """Missing or invalid caller input"""
    status_code = 400
    default_detail = "Invalid request"


class NotFound(TaxiFareError):
    """Referenced station or route does not exist"""
    status_code = 404
    default_detail = "Not found"


class StationLookupError(TaxiFareError):
    """A dependent station lookup failed; stored data is inconsistent"""
    status_code = 500
    default_detail = "Error fetching station details"


class Conflict(TaxiFareError):
    """Duplicate route pair or station still referenced by routes"""
    status_code = 409
    default_detail = "Conflict"


class UpstreamUnavailable(TaxiFareError):
    """An external service (directions, uploads, email) failed or timed out"""
    status_code = 502
    default_detail = "Upstream service unavailable"


class InvalidState(TaxiFareError):
    """A stored route is neither direct nor has intermediate stations"""
    status_code = 500
    default_detail = "Invalid route configuration"


class StoreUnavailable(TaxiFareError):
    """The station/route store failed or timed out; safe to retry"""
    status_code = 503
    default_detail = "Data store unavailable, please retry"


class ConfigurationError(TaxiFareError):
    """A required setting for an optional integration is missing"""
    status_code = 500
    default_detail = "Service not configured"
