"""
Fare calculation: distance brackets for estimated fares and the night-fare
surcharge applied on the fare lookup path.
"""
import math
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from src.config import settings
from src.routes.schemas import JourneyResponse, RouteLeg

# (upper bound in km, fare) in ascending order
FARE_BRACKETS = [
    (2.5, 10.0),
    (5.0, 15.0),
    (7.5, 20.0),
    (10.0, 25.0),
    (12.5, 30.0),
    (15.0, 35.0),
    (17.5, 40.0),
    (20.0, 45.0),
    (22.5, 50.0),
    (25.0, 55.0),
    (27.5, 60.0),
    (30.0, 65.0),
]

PER_KM_RATE = 2.17


def calculate_fare(distance_km: float) -> float:
    """Fare for a distance in kilometers.

    Distances within the brackets pay the first bracket whose bound covers
    them; anything beyond the last bracket pays PER_KM_RATE per km, truncated.
    """
    if distance_km < 0:
        return 0.0

    for upper_bound, fare in FARE_BRACKETS:
        if distance_km <= upper_bound:
            return fare

    return float(math.floor(distance_km * PER_KM_RATE))


class NightFarePolicy:
    """Fixed surcharge during the evening window, evaluated in local time"""

    def __init__(
        self,
        multiplier: float = None,
        start_hour: float = None,
        end_hour: float = None,
        timezone: str = None
    ):
        self.multiplier = settings.NIGHT_FARE_MULTIPLIER if multiplier is None else multiplier
        self.start_hour = settings.NIGHT_FARE_START_HOUR if start_hour is None else start_hour
        self.end_hour = settings.NIGHT_FARE_END_HOUR if end_hour is None else end_hour
        self.timezone = ZoneInfo(timezone or settings.FARE_TIMEZONE)

    def local_time(self, now: Optional[datetime] = None) -> datetime:
        if now is None:
            return datetime.now(self.timezone)
        if now.tzinfo is None:
            # Naive datetimes are already local wall-clock time
            return now.replace(tzinfo=self.timezone)
        return now.astimezone(self.timezone)

    def is_night_time(self, now: Optional[datetime] = None) -> bool:
        local = self.local_time(now)
        current_time = local.hour + local.minute / 60.0
        return self.start_hour <= current_time <= self.end_hour

    def apply(self, response: JourneyResponse, now: Optional[datetime] = None) -> JourneyResponse:
        """Return the response with the surcharge applied to the total and every leg"""
        if not self.is_night_time(now):
            return response

        return JourneyResponse(
            route=list(response.route),
            total_price=response.total_price * self.multiplier,
            legs=[
                RouteLeg(
                    from_station=leg.from_station,
                    to_station=leg.to_station,
                    price=leg.price * self.multiplier
                )
                for leg in response.legs
            ],
            is_night=True
        )


def is_night_time(now: Optional[datetime] = None) -> bool:
    return NightFarePolicy().is_night_time(now)


def apply_night_fare(response: JourneyResponse, now: Optional[datetime] = None) -> JourneyResponse:
    return NightFarePolicy().apply(response, now)
