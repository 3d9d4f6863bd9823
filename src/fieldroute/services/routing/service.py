"""Daily route construction and distance summaries."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ...models.domain import CustomerRecord, GeoPoint, RouteStop, RouteSummary
from ..geospatial import haversine_km

logger = logging.getLogger(__name__)

DEFAULT_AVERAGE_SPEED_KMH = 25.0
GOOGLE_MAPS_DIRECTIONS_URL = "https://www.google.com/maps/dir/"


class RouteUnavailableError(ValueError):
    """Raised when a navigation tour cannot be built for the day's route."""


class EmptyRouteError(RouteUnavailableError):
    pass


class MissingLocationError(RouteUnavailableError):
    pass


def build_daily_route(customers: Iterable[CustomerRecord], areas: Sequence[str]) -> tuple[CustomerRecord, ...]:
    """Keep customers whose area is scheduled, preserving their incoming order."""

    scheduled = set(areas)
    if not scheduled:
        return ()
    return tuple(customer for customer in customers if customer.area in scheduled)


def distance_from_origin(customer: CustomerRecord, origin: GeoPoint) -> float | None:
    if not customer.has_location:
        return None
    return haversine_km(origin.latitude, origin.longitude, customer.latitude, customer.longitude)


def summarize_route(
    route: Sequence[CustomerRecord],
    origin: GeoPoint,
    average_speed_kmh: float = DEFAULT_AVERAGE_SPEED_KMH,
) -> RouteSummary:
    """Closed-loop distance from ``origin`` through each located stop and back.

    Stops without a usable location are counted but contribute no distance.
    ``average_speed_kmh`` is an operational assumption used only for the
    travel-time estimate.
    """

    if average_speed_kmh <= 0:
        raise ValueError("average_speed_kmh must be positive")

    total = 0.0
    prev_lat, prev_lng = origin.latitude, origin.longitude
    for customer in route:
        if not customer.has_location:
            continue
        total += haversine_km(prev_lat, prev_lng, customer.latitude, customer.longitude)
        prev_lat, prev_lng = customer.latitude, customer.longitude

    total += haversine_km(prev_lat, prev_lng, origin.latitude, origin.longitude)
    return RouteSummary(
        stop_count=len(route),
        total_distance_km=total,
        estimated_travel_hours=total / average_speed_kmh,
    )


def build_route_stops(route: Sequence[CustomerRecord], origin: GeoPoint) -> tuple[RouteStop, ...]:
    stops: list[RouteStop] = []
    prev = origin
    for sequence, customer in enumerate(route, start=1):
        leg = None
        if customer.has_location:
            leg = haversine_km(prev.latitude, prev.longitude, customer.latitude, customer.longitude)
            prev = GeoPoint(customer.latitude, customer.longitude)
        stops.append(
            RouteStop(
                sequence=sequence,
                customer_name=customer.name,
                area=customer.area,
                distance_from_origin_km=distance_from_origin(customer, origin),
                distance_from_prev_km=leg,
            )
        )
    return tuple(stops)


def build_tour_url(route: Sequence[CustomerRecord], origin: GeoPoint) -> str:
    """Google Maps directions link: origin, each located stop in order, then origin."""

    if not route:
        raise EmptyRouteError("No customers scheduled for today")

    points = [f"{customer.latitude},{customer.longitude}" for customer in route if customer.has_location]
    if not points:
        raise MissingLocationError("Cannot start tour: missing location data")
    if len(points) < len(route):
        logger.info("Tour skips %d stops without coordinates", len(route) - len(points))

    home = f"{origin.latitude},{origin.longitude}"
    return GOOGLE_MAPS_DIRECTIONS_URL + "/".join([home, *points, home])
