"""Routing helpers for the day's visits."""

from .schedule import current_weekday, resolve_day_schedule
from .service import (
    EmptyRouteError,
    MissingLocationError,
    RouteUnavailableError,
    build_daily_route,
    build_route_stops,
    build_tour_url,
    distance_from_origin,
    summarize_route,
)

__all__ = [
    "current_weekday",
    "resolve_day_schedule",
    "build_daily_route",
    "build_route_stops",
    "build_tour_url",
    "distance_from_origin",
    "summarize_route",
    "RouteUnavailableError",
    "EmptyRouteError",
    "MissingLocationError",
]
