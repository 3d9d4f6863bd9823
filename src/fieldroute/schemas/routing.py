"""Routing response schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class OriginModel(BaseModel):
    latitude: float
    longitude: float


class RouteStopModel(BaseModel):
    sequence: int
    customer_name: str
    area: str
    distance_from_origin_km: float | None = None
    distance_from_prev_km: float | None = None


class RouteSummaryModel(BaseModel):
    stop_count: int
    total_distance_km: float
    estimated_travel_hours: float


class DailyRouteResponse(BaseModel):
    weekday: str
    areas: List[str]
    origin: OriginModel
    stops: List[RouteStopModel]
    summary: RouteSummaryModel
    generated_at: str


class TourResponse(BaseModel):
    url: str
    stops: int


class DayScheduleResponse(BaseModel):
    weekday: str
    areas: List[str]
