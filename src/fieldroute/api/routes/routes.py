"""Daily route endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import (
    DailyRouteResponse,
    DayScheduleResponse,
    OriginModel,
    RouteStopModel,
    RouteSummaryModel,
    TourResponse,
)
from ...services.routing import RouteUnavailableError, build_tour_url, resolve_day_schedule
from .customers import current_snapshot

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("/today", response_model=DailyRouteResponse, status_code=status.HTTP_200_OK)
def get_today_route() -> DailyRouteResponse:
    snapshot = current_snapshot()
    return DailyRouteResponse(
        weekday=snapshot.weekday,
        areas=list(snapshot.areas),
        origin=OriginModel(**asdict(snapshot.origin)),
        stops=[RouteStopModel(**asdict(stop)) for stop in snapshot.route_stops],
        summary=RouteSummaryModel(**asdict(snapshot.route_summary)),
        generated_at=snapshot.generated_at.isoformat(),
    )


@router.get("/today/tour", response_model=TourResponse, status_code=status.HTTP_200_OK)
def get_today_tour() -> TourResponse:
    snapshot = current_snapshot()
    try:
        url = build_tour_url(snapshot.daily_route, snapshot.origin)
    except RouteUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return TourResponse(url=url, stops=sum(1 for customer in snapshot.daily_route if customer.has_location))


@router.get("/schedule/{weekday}", response_model=DayScheduleResponse, status_code=status.HTTP_200_OK)
def get_day_schedule(weekday: str) -> DayScheduleResponse:
    return DayScheduleResponse(weekday=weekday.strip().title(), areas=list(resolve_day_schedule(weekday)))
