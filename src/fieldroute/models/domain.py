"""Domain models for customer accounts and the day's route."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class AccountStatus(str, Enum):
    """Closed set of account states; the feed's free text is kept for display."""

    BLOCKED = "blocked"
    ACTIVE = "active"
    OTHER = "other"

    @classmethod
    def from_text(cls, text: Optional[str]) -> "AccountStatus":
        normalized = (text or "").strip().lower()
        if "blocked" in normalized:
            return cls.BLOCKED
        if normalized == "active":
            return cls.ACTIVE
        return cls.OTHER


class UrgencyTag(str, Enum):
    BLOCKED = "BLOCKED"
    COLLECT_NOW = "COLLECT_NOW"
    FOLLOW_UP = "FOLLOW_UP"


@dataclass(slots=True, frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class CustomerRecord:
    """A normalized account row from the feed."""

    name: str
    area: str
    route: str
    status: str
    status_kind: AccountStatus
    reason: str
    due: float
    business: str
    avg_credit_cycle: str
    last_sale_date: str
    sale_amount: str
    last_collection_date: str
    collection_amount: str
    orders_this_month: str
    reactivate_amount: str
    phone: str
    latitude: float
    longitude: float

    @property
    def is_blocked(self) -> bool:
        return self.status_kind is AccountStatus.BLOCKED

    @property
    def has_location(self) -> bool:
        # Coordinates are parsed independently; both must be finite to place the stop.
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


@dataclass(slots=True, frozen=True)
class RouteStop:
    sequence: int
    customer_name: str
    area: str
    distance_from_origin_km: Optional[float]
    distance_from_prev_km: Optional[float]


@dataclass(slots=True, frozen=True)
class RouteSummary:
    stop_count: int
    total_distance_km: float
    estimated_travel_hours: float


@dataclass(slots=True, frozen=True)
class CustomerSnapshot:
    """One complete generation of derived customer state."""

    customers: tuple[CustomerRecord, ...]
    daily_route: tuple[CustomerRecord, ...]
    route_stops: tuple[RouteStop, ...]
    route_summary: RouteSummary
    weekday: str
    areas: tuple[str, ...]
    origin: GeoPoint
    generated_at: datetime
