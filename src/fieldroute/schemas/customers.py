"""Customer-facing API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class CustomerModel(BaseModel):
    name: str
    area: str
    route: str
    status: str
    status_kind: str
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
    latitude: float | None = None
    longitude: float | None = None
    credit_age_days: int | None = None
    recovery_score: float
    urgency: str | None = None
    distance_from_origin_km: float | None = None


class CustomerListResponse(BaseModel):
    items: List[CustomerModel]
    page: int
    page_size: int
    total: int
    has_next_page: bool
    generated_at: str


class MissingLocationGroup(BaseModel):
    count: int
    sample: List[str]


class CustomerStatsResponse(BaseModel):
    totalCustomers: int
    blockedCustomers: int
    totalDue: float
    urgency: dict[str, int]
    missingLocation: MissingLocationGroup
    generatedAt: str


class RefreshResponse(BaseModel):
    customers: int
    scheduled: int
    weekday: str
    generated_at: str
    export_dir: str | None = None
