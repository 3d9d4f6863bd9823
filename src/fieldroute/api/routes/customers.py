"""Customer ranking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...data.customers_repository import find_customer, sanitize_text
from ...data.feed_client import FeedUnavailableError
from ...models.domain import CustomerSnapshot
from ...persistence.filesystem import FileStorage
from ...schemas.customers import (
    CustomerListResponse,
    CustomerModel,
    CustomerStatsResponse,
    RefreshResponse,
)
from ...services.customers import compute_customer_stats, customer_to_dict, get_store, list_ranked_customers
from ...services.outputs import export_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])

FEED_ERROR_DETAIL = "Failed to load customer data. Please try again later."


def current_snapshot() -> CustomerSnapshot:
    try:
        return get_store().current()
    except FeedUnavailableError as exc:
        logger.warning("Customer feed fetch failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=FEED_ERROR_DETAIL) from exc


@router.post("/refresh", response_model=RefreshResponse, status_code=status.HTTP_200_OK)
def refresh_customers(persist: bool = Query(default=False, description="Export the new snapshot to disk.")) -> RefreshResponse:
    try:
        snapshot = get_store().refresh()
    except FeedUnavailableError as exc:
        logger.warning("Customer feed fetch failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=FEED_ERROR_DETAIL) from exc

    export_dir = None
    if persist:
        export_dir = str(export_snapshot(snapshot, FileStorage()))
    return RefreshResponse(
        customers=len(snapshot.customers),
        scheduled=len(snapshot.daily_route),
        weekday=snapshot.weekday,
        generated_at=snapshot.generated_at.isoformat(),
        export_dir=export_dir,
    )


@router.get("", response_model=CustomerListResponse, status_code=status.HTTP_200_OK)
def list_customers(
    area: str | None = Query(default=None, description="Optional area filter"),
    page: int = Query(default=1, ge=1, description="1-based page index for pagination"),
    page_size: int = Query(default=100, ge=1, le=1000, description="Maximum number of records per page"),
) -> CustomerListResponse:
    snapshot = current_snapshot()
    offset = (page - 1) * page_size
    items, total = list_ranked_customers(snapshot, area, offset=offset, limit=page_size)
    return CustomerListResponse(
        items=[CustomerModel(**record) for record in items],
        page=page,
        page_size=page_size,
        total=total,
        has_next_page=(offset + len(items)) < total,
        generated_at=snapshot.generated_at.isoformat(),
    )


@router.get("/stats", response_model=CustomerStatsResponse, status_code=status.HTTP_200_OK)
def get_customer_stats() -> CustomerStatsResponse:
    return CustomerStatsResponse(**compute_customer_stats(current_snapshot()))


@router.get("/{name}", response_model=CustomerModel, status_code=status.HTTP_200_OK)
def get_customer(name: str) -> CustomerModel:
    snapshot = current_snapshot()
    # Stored names are HTML-escaped; accept the raw feed spelling too.
    customer = find_customer(snapshot.customers, name) or find_customer(snapshot.customers, sanitize_text(name))
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerModel(**customer_to_dict(customer, snapshot))
