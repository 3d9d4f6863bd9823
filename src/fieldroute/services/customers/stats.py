"""Customer listing and summary helpers."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from ...models.domain import CustomerRecord, CustomerSnapshot
from ..routing import distance_from_origin
from ..scoring import credit_age_days, recovery_score, urgency_tag


def customer_to_dict(customer: CustomerRecord, snapshot: CustomerSnapshot) -> dict:
    """Flatten a record with its derived score, tag and distance from the origin."""

    now = snapshot.generated_at
    tag = urgency_tag(customer, now)
    return {
        "name": customer.name,
        "area": customer.area,
        "route": customer.route,
        "status": customer.status,
        "status_kind": customer.status_kind.value,
        "reason": customer.reason,
        "due": customer.due,
        "business": customer.business,
        "avg_credit_cycle": customer.avg_credit_cycle,
        "last_sale_date": customer.last_sale_date,
        "sale_amount": customer.sale_amount,
        "last_collection_date": customer.last_collection_date,
        "collection_amount": customer.collection_amount,
        "orders_this_month": customer.orders_this_month,
        "reactivate_amount": customer.reactivate_amount,
        "phone": customer.phone,
        "latitude": customer.latitude if customer.has_location else None,
        "longitude": customer.longitude if customer.has_location else None,
        "credit_age_days": credit_age_days(customer, now),
        "recovery_score": recovery_score(customer, now),
        "urgency": tag.value if tag else None,
        "distance_from_origin_km": distance_from_origin(customer, snapshot.origin),
    }


def list_ranked_customers(
    snapshot: CustomerSnapshot,
    area: Optional[str] = None,
    *,
    offset: int = 0,
    limit: Optional[int] = None,
) -> tuple[list[dict], int]:
    """Return ranked customers, optionally filtered by area, with pagination support."""

    normalized_area = area.strip().lower() if isinstance(area, str) and area.strip() else None
    matched = [
        customer
        for customer in snapshot.customers
        if not normalized_area or customer.area.strip().lower() == normalized_area
    ]
    window = matched[offset:] if limit is None else matched[offset : offset + limit]
    return [customer_to_dict(customer, snapshot) for customer in window], len(matched)


def compute_customer_stats(snapshot: CustomerSnapshot) -> dict:
    customers = snapshot.customers
    now = snapshot.generated_at

    tag_counts: Counter[str] = Counter()
    for customer in customers:
        tag = urgency_tag(customer, now)
        if tag:
            tag_counts[tag.value] += 1

    missing_location = [customer.name for customer in customers if not customer.has_location]
    return {
        "totalCustomers": len(customers),
        "blockedCustomers": sum(1 for customer in customers if customer.is_blocked),
        "totalDue": round(sum(customer.due for customer in customers), 2),
        "urgency": dict(tag_counts),
        "missingLocation": {
            "count": len(missing_location),
            "sample": missing_location[:10],
        },
        "generatedAt": now.isoformat(),
    }
