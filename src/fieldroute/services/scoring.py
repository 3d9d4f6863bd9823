"""Recovery-priority scoring for customer accounts."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from ..models.domain import CustomerRecord, UrgencyTag

BLOCKED_WEIGHT = 1000.0
OVERDUE_90_WEIGHT = 500.0
OVERDUE_60_WEIGHT = 300.0
DUE_DIVISOR = 1000.0

_DATE_FORMATS = ("%m/%d/%Y", "%d-%b-%Y", "%d %b %Y", "%b %d, %Y", "%B %d, %Y")


def parse_sale_date(value: str) -> Optional[datetime]:
    """Parse a sheet date; naive values are taken as UTC."""

    text = (value or "").strip()
    if not text:
        return None
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _resolve_now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def credit_age_days(customer: CustomerRecord, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days since the last sale, floored. Future dates give negative ages."""

    sale_date = parse_sale_date(customer.last_sale_date)
    if sale_date is None:
        return None
    return (_resolve_now(now) - sale_date) // timedelta(days=1)


def recovery_score(customer: CustomerRecord, now: Optional[datetime] = None) -> float:
    """Relative urgency rank key; higher means the account needs attention sooner."""

    if not customer.last_sale_date:
        return 0.0

    age = credit_age_days(customer, now)
    score = 0.0
    if customer.is_blocked:
        score += BLOCKED_WEIGHT
    if age is not None:
        if age > 90:
            score += OVERDUE_90_WEIGHT
        elif age > 60:
            score += OVERDUE_60_WEIGHT
    score += customer.due / DUE_DIVISOR
    return score


def rank_customers(customers: Iterable[CustomerRecord], now: Optional[datetime] = None) -> tuple[CustomerRecord, ...]:
    """Order customers by descending recovery score; ties keep feed order."""

    current = _resolve_now(now)
    return tuple(sorted(customers, key=lambda customer: recovery_score(customer, current), reverse=True))


def urgency_tag(customer: CustomerRecord, now: Optional[datetime] = None) -> Optional[UrgencyTag]:
    if customer.is_blocked:
        return UrgencyTag.BLOCKED
    age = credit_age_days(customer, now) if customer.last_sale_date else 0
    if age is None or age <= 60:
        return None
    if customer.due > 0:
        return UrgencyTag.COLLECT_NOW
    return UrgencyTag.FOLLOW_UP
