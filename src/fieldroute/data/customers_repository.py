"""Helpers for turning raw feed rows into customer records."""

from __future__ import annotations

import html
import logging
import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..models.domain import AccountStatus, CustomerRecord

logger = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(slots=True, frozen=True)
class ColumnSchema:
    """Column positions (0-indexed) of each field in the published sheet.

    The feed has no stable header names, so reordering the sheet's columns
    requires a matching schema here.
    """

    name: int = 0
    area: int = 1
    status: int = 2
    reason: int = 3
    reactivate_amount: int = 4
    business: int = 5
    due: int = 6
    avg_credit_cycle: int = 8
    phone: int = 13
    latitude: int = 14
    longitude: int = 15
    last_sale_date: int = 17
    sale_amount: int = 18
    last_collection_date: int = 19
    collection_amount: int = 20
    orders_this_month: int = 21
    route: int = 22


DEFAULT_SCHEMA = ColumnSchema()


def parse_float(value: Optional[str]) -> float:
    """Read the leading number of ``value`` the way a browser's parseFloat does.

    Returns ``nan`` when no numeric prefix is present.
    """

    if value is None:
        return math.nan
    match = _FLOAT_PREFIX.match(value.lstrip())
    if not match:
        return math.nan
    return float(match.group(0).replace("Infinity", "inf"))


def sanitize_text(value: Optional[str]) -> str:
    """Escape markup-significant characters so the value is safe to embed in HTML."""

    if not value:
        return ""
    return html.escape(value, quote=False)


def _cell(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def row_to_customer(row: Sequence[str], schema: ColumnSchema = DEFAULT_SCHEMA) -> Optional[CustomerRecord]:
    """Map a single positional row to a record; ``None`` when the name is empty."""

    raw_name = _cell(row, schema.name)
    if not raw_name:
        return None

    def text(index: int) -> str:
        return sanitize_text(_cell(row, index))

    due = parse_float(_cell(row, schema.due))
    status = text(schema.status)
    return CustomerRecord(
        name=sanitize_text(raw_name),
        area=text(schema.area),
        route=text(schema.route),
        status=status,
        status_kind=AccountStatus.from_text(status),
        reason=text(schema.reason),
        due=due if math.isfinite(due) and due else 0.0,
        business=text(schema.business),
        avg_credit_cycle=text(schema.avg_credit_cycle),
        last_sale_date=text(schema.last_sale_date),
        sale_amount=text(schema.sale_amount),
        last_collection_date=text(schema.last_collection_date),
        collection_amount=text(schema.collection_amount),
        orders_this_month=text(schema.orders_this_month),
        reactivate_amount=text(schema.reactivate_amount),
        phone=text(schema.phone),
        latitude=parse_float(_cell(row, schema.latitude)),
        longitude=parse_float(_cell(row, schema.longitude)),
    )


def normalize_rows(
    rows: Iterable[Sequence[str]],
    schema: ColumnSchema = DEFAULT_SCHEMA,
) -> tuple[CustomerRecord, ...]:
    """Convert parsed rows (header first) into customer records in feed order."""

    customers: list[CustomerRecord] = []
    for line_number, row in enumerate(rows):
        if line_number == 0:
            continue  # header
        customer = row_to_customer(row, schema)
        if customer is None:
            logger.debug("Skipping feed row %d without a customer name", line_number + 1)
            continue
        customers.append(customer)
    return tuple(customers)


def find_customer(customers: Iterable[CustomerRecord], name: str) -> Optional[CustomerRecord]:
    """Return the first customer whose name matches exactly."""

    for customer in customers:
        if customer.name == name:
            return customer
    return None
