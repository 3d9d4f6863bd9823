from datetime import datetime, timezone
from typing import Callable

import pytest

from fieldroute.data.customers_repository import DEFAULT_SCHEMA
from fieldroute.models.domain import AccountStatus, CustomerRecord

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)

HEADER = [
    "Name", "Area", "Status", "Reason", "Reactivate", "Business", "Due", "", "AvgCycle",
    "", "", "", "", "Phone", "Lat", "Lng", "", "LastSale", "SaleAmt", "LastCollection",
    "CollectionAmt", "Orders", "Route",
]


def feed_row(
    name: str,
    area: str,
    *,
    status: str = "Active",
    due: str = "0",
    lat: str = "",
    lng: str = "",
    last_sale: str = "",
    phone: str = "9876500000",
    route: str = "R1",
) -> list[str]:
    row = [""] * len(HEADER)
    row[DEFAULT_SCHEMA.name] = name
    row[DEFAULT_SCHEMA.area] = area
    row[DEFAULT_SCHEMA.status] = status
    row[DEFAULT_SCHEMA.due] = due
    row[DEFAULT_SCHEMA.phone] = phone
    row[DEFAULT_SCHEMA.latitude] = lat
    row[DEFAULT_SCHEMA.longitude] = lng
    row[DEFAULT_SCHEMA.last_sale_date] = last_sale
    row[DEFAULT_SCHEMA.route] = route
    return row


def feed_text(rows: list[list[str]]) -> str:
    return "\n".join(",".join(row) for row in [HEADER, *rows]) + "\n"


SAMPLE_ROWS = [
    feed_row("Acme Traders", "Juria", due="1500", lat="21.0", lng="83.05", last_sale="2024-05-20"),
    feed_row("Bharat Stores", "Ghess", status="Blocked", due="20000", lat="21.1", lng="83.2", last_sale="2024-01-01"),
    feed_row("Chandan Agencies", "Juria", due="90000", lat="21.02", lng="83.07", last_sale="2024-02-15"),
    feed_row("", "Juria", due="100"),
    feed_row("Durga Mart", "Juria", due="0", last_sale="2024-03-20"),
]


@pytest.fixture
def sample_feed() -> str:
    return feed_text(SAMPLE_ROWS)


@pytest.fixture
def make_customer() -> Callable[..., CustomerRecord]:
    def _customer(
        name: str = "Customer",
        area: str = "Juria",
        *,
        status: str = "Active",
        due: float = 0.0,
        lat: float = float("nan"),
        lng: float = float("nan"),
        last_sale: str = "",
    ) -> CustomerRecord:
        return CustomerRecord(
            name=name,
            area=area,
            route="R1",
            status=status,
            status_kind=AccountStatus.from_text(status),
            reason="",
            due=due,
            business="",
            avg_credit_cycle="",
            last_sale_date=last_sale,
            sale_amount="",
            last_collection_date="",
            collection_amount="",
            orders_this_month="",
            reactivate_amount="",
            phone="",
            latitude=lat,
            longitude=lng,
        )

    return _customer
