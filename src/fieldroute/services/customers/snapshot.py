"""Build and publish complete generations of customer-derived state."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional, Sequence

from ...config import settings
from ...data.csv_parser import parse_csv
from ...data.customers_repository import DEFAULT_SCHEMA, ColumnSchema, normalize_rows
from ...data.feed_client import FeedClient, FeedUnavailableError
from ...models.domain import CustomerSnapshot, GeoPoint
from ..routing import build_daily_route, build_route_stops, current_weekday, resolve_day_schedule, summarize_route
from ..scoring import rank_customers

logger = logging.getLogger(__name__)


def default_origin() -> GeoPoint:
    return GeoPoint(settings.hq_latitude, settings.hq_longitude)


def build_snapshot(
    text: str,
    *,
    weekday: str,
    now: Optional[datetime] = None,
    schema: ColumnSchema = DEFAULT_SCHEMA,
    origin: Optional[GeoPoint] = None,
    plan: Optional[Mapping[str, Sequence[str]]] = None,
    average_speed_kmh: Optional[float] = None,
) -> CustomerSnapshot:
    """Derive every output from raw feed text without touching published state."""

    generated_at = now or datetime.now(timezone.utc)
    home = origin or default_origin()
    speed = average_speed_kmh if average_speed_kmh is not None else settings.average_speed_kmh

    customers = normalize_rows(parse_csv(text), schema)
    areas = resolve_day_schedule(weekday, plan)
    # The route follows feed order, so it is taken before ranking.
    daily_route = build_daily_route(customers, areas)

    return CustomerSnapshot(
        customers=rank_customers(customers, generated_at),
        daily_route=daily_route,
        route_stops=build_route_stops(daily_route, home),
        route_summary=summarize_route(daily_route, home, speed),
        weekday=weekday,
        areas=areas,
        origin=home,
        generated_at=generated_at,
    )


class SnapshotStore:
    """Holds the latest published snapshot and serializes refreshes."""

    def __init__(
        self,
        client_factory: Callable[[], FeedClient] = FeedClient,
        schema: ColumnSchema = DEFAULT_SCHEMA,
    ) -> None:
        self._client_factory = client_factory
        self._schema = schema
        self._snapshot: Optional[CustomerSnapshot] = None
        self._feed_text: Optional[str] = None
        self._refresh_lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[CustomerSnapshot]:
        return self._snapshot

    def refresh(self, *, weekday: Optional[str] = None, now: Optional[datetime] = None) -> CustomerSnapshot:
        """Fetch the feed and publish a new generation.

        On fetch failure the previously published snapshot is left untouched and
        :class:`FeedUnavailableError` propagates to the caller.
        """

        with self._refresh_lock:
            return self._refresh_locked(weekday or current_weekday(), now)

    def current(self) -> CustomerSnapshot:
        """Return the published snapshot for today, building it when missing or stale.

        A snapshot built on an earlier weekday is rebuilt from the last fetched
        feed text so the day's route follows the clock without a new fetch.
        """

        today = current_weekday()
        snapshot = self._snapshot
        if snapshot is not None and snapshot.weekday == today:
            return snapshot

        with self._refresh_lock:
            # Another caller may have published while we waited for the lock.
            snapshot = self._snapshot
            if snapshot is not None and snapshot.weekday == today:
                return snapshot
            if snapshot is None or self._feed_text is None:
                return self._refresh_locked(today, None)
            logger.info("Weekday changed from %s to %s; rebuilding day route", snapshot.weekday, today)
            return self._publish(self._feed_text, today, None)

    def _refresh_locked(self, weekday: str, now: Optional[datetime]) -> CustomerSnapshot:
        try:
            text = self._client_factory().fetch_text()
        except FeedUnavailableError:
            logger.warning("Customer feed unavailable; keeping previous snapshot")
            raise
        return self._publish(text, weekday, now)

    def _publish(self, text: str, weekday: str, now: Optional[datetime]) -> CustomerSnapshot:
        snapshot = build_snapshot(text, weekday=weekday, now=now, schema=self._schema)
        self._feed_text = text
        self._snapshot = snapshot
        logger.info(
            "Published snapshot: %d customers, %d scheduled for %s (%.1f km)",
            len(snapshot.customers),
            len(snapshot.daily_route),
            snapshot.weekday,
            snapshot.route_summary.total_distance_km,
        )
        return snapshot


_store: Optional[SnapshotStore] = None


def get_store() -> SnapshotStore:
    global _store
    if _store is None:
        _store = SnapshotStore()
    return _store
