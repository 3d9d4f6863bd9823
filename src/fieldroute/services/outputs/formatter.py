"""Serializers for snapshot exports."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from pathlib import Path

from ...models.domain import CustomerSnapshot
from ...persistence.filesystem import FileStorage
from ..customers.stats import customer_to_dict


def snapshot_to_json(snapshot: CustomerSnapshot) -> dict:
    return {
        "generated_at": snapshot.generated_at.isoformat(),
        "weekday": snapshot.weekday,
        "areas": list(snapshot.areas),
        "origin": asdict(snapshot.origin),
        "route_summary": asdict(snapshot.route_summary),
        "route": [asdict(stop) for stop in snapshot.route_stops],
        "customers": [customer_to_dict(customer, snapshot) for customer in snapshot.customers],
    }


def route_stops_to_csv(snapshot: CustomerSnapshot) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "weekday",
        "sequence",
        "customer_name",
        "area",
        "distance_from_origin_km",
        "distance_from_prev_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in snapshot.route_stops:
        writer.writerow(
            {
                "weekday": snapshot.weekday,
                "sequence": stop.sequence,
                "customer_name": stop.customer_name,
                "area": stop.area,
                "distance_from_origin_km": "" if stop.distance_from_origin_km is None else round(stop.distance_from_origin_km, 3),
                "distance_from_prev_km": "" if stop.distance_from_prev_km is None else round(stop.distance_from_prev_km, 3),
            }
        )
    return buffer.getvalue()


def export_snapshot(snapshot: CustomerSnapshot, storage: FileStorage) -> Path:
    """Write ``summary.json`` and ``route.csv`` into a fresh run directory."""

    run_dir = storage.make_run_directory(prefix=f"snapshot_{snapshot.weekday.lower()}")
    storage.write_json(run_dir / "summary.json", snapshot_to_json(snapshot))
    storage.write_csv(run_dir / "route.csv", route_stops_to_csv(snapshot))
    return run_dir
