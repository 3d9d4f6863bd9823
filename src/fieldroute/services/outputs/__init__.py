"""Snapshot export helpers."""

from .formatter import export_snapshot, route_stops_to_csv, snapshot_to_json

__all__ = ["export_snapshot", "route_stops_to_csv", "snapshot_to_json"]
