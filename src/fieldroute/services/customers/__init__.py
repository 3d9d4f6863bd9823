"""Customer service helpers."""

from .snapshot import SnapshotStore, build_snapshot, get_store
from .stats import compute_customer_stats, customer_to_dict, list_ranked_customers

__all__ = [
    "SnapshotStore",
    "build_snapshot",
    "get_store",
    "compute_customer_stats",
    "customer_to_dict",
    "list_ranked_customers",
]
