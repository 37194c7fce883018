"""In-memory table snapshots."""

from query_bridge.store.dataset_store import DatasetStore, collect_pages, estimate_size

__all__ = ["DatasetStore", "collect_pages", "estimate_size"]
