"""In-memory data store for the lending business."""

from microlend.store.lending import LendingDataStore

__all__ = ["LendingDataStore"]
