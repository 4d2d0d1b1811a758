"""Data persistence adapters."""

from tyre_twin.storage.history_recorder import HistoryRecorder
from tyre_twin.storage.snapshot_store import SavedSession, SnapshotStore

__all__ = ["HistoryRecorder", "SavedSession", "SnapshotStore"]
