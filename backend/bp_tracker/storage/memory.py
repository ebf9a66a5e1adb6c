"""
In-memory reading store.
"""
import threading
from bp_tracker.storage.base import EntryStore


class MemoryEntryStore(EntryStore):
    """List-backed store with auto-incrementing ids."""

    def __init__(self, readings=None):
        self._lock = threading.Lock()
        self._readings = []
        self._next_id = 1
        for reading in readings or []:
            self.create(reading)

    def list_all(self):
        with self._lock:
            return list(self._readings)

    def create(self, reading):
        with self._lock:
            stored = reading.with_id(self._next_id)
            self._next_id += 1
            self._readings.append(stored)
            return stored

    def get_by_id(self, entry_id):
        with self._lock:
            for reading in self._readings:
                if reading.id == entry_id:
                    return reading
        return None

    def delete_by_id(self, entry_id):
        with self._lock:
            before = len(self._readings)
            self._readings = [r for r in self._readings if r.id != entry_id]
            return before - len(self._readings)
