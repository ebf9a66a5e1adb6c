"""
Storage collaborator interface for readings.
"""
import abc
from typing import List, Optional
from bp_tracker.models.reading import Reading


class StorageError(Exception):
    """Raised when the backing store cannot be read or written."""


class EntryStore(abc.ABC):
    """Persists readings and assigns their ids."""

    @abc.abstractmethod
    def list_all(self) -> List[Reading]:
        """Return every stored reading."""

    @abc.abstractmethod
    def create(self, reading: Reading) -> Reading:
        """Store a reading and return it with its assigned id."""

    @abc.abstractmethod
    def get_by_id(self, entry_id: int) -> Optional[Reading]:
        """Return the reading with this id, or None."""

    @abc.abstractmethod
    def delete_by_id(self, entry_id: int) -> int:
        """Delete a reading. Returns the number of readings removed."""
