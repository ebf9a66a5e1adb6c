from .base import EntryStore, StorageError
from .csv_store import CsvEntryStore
from .memory import MemoryEntryStore


def build_store(config):
    """Create the store named by ``BP_STORAGE`` (``sql`` or ``csv``)."""
    backend = (config.get('BP_STORAGE') or 'sql').lower()
    if backend == 'csv':
        return CsvEntryStore(config.get('BP_DATA_FILE') or 'bp_data.csv')
    if backend == 'sql':
        from .sql_store import SqlEntryStore
        return SqlEntryStore()
    raise RuntimeError(f'Unknown BP_STORAGE backend: {backend}')
