"""
CSV file reading store.

Layout: a ``DateTime,Systolic,Diastolic,HeartRate,Location,Notes`` header
followed by one reading per line. Ids are 1-based row positions.
"""
import csv
import io
import logging
import os
import tempfile
import threading
from bp_tracker.storage.base import EntryStore, StorageError
from bp_tracker.utils.validators import EntryDefaults, validate_reading

logger = logging.getLogger(__name__)

CSV_HEADER = ['DateTime', 'Systolic', 'Diastolic', 'HeartRate', 'Location', 'Notes']

# Rows already on disk keep whatever location/notes they were saved with
_STORED_ROW_DEFAULTS = EntryDefaults(location='', notes='')


def reading_to_row(reading):
    return [
        reading.timestamp_text,
        reading.systolic,
        reading.diastolic,
        reading.heart_rate,
        reading.location,
        reading.notes,
    ]


def row_to_reading(row, entry_id):
    """Parse a data row. Returns None if the row is not a valid reading."""
    padded = list(row) + [''] * (len(CSV_HEADER) - len(row))
    data = {
        'timestamp': padded[0],
        'systolic': padded[1],
        'diastolic': padded[2],
        'heartRate': padded[3],
        'location': padded[4],
        'notes': padded[5],
    }
    result = validate_reading(data, _STORED_ROW_DEFAULTS)
    if not result.ok:
        return None
    return result.reading.with_id(entry_id)


def write_readings_csv(readings, output=None):
    """Write readings in the data file layout. Returns the text stream."""
    output = output or io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for reading in readings:
        writer.writerow(reading_to_row(reading))
    return output


class CsvEntryStore(EntryStore):
    """Append-only CSV file store; deletes rewrite the file."""

    def __init__(self, path):
        self.path = path
        self._lock = threading.Lock()

    def _ensure_file(self):
        if os.path.exists(self.path) and os.path.getsize(self.path) > 0:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', newline='', encoding='utf-8') as f:
            csv.writer(f, lineterminator='\n').writerow(CSV_HEADER)
        logger.info(f'Created new data file: {self.path}')

    def _read_rows(self):
        if not os.path.exists(self.path):
            return []
        with open(self.path, newline='', encoding='utf-8') as f:
            rows = [row for row in csv.reader(f) if any(cell.strip() for cell in row)]
        if rows and [cell.strip() for cell in rows[0]] == CSV_HEADER:
            return rows[1:]
        return rows

    def _rewrite(self, rows):
        """Replace the data file atomically with the header plus ``rows``."""
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.bp_data-', suffix='.csv')
        try:
            with os.fdopen(fd, 'w', newline='', encoding='utf-8') as f:
                writer = csv.writer(f, lineterminator='\n')
                writer.writerow(CSV_HEADER)
                writer.writerows(rows)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def scan(self):
        """Return ``(position, reading)`` for every data row.

        ``reading`` is None for rows that do not hold a valid reading.
        """
        try:
            with self._lock:
                rows = self._read_rows()
        except OSError as e:
            raise StorageError(f'Could not read {self.path}: {e}') from e
        return [(position, row_to_reading(row, position)) for position, row in enumerate(rows, start=1)]

    def list_all(self):
        readings = []
        for position, reading in self.scan():
            if reading is None:
                logger.warning(f'Skipping invalid row {position} in {self.path}')
                continue
            readings.append(reading)
        return readings

    def create(self, reading):
        try:
            with self._lock:
                self._ensure_file()
                position = len(self._read_rows()) + 1
                with open(self.path, 'a', newline='', encoding='utf-8') as f:
                    csv.writer(f, lineterminator='\n').writerow(reading_to_row(reading))
        except OSError as e:
            raise StorageError(f'Could not write {self.path}: {e}') from e
        return reading.with_id(position)

    def get_by_id(self, entry_id):
        for reading in self.list_all():
            if reading.id == entry_id:
                return reading
        return None

    def delete_by_id(self, entry_id):
        """Remove a row. Rows that are not valid readings count as absent."""
        try:
            with self._lock:
                rows = self._read_rows()
                if entry_id < 1 or entry_id > len(rows):
                    return 0
                if row_to_reading(rows[entry_id - 1], entry_id) is None:
                    return 0
                del rows[entry_id - 1]
                self._rewrite(rows)
        except OSError as e:
            raise StorageError(f'Could not rewrite {self.path}: {e}') from e
        return 1
