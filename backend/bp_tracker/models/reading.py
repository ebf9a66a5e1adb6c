"""
Blood Pressure Reading value object.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class Reading:
    """
    A single blood pressure / heart rate measurement.
    Readings are never updated; storage assigns the id on creation.
    """
    timestamp: datetime
    systolic: int
    diastolic: int
    heart_rate: int
    location: str = ''
    notes: str = ''
    id: Optional[int] = field(default=None, compare=False)

    def with_id(self, entry_id: int) -> 'Reading':
        return replace(self, id=entry_id)

    @property
    def timestamp_text(self) -> str:
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp_text,
            'systolic': self.systolic,
            'diastolic': self.diastolic,
            'heartRate': self.heart_rate,
            'location': self.location,
            'notes': self.notes,
        }

    def __repr__(self):
        return f'<Reading {self.id}: {self.systolic}/{self.diastolic}>'
