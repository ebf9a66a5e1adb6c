"""
Entry model: relational row for a stored reading.
"""
from datetime import datetime
from bp_tracker import db
from bp_tracker.models.reading import Reading


class Entry(db.Model):
    """Persisted blood pressure reading."""
    __tablename__ = 'entries'

    id = db.Column(db.Integer, primary_key=True)
    date_time = db.Column(db.DateTime, nullable=False, index=True)

    # Measurements
    systolic = db.Column(db.Integer, nullable=False)
    diastolic = db.Column(db.Integer, nullable=False)
    heart_rate = db.Column(db.Integer, nullable=False)

    location = db.Column(db.String(255), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def from_reading(cls, reading: Reading) -> 'Entry':
        return cls(
            date_time=reading.timestamp,
            systolic=reading.systolic,
            diastolic=reading.diastolic,
            heart_rate=reading.heart_rate,
            location=reading.location,
            notes=reading.notes,
        )

    def to_reading(self) -> Reading:
        return Reading(
            timestamp=self.date_time,
            systolic=self.systolic,
            diastolic=self.diastolic,
            heart_rate=self.heart_rate,
            location=self.location or '',
            notes=self.notes or '',
            id=self.id,
        )

    def __repr__(self):
        return f'<Entry {self.id}: {self.systolic}/{self.diastolic}>'
