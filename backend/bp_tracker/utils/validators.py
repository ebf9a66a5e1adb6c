"""
Input validation for blood pressure readings.
"""
import enum
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from bp_tracker.models.reading import Reading, TIMESTAMP_FORMAT


class RejectionReason(str, enum.Enum):
    MISSING_FIELD = 'MissingField'
    INVALID_TIMESTAMP = 'InvalidTimestamp'
    SYSTOLIC_OUT_OF_RANGE = 'SystolicOutOfRange'
    DIASTOLIC_OUT_OF_RANGE = 'DiastolicOutOfRange'
    HEART_RATE_OUT_OF_RANGE = 'HeartRateOutOfRange'


# field -> (label, minimum, maximum, reason); checked in this order
MEASUREMENT_RANGES = {
    'systolic': ('Systolic', 70, 250, RejectionReason.SYSTOLIC_OUT_OF_RANGE),
    'diastolic': ('Diastolic', 40, 150, RejectionReason.DIASTOLIC_OUT_OF_RANGE),
    'heart_rate': ('Heart rate', 30, 200, RejectionReason.HEART_RATE_OUT_OF_RANGE),
}

# Accepted request keys per field, first match wins
FIELD_ALIASES = {
    'timestamp': ('timestamp', 'dateTime'),
    'systolic': ('systolic',),
    'diastolic': ('diastolic',),
    'heart_rate': ('heartRate', 'heart_rate'),
    'location': ('location',),
    'notes': ('notes',),
}

REQUIRED_FIELDS = ('timestamp', 'systolic', 'diastolic', 'heart_rate')

# Names reported back to callers in "missing field" messages
FIELD_DISPLAY_NAMES = {
    'timestamp': 'timestamp',
    'systolic': 'systolic',
    'diastolic': 'diastolic',
    'heart_rate': 'heartRate',
}


def current_timestamp() -> datetime:
    return datetime.now().replace(microsecond=0)


@dataclass(frozen=True)
class EntryDefaults:
    """Values substituted for blank optional fields.

    A ``timestamp`` of None means callers must supply one.
    """
    location: str = 'Unknown'
    notes: str = ''
    timestamp: Optional[Callable[[], datetime]] = None


REST_DEFAULTS = EntryDefaults(location='Unknown')
INTERACTIVE_DEFAULTS = EntryDefaults(location='Home', timestamp=current_timestamp)


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    field: str
    message: str

    def to_dict(self):
        return {'reason': self.reason.value, 'field': self.field, 'message': self.message}


@dataclass(frozen=True)
class ValidationResult:
    reading: Optional[Reading] = None
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _lookup(data: dict, field: str):
    for key in FIELD_ALIASES[field]:
        if key in data:
            return data[key]
    return None


def parse_int(value) -> Optional[int]:
    """Coerce a raw value to int. Returns None when it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not re.fullmatch(r'[+-]?\d+', text, re.ASCII):
        return None
    return int(text)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD HH:MM:SS`` (or ISO-8601). Returns None if unparseable."""
    if isinstance(value, datetime):
        return value.replace(microsecond=0)
    text = str(value).strip()
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).replace(microsecond=0)
    except ValueError:
        return None


def validate_measurement(field: str, value) -> Optional[Rejection]:
    """Check one numeric field. Non-numeric input counts as out of range."""
    label, minimum, maximum, reason = MEASUREMENT_RANGES[field]
    number = parse_int(value)
    if number is None or number < minimum or number > maximum:
        return Rejection(reason, field, f'{label} must be between {minimum} and {maximum}')
    return None


def validate_reading(data: dict, defaults: EntryDefaults = REST_DEFAULTS) -> ValidationResult:
    """Validate blood pressure reading input.

    Checks run in order (presence, timestamp format, systolic, diastolic,
    heart rate) and the first failure is returned as the rejection.
    """
    raw = {field: _lookup(data, field) for field in FIELD_ALIASES}

    if _is_blank(raw['timestamp']) and defaults.timestamp is not None:
        raw['timestamp'] = defaults.timestamp()

    missing = [field for field in REQUIRED_FIELDS if _is_blank(raw[field])]
    if missing:
        names = ', '.join(FIELD_DISPLAY_NAMES[f] for f in missing)
        return ValidationResult(rejection=Rejection(
            RejectionReason.MISSING_FIELD, missing[0], f'Missing required fields: {names}'))

    timestamp = parse_timestamp(raw['timestamp'])
    if timestamp is None:
        return ValidationResult(rejection=Rejection(
            RejectionReason.INVALID_TIMESTAMP, 'timestamp',
            'Timestamp must be in YYYY-MM-DD HH:MM:SS format'))

    for field in MEASUREMENT_RANGES:
        rejection = validate_measurement(field, raw[field])
        if rejection:
            return ValidationResult(rejection=rejection)

    location = raw['location']
    notes = raw['notes']
    reading = Reading(
        timestamp=timestamp,
        systolic=parse_int(raw['systolic']),
        diastolic=parse_int(raw['diastolic']),
        heart_rate=parse_int(raw['heart_rate']),
        location=defaults.location if _is_blank(location) else str(location).strip(),
        notes=defaults.notes if _is_blank(notes) else str(notes).strip(),
    )
    return ValidationResult(reading=reading)
