"""
Tests for reading validation in `bp_tracker/utils/validators.py`.

Covers:
- Acceptance of every in-range reading
- Distinct rejection reasons, reported in check order
- Non-numeric input treated like out-of-range input
- Per-entry-point defaults for timestamp, location and notes
"""

from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bp_tracker.utils.validators import (
    INTERACTIVE_DEFAULTS,
    REST_DEFAULTS,
    EntryDefaults,
    RejectionReason,
    parse_int,
    validate_measurement,
    validate_reading,
)


def _payload(**overrides) -> dict:
    data = {
        'timestamp': '2024-03-01 08:30:00',
        'systolic': 120,
        'diastolic': 80,
        'heartRate': 70,
    }
    data.update(overrides)
    return data


class TestAcceptance:
    def test_valid_payload_produces_normalized_reading(self) -> None:
        result = validate_reading(_payload(systolic='118', location=' Clinic ', notes='after walk'))

        assert result.ok
        reading = result.reading
        assert reading.timestamp == datetime(2024, 3, 1, 8, 30, 0)
        assert reading.systolic == 118
        assert reading.diastolic == 80
        assert reading.heart_rate == 70
        assert reading.location == 'Clinic'
        assert reading.notes == 'after walk'
        assert reading.id is None

    @given(
        systolic=st.integers(min_value=70, max_value=250),
        diastolic=st.integers(min_value=40, max_value=150),
        heart_rate=st.integers(min_value=30, max_value=200),
    )
    def test_every_in_range_reading_is_accepted(self, systolic: int, diastolic: int, heart_rate: int) -> None:
        result = validate_reading(_payload(systolic=systolic, diastolic=diastolic, heartRate=heart_rate))
        assert result.ok
        assert (result.reading.systolic, result.reading.diastolic, result.reading.heart_rate) == (
            systolic, diastolic, heart_rate)

    def test_date_time_alias_and_iso_format_are_accepted(self) -> None:
        data = _payload()
        del data['timestamp']
        data['dateTime'] = '2024-03-01T08:30:00'

        result = validate_reading(data)

        assert result.ok
        assert result.reading.timestamp == datetime(2024, 3, 1, 8, 30, 0)

    def test_integral_float_is_coerced(self) -> None:
        result = validate_reading(_payload(systolic=120.0))
        assert result.ok
        assert result.reading.systolic == 120


class TestRejections:
    @given(systolic=st.one_of(st.integers(max_value=69), st.integers(min_value=251)))
    def test_systolic_out_of_range(self, systolic: int) -> None:
        result = validate_reading(_payload(systolic=systolic))
        assert result.rejection.reason is RejectionReason.SYSTOLIC_OUT_OF_RANGE
        assert result.rejection.message == 'Systolic must be between 70 and 250'

    @given(diastolic=st.one_of(st.integers(max_value=39), st.integers(min_value=151)))
    def test_diastolic_out_of_range(self, diastolic: int) -> None:
        result = validate_reading(_payload(diastolic=diastolic))
        assert result.rejection.reason is RejectionReason.DIASTOLIC_OUT_OF_RANGE
        assert result.rejection.message == 'Diastolic must be between 40 and 150'

    @given(heart_rate=st.one_of(st.integers(max_value=29), st.integers(min_value=201)))
    def test_heart_rate_out_of_range(self, heart_rate: int) -> None:
        result = validate_reading(_payload(heartRate=heart_rate))
        assert result.rejection.reason is RejectionReason.HEART_RATE_OUT_OF_RANGE
        assert result.rejection.message == 'Heart rate must be between 30 and 200'

    @pytest.mark.parametrize('value', ['abc', '12a', 120.5, True, [120], '1_20', '١٢٠', '+', '12 0'])
    def test_non_numeric_input_is_reported_as_out_of_range(self, value) -> None:
        result = validate_reading(_payload(systolic=value))
        assert not result.ok
        assert result.rejection.reason is RejectionReason.SYSTOLIC_OUT_OF_RANGE

    @pytest.mark.parametrize('text,expected', [('120', 120), (' 85 ', 85), ('+72', 72), ('-5', -5)])
    def test_parse_int_accepts_plain_ascii_integers(self, text: str, expected: int) -> None:
        assert parse_int(text) == expected

    @pytest.mark.parametrize('text', ['1_20', '١٢٠', '１２０', ''])
    def test_parse_int_rejects_underscores_and_non_ascii_digits(self, text: str) -> None:
        assert parse_int(text) is None

    def test_missing_fields_are_all_named(self) -> None:
        result = validate_reading({'systolic': 120, 'diastolic': ''})

        assert result.rejection.reason is RejectionReason.MISSING_FIELD
        assert result.rejection.message == 'Missing required fields: timestamp, diastolic, heartRate'

    def test_presence_is_checked_before_ranges(self) -> None:
        data = _payload(systolic=10)
        del data['heartRate']

        result = validate_reading(data)

        assert result.rejection.reason is RejectionReason.MISSING_FIELD
        assert result.rejection.field == 'heart_rate'

    def test_first_failing_range_wins(self) -> None:
        result = validate_reading(_payload(systolic=300, diastolic=10, heartRate=5))
        assert result.rejection.reason is RejectionReason.SYSTOLIC_OUT_OF_RANGE

    def test_unparseable_timestamp(self) -> None:
        result = validate_reading(_payload(timestamp='yesterday morning'))
        assert result.rejection.reason is RejectionReason.INVALID_TIMESTAMP

    def test_rejection_serializes_reason_code(self) -> None:
        result = validate_reading(_payload(diastolic=200))
        assert result.rejection.to_dict() == {
            'reason': 'DiastolicOutOfRange',
            'field': 'diastolic',
            'message': 'Diastolic must be between 40 and 150',
        }


class TestDefaults:
    def test_rest_defaults_require_timestamp(self) -> None:
        result = validate_reading(_payload(timestamp=''), REST_DEFAULTS)
        assert result.rejection.reason is RejectionReason.MISSING_FIELD
        assert result.rejection.field == 'timestamp'

    def test_rest_defaults_fill_location_and_notes(self) -> None:
        result = validate_reading(_payload(), REST_DEFAULTS)
        assert result.reading.location == 'Unknown'
        assert result.reading.notes == ''

    def test_interactive_defaults_fill_timestamp_and_location(self) -> None:
        before = datetime.now().replace(microsecond=0)
        result = validate_reading(_payload(timestamp='  ', location=''), INTERACTIVE_DEFAULTS)

        assert result.ok
        assert result.reading.location == 'Home'
        assert result.reading.timestamp >= before

    def test_custom_defaults(self) -> None:
        fixed = datetime(2023, 1, 1, 0, 0, 0)
        defaults = EntryDefaults(location='Pharmacy', notes='n/a', timestamp=lambda: fixed)

        result = validate_reading(_payload(timestamp=None), defaults)

        assert result.reading.timestamp == fixed
        assert result.reading.location == 'Pharmacy'
        assert result.reading.notes == 'n/a'


class TestValidateMeasurement:
    @pytest.mark.parametrize('field,low,high', [
        ('systolic', 70, 250),
        ('diastolic', 40, 150),
        ('heart_rate', 30, 200),
    ])
    def test_bounds_are_inclusive(self, field: str, low: int, high: int) -> None:
        assert validate_measurement(field, low) is None
        assert validate_measurement(field, str(high)) is None
        assert validate_measurement(field, low - 1) is not None
        assert validate_measurement(field, high + 1) is not None

    def test_blank_value_is_rejected(self) -> None:
        rejection = validate_measurement('heart_rate', '')
        assert rejection.reason is RejectionReason.HEART_RATE_OUT_OF_RANGE
