"""Unit tests for store timestamp normalization."""

from datetime import datetime, timedelta, timezone

import pytest

from margin.persistence.timestamps import format_timestamp, parse_timestamp


class TestParseTimestamp:
    def test_nanosecond_fraction_truncated(self):
        result = parse_timestamp("2025-03-04T09:30:00.123456789Z")

        assert result == datetime(2025, 3, 4, 9, 30, 0, 123456, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        result = parse_timestamp("2025-03-04T10:30:00+01:00")

        assert result == datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    def test_postgres_style_offset(self):
        result = parse_timestamp("2025-03-04 09:30:00.5+00")

        assert result == datetime(2025, 3, 4, 9, 30, 0, 500000, tzinfo=timezone.utc)

    def test_missing_offset_means_utc(self):
        assert parse_timestamp("2025-03-04T09:30:00").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["", "yesterday", "2025-03-04"])
    def test_garbage_rejected(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestFormatTimestamp:
    def test_utc_z_suffix(self):
        value = datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc)

        assert format_timestamp(value) == "2025-03-04T09:30:00.000000Z"

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2025, 3, 4, 9, 30)).endswith("Z")
