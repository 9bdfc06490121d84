"""
Unit tests for ledger input validators.

Tests:
- Day keys must be real calendar days in YYYY-MM-DD form
- Minutes round half up and must end up positive
- Bulk minute lists drop invalid entries instead of failing
- Ratings truncate and fall back to None outside 1..5
"""

import math
from datetime import date

import pytest

from saunalog.errors import InvalidDate, InvalidIndex, InvalidInput
from saunalog.services.validators import (
    MINUTES_MAX,
    clean_minutes_list,
    normalize_facility_name,
    normalize_meta,
    normalize_minutes,
    normalize_rating,
    parse_date_key,
    parse_index,
    round_half_up,
)


class TestParseDateKey:
    """Tests for parse_date_key function."""

    def test_valid_key(self):
        assert parse_date_key("2024-01-15") == date(2024, 1, 15)

    def test_leap_day(self):
        assert parse_date_key("2024-02-29") == date(2024, 2, 29)

    def test_rejects_impossible_calendar_day(self):
        """Shape is fine but 30 February does not exist."""
        with pytest.raises(InvalidDate):
            parse_date_key("2024-02-30")

    def test_rejects_feb_29_outside_leap_year(self):
        with pytest.raises(InvalidDate):
            parse_date_key("2023-02-29")

    @pytest.mark.parametrize("value", [
        "2024-1-15",
        "2024-13-01",
        "2024-00-10",
        "2024-01-32",
        "20240115",
        "2024-01-15T00:00:00",
        "2024-01-15\n",
        "2024-٠3-10",
        "",
        None,
        20240115,
    ])
    def test_rejects_malformed_keys(self, value):
        with pytest.raises(InvalidDate):
            parse_date_key(value)

    def test_rejects_full_width_digits(self):
        """Full-width digits parse with strptime but are not a canonical key."""
        with pytest.raises(InvalidDate):
            parse_date_key("２０２４-03-10")

    def test_accepts_date_object(self):
        assert parse_date_key(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_invalid_date_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date_key("nope")


class TestNormalizeMinutes:
    """Tests for normalize_minutes function."""

    def test_integer(self):
        assert normalize_minutes(12) == 12

    def test_rounds_to_nearest(self):
        assert normalize_minutes(9.4) == 9
        assert normalize_minutes(9.6) == 10

    def test_half_rounds_up(self):
        assert normalize_minutes(2.5) == 3
        assert normalize_minutes(0.5) == 1

    def test_numeric_string(self):
        assert normalize_minutes(" 15 ") == 15

    @pytest.mark.parametrize("value", [0, -3, 0.4, -0.5, "abc", "", None, True, math.nan, math.inf])
    def test_rejects_non_positive_or_non_finite(self, value):
        with pytest.raises(InvalidInput):
            normalize_minutes(value)

    def test_upper_bound(self):
        assert normalize_minutes(MINUTES_MAX) == MINUTES_MAX

    @pytest.mark.parametrize("value", [MINUTES_MAX + 1, 1e20, 10**30, "1e20"])
    def test_rejects_values_the_column_cannot_hold(self, value):
        with pytest.raises(InvalidInput):
            normalize_minutes(value)


class TestCleanMinutesList:
    """Tests for clean_minutes_list function."""

    def test_keeps_order_and_rounds(self):
        assert clean_minutes_list([10, 7.6, "5"]) == [10, 8, 5]

    def test_drops_invalid_entries(self):
        result = clean_minutes_list([10, 0, -2, "abc", None, math.nan, math.inf, 0.2, 12])
        assert result == [10, 12]

    def test_drops_oversized_entries(self):
        assert clean_minutes_list([5, 1e20, 10**30, MINUTES_MAX + 1, 7]) == [5, 7]

    def test_none_is_empty(self):
        assert clean_minutes_list(None) == []

    def test_empty(self):
        assert clean_minutes_list([]) == []

    def test_rejects_non_list(self):
        with pytest.raises(InvalidInput):
            clean_minutes_list("10,12")


class TestNormalizeRating:
    """Tests for normalize_rating function."""

    @pytest.mark.parametrize("value", [6, 0, -1, "abc", "", None, math.nan, True])
    def test_invalid_becomes_none(self, value):
        assert normalize_rating(value) is None

    def test_valid_rating(self):
        assert normalize_rating(3) == 3

    def test_bounds(self):
        assert normalize_rating(1) == 1
        assert normalize_rating(5) == 5

    def test_fraction_truncates(self):
        assert normalize_rating(3.9) == 3
        assert normalize_rating(5.9) == 5

    def test_fraction_below_one_is_none(self):
        """0.9 truncates to 0, which is out of range, not clamped to 1."""
        assert normalize_rating(0.9) is None

    def test_numeric_string(self):
        assert normalize_rating("4") == 4


class TestNormalizeFacilityName:
    """Tests for normalize_facility_name function."""

    def test_strips(self):
        assert normalize_facility_name("  Kitanoyu ") == "Kitanoyu"

    def test_blank_is_none(self):
        assert normalize_facility_name("   ") is None
        assert normalize_facility_name(None) is None

    def test_truncates_long_names(self):
        assert len(normalize_facility_name("x" * 300)) == 255


class TestNormalizeMeta:
    """Tests for normalize_meta function."""

    def test_only_supplied_keys(self):
        assert normalize_meta({"condition_rating": 4}) == {"condition_rating": 4}

    def test_explicit_none_is_kept(self):
        result = normalize_meta({"facility_name": None, "satisfaction_rating": "9"})
        assert result == {"facility_name": None, "satisfaction_rating": None}

    def test_unknown_keys_ignored(self):
        assert normalize_meta({"mood": "great"}) == {}

    def test_none(self):
        assert normalize_meta(None) == {}

    def test_rejects_non_mapping(self):
        with pytest.raises(InvalidInput):
            normalize_meta(["facility_name"])


class TestParseIndex:
    """Tests for parse_index function."""

    def test_integer(self):
        assert parse_index(2) == 2

    def test_integral_float(self):
        assert parse_index(1.0) == 1

    def test_digit_string(self):
        assert parse_index("3") == 3

    def test_padded_string(self):
        assert parse_index(" 0 ") == 0

    @pytest.mark.parametrize("value", [-1, 1.5, "x", None, True, "-2"])
    def test_rejects(self, value):
        with pytest.raises(InvalidIndex):
            parse_index(value)

    @pytest.mark.parametrize("value", ["²", "--1", "1_0", "+1", "٣", ""])
    def test_rejects_strings_int_would_misread(self, value):
        """Unicode digits and doubled signs are InvalidIndex, not a bare ValueError."""
        with pytest.raises(InvalidIndex):
            parse_index(value)


def test_round_half_up_negative_half():
    assert round_half_up(-2.5) == -2
