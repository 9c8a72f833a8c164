"""
Tests for frequency validation and cutoff resolution.
"""

import pytest
from hypothesis import given, strategies as st

from alncut.cutoff import validate_frequency, resolve_cutoff
from alncut.errors import InvalidCutoffArgument


class TestValidateFrequency:
    """Test validation of raw frequency arguments."""

    @pytest.mark.parametrize("value,expected", [
        ("1", 1.0),
        ("3", 3.0),
        ("0.25", 0.25),
        (0.5, 0.5),
        (7, 7.0),
        ("2.0", 2.0),
    ])
    def test_valid_frequencies(self, value, expected):
        """Positive integers and fractions in (0, 1) are accepted."""
        assert validate_frequency(value) == expected

    @pytest.mark.parametrize("value", ["0", "-1", "1.5", "-0.2", "abc", "", "nan", "inf", None])
    def test_invalid_frequencies(self, value):
        """Zero, negatives, non-integers above 1 and non-numbers are rejected."""
        with pytest.raises(InvalidCutoffArgument):
            validate_frequency(value)

    def test_invalid_frequency_is_value_error(self):
        """InvalidCutoffArgument can be caught as a ValueError."""
        with pytest.raises(ValueError):
            validate_frequency("2.5")


class TestResolveCutoff:
    """Test conversion of frequencies into relative cutoffs."""

    def test_unset_frequency(self):
        """No frequency means no tolerance."""
        assert resolve_cutoff(None, 10) == 0.0
        assert resolve_cutoff(0, 10) == 0.0

    def test_fraction_passes_through(self):
        """Fractions are used directly regardless of row count."""
        assert resolve_cutoff(0.3, 4) == 0.3
        assert resolve_cutoff(0.3, 40) == 0.3

    def test_absolute_count_divided_by_rows(self):
        """Counts become count / rows."""
        assert resolve_cutoff(1, 4) == 0.25
        assert resolve_cutoff(3, 12) == 0.25

    def test_count_and_fraction_equivalence(self):
        """For 10 rows, a count of 2 equals a fraction of 0.2."""
        assert resolve_cutoff(2, 10) == pytest.approx(resolve_cutoff(0.2, 10))

    def test_cutoff_recomputed_per_row_count(self):
        """The same count gives different cutoffs for different alignments."""
        assert resolve_cutoff(2, 4) == 0.5
        assert resolve_cutoff(2, 8) == 0.25

    def test_no_rows_rejected(self):
        """An alignment must have at least one row."""
        with pytest.raises(ValueError):
            resolve_cutoff(1, 0)

    @given(
        count=st.integers(min_value=1, max_value=50),
        n_rows=st.integers(min_value=1, max_value=200)
    )
    def test_count_cutoff_properties(self, count, n_rows):
        """Property-based test: count cutoffs scale back to the count."""
        cutoff = resolve_cutoff(float(count), n_rows)
        assert cutoff > 0
        assert cutoff * n_rows == pytest.approx(count)
