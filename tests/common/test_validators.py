"""
Tests for input validation functions.

Covers valid inputs (should pass) and invalid inputs (should raise
ValidationError) for edge-list tables, parallel triples and declared types.
"""

import pytest
import polars as pl
import warnings

from evolvingGraphs.common.exceptions import ValidationError, LengthMismatchError
from evolvingGraphs.common.validators import (
    validate_edgelist_dataframe,
    validate_triples,
    validate_value_type
)


class TestValidateEdgelistDataframe:
    """Test timestamped edge list DataFrame validation."""

    def test_valid_basic_edgelist(self):
        """Test validation of valid basic edge list."""
        df = pl.DataFrame({
            "source": ["A", "B", "C"],
            "target": ["B", "C", "A"],
            "timestamp": [1, 1, 2]
        })

        # Should not raise any exception
        validate_edgelist_dataframe(df)

    def test_valid_edgelist_with_weights(self):
        """Test validation of edge list with weights."""
        df = pl.DataFrame({
            "source": ["A", "B"],
            "target": ["B", "C"],
            "timestamp": ["t1", "t2"],
            "weight": [1.0, 2.5]
        })

        validate_edgelist_dataframe(df, weight_col="weight")

    def test_custom_column_names(self):
        """Test validation with custom column names."""
        df = pl.DataFrame({"from": [1], "to": [2], "when": [2018]})

        validate_edgelist_dataframe(df, source_col="from", target_col="to", timestamp_col="when")

    def test_empty_edgelist_is_valid(self):
        """Test empty edge list passes without warnings."""
        df = pl.DataFrame(
            {"source": [], "target": [], "timestamp": []},
            schema={"source": pl.Utf8, "target": pl.Utf8, "timestamp": pl.Int64}
        )

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            validate_edgelist_dataframe(df)

    def test_missing_timestamp_column(self):
        """Test missing timestamp column."""
        df = pl.DataFrame({"source": ["A"], "target": ["B"]})

        with pytest.raises(ValidationError) as exc_info:
            validate_edgelist_dataframe(df)

        assert "Missing required columns: ['timestamp']" in str(exc_info.value)
        assert exc_info.value.field == "columns"

    def test_null_values(self):
        """Test null values in node columns."""
        df = pl.DataFrame({
            "source": ["A", None],
            "target": ["B", "C"],
            "timestamp": [1, 2]
        })

        with pytest.raises(ValidationError, match="Column contains 1 null values") as exc_info:
            validate_edgelist_dataframe(df)

        assert exc_info.value.field == "source"

    def test_nested_values_rejected(self):
        """Test nested column values are rejected."""
        df = pl.DataFrame({
            "source": [[1, 2]],
            "target": ["B"],
            "timestamp": [1]
        })

        with pytest.raises(ValidationError, match="unhashable"):
            validate_edgelist_dataframe(df)

    def test_non_numeric_weight(self):
        """Test non-numeric weight column."""
        df = pl.DataFrame({
            "source": ["A"],
            "target": ["B"],
            "timestamp": [1],
            "weight": ["heavy"]
        })

        with pytest.raises(ValidationError, match="Weight column must be numeric"):
            validate_edgelist_dataframe(df, weight_col="weight")

    def test_self_loops(self):
        """Test self-loop handling."""
        df = pl.DataFrame({"source": ["A", "B"], "target": ["A", "C"], "timestamp": [1, 1]})

        validate_edgelist_dataframe(df)
        with pytest.raises(ValidationError, match="Found 1 self-loops"):
            validate_edgelist_dataframe(df, allow_self_loops=False)

    def test_duplicate_rows_warn(self):
        """Test duplicate rows produce a warning."""
        df = pl.DataFrame({
            "source": ["A", "A"],
            "target": ["B", "B"],
            "timestamp": [1, 1]
        })

        with pytest.warns(UserWarning, match="1 duplicate"):
            validate_edgelist_dataframe(df)

    def test_same_pair_at_other_timestamp_is_not_duplicate(self):
        """Test same pair at another timestamp is not a duplicate."""
        df = pl.DataFrame({
            "source": ["A", "A"],
            "target": ["B", "B"],
            "timestamp": [1, 2]
        })

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            validate_edgelist_dataframe(df)


class TestValidateTriples:
    """Test parallel sequence validation."""

    def test_equal_lengths(self):
        """Test equal length triples."""
        assert validate_triples(["a", "b"], ["b", "c"], [1, 2]) == 2

    def test_empty_sequences(self):
        """Test empty triples."""
        assert validate_triples([], [], []) == 0

    def test_unequal_lengths(self):
        """Test unequal length triples."""
        with pytest.raises(LengthMismatchError) as exc_info:
            validate_triples(["a", "b"], ["b"], [1, 2])

        assert exc_info.value.lengths == {"sources": 2, "targets": 1, "timestamps": 2}


class TestValidateValueType:
    """Test declared key and timestamp type checks."""

    def test_any_type_when_undeclared(self):
        """Test any hashable value passes without a declared type."""
        validate_value_type(("a", 1), None, "key")

    def test_matching_type(self):
        """Test values matching the declared type."""
        validate_value_type("a", str, "key")
        validate_value_type(True, int, "key")

    def test_mismatched_type(self):
        """Test values of the wrong type."""
        with pytest.raises(ValidationError, match="Expected str, got int") as exc_info:
            validate_value_type(3, str, "key")

        assert exc_info.value.field == "key"
        assert exc_info.value.expected == "str"

    def test_unhashable_value(self):
        """Test unhashable values."""
        with pytest.raises(ValidationError, match="must be hashable"):
            validate_value_type(["a"], None, "timestamp")
