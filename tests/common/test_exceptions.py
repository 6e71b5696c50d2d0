"""
Tests for the exception hierarchy.

Covers message construction, structured details, context chaining and the
helper functions that raise library errors for common parameter problems.
"""

import pytest

from evolvingGraphs.common.exceptions import (
    EvolvingGraphError,
    ValidationError,
    LengthMismatchError,
    UnknownTimestampError,
    EdgeNotFoundError,
    GraphConstructionError,
    ConfigurationError,
    DataFormatError,
    require_positive,
    require_equal_lengths
)


class TestEvolvingGraphError:
    """Test the base exception."""

    def test_plain_message(self):
        """Test error with only a message."""
        error = EvolvingGraphError("Store is inconsistent")
        assert str(error) == "Store is inconsistent"
        assert error.details == {}
        assert error.context == {}
        assert error.cause is None

    def test_details_are_appended(self):
        """Test that details are appended to the message."""
        error = EvolvingGraphError("Bad size", details={"expected": 3, "actual": 2})
        assert "(Details: expected=3, actual=2)" in str(error)

    def test_long_collections_are_summarized(self):
        """Test that long detail collections are summarized."""
        error = EvolvingGraphError("Too many", details={"keys": list(range(100))})
        assert "keys=<list with 100 items>" in str(error)

    def test_cause_is_chained(self):
        """Test exception chaining through cause."""
        cause = RuntimeError("boom")
        error = EvolvingGraphError("Wrapped", cause=cause)
        assert error.__cause__ is cause

    def test_add_context_chains(self):
        """Test adding context returns the error itself."""
        error = EvolvingGraphError("Failed").add_context(operation="matrix")
        assert error.context == {"operation": "matrix"}

    def test_debug_info(self):
        """Test debug information dictionary."""
        error = EvolvingGraphError("Failed", details={"n": 1}, cause=ValueError("x"))
        info = error.get_debug_info()

        assert info["exception_type"] == "EvolvingGraphError"
        assert info["message"] == "Failed"
        assert info["details"] == {"n": 1}
        assert info["cause"] == "x"


class TestValidationError:
    """Test ValidationError and its subclasses."""

    def test_without_field(self):
        """Test message prefix without a field."""
        error = ValidationError("Test error message")
        assert str(error) == "Validation error: Test error message"
        assert error.field is None

    def test_with_field_value_and_expected(self):
        """Test field, value and expected in message and details."""
        error = ValidationError("Bad key", field="key", value=3, expected="str")
        message = str(error)

        assert "Validation error in field 'key': Bad key" in message
        assert error.details["invalid_value"] == 3
        assert error.details["expected"] == "str"

    def test_length_mismatch_is_value_error(self):
        """Test LengthMismatchError is also a ValueError."""
        error = LengthMismatchError("mismatch", lengths={"sources": 1, "targets": 2})

        assert isinstance(error, ValidationError)
        assert isinstance(error, ValueError)
        assert error.lengths == {"sources": 1, "targets": 2}
        assert error.field == "lengths"

    def test_data_format_error_details(self):
        """Test DataFormatError file details."""
        error = DataFormatError(
            "Not a valid EvolvingGraph header",
            format_type="EvolvingGraph",
            file_path="edges.txt",
            line_number=1
        )

        assert isinstance(error, ValidationError)
        assert error.details["format_type"] == "EvolvingGraph"
        assert error.details["file_path"] == "edges.txt"
        assert error.details["line_number"] == 1


class TestLookupErrors:
    """Test errors for absent timestamps and edges."""

    def test_unknown_timestamp(self):
        """Test UnknownTimestampError message and attributes."""
        error = UnknownTimestampError("t9", num_timestamps=2)

        assert isinstance(error, LookupError)
        assert error.timestamp == "t9"
        assert "unknown timestamp 't9'" in str(error)
        assert "num_timestamps=2" in str(error)

    def test_edge_not_found(self):
        """Test EdgeNotFoundError message and attributes."""
        error = EdgeNotFoundError("a->b")

        assert isinstance(error, LookupError)
        assert isinstance(error, EvolvingGraphError)
        assert error.edge == "a->b"
        assert "is not in the graph" in str(error)


class TestGraphConstructionAndConfiguration:
    """Test construction and configuration errors."""

    def test_construction_context(self):
        """Test GraphConstructionError context."""
        error = GraphConstructionError(
            "Failed",
            graph_type="aggregated",
            node_count=4,
            edge_count=0,
            operation="aggregated_graph"
        )

        assert error.context == {
            "graph_type": "aggregated",
            "node_count": 4,
            "edge_count": 0,
            "operation": "aggregated_graph",
        }

    def test_configuration_lists_valid_options(self):
        """Test ConfigurationError lists valid options."""
        error = ConfigurationError(
            "Bad option", parameter="mode", value="x", valid_options=["a", "b"]
        )
        assert "Valid options for 'mode': ['a', 'b']" in str(error)
        assert error.details["invalid_value"] == "x"


class TestHelpers:
    """Test the raising helper functions."""

    def test_require_positive(self):
        """Test positive and non-negative parameter checks."""
        require_positive(1, "num_nodes")
        require_positive(0, "num_nodes", allow_zero=True)

        with pytest.raises(ConfigurationError, match="must be positive"):
            require_positive(0, "num_nodes")
        with pytest.raises(ConfigurationError, match="must be non-negative"):
            require_positive(-1, "num_nodes", allow_zero=True)

    def test_require_equal_lengths(self):
        """Test equal length check for named sequences."""
        assert require_equal_lengths(a=[1, 2], b="xy", c=(0, 0)) == 2
        assert require_equal_lengths() == 0

        with pytest.raises(LengthMismatchError, match="3 input sequences must have the same length") as exc_info:
            require_equal_lengths(sources=[1], targets=[1, 2], timestamps=[1])

        assert exc_info.value.lengths == {"sources": 1, "targets": 2, "timestamps": 1}
