"""
Custom exception hierarchy for the evolvingGraphs library.

This module defines the exceptions raised by the evolving graph store and its
collaborators (edge-list reader, aggregation, random generation). Every
exception carries a human-readable message plus optional structured details
and context for programmatic handling.

The hierarchy:
- EvolvingGraphError: root of all library errors
- ValidationError: invalid input data
    - LengthMismatchError: parallel input sequences of unequal length
    - DataFormatError: malformed edge-list files or tables
- UnknownTimestampError: timestamp not present in the store
- EdgeNotFoundError: edge not present in the store
- GraphConstructionError: failure while building a derived graph
- ConfigurationError: invalid parameter values
"""

from typing import Dict, Any, Optional, List, Sequence, Union
import traceback


class EvolvingGraphError(Exception):
    """
    Base exception for all evolvingGraphs errors.

    All other custom exceptions inherit from this class, allowing users to
    catch every library-specific error with a single except clause.

    Parameters
    ----------
    message : str
        Human-readable error message describing what went wrong
    details : Dict[str, Any], optional
        Additional structured information about the error for debugging
        or programmatic handling
    cause : Exception, optional
        The underlying exception that caused this error (for exception chaining)
    context : Dict[str, Any], optional
        Additional context about the operation that failed

    Attributes
    ----------
    message : str
        The error message
    details : Dict[str, Any]
        Additional error details
    cause : Exception, optional
        The underlying cause
    context : Dict[str, Any]
        Operation context

    Examples
    --------
    >>> raise EvolvingGraphError("Store is inconsistent")
    >>> raise EvolvingGraphError(
    ...     "Invalid store size",
    ...     details={"nodes": 0, "edges": 10}
    ... )
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        self.message = message
        self.details = details or {}
        self.cause = cause
        self.context = context or {}

        full_message = message

        if self.details:
            detail_parts = []
            for key, value in self.details.items():
                if isinstance(value, (list, dict)) and len(str(value)) > 100:
                    # Truncate long collections
                    detail_parts.append(f"{key}=<{type(value).__name__} with {len(value)} items>")
                else:
                    detail_parts.append(f"{key}={value}")

            if detail_parts:
                full_message += f" (Details: {', '.join(detail_parts)})"

        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            if context_parts:
                full_message += f" (Context: {', '.join(context_parts)})"

        super().__init__(full_message)

        if cause is not None:
            self.__cause__ = cause

    def add_context(self, **kwargs: Any) -> 'EvolvingGraphError':
        """
        Add additional context to the exception.

        Parameters
        ----------
        **kwargs
            Key-value pairs to add to the context

        Returns
        -------
        EvolvingGraphError
            Self, for method chaining
        """
        self.context.update(kwargs)
        return self

    def get_debug_info(self) -> Dict[str, Any]:
        """
        Get comprehensive debugging information.

        Returns
        -------
        Dict[str, Any]
            Dictionary containing all available error information
        """
        return {
            "exception_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "traceback": traceback.format_exc() if hasattr(self, '__traceback__') else None
        }


class ValidationError(EvolvingGraphError):
    """
    Exception raised for input validation errors.

    Raised when input data (keys, timestamps, edge-list tables) does not meet
    the requirements of the store, before any mutation takes place.

    Parameters
    ----------
    message : str
        Descriptive error message explaining the validation failure
    field : str, optional
        Name of the field or column that failed validation
    value : Any, optional
        The invalid value that caused the error
    expected : str, optional
        Description of what was expected
    details : Dict[str, Any], optional
        Additional details about the validation failure

    Examples
    --------
    >>> raise ValidationError("Source column contains null values", field="source")
    >>> raise ValidationError(
    ...     "Key has the wrong type",
    ...     field="key",
    ...     value=3,
    ...     expected="str"
    ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        expected: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> None:
        self.field = field
        self.value = value
        self.expected = expected

        enhanced_details = details or {}
        if field is not None:
            enhanced_details["field"] = field
        if value is not None:
            enhanced_details["invalid_value"] = value
        if expected is not None:
            enhanced_details["expected"] = expected

        if field:
            enhanced_message = f"Validation error in field '{field}': {message}"
        else:
            enhanced_message = f"Validation error: {message}"

        super().__init__(enhanced_message, details=enhanced_details, **kwargs)


class LengthMismatchError(ValidationError, ValueError):
    """
    Exception raised when parallel input sequences differ in length.

    Bulk construction takes sources, targets and timestamps as three parallel
    sequences. This error is raised before any node or edge is added.

    Parameters
    ----------
    message : str
        Description of the mismatch
    lengths : Dict[str, int], optional
        Length of each input sequence, keyed by its name

    Examples
    --------
    >>> raise LengthMismatchError(
    ...     "3 input sequences must have the same length",
    ...     lengths={"sources": 2, "targets": 3, "timestamps": 2}
    ... )
    """

    def __init__(
        self,
        message: str,
        lengths: Optional[Dict[str, int]] = None,
        **kwargs
    ) -> None:
        self.lengths = lengths or {}

        details = kwargs.pop("details", None) or {}
        if self.lengths:
            details["lengths"] = self.lengths

        super().__init__(message, field="lengths", details=details, **kwargs)


class UnknownTimestampError(EvolvingGraphError, LookupError):
    """
    Exception raised when a timestamp is not present in an evolving graph.

    Per-timestamp queries (edge slicing and matrix extraction) share the same
    timestamp index and raise this error when no edge is active at the
    requested timestamp.

    Parameters
    ----------
    timestamp : Any
        The requested timestamp
    num_timestamps : int, optional
        Number of distinct timestamps the store holds

    Examples
    --------
    >>> raise UnknownTimestampError("t9", num_timestamps=2)
    """

    def __init__(
        self,
        timestamp: Any,
        num_timestamps: Optional[int] = None,
        **kwargs
    ) -> None:
        self.timestamp = timestamp

        details = kwargs.pop("details", None) or {}
        if num_timestamps is not None:
            details["num_timestamps"] = num_timestamps

        super().__init__(f"unknown timestamp {timestamp!r}", details=details, **kwargs)


class EdgeNotFoundError(EvolvingGraphError, LookupError):
    """
    Exception raised when an edge to be removed is not in the graph.

    Parameters
    ----------
    edge : Any
        The edge that was looked up

    Examples
    --------
    >>> raise EdgeNotFoundError(TimeEdge("a", "b", 1))  # doctest: +SKIP
    """

    def __init__(self, edge: Any, **kwargs) -> None:
        self.edge = edge
        super().__init__(f"{edge!r} is not in the graph", **kwargs)


class GraphConstructionError(EvolvingGraphError):
    """
    Exception raised while building a graph from an evolving graph or from
    external data.

    Covers failures when creating NetworkIt graphs during aggregation and when
    replaying edge lists into a store.

    Parameters
    ----------
    message : str
        Description of the graph construction error
    graph_type : str, optional
        Type of graph being constructed (e.g., "directed", "aggregated")
    node_count : int, optional
        Number of nodes in the graph when error occurred
    edge_count : int, optional
        Number of edges processed when error occurred
    operation : str, optional
        Specific operation that failed (e.g., "aggregated_graph")

    Examples
    --------
    >>> raise GraphConstructionError(
    ...     "Failed to add edges to graph",
    ...     operation="add_edges",
    ...     edge_count=1500
    ... )
    """

    def __init__(
        self,
        message: str,
        graph_type: Optional[str] = None,
        node_count: Optional[int] = None,
        edge_count: Optional[int] = None,
        operation: Optional[str] = None,
        **kwargs
    ) -> None:
        self.graph_type = graph_type
        self.node_count = node_count
        self.edge_count = edge_count
        self.operation = operation

        context = {}
        if graph_type:
            context["graph_type"] = graph_type
        if node_count is not None:
            context["node_count"] = node_count
        if edge_count is not None:
            context["edge_count"] = edge_count
        if operation:
            context["operation"] = operation

        super().__init__(message, context=context, **kwargs)


class ConfigurationError(EvolvingGraphError):
    """
    Exception raised for invalid configuration or parameter values.

    Parameters
    ----------
    message : str
        Description of the configuration error
    parameter : str, optional
        Name of the problematic parameter
    value : Any, optional
        The invalid parameter value
    valid_options : List[Any], optional
        List of valid options for the parameter
    function : str, optional
        Name of the function where the error occurred

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Edge probability out of range",
    ...     parameter="p",
    ...     value=1.5
    ... )
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Optional[Any] = None,
        valid_options: Optional[List[Any]] = None,
        function: Optional[str] = None,
        **kwargs
    ) -> None:
        self.parameter = parameter
        self.value = value
        self.valid_options = valid_options
        self.function = function

        details = kwargs.get('details', {})
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["invalid_value"] = value
        if valid_options:
            details["valid_options"] = valid_options
        if function:
            details["function"] = function

        enhanced_message = message
        if parameter and valid_options:
            enhanced_message += f". Valid options for '{parameter}': {valid_options}"

        kwargs["details"] = details
        super().__init__(enhanced_message, **kwargs)


class DataFormatError(ValidationError):
    """
    Exception raised for data format and structure errors.

    A specialized ValidationError for edge-list files whose header, column
    layout or column types do not match the evolving graph text format.

    Parameters
    ----------
    message : str
        Description of the format error
    format_type : str, optional
        Expected format (e.g., "EvolvingGraph", "CSV", "DataFrame")
    file_path : str, optional
        Path to the problematic file
    line_number : int, optional
        Line number where error occurred (for file parsing)

    Examples
    --------
    >>> raise DataFormatError(
    ...     "Not a valid EvolvingGraph header",
    ...     format_type="EvolvingGraph",
    ...     file_path="/path/to/edges.txt",
    ...     line_number=1
    ... )
    """

    def __init__(
        self,
        message: str,
        format_type: Optional[str] = None,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        **kwargs
    ) -> None:
        details = kwargs.get('details', {})

        if format_type:
            details["format_type"] = format_type
        if file_path:
            details["file_path"] = file_path
        if line_number is not None:
            details["line_number"] = line_number

        kwargs["details"] = details
        super().__init__(message, **kwargs)


# Convenience functions for common error patterns

def require_positive(
    value: Union[int, float],
    parameter_name: str,
    allow_zero: bool = False
) -> None:
    """
    Validate that a numeric parameter is positive.

    Parameters
    ----------
    value : Union[int, float]
        The numeric value to validate
    parameter_name : str
        Name of the parameter
    allow_zero : bool, default False
        Whether to allow zero values

    Raises
    ------
    ConfigurationError
        If value is not positive (or non-negative if allow_zero=True)
    """
    if allow_zero and value < 0:
        raise ConfigurationError(
            f"Parameter '{parameter_name}' must be non-negative, got {value}",
            parameter=parameter_name,
            value=value
        )
    elif not allow_zero and value <= 0:
        raise ConfigurationError(
            f"Parameter '{parameter_name}' must be positive, got {value}",
            parameter=parameter_name,
            value=value
        )


def require_equal_lengths(**sequences: Sequence[Any]) -> int:
    """
    Validate that all given sequences have the same length.

    Parameters
    ----------
    **sequences
        Named sequences to compare, e.g. ``sources=..., targets=...``

    Returns
    -------
    int
        The common length

    Raises
    ------
    LengthMismatchError
        If the sequences differ in length
    """
    lengths = {name: len(seq) for name, seq in sequences.items()}
    if len(set(lengths.values())) > 1:
        raise LengthMismatchError(
            f"{len(lengths)} input sequences must have the same length",
            lengths=lengths
        )
    return next(iter(lengths.values()), 0)
