"""
Input validation utilities for the evolvingGraphs library.

This module validates the inputs handed to the evolving graph store by its
collaborators: edge-list tables from the reader, declared key and timestamp
types, and parallel source/target/timestamp sequences.
"""

from typing import Any, Optional, Sequence
import warnings

import polars as pl

from .exceptions import ValidationError, require_equal_lengths


def validate_edgelist_dataframe(
    df: pl.DataFrame,
    source_col: str = "source",
    target_col: str = "target",
    timestamp_col: str = "timestamp",
    weight_col: Optional[str] = None,
    allow_self_loops: bool = True
) -> None:
    """
    Validate a timestamped edge list DataFrame before it is replayed into an
    evolving graph.

    Parameters
    ----------
    df : pl.DataFrame
        Edge list DataFrame to validate
    source_col : str, default "source"
        Name of the source node column
    target_col : str, default "target"
        Name of the target node column
    timestamp_col : str, default "timestamp"
        Name of the timestamp column
    weight_col : str, optional
        Name of the edge weight column (if present)
    allow_self_loops : bool, default True
        Whether to allow edges from a node to itself

    Raises
    ------
    ValidationError
        If the DataFrame fails any validation checks

    Examples
    --------
    >>> df = pl.DataFrame({
    ...     "source": ["a", "b"],
    ...     "target": ["b", "c"],
    ...     "timestamp": ["t1", "t1"]
    ... })
    >>> validate_edgelist_dataframe(df)

    Notes
    -----
    An empty DataFrame is valid and yields an empty evolving graph; unlike
    static edge lists, there is nothing to aggregate so no warning is issued.
    """
    required_cols = [source_col, target_col, timestamp_col]
    if weight_col is not None:
        required_cols.append(weight_col)

    missing_cols = [col for col in required_cols if col not in df.columns]
    if missing_cols:
        raise ValidationError(
            f"Missing required columns: {missing_cols}",
            field="columns",
            details={"available_columns": df.columns, "missing": missing_cols}
        )

    for col in (source_col, target_col, timestamp_col):
        null_count = df[col].null_count()
        if null_count > 0:
            raise ValidationError(
                f"Column contains {null_count} null values",
                field=col,
                details={"null_count": null_count, "total_rows": len(df)}
            )

    for col in (source_col, target_col, timestamp_col):
        dtype = df[col].dtype
        if dtype.is_nested():
            raise ValidationError(
                "Column contains unhashable values that cannot be used as keys",
                field=col,
                details={"dtype": str(dtype)}
            )

    if weight_col is not None:
        weight_series = df[weight_col]

        if not weight_series.dtype.is_numeric():
            raise ValidationError(
                f"Weight column must be numeric, got {weight_series.dtype}",
                field=weight_col,
                details={"dtype": str(weight_series.dtype)}
            )

        if weight_series.null_count() > 0:
            raise ValidationError(
                f"Weight column contains {weight_series.null_count()} null values",
                field=weight_col
            )

    if not allow_self_loops and not df.is_empty():
        self_loop_count = int((df[source_col] == df[target_col]).sum())
        if self_loop_count > 0:
            raise ValidationError(
                f"Found {self_loop_count} self-loops (edges from node to itself)",
                field="edges",
                details={"self_loop_count": self_loop_count, "allow_self_loops": False}
            )

    if not df.is_empty():
        total_rows = len(df)
        unique_rows = df.select([source_col, target_col, timestamp_col]).n_unique()
        if unique_rows < total_rows:
            warnings.warn(
                f"Edge list contains {total_rows - unique_rows} duplicate "
                "(source, target, timestamp) rows; each row is stored as its own edge."
            )


def validate_triples(
    sources: Sequence[Any],
    targets: Sequence[Any],
    timestamps: Sequence[Any]
) -> int:
    """
    Validate three parallel sequences describing timestamped edges.

    Parameters
    ----------
    sources, targets, timestamps : Sequence[Any]
        Parallel sequences; entry ``i`` of each describes one edge

    Returns
    -------
    int
        Number of triples

    Raises
    ------
    LengthMismatchError
        If the three sequences do not have the same length
    """
    return require_equal_lengths(
        sources=sources,
        targets=targets,
        timestamps=timestamps
    )


def validate_value_type(
    value: Any,
    expected_type: Optional[type],
    field: str
) -> None:
    """
    Validate that a key or timestamp matches the type declared for a store.

    Parameters
    ----------
    value : Any
        Node key or timestamp to check
    expected_type : type, optional
        Declared type; ``None`` accepts any value
    field : str
        Name of the checked field ("key" or "timestamp")

    Raises
    ------
    ValidationError
        If the value is unhashable or not an instance of expected_type
    """
    try:
        hash(value)
    except TypeError:
        raise ValidationError(
            f"Value must be hashable, got {type(value).__name__}",
            field=field,
            expected="hashable value"
        )

    if expected_type is None or isinstance(value, expected_type):
        return

    raise ValidationError(
        f"Expected {expected_type.__name__}, got {type(value).__name__}",
        field=field,
        value=value,
        expected=expected_type.__name__
    )
