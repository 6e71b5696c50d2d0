"""
Edge-list reading for evolving graphs.

This module turns timestamped edge lists into evolving graphs. Two inputs are
supported:

- the EvolvingGraph text format::

    %%EvolvingGraph directed
    % comment lines start with '%'
    source,target,timestamp[,attribute...]
    a,b,1
    b,c,2

- any CSV file or Polars DataFrame with source, target and timestamp columns

Column types are sniffed from the first data row and then committed to: a
later row that cannot be parsed with the sniffed type is rejected with
DataFormatError instead of silently falling back to strings.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import polars as pl

from ..graphs.edges import WeightedTimeEdge
from ..graphs.evolving_graph import EvolvingGraph, build_evolving_graph
from ..common.exceptions import DataFormatError
from ..common.validators import validate_edgelist_dataframe
from ..common.logging_config import get_logger, log_function_entry, LoggingTimer

logger = get_logger(__name__)

HEADER_TOKEN = "%%EvolvingGraph"
COMMENT_PREFIX = "%"
DIRECTEDNESS = {"directed": True, "undirected": False}


def read_edgelist(path: Union[str, Path]) -> Tuple[pl.DataFrame, bool]:
    """
    Read an EvolvingGraph format file into a DataFrame.

    Parameters
    ----------
    path : Union[str, Path]
        Path to the file

    Returns
    -------
    df : pl.DataFrame
        One row per edge. The first three columns are source, target and
        timestamp (named as in the file header); any further columns are
        edge attributes.
    is_directed : bool
        Directedness declared on the first line. A header without a
        directedness token declares an undirected graph.

    Raises
    ------
    DataFormatError
        If the file is missing, the first line is not an EvolvingGraph
        header, the column header has fewer than three names, or a data row
        disagrees with the column types sniffed from the first data row

    Examples
    --------
    >>> df, is_directed = read_edgelist("contacts.txt")  # doctest: +SKIP
    >>> df.columns[:3]  # doctest: +SKIP
    ['source', 'target', 'timestamp']
    """
    file_path = Path(path)
    log_function_entry("read_edgelist", path=str(file_path))

    if not file_path.exists():
        raise DataFormatError(
            f"Edge list file not found: {file_path}",
            format_type="EvolvingGraph",
            file_path=str(file_path)
        )

    lines = file_path.read_text(encoding="utf-8").splitlines()
    is_directed = _parse_header_line(lines, str(file_path))

    position = 1
    while position < len(lines) and (
        not lines[position].strip() or lines[position].startswith(COMMENT_PREFIX)
    ):
        position += 1

    if position == len(lines):
        raise DataFormatError(
            "Missing column header after the EvolvingGraph header",
            format_type="EvolvingGraph",
            file_path=str(file_path),
            line_number=position + 1
        )

    header = [name.strip() for name in lines[position].split(",")]
    if len(header) < 3:
        raise DataFormatError(
            f"The column header must name at least 3 columns, got {len(header)}",
            format_type="EvolvingGraph",
            file_path=str(file_path),
            line_number=position + 1
        )

    body = "\n".join(line for line in lines[position:] if line.strip())
    with LoggingTimer("read_edgelist", {"path": str(file_path)}):
        df = _parse_rows(body, str(file_path))

    logger.info("Read %d edges from %s (directed=%s)", len(df), file_path, is_directed)
    return df, is_directed


def read_evolving_graph(
    path: Union[str, Path],
    with_attributes: bool = False
) -> Union[EvolvingGraph, Tuple[EvolvingGraph, List[Dict[str, Any]]]]:
    """
    Read an EvolvingGraph format file into an evolving graph.

    Parameters
    ----------
    path : Union[str, Path]
        Path to the file
    with_attributes : bool, default False
        If True, also return the attribute columns beyond the first three

    Returns
    -------
    EvolvingGraph
        The graph, when ``with_attributes`` is False
    (EvolvingGraph, List[Dict[str, Any]])
        The graph and one attribute dict per data row, in file order, when
        ``with_attributes`` is True. Rows of a file with only three columns
        get an empty dict. Reverse twins of undirected edges have no entry
        of their own.

    Raises
    ------
    DataFormatError
        If the file is not a valid EvolvingGraph file
    ValidationError
        If a source, target or timestamp value is missing

    Examples
    --------
    >>> g, attributes = read_evolving_graph("calls.txt", with_attributes=True)  # doctest: +SKIP
    >>> attributes[0]  # doctest: +SKIP
    {'kind': 'call'}
    """
    df, is_directed = read_edgelist(path)
    source_col, target_col, timestamp_col = df.columns[:3]

    graph = build_evolving_graph_from_edgelist(
        df,
        source_col=source_col,
        target_col=target_col,
        timestamp_col=timestamp_col,
        is_directed=is_directed
    )

    if not with_attributes:
        if len(df.columns) > 3:
            logger.debug("Ignoring attribute columns %s", df.columns[3:])
        return graph

    return graph, edge_attributes(df)


def edge_attributes(df: pl.DataFrame) -> List[Dict[str, Any]]:
    """
    Return one dict per edge row holding the columns after the first three.

    Examples
    --------
    >>> df = pl.DataFrame({"s": ["a"], "t": ["b"], "ts": [1], "kind": ["call"]})
    >>> edge_attributes(df)
    [{'kind': 'call'}]
    """
    attribute_cols = df.columns[3:]
    if not attribute_cols:
        return [{} for _ in range(df.height)]
    return df.select(attribute_cols).to_dicts()


def build_evolving_graph_from_edgelist(
    edgelist: Union[str, Path, pl.DataFrame],
    source_col: str = "source",
    target_col: str = "target",
    timestamp_col: str = "timestamp",
    weight_col: Optional[str] = None,
    is_directed: bool = True
) -> EvolvingGraph:
    """
    Construct an evolving graph from a timestamped edge list.

    Parameters
    ----------
    edgelist : Union[str, Path, pl.DataFrame]
        Path to a CSV file or a Polars DataFrame containing edge data
    source_col : str, default "source"
        Name of the source node column
    target_col : str, default "target"
        Name of the target node column
    timestamp_col : str, default "timestamp"
        Name of the timestamp column
    weight_col : str, optional
        Name of a numeric weight column. When given, edges are stored as
        WeightedTimeEdge; otherwise as TimeEdge.
    is_directed : bool, default True
        Directedness of the new graph

    Returns
    -------
    EvolvingGraph
        Graph with one edge per row (rows are not deduplicated)

    Raises
    ------
    ValidationError
        If required columns are missing or contain nulls
    DataFormatError
        If the input cannot be read

    Examples
    --------
    >>> edges = pl.DataFrame({
    ...     "source": ["a", "b", "c"],
    ...     "target": ["b", "c", "d"],
    ...     "timestamp": [1, 1, 2]
    ... })
    >>> g = build_evolving_graph_from_edgelist(edges)
    >>> g.timestamps()
    [1, 2]
    """
    log_function_entry("build_evolving_graph_from_edgelist",
                       edgelist=type(edgelist).__name__, is_directed=is_directed)

    df = _load_edge_list(edgelist)
    validate_edgelist_dataframe(
        df,
        source_col=source_col,
        target_col=target_col,
        timestamp_col=timestamp_col,
        weight_col=weight_col
    )

    sources = df[source_col].to_list()
    targets = df[target_col].to_list()
    timestamps = df[timestamp_col].to_list()

    if weight_col is None:
        return build_evolving_graph(sources, targets, timestamps, is_directed=is_directed)

    weights = df[weight_col].to_list()
    graph = EvolvingGraph(is_directed=is_directed)
    with LoggingTimer("build_weighted_evolving_graph", {"rows": len(df)}):
        for v1, v2, t, w in zip(sources, targets, timestamps, weights):
            node1 = graph.add_node(v1)
            node2 = graph.add_node(v2)
            graph.insert_edge(WeightedTimeEdge(node1, node2, t, float(w)))

    logger.info("Weighted evolving graph built: %d nodes, %d edges",
                graph.num_nodes(), graph.num_edges())
    return graph


def to_edgelist(graph: EvolvingGraph) -> pl.DataFrame:
    """
    Return the edges of an evolving graph as a DataFrame.

    Returns
    -------
    pl.DataFrame
        Columns ``source``, ``target`` and ``timestamp`` holding node keys and
        timestamps in storage order, plus ``weight`` when the graph holds
        weighted edges (1.0 for unweighted ones). Reverse twins of undirected
        edges appear as their own rows.
    """
    edges = graph.edges()
    data = {
        "source": [_key(edge.source) for edge in edges],
        "target": [_key(edge.target) for edge in edges],
        "timestamp": graph.raw_timestamps(),
    }
    if any(isinstance(edge, WeightedTimeEdge) for edge in edges):
        data["weight"] = [float(getattr(edge, "weight", 1.0)) for edge in edges]

    return pl.DataFrame(data)


def _parse_header_line(lines: list, file_path: str) -> bool:
    tokens = lines[0].split() if lines else []
    if not tokens or tokens[0] != HEADER_TOKEN:
        raise DataFormatError(
            "Not a valid EvolvingGraph header",
            format_type="EvolvingGraph",
            file_path=file_path,
            line_number=1
        )

    if len(tokens) < 2:
        return False

    directedness = tokens[1].lower()
    if directedness not in DIRECTEDNESS:
        raise DataFormatError(
            f"Unknown graph type '{tokens[1]}'",
            format_type="EvolvingGraph",
            file_path=file_path,
            line_number=1,
            details={"valid_options": list(DIRECTEDNESS)}
        )
    return DIRECTEDNESS[directedness]


def _parse_rows(body: str, file_path: str) -> pl.DataFrame:
    try:
        return pl.read_csv(
            body.encode("utf-8"),
            has_header=True,
            infer_schema_length=1,
            comment_prefix=COMMENT_PREFIX
        )
    except pl.exceptions.PolarsError as e:
        raise DataFormatError(
            f"Failed to parse edge rows: {str(e)}",
            format_type="EvolvingGraph",
            file_path=file_path,
            cause=e
        )


def _load_edge_list(edgelist: Union[str, Path, pl.DataFrame]) -> pl.DataFrame:
    """
    Load edge list from a CSV path or return a DataFrame as-is.

    Raises
    ------
    DataFormatError
        If the file cannot be read or parsed
    """
    if isinstance(edgelist, pl.DataFrame):
        return edgelist

    if not isinstance(edgelist, (str, Path)):
        raise DataFormatError(
            f"Invalid edgelist type: {type(edgelist)}. Expected str, Path or pl.DataFrame",
            format_type="DataFrame"
        )

    file_path = Path(edgelist)
    if not file_path.exists():
        raise DataFormatError(
            f"Edge list file not found: {edgelist}",
            format_type="CSV",
            file_path=str(edgelist)
        )

    logger.debug("Loading edge list from file: %s", file_path)
    try:
        return pl.read_csv(file_path)
    except pl.exceptions.PolarsError as e:
        raise DataFormatError(
            f"Failed to parse CSV file: {str(e)}",
            format_type="CSV",
            file_path=str(edgelist),
            cause=e
        )


def _key(endpoint: Any) -> Any:
    return getattr(endpoint, "key", endpoint)
