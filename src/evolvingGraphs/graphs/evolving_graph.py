"""
Evolving graph store.

This module provides the mutable container for graphs whose edges are
associated with discrete timestamps. The store keeps four aligned pieces of
state:

- an ordered node list, nodes indexed from 1 in insertion order
- an ordered edge list
- a raw timestamp list parallel to the edge list
- a key -> index map, the only lookup layer for nodes

Nodes are only ever appended, so node indices are stable for the lifetime of
the store. Edges can be removed.
"""

import copy
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import scipy.sparse as sp

from .nodes import Node, AttributeNode, TimeNode, is_node, UNBOUND_INDEX
from .edges import TimeEdge, TIMED_EDGE_TYPES, is_edge
from ..common.exceptions import (
    EvolvingGraphError,
    ValidationError,
    UnknownTimestampError,
    EdgeNotFoundError,
    GraphConstructionError
)
from ..common.validators import validate_triples, validate_value_type
from ..common.logging_config import get_logger, log_function_entry, LoggingTimer

logger = get_logger(__name__)

# Distinguishes "argument not given" from a None key or timestamp
_MISSING = object()


class EvolvingGraph:
    """
    Mutable evolving graph: nodes, timestamped edges and a key index.

    Parameters
    ----------
    node_type : type, optional
        Declared type of node keys. When given, keys that are not instances
        of it are rejected with ValidationError.
    time_type : type, optional
        Declared type of timestamps, checked the same way.
    is_directed : bool, default True
        If False, every edge inserted through the store is accompanied by its
        reverse with the same timestamp.

    Examples
    --------
    >>> g = EvolvingGraph(str, str)
    >>> g.add_edge("a", "b", "t1")
    a->b at time t1
    >>> g.add_edge("b", "c", "t1")
    b->c at time t1
    >>> g.num_nodes(), g.num_edges(), g.timestamps()
    (3, 2, ['t1'])
    >>> g
    Directed EvolvingGraph (3 nodes, 2 edges, 1 timestamps)

    Notes
    -----
    The store is not synchronized. Mutations (add_node, add_edge,
    insert_edge, remove_edge) require exclusive access; read-only queries
    may run concurrently with each other but not with a mutation.
    """

    def __init__(
        self,
        node_type: Optional[type] = None,
        time_type: Optional[type] = None,
        is_directed: bool = True
    ) -> None:
        self.node_type = node_type
        self.time_type = time_type
        self._is_directed = is_directed
        self._nodes: List[Any] = []
        self._edges: List[Any] = []
        self._timestamps: List[Any] = []
        self._indexof: Dict[Any, int] = {}

    @classmethod
    def from_triples(
        cls,
        sources: Sequence[Any],
        targets: Sequence[Any],
        timestamps: Sequence[Any],
        is_directed: bool = True,
        node_type: Optional[type] = None,
        time_type: Optional[type] = None
    ) -> "EvolvingGraph":
        """
        Build an evolving graph from three parallel sequences.

        Entry ``i`` of the three sequences is an edge from ``sources[i]`` to
        ``targets[i]`` at ``timestamps[i]``. Triples are inserted left to
        right: both endpoints through add_node, then the edge through
        insert_edge, so repeated triples are stored repeatedly.

        Parameters
        ----------
        sources : Sequence[Any]
            Source node keys
        targets : Sequence[Any]
            Target node keys
        timestamps : Sequence[Any]
            Edge timestamps
        is_directed : bool, default True
            Directedness of the new graph
        node_type, time_type : type, optional
            Declared key and timestamp types

        Returns
        -------
        EvolvingGraph
            The populated graph

        Raises
        ------
        LengthMismatchError
            If the sequences differ in length; raised before any mutation
        ValidationError
            If a key or timestamp violates the declared types. Nodes and
            edges inserted before the offending triple are not rolled back.

        Examples
        --------
        >>> g = EvolvingGraph.from_triples([1, 2], [2, 3], [10, 20])
        >>> g.num_edges()
        2
        """
        num_triples = validate_triples(sources, targets, timestamps)
        log_function_entry("from_triples", triples=num_triples, is_directed=is_directed)

        graph = cls(node_type=node_type, time_type=time_type, is_directed=is_directed)

        with LoggingTimer("from_triples", {"triples": num_triples}):
            for v1, v2, t in zip(sources, targets, timestamps):
                node1 = graph.add_node(v1)
                node2 = graph.add_node(v2)
                graph.insert_edge(TimeEdge(node1, node2, t))

        logger.info("Evolving graph built: %d nodes, %d edges, %d timestamps, directed=%s",
                    graph.num_nodes(), graph.num_edges(), graph.num_timestamps(), is_directed)
        return graph

    @property
    def is_directed(self) -> bool:
        return self._is_directed

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def add_node(self, v: Any) -> Any:
        """
        Add a node to the graph, or return the node already stored for its key.

        Parameters
        ----------
        v : Any
            Node key, or a node object (Node, AttributeNode, TimeNode). A node
            object whose key is new is stored as a copy bound to the next
            index, keeping its attributes or timestamp.

        Returns
        -------
        Node
            The stored node. Adding a known key returns the existing node
            unchanged and creates nothing.

        Raises
        ------
        ValidationError
            If the key is unhashable or violates the declared node type

        Examples
        --------
        >>> g = EvolvingGraph()
        >>> g.add_node("a").index
        1
        >>> g.add_node("a").index
        1
        >>> g.num_nodes()
        1
        """
        key = v.key if is_node(v) else v
        validate_value_type(key, self.node_type, "key")

        existing = self.get_node(key)
        if existing is not None:
            return existing

        index = self.num_nodes() + 1
        node = _bind_node(v, index) if is_node(v) else Node(key, index=index)
        self._nodes.append(node)
        self._indexof[key] = index

        logger.debug("Added node %r with index %d", key, index)
        return node

    def get_node(self, key: Any) -> Optional[Any]:
        """Return the node stored for ``key``, or None if the key is unknown."""
        index = self._indexof.get(key)
        if index is None:
            return None
        return self._nodes[index - 1]

    def index_of(self, key: Any) -> Optional[int]:
        """Return the index of the node stored for ``key``, or None."""
        return self._indexof.get(key)

    def has_node(self, v: Any, t: Any = _MISSING) -> bool:
        """
        Check node membership, optionally at a timestamp.

        Parameters
        ----------
        v : Any
            Node key or node object
        t : Any, optional
            Timestamp. When given, see is_active_node.

        Returns
        -------
        bool
            Without ``t``: True if the graph holds a node for the key (a node
            object must also equal the stored node). Never raises for
            unknown keys.
        """
        if t is not _MISSING:
            return self.is_active_node(v, t)

        if is_node(v):
            return self.get_node(v.key) == v

        try:
            return v in self._indexof
        except TypeError:
            return False

    def is_active_node(self, v: Any, t: Any) -> bool:
        """
        Return True if ``v`` is an endpoint of every edge active at ``t``.

        This is stricter than "appears in some edge at t": a single edge at
        ``t`` not touching ``v`` makes the result False. When no edge has
        timestamp ``t`` the result is vacuously True.

        Examples
        --------
        >>> g = EvolvingGraph.from_triples(["a", "a", "b"], ["b", "c", "c"], [1, 1, 2])
        >>> g.is_active_node("a", 1)
        True
        >>> g.is_active_node("b", 1)
        False
        >>> g.is_active_node("z", 99)
        True
        """
        endpoint = self._resolve_endpoint(v)
        return all(
            edge.has_node(endpoint)
            for edge, ts in zip(self._edges, self._timestamps)
            if ts == t
        )

    def nodes(self) -> List[Any]:
        """Return the nodes in insertion (index) order."""
        return list(self._nodes)

    def num_nodes(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(self, v1: Any, v2: Any = _MISSING, t: Any = _MISSING) -> Any:
        """
        Add an edge from ``v1`` to ``v2`` at time ``t``.

        Both endpoints are resolved or created with add_node, then a TimeEdge
        is built. If an equal edge is already stored, nothing is added and
        the stored edge is returned.

        Two further call forms are accepted:

        - ``add_edge(edge)`` inserts an edge object via insert_edge (no dedup)
        - ``add_edge(list1, list2, t)`` inserts the cross product via add_edges

        Parameters
        ----------
        v1 : Any
            Source key or node
        v2 : Any
            Target key or node
        t : Any
            Timestamp

        Returns
        -------
        TimeEdge
            The stored edge

        Raises
        ------
        ValidationError
            If a key or the timestamp violates the declared types

        Examples
        --------
        >>> g = EvolvingGraph(is_directed=False)
        >>> g.add_edge("a", "b", 1)
        a->b at time 1
        >>> g.add_edge("a", "b", 1)
        a->b at time 1
        >>> g.num_edges()
        2
        """
        if v2 is _MISSING and t is _MISSING:
            return self.insert_edge(v1)

        if t is _MISSING:
            raise TypeError("add_edge() requires a timestamp when source and target are given")

        if isinstance(v1, list) and isinstance(v2, list):
            return self.add_edges(v1, v2, t)

        validate_value_type(t, self.time_type, "timestamp")

        node1 = self.add_node(v1)
        node2 = self.add_node(v2)
        edge = TimeEdge(node1, node2, t)

        position = self._find_edge(edge)
        if position is not None:
            logger.debug("Edge %r already present, not added", edge)
            return self._edges[position]

        return self.insert_edge(edge)

    def add_edges(self, sources: List[Any], targets: List[Any], t: Any) -> List[Any]:
        """
        Add one edge for every pair in the cross product of two node lists,
        all at timestamp ``t``.

        Parameters
        ----------
        sources : List[Any]
            Source keys or nodes
        targets : List[Any]
            Target keys or nodes
        t : Any
            Timestamp shared by all edges

        Returns
        -------
        List[TimeEdge]
            The ``len(sources) * len(targets)`` stored edges, target-major
            order (for each target, every source)
        """
        log_function_entry("add_edges", sources=len(sources), targets=len(targets), timestamp=t)
        return [self.add_edge(i, j, t) for j in targets for i in sources]

    def insert_edge(self, edge: Any) -> Any:
        """
        Append a timed edge and its timestamp without any duplicate check.

        For undirected graphs the reverse edge is appended as well, with the
        same timestamp. Endpoints are stored as given; callers are expected
        to pass nodes of this graph (as add_edge and from_triples do).

        Parameters
        ----------
        edge : TimeEdge or WeightedTimeEdge
            Edge to append

        Returns
        -------
        TimeEdge or WeightedTimeEdge
            The edge passed in

        Raises
        ------
        ValidationError
            If ``edge`` is not a timed edge or its timestamp violates the
            declared time type
        """
        if not isinstance(edge, TIMED_EDGE_TYPES):
            raise ValidationError(
                f"Expected a TimeEdge or WeightedTimeEdge, got {type(edge).__name__}",
                field="edge",
                expected="TimeEdge or WeightedTimeEdge"
            )
        validate_value_type(edge.timestamp, self.time_type, "timestamp")

        self._edges.append(edge)
        self._timestamps.append(edge.timestamp)
        if not self._is_directed:
            self._edges.append(edge.reverse())
            self._timestamps.append(edge.timestamp)

        logger.debug("Inserted edge %r", edge)
        return edge

    def remove_edge(self, edge: Any) -> Any:
        """
        Remove the first stored edge equal to ``edge`` and its timestamp.

        Endpoints given as plain keys are resolved to the stored nodes first.
        For undirected graphs only the matching edge is removed; its reverse
        twin stays in the graph.

        Parameters
        ----------
        edge : TimeEdge or WeightedTimeEdge
            Edge to remove

        Returns
        -------
        TimeEdge or WeightedTimeEdge
            The removed edge

        Raises
        ------
        EdgeNotFoundError
            If no stored edge equals ``edge``
        """
        resolved = self._resolve_edge(edge)
        position = self._find_edge(resolved)
        if position is None:
            raise EdgeNotFoundError(edge, details={"num_edges": self.num_edges()})

        removed = self._edges.pop(position)
        del self._timestamps[position]

        logger.debug("Removed edge %r at position %d", removed, position)
        return removed

    def has_edge(self, edge: Any) -> bool:
        """Return True if an edge equal to ``edge`` is stored."""
        return self._find_edge(self._resolve_edge(edge)) is not None

    def edges(self, t: Any = _MISSING) -> List[Any]:
        """
        Return the stored edges, or only those active at timestamp ``t``.

        Raises
        ------
        UnknownTimestampError
            If ``t`` is given and no edge has that timestamp
        """
        if t is _MISSING:
            return list(self._edges)
        return [self._edges[i] for i in self._positions_at(t)]

    def num_edges(self) -> int:
        return len(self._edges)

    # ------------------------------------------------------------------
    # Timestamps
    # ------------------------------------------------------------------

    def timestamps(self) -> List[Any]:
        """Return the distinct edge timestamps in ascending order."""
        return sorted(set(self._timestamps))

    def raw_timestamps(self) -> List[Any]:
        """Return the per-edge timestamps, parallel to edges()."""
        return list(self._timestamps)

    def num_timestamps(self) -> int:
        return len(set(self._timestamps))

    # ------------------------------------------------------------------
    # Matrices
    # ------------------------------------------------------------------

    def matrix(self, t: Any, cell_type: Any = bool) -> np.ndarray:
        """
        Return the dense adjacency matrix of the graph at timestamp ``t``.

        Parameters
        ----------
        t : Any
            Timestamp
        cell_type : numpy dtype-like, default bool
            Element type of the matrix

        Returns
        -------
        np.ndarray
            ``n x n`` matrix (``n = num_nodes()``). For every edge active at
            ``t`` the cell at row ``index(target) - 1``, column
            ``index(source) - 1`` holds one; every other cell is zero.
            Edge weights are not used.

        Raises
        ------
        UnknownTimestampError
            If no edge has timestamp ``t``
        ValidationError
            If an active edge has an endpoint that is not a node of this graph

        Examples
        --------
        >>> g = EvolvingGraph.from_triples(["a"], ["b"], [1])
        >>> g.matrix(1)
        array([[False, False],
               [ True, False]])
        """
        n = self.num_nodes()
        cells = [self._matrix_cell(edge, n) for edge in self.edges(t)]

        with LoggingTimer("matrix", {"nodes": n, "cells": len(cells)}):
            A = np.zeros((n, n), dtype=cell_type)
            for row, col in cells:
                A[row, col] = 1
        return A

    def spmatrix(self, t: Any, cell_type: Any = bool) -> sp.coo_matrix:
        """
        Return the sparse adjacency matrix of the graph at timestamp ``t``.

        Same cells and same failure conditions as matrix(); repeated edges
        set their cell once, so ``spmatrix(t).toarray()`` equals ``matrix(t)``.

        Returns
        -------
        scipy.sparse.coo_matrix
            ``n x n`` matrix in coordinate format
        """
        n = self.num_nodes()
        cells = sorted(set(self._matrix_cell(edge, n) for edge in self.edges(t)))

        with LoggingTimer("spmatrix", {"nodes": n, "cells": len(cells)}):
            rows = np.array([row for row, _ in cells], dtype=np.intp)
            cols = np.array([col for _, col in cells], dtype=np.intp)
            values = np.ones(len(cells), dtype=cell_type)
            return sp.coo_matrix((values, (rows, cols)), shape=(n, n), dtype=cell_type)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def copy(self) -> "EvolvingGraph":
        """Return an independent deep copy of the graph."""
        return copy.deepcopy(self)

    def to_undirected(self) -> "EvolvingGraph":
        """
        Return a new undirected graph with the same nodes and edges.

        Node indices are preserved. Every edge is replayed with its reverse;
        an edge already present (for example the reverse of an earlier edge)
        is not stored twice.
        """
        graph = EvolvingGraph(
            node_type=self.node_type,
            time_type=self.time_type,
            is_directed=False
        )
        for node in self._nodes:
            graph.add_node(node)

        for edge in self._edges:
            source_key = getattr(edge.source, "key", edge.source)
            target_key = getattr(edge.target, "key", edge.target)
            replayed = graph._resolve_edge(_with_endpoints(edge, source_key, target_key))
            if graph._find_edge(replayed) is None:
                graph.insert_edge(replayed)

        logger.info("Converted to undirected graph: %d edges -> %d edges",
                    self.num_edges(), graph.num_edges())
        return graph

    def __repr__(self) -> str:
        title = "Directed EvolvingGraph" if self._is_directed else "Undirected EvolvingGraph"
        return (
            f"{title} ({self.num_nodes()} nodes, {self.num_edges()} edges, "
            f"{self.num_timestamps()} timestamps)"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _find_edge(self, edge: Any) -> Optional[int]:
        for position, stored in enumerate(self._edges):
            if stored == edge:
                return position
        return None

    def _positions_at(self, t: Any) -> List[int]:
        positions = [i for i, ts in enumerate(self._timestamps) if ts == t]
        if not positions:
            raise UnknownTimestampError(t, num_timestamps=self.num_timestamps())
        return positions

    def _resolve_endpoint(self, v: Any) -> Any:
        if is_node(v):
            return v
        try:
            node = self.get_node(v)
        except TypeError:
            return v
        return v if node is None else node

    def _resolve_edge(self, edge: Any) -> Any:
        if not is_edge(edge):
            raise ValidationError(
                f"Expected an edge, got {type(edge).__name__}",
                field="edge"
            )
        source = self._resolve_endpoint(edge.source)
        target = self._resolve_endpoint(edge.target)
        if source is edge.source and target is edge.target:
            return edge
        return _with_endpoints(edge, source, target)

    def _matrix_cell(self, edge: Any, n: int) -> Tuple[int, int]:
        i = getattr(edge.source, "index", UNBOUND_INDEX)
        j = getattr(edge.target, "index", UNBOUND_INDEX)
        if not (1 <= i <= n and 1 <= j <= n):
            raise ValidationError(
                "Edge endpoint is not a node of this graph",
                field="edges",
                value=repr(edge),
                details={"num_nodes": n}
            )
        return j - 1, i - 1


def _bind_node(node: Any, index: int) -> Any:
    """Copy a node object, binding it to ``index``."""
    if isinstance(node, AttributeNode):
        return AttributeNode(node.key, dict(node.attributes), index=index)
    if isinstance(node, TimeNode):
        return TimeNode(node.key, node.timestamp, index=index)
    return Node(node.key, index=index)


def _with_endpoints(edge: Any, source: Any, target: Any) -> Any:
    """Copy an edge of any variant with new endpoints."""
    replaced = copy.copy(edge)
    replaced.source = source
    replaced.target = target
    return replaced


def build_evolving_graph(
    sources: Sequence[Any],
    targets: Sequence[Any],
    timestamps: Sequence[Any],
    is_directed: bool = True,
    node_type: Optional[type] = None,
    time_type: Optional[type] = None
) -> EvolvingGraph:
    """
    Construct an evolving graph from parallel source, target and timestamp
    sequences.

    This is the entry point used by the edge-list reader and the random graph
    generator. Library errors propagate unchanged; anything else raised
    while building is wrapped in GraphConstructionError.

    Parameters
    ----------
    sources, targets, timestamps : Sequence[Any]
        Parallel sequences of equal length
    is_directed : bool, default True
        Directedness of the new graph
    node_type, time_type : type, optional
        Declared key and timestamp types

    Returns
    -------
    EvolvingGraph
        The populated graph

    Raises
    ------
    LengthMismatchError
        If the sequences differ in length
    GraphConstructionError
        If construction fails for an unexpected reason
    """
    try:
        return EvolvingGraph.from_triples(
            sources, targets, timestamps,
            is_directed=is_directed,
            node_type=node_type,
            time_type=time_type
        )
    except EvolvingGraphError:
        raise
    except Exception as e:
        raise GraphConstructionError(
            f"Unexpected error during evolving graph construction: {str(e)}",
            operation="build_evolving_graph",
            cause=e
        )


def get_graph_info(graph: EvolvingGraph) -> Dict[str, Any]:
    """
    Get summary information about an evolving graph.

    Returns
    -------
    Dict[str, Any]
        ``is_directed``, ``num_nodes``, ``num_edges`` and ``num_timestamps``

    Examples
    --------
    >>> info = get_graph_info(EvolvingGraph.from_triples([1], [2], [0]))
    >>> info["num_edges"]
    1
    """
    return {
        "is_directed": graph.is_directed,
        "num_nodes": graph.num_nodes(),
        "num_edges": graph.num_edges(),
        "num_timestamps": graph.num_timestamps(),
    }
