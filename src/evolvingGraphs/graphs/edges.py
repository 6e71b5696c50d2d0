"""
Edge identity types for evolving graphs.

Edges are directed pairs of endpoints. Endpoints are held by value: inside a
store they are the store's bound nodes, but any hashable value works for
edges built outside a store.

- Edge: source and target
- TimeEdge: adds the activation timestamp
- WeightedTimeEdge: adds a weight (default 1.0) plus the timestamp

Equality is structural over all fields of a variant; edges of different
variants never compare equal.
"""

from typing import Any


class Edge:
    """
    Directed edge without a timestamp.

    Parameters
    ----------
    source : Any
        Source endpoint
    target : Any
        Target endpoint

    Notes
    -----
    A plain Edge has no ``timestamp`` attribute; accessing it raises
    AttributeError.
    """

    def __init__(self, source: Any, target: Any) -> None:
        self.source = source
        self.target = target

    def reverse(self) -> "Edge":
        """Return a new edge with source and target swapped."""
        return Edge(self.target, self.source)

    def has_node(self, v: Any) -> bool:
        """Return True if ``v`` is the source or the target of this edge."""
        return v == self.source or v == self.target

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.source == other.source and self.target == other.target

    def __hash__(self) -> int:
        return hash((Edge, self.source, self.target))

    def __repr__(self) -> str:
        return f"{_endpoint_label(self.source)}->{_endpoint_label(self.target)}"


class TimeEdge:
    """
    Directed edge active at a timestamp.

    Parameters
    ----------
    source : Any
        Source endpoint
    target : Any
        Target endpoint
    timestamp : Any
        Activation time of the edge

    Examples
    --------
    >>> e = TimeEdge("A", "B", 1)
    >>> e
    A->B at time 1
    >>> e.reverse()
    B->A at time 1
    """

    def __init__(self, source: Any, target: Any, timestamp: Any) -> None:
        self.source = source
        self.target = target
        self.timestamp = timestamp

    def reverse(self) -> "TimeEdge":
        """Return a new edge with source and target swapped, same timestamp."""
        return TimeEdge(self.target, self.source, self.timestamp)

    def has_node(self, v: Any) -> bool:
        """Return True if ``v`` is the source or the target of this edge."""
        return v == self.source or v == self.target

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.source == other.source
            and self.target == other.target
            and self.timestamp == other.timestamp
        )

    def __hash__(self) -> int:
        return hash((TimeEdge, self.source, self.target, self.timestamp))

    def __repr__(self) -> str:
        return (
            f"{_endpoint_label(self.source)}->{_endpoint_label(self.target)}"
            f" at time {self.timestamp}"
        )


class WeightedTimeEdge:
    """
    Directed, weighted edge active at a timestamp.

    Parameters
    ----------
    source : Any
        Source endpoint
    target : Any
        Target endpoint
    timestamp : Any
        Activation time of the edge
    weight : float, default 1.0
        Edge weight

    Examples
    --------
    >>> e = WeightedTimeEdge("A", "B", 3, weight=2.5)
    >>> e.reverse().weight
    2.5
    """

    def __init__(self, source: Any, target: Any, timestamp: Any, weight: float = 1.0) -> None:
        self.source = source
        self.target = target
        self.timestamp = timestamp
        self.weight = weight

    def reverse(self) -> "WeightedTimeEdge":
        """Return a new edge with source and target swapped, same weight and timestamp."""
        return WeightedTimeEdge(self.target, self.source, self.timestamp, self.weight)

    def has_node(self, v: Any) -> bool:
        """Return True if ``v`` is the source or the target of this edge."""
        return v == self.source or v == self.target

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.source == other.source
            and self.target == other.target
            and self.weight == other.weight
            and self.timestamp == other.timestamp
        )

    def __hash__(self) -> int:
        return hash((WeightedTimeEdge, self.source, self.target, self.weight, self.timestamp))

    def __repr__(self) -> str:
        return (
            f"{_endpoint_label(self.source)}->{_endpoint_label(self.target)}"
            f" at time {self.timestamp} with weight {self.weight}"
        )


TIMED_EDGE_TYPES = (TimeEdge, WeightedTimeEdge)
EDGE_TYPES = (Edge, TimeEdge, WeightedTimeEdge)


def _endpoint_label(v: Any) -> Any:
    # nodes print by key
    return getattr(v, "key", v)


def is_edge(value: Any) -> bool:
    """Return True if ``value`` is one of the edge variants."""
    return isinstance(value, EDGE_TYPES)


def source(e: Any) -> Any:
    """Return the source of edge ``e``."""
    return e.source


def target(e: Any) -> Any:
    """Return the target of edge ``e``."""
    return e.target


def edge_timestamp(e: Any) -> Any:
    """
    Return the timestamp of a TimeEdge or WeightedTimeEdge.

    Raises
    ------
    AttributeError
        If ``e`` is a plain Edge, which has no timestamp
    """
    return e.timestamp


def edge_weight(e: WeightedTimeEdge) -> float:
    """Return the weight of a WeightedTimeEdge."""
    return e.weight


def edge_reverse(e: Any) -> Any:
    """Return the reverse of edge ``e``."""
    return e.reverse()
