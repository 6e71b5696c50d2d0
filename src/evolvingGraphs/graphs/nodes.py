"""
Node identity types for evolving graphs.

A node pairs a key (any hashable value supplied by the caller) with an integer
index assigned by the store that owns it. Index 0 means the node is unbound,
i.e. not yet attached to a graph. Three variants share the ``key``/``index``
capability:

- Node: key + index; equal when key and index match
- AttributeNode: adds an attributes dict; equal when key, index and
  attributes match
- TimeNode: adds a timestamp; equal when key and timestamp match (the index
  does not take part)

Nodes of different variants never compare equal.
"""

from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .evolving_graph import EvolvingGraph

UNBOUND_INDEX = 0


class Node:
    """
    Node with a key and a store index.

    Parameters
    ----------
    key : Any
        Hashable node key
    index : int, default 0
        Store index; 0 means unbound

    Examples
    --------
    >>> a = Node("a", index=1)
    >>> a.index, a.key
    (1, 'a')
    >>> Node("b").index
    0
    """

    def __init__(self, key: Any, index: int = UNBOUND_INDEX) -> None:
        self.key = key
        self.index = index

    @classmethod
    def for_graph(cls, graph: "EvolvingGraph", key: Any) -> "Node":
        """
        Create the node that the next insertion into ``graph`` would produce.

        The index is ``graph.num_nodes() + 1``; the graph is not modified.
        """
        return cls(key, index=graph.num_nodes() + 1)

    @property
    def is_bound(self) -> bool:
        return self.index != UNBOUND_INDEX

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.key == other.key and self.index == other.index

    def __hash__(self) -> int:
        return hash((Node, self.key, self.index))

    def __repr__(self) -> str:
        return f"Node({self.key})"


class AttributeNode:
    """
    Node carrying an attributes dictionary.

    Parameters
    ----------
    key : Any
        Hashable node key
    attributes : Dict[Any, Any], optional
        Node attributes; defaults to an empty dict
    index : int, default 0
        Store index; 0 means unbound

    Examples
    --------
    >>> a = AttributeNode("a", {"age": 12}, index=1)
    >>> a.attributes
    {'age': 12}
    """

    def __init__(
        self,
        key: Any,
        attributes: Optional[Dict[Any, Any]] = None,
        index: int = UNBOUND_INDEX
    ) -> None:
        self.key = key
        self.attributes = attributes if attributes is not None else {}
        self.index = index

    @classmethod
    def for_graph(
        cls,
        graph: "EvolvingGraph",
        key: Any,
        attributes: Optional[Dict[Any, Any]] = None
    ) -> "AttributeNode":
        """Create an attribute node indexed for the next insertion into ``graph``."""
        return cls(key, attributes, index=graph.num_nodes() + 1)

    @property
    def is_bound(self) -> bool:
        return self.index != UNBOUND_INDEX

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.key == other.key
            and self.index == other.index
            and self.attributes == other.attributes
        )

    # attributes are mutable, so they stay out of the hash
    def __hash__(self) -> int:
        return hash((AttributeNode, self.key, self.index))

    def __repr__(self) -> str:
        return f"AttributeNode({self.key})"


class TimeNode:
    """
    Node observed at a timestamp.

    Equality compares key and timestamp only, so the same ``(key, timestamp)``
    pair is one TimeNode regardless of index.

    Parameters
    ----------
    key : Any
        Hashable node key
    timestamp : Any
        Timestamp the node is observed at
    index : int, default 0
        Store index; 0 means unbound

    Examples
    --------
    >>> t = TimeNode("t", 2018, index=1)
    >>> t.timestamp
    2018
    >>> t == TimeNode("t", 2018)
    True
    """

    def __init__(self, key: Any, timestamp: Any, index: int = UNBOUND_INDEX) -> None:
        self.key = key
        self.timestamp = timestamp
        self.index = index

    @classmethod
    def for_graph(cls, graph: "EvolvingGraph", key: Any, timestamp: Any) -> "TimeNode":
        """Create a time node indexed for the next insertion into ``graph``."""
        return cls(key, timestamp, index=graph.num_nodes() + 1)

    @property
    def is_bound(self) -> bool:
        return self.index != UNBOUND_INDEX

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.key == other.key and self.timestamp == other.timestamp

    def __hash__(self) -> int:
        return hash((TimeNode, self.key, self.timestamp))

    def __repr__(self) -> str:
        return f"TimeNode({self.key}, {self.timestamp})"


NODE_TYPES = (Node, AttributeNode, TimeNode)


def is_node(value: Any) -> bool:
    """Return True if ``value`` is one of the node variants."""
    return isinstance(value, NODE_TYPES)


def node_index(v: Any) -> int:
    """Return the index of node ``v``."""
    return v.index


def node_key(v: Any) -> Any:
    """Return the key of node ``v``."""
    return v.key


def node_attributes(v: AttributeNode) -> Dict[Any, Any]:
    """Return the attributes of AttributeNode ``v``."""
    return v.attributes


def node_timestamp(v: TimeNode) -> Any:
    """Return the timestamp of TimeNode ``v``."""
    return v.timestamp
