"""
ID mapping utilities for the evolvingGraphs library.

Evolving graphs index their nodes from 1 in insertion order, while NetworkIt
graphs require consecutive integer node IDs starting from 0. This module
provides the bidirectional mapping between node keys (arbitrary hashable
values) and NetworkIt IDs used when an evolving graph is turned into a
static NetworkIt graph.
"""

from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from ..graphs.evolving_graph import EvolvingGraph


class IDMapper:
    """
    Bidirectional mapping between node keys and NetworkIt node IDs.

    Attributes
    ----------
    original_to_internal : Dict[Any, int]
        Maps node keys to NetworkIt internal IDs (0, 1, 2, ...)
    internal_to_original : Dict[int, Any]
        Maps NetworkIt internal IDs to node keys

    Examples
    --------
    >>> mapper = IDMapper()
    >>> mapper.add_mapping("a", 0)
    >>> mapper.get_internal("a")
    0
    >>> mapper.get_original(0)
    'a'

    Notes
    -----
    For a mapper built with ``from_evolving_graph`` the internal ID of every
    key is its store index minus one, so store order and NetworkIt order agree.
    """

    def __init__(self) -> None:
        self.original_to_internal: Dict[Any, int] = {}
        self.internal_to_original: Dict[int, Any] = {}

    @classmethod
    def from_evolving_graph(cls, graph: "EvolvingGraph") -> "IDMapper":
        """
        Build the mapping for every node of an evolving graph.

        Parameters
        ----------
        graph : EvolvingGraph
            Store whose nodes are mapped, in index order

        Returns
        -------
        IDMapper
            Mapper with ``key -> index - 1`` for each node
        """
        mapper = cls()
        for node in graph.nodes():
            mapper.add_mapping(node.key, node.index - 1)
        return mapper

    def get_internal(self, original_id: Any) -> int:
        """
        Get the NetworkIt ID for a node key.

        Raises
        ------
        KeyError
            If original_id is not found in the mapping
        """
        try:
            return self.original_to_internal[original_id]
        except KeyError:
            raise KeyError(f"Original ID '{original_id}' not found in mapping")

    def get_original(self, internal_id: int) -> Any:
        """
        Get the node key for a NetworkIt ID.

        Raises
        ------
        KeyError
            If internal_id is not found in the mapping
        TypeError
            If internal_id is not an integer
        """
        if not isinstance(internal_id, int):
            raise TypeError(f"Internal ID must be integer, got {type(internal_id)}")

        try:
            return self.internal_to_original[internal_id]
        except KeyError:
            raise KeyError(f"Internal ID {internal_id} not found in mapping")

    def add_mapping(self, original_id: Any, internal_id: int) -> None:
        """
        Add a new ID mapping pair.

        Parameters
        ----------
        original_id : Any
            Node key (must be hashable)
        internal_id : int
            NetworkIt internal ID (must be non-negative integer)

        Raises
        ------
        ValueError
            If original_id or internal_id already exists in mapping,
            or if internal_id is negative
        TypeError
            If internal_id is not an integer
        """
        if not isinstance(internal_id, int):
            raise TypeError(f"Internal ID must be integer, got {type(internal_id)}")

        if internal_id < 0:
            raise ValueError(f"Internal ID must be non-negative, got {internal_id}")

        if original_id in self.original_to_internal:
            existing_internal = self.original_to_internal[original_id]
            raise ValueError(
                f"Original ID '{original_id}' already mapped to internal ID {existing_internal}"
            )

        if internal_id in self.internal_to_original:
            existing_original = self.internal_to_original[internal_id]
            raise ValueError(
                f"Internal ID {internal_id} already mapped to original ID '{existing_original}'"
            )

        self.original_to_internal[original_id] = internal_id
        self.internal_to_original[internal_id] = original_id

    def has_original(self, original_id: Any) -> bool:
        return original_id in self.original_to_internal

    def size(self) -> int:
        """Get the number of mapped node IDs."""
        return len(self.original_to_internal)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, item: Any) -> bool:
        return self.has_original(item)

    def __repr__(self) -> str:
        return f"IDMapper(size={self.size()})"
