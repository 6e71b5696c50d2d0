"""
Evolving graph data structures.

This module provides the node and edge identity types and the evolving graph
store:
- Node, AttributeNode and TimeNode identities
- Edge, TimeEdge and WeightedTimeEdge identities
- EvolvingGraph: nodes, timestamped edges, per-timestamp slicing and
  adjacency matrices
- Random evolving graph generation
"""

from .nodes import (
    Node,
    AttributeNode,
    TimeNode,
    node_index,
    node_key,
    node_attributes,
    node_timestamp
)

from .edges import (
    Edge,
    TimeEdge,
    WeightedTimeEdge,
    source,
    target,
    edge_timestamp,
    edge_weight,
    edge_reverse
)

from .evolving_graph import (
    EvolvingGraph,
    build_evolving_graph,
    get_graph_info
)

from .random_graphs import random_evolving_graph
