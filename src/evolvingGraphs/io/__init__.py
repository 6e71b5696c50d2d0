"""
Edge-list input for evolving graphs.

Reads the EvolvingGraph text format and timestamped CSV edge lists, and
exposes the edges of a graph as a Polars DataFrame.
"""

from .reader import (
    read_edgelist,
    read_evolving_graph,
    edge_attributes,
    build_evolving_graph_from_edgelist,
    to_edgelist
)
