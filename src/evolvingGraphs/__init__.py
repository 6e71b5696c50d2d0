"""
evolvingGraphs - Evolving graph data structures for temporal network analysis.

An evolving graph is a graph whose edges are active at discrete timestamps,
such as contact networks or time-stamped interaction logs.

Modules:
    common: Exceptions, ID mapping, validation and logging configuration
    graphs: Node and edge identities and the EvolvingGraph store
    network: Aggregation into static NetworkIt graphs
    io: Reading timestamped edge lists
"""

__version__ = "0.1.0"

from .common.exceptions import (
    EvolvingGraphError,
    ValidationError,
    LengthMismatchError,
    UnknownTimestampError,
    EdgeNotFoundError,
    GraphConstructionError,
    ConfigurationError,
    DataFormatError
)
from .common.logging_config import setup_logging, get_logger
from .graphs import (
    Node,
    AttributeNode,
    TimeNode,
    Edge,
    TimeEdge,
    WeightedTimeEdge,
    EvolvingGraph,
    build_evolving_graph,
    get_graph_info,
    random_evolving_graph
)
from .network import aggregated_graph
from .io import read_evolving_graph, build_evolving_graph_from_edgelist

__all__ = [
    "EvolvingGraphError",
    "ValidationError",
    "LengthMismatchError",
    "UnknownTimestampError",
    "EdgeNotFoundError",
    "GraphConstructionError",
    "ConfigurationError",
    "DataFormatError",
    "setup_logging",
    "get_logger",
    "Node",
    "AttributeNode",
    "TimeNode",
    "Edge",
    "TimeEdge",
    "WeightedTimeEdge",
    "EvolvingGraph",
    "build_evolving_graph",
    "get_graph_info",
    "random_evolving_graph",
    "aggregated_graph",
    "read_evolving_graph",
    "build_evolving_graph_from_edgelist",
]
