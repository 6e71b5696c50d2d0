"""
Random evolving graph generation.

Generates evolving graphs with integer node keys and integer timestamps where
each ordered node pair is active at each timestamp independently with a fixed
probability.
"""

from typing import Optional

import numpy as np

from .edges import TimeEdge
from .evolving_graph import EvolvingGraph
from ..common.exceptions import ConfigurationError, require_positive
from ..common.logging_config import get_logger, log_function_entry, LoggingTimer

logger = get_logger(__name__)


def random_evolving_graph(
    num_nodes: int,
    num_timestamps: int,
    p: float = 0.5,
    is_directed: bool = True,
    seed: Optional[int] = None
) -> EvolvingGraph:
    """
    Generate a random evolving graph.

    Node keys are ``1..num_nodes`` and timestamps ``1..num_timestamps``. For
    every timestamp and every ordered pair ``(i, j)`` with ``i != j``, an edge
    from ``i`` to ``j`` is created with probability ``p``. For undirected
    graphs only pairs with ``i < j`` are drawn, the reverse being added by
    the store.

    Parameters
    ----------
    num_nodes : int
        Number of candidate nodes (positive)
    num_timestamps : int
        Number of timestamps (positive)
    p : float, default 0.5
        Edge probability, between 0 and 1
    is_directed : bool, default True
        Directedness of the generated graph
    seed : int, optional
        Seed for numpy's random generator, for reproducible graphs

    Returns
    -------
    EvolvingGraph
        The generated graph. All ``num_nodes`` nodes are present, key ``k``
        at index ``k``, including nodes without edges.

    Raises
    ------
    ConfigurationError
        If a count is not positive or ``p`` is outside [0, 1]

    Examples
    --------
    >>> g = random_evolving_graph(5, 3, p=0.3, seed=42)
    >>> g.num_nodes()
    5
    """
    log_function_entry("random_evolving_graph", num_nodes=num_nodes,
                       num_timestamps=num_timestamps, p=p, is_directed=is_directed)

    require_positive(num_nodes, "num_nodes")
    require_positive(num_timestamps, "num_timestamps")
    if not 0.0 <= p <= 1.0:
        raise ConfigurationError(
            f"Parameter 'p' must be between 0 and 1, got {p}",
            parameter="p",
            value=p,
            function="random_evolving_graph"
        )

    rng = np.random.default_rng(seed)
    graph = EvolvingGraph(node_type=int, time_type=int, is_directed=is_directed)

    with LoggingTimer("random_evolving_graph", {"nodes": num_nodes, "timestamps": num_timestamps}):
        nodes = [graph.add_node(k) for k in range(1, num_nodes + 1)]

        for t in range(1, num_timestamps + 1):
            draws = rng.random((num_nodes, num_nodes)) < p
            np.fill_diagonal(draws, False)
            if not is_directed:
                draws = np.triu(draws, k=1)
            for i, j in zip(*np.nonzero(draws)):
                graph.insert_edge(TimeEdge(nodes[i], nodes[j], t))

    logger.info("Generated random evolving graph: %d nodes, %d edges, %d timestamps",
                graph.num_nodes(), graph.num_edges(), graph.num_timestamps())
    return graph
