"""
Static network views of evolving graphs.

This module provides aggregation of an evolving graph over all timestamps
into a NetworkIt graph.
"""

from .aggregation import aggregated_graph
