"""
Tests for edge identity types.
"""

import pytest

from evolvingGraphs.graphs.nodes import Node
from evolvingGraphs.graphs.edges import (
    Edge,
    TimeEdge,
    WeightedTimeEdge,
    is_edge,
    source,
    target,
    edge_timestamp,
    edge_weight,
    edge_reverse
)


class TestEdge:
    """Test the untimed Edge variant."""

    def test_endpoints_and_repr(self):
        """Test endpoint accessors and repr."""
        e = Edge("a", "b")

        assert source(e) == "a"
        assert target(e) == "b"
        assert repr(e) == "a->b"

    def test_reverse(self):
        """Test reversing an untimed edge."""
        assert Edge("a", "b").reverse() == Edge("b", "a")

    def test_has_no_timestamp(self):
        """Test untimed edges have no timestamp."""
        with pytest.raises(AttributeError):
            edge_timestamp(Edge("a", "b"))

    def test_has_node(self):
        """Test endpoint membership."""
        e = Edge("a", "b")

        assert e.has_node("a")
        assert e.has_node("b")
        assert not e.has_node("c")


class TestTimeEdge:
    """Test the TimeEdge variant."""

    def test_repr_uses_node_keys(self):
        """Test repr shows node keys."""
        e = TimeEdge(Node("a", 1), Node("b", 2), "t1")

        assert repr(e) == "a->b at time t1"

    def test_reverse_keeps_timestamp(self):
        """Test reverse keeps the timestamp and leaves the edge unchanged."""
        e = TimeEdge("A", "B", 1)
        r = edge_reverse(e)

        assert r == TimeEdge("B", "A", 1)
        assert edge_timestamp(r) == 1
        assert e == TimeEdge("A", "B", 1)

    def test_double_reverse_is_identity(self):
        """Test reversing twice gives an equal edge."""
        e = TimeEdge("A", "B", 1)

        assert e.reverse().reverse() == e

    def test_equality(self):
        """Test structural equality and hashing."""
        assert TimeEdge("A", "B", 1) == TimeEdge("A", "B", 1)
        assert TimeEdge("A", "B", 1) != TimeEdge("A", "B", 2)
        assert TimeEdge("A", "B", 1) != TimeEdge("B", "A", 1)
        assert hash(TimeEdge("A", "B", 1)) == hash(TimeEdge("A", "B", 1))

    def test_has_node_compares_endpoints(self):
        """Test membership compares against stored endpoints."""
        a, b = Node("a", 1), Node("b", 2)
        e = TimeEdge(a, b, 1)

        assert e.has_node(a)
        assert not e.has_node(Node("a", 3))
        assert not e.has_node("a")


class TestWeightedTimeEdge:
    """Test the WeightedTimeEdge variant."""

    def test_default_weight(self):
        """Test default weight."""
        assert edge_weight(WeightedTimeEdge("A", "B", 3)) == 1.0

    def test_repr(self):
        """Test weighted edge repr."""
        e = WeightedTimeEdge("A", "B", 3, weight=2.5)

        assert repr(e) == "A->B at time 3 with weight 2.5"

    def test_reverse_keeps_weight_and_timestamp(self):
        """Test reverse keeps weight and timestamp."""
        r = WeightedTimeEdge("A", "B", 3, 2.5).reverse()

        assert r == WeightedTimeEdge("B", "A", 3, 2.5)

    def test_weight_takes_part_in_equality(self):
        """Test weight takes part in equality."""
        assert WeightedTimeEdge("A", "B", 3, 2.5) != WeightedTimeEdge("A", "B", 3, 1.0)


class TestCrossVariant:
    """Edges of different variants never compare equal."""

    def test_variants_differ(self):
        """Test edges of different variants are unequal."""
        assert Edge("A", "B") != TimeEdge("A", "B", 1)
        assert TimeEdge("A", "B", 1) != WeightedTimeEdge("A", "B", 1, 1.0)

    @pytest.mark.parametrize("e", [Edge(1, 2), TimeEdge(1, 2, 0), WeightedTimeEdge(1, 2, 0)])
    def test_is_edge(self, e):
        """Test edge detection for every variant."""
        assert is_edge(e)

    def test_is_edge_rejects_tuples(self):
        """Test tuples are not edges."""
        assert not is_edge((1, 2, 0))
