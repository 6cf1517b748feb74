"""Tests for the TrustNet ranking engine."""

from __future__ import annotations

import pytest

from trustnet import TrustAssignment, TrustNet, TrustNetConfig
from trustnet.exceptions import ValidationException


def _assignments(*edges: tuple[str, str, float]) -> list[dict]:
    return [{"src": s, "dst": d, "weight": w} for s, d, w in edges]


@pytest.fixture
def deep_assignments() -> list[dict]:
    return _assignments(
        ("a", "b", 0.75),
        ("a", "c", 0.50),
        ("b", "d", 0.75),
        ("b", "e", 0.50),
        ("c", "e", 0.50),
        ("c", "f", 0.50),
        ("d", "g", 0.50),
        ("f", "h", 0.50),
    )


@pytest.fixture
def shallow_assignments() -> list[dict]:
    return _assignments(("a", "b", 0.75), ("a", "c", 0.75), ("a", "d", 0.25))


@pytest.fixture
def thesis_assignments() -> list[dict]:
    return _assignments(
        ("alice", "bob", 0.25),
        ("alice", "carole", 0.8),
        ("carole", "david", 0.8),
        ("david", "carole", 0.8),
        ("carole", "alice", 0.8),
        ("bob", "eve", 0.8),
        ("eve", "mallory", 1.0),
        ("mallory", "eve", 1.0),
    )


class TestUnloaded:
    """Queries before any load return empty results."""

    def test_queries_are_empty(self):
        tnet = TrustNet()
        assert tnet.is_loaded is False
        assert tnet.root_id is None
        assert tnet.is_first_order is None
        assert tnet.get_most_trusted() == set()
        assert tnet.most_trusted_rankings() == {}
        assert tnet.get_rankings() == {}
        assert tnet.get_all_trusted() == []
        assert tnet.first_order_edges() == []


class TestScenarios:
    def test_transitive_graph(self, deep_assignments):
        tnet = TrustNet()
        tnet.load("a", deep_assignments)
        assert tnet.is_first_order is False
        most_trusted = tnet.get_most_trusted()
        assert {"b", "c", "d"} <= most_trusted

    def test_fewer_than_three_nodes(self, shallow_assignments):
        tnet = TrustNet()
        tnet.load("a", shallow_assignments)
        assert tnet.is_first_order is True
        assert tnet.get_most_trusted() == {"b", "c", "d"}

    def test_direct_edges_ignore_deeper_edges(self):
        tnet = TrustNet()
        tnet.load("a", _assignments(("a", "b", 0.75), ("a", "c", 0.75), ("a", "d", 0.25), ("b", "c", 0.25)))
        nodes = [e.dst for e in tnet.first_order_edges()]
        assert len(nodes) == 3
        assert set(nodes) == {"b", "c", "d"}

    def test_cycles(self, thesis_assignments):
        tnet = TrustNet()
        tnet.load("alice", thesis_assignments)
        assert tnet.is_first_order is False
        assert tnet.state.propagation.converged is True
        assert "carole" in tnet.get_most_trusted()
        all_trusted = tnet.get_all_trusted()
        assert all_trusted[-1] == "alice"
        assert "carole" in all_trusted

    def test_root_never_ranked(self, thesis_assignments):
        tnet = TrustNet()
        tnet.load("alice", thesis_assignments)
        assert "alice" not in tnet.get_rankings()
        assert all(rank > 0 for rank in tnet.get_rankings().values())


class TestLoad:
    def test_first_order_rankings_are_direct_weights(self, shallow_assignments):
        tnet = TrustNet()
        state = tnet.load("a", shallow_assignments)
        assert state.propagation is None
        assert tnet.get_rankings() == {"b": 0.75, "c": 0.75, "d": 0.25}

    def test_accepts_assignment_objects(self):
        tnet = TrustNet()
        tnet.load("a", [TrustAssignment("a", "b", 0.9)])
        assert tnet.get_most_trusted() == {"b"}

    def test_root_is_coerced_to_string(self):
        tnet = TrustNet()
        tnet.load(1, [{"src": 1, "dst": 2, "weight": 0.8}])
        assert tnet.root_id == "1"
        assert tnet.get_most_trusted() == {"2"}
        assert tnet.get_all_trusted() == ["2", "1"]

    def test_missing_root(self, shallow_assignments):
        with pytest.raises(ValidationException):
            TrustNet().load(None, shallow_assignments)

    def test_distrusted_ids_are_removed(self, deep_assignments):
        tnet = TrustNet()
        tnet.load("a", deep_assignments, distrusted=["b"])
        assert "b" not in tnet.get_rankings()
        assert "b" not in tnet.get_most_trusted()
        # d was only reachable through b
        assert "d" not in tnet.get_rankings()
        assert "c" in tnet.get_most_trusted()

    def test_distrusting_every_trustee_empties_results(self, shallow_assignments):
        tnet = TrustNet()
        tnet.load("a", shallow_assignments, distrusted=["b", "c", "d"])
        assert tnet.get_rankings() == {}
        assert tnet.get_most_trusted() == set()
        assert tnet.get_all_trusted() == ["a"]

    def test_single_distrusted_string(self, shallow_assignments):
        tnet = TrustNet()
        tnet.load("a", shallow_assignments, distrusted="b")
        assert tnet.get_most_trusted() == {"c", "d"}

    def test_root_without_edges(self, deep_assignments):
        tnet = TrustNet()
        tnet.load("z", deep_assignments)
        assert tnet.is_first_order is True
        assert tnet.get_rankings() == {}
        assert tnet.get_most_trusted() == set()
        assert tnet.get_all_trusted() == ["z"]

    def test_empty_assignments(self):
        tnet = TrustNet()
        tnet.load("a", [])
        assert tnet.is_loaded is True
        assert tnet.get_most_trusted() == set()

    def test_load_is_deterministic(self, deep_assignments):
        tnet = TrustNet()
        tnet.load("a", deep_assignments)
        first = tnet.get_rankings()
        tnet.load("a", deep_assignments)
        assert tnet.get_rankings() == first

    def test_load_replaces_previous_state(self, deep_assignments, shallow_assignments):
        tnet = TrustNet()
        tnet.load("a", deep_assignments)
        tnet.load("a", shallow_assignments)
        assert tnet.is_first_order is True
        assert tnet.get_rankings() == {"b": 0.75, "c": 0.75, "d": 0.25}

    def test_failed_load_keeps_previous_state(self, shallow_assignments):
        tnet = TrustNet()
        tnet.load("a", shallow_assignments)
        with pytest.raises(ValidationException):
            tnet.load("x", _assignments(("x", "y", 1.5)))
        assert tnet.root_id == "a"
        assert tnet.get_most_trusted() == {"b", "c", "d"}

    def test_failed_first_load_stays_unloaded(self):
        tnet = TrustNet()
        with pytest.raises(ValidationException):
            tnet.load("a", [{"src": "a", "weight": 0.5}])
        assert tnet.is_loaded is False

    def test_duplicate_pairs_last_write_wins(self):
        tnet = TrustNet()
        tnet.load("a", _assignments(("a", "b", 0.2), ("a", "b", 0.9)))
        assert tnet.get_rankings() == {"b": 0.9}

    @pytest.mark.asyncio
    async def test_aload(self, shallow_assignments):
        tnet = TrustNet()
        state = await tnet.aload("a", shallow_assignments)
        assert state.root_id == "a"
        assert tnet.get_most_trusted() == {"b", "c", "d"}


class TestMostTrusted:
    def test_superset_of_high_trust_direct_vouches(self, deep_assignments, thesis_assignments):
        tnet = TrustNet()
        tnet.load("a", deep_assignments)
        assert {"b", "c"} <= tnet.get_most_trusted()
        tnet.load("alice", thesis_assignments)
        assert {"carole"} <= tnet.get_most_trusted()

    def test_all_direct_trustees_are_kept(self, thesis_assignments):
        tnet = TrustNet()
        tnet.load("alice", thesis_assignments)
        assert {"bob", "carole"} <= tnet.get_most_trusted()

    def test_without_high_trust_only_direct_trustees(self):
        tnet = TrustNet()
        tnet.load("a", _assignments(("a", "b", 0.3), ("b", "c", 0.9), ("c", "d", 0.9)))
        assert tnet.is_first_order is False
        ranked = tnet.most_trusted_rankings()
        assert list(ranked) == ["b"]
        assert ranked["b"] > 0

    def test_threshold_override(self, shallow_assignments):
        tnet = TrustNet(threshold=0.8)
        assert tnet.config.threshold == 0.8
        tnet.load("a", shallow_assignments)
        # no vouch reaches 0.8, so every direct trustee is returned as-is
        assert tnet.most_trusted_rankings() == {"b": 0.75, "c": 0.75, "d": 0.25}

    def test_config_object(self):
        config = TrustNetConfig(decay_factor=0.5)
        tnet = TrustNet(config, threshold=0.9)
        assert tnet.config.decay_factor == 0.5
        assert tnet.config.threshold == 0.9
