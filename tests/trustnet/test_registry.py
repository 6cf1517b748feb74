"""Tests for named trust areas."""

from __future__ import annotations

import pytest

from trustnet import TrustAreaRegistry, TrustNet
from trustnet.exceptions import AreaNotFoundError

ASSIGNMENTS = [
    {"src": "a", "dst": "b", "weight": 0.75},
    {"src": "a", "dst": "c", "weight": 0.75},
    {"src": "a", "dst": "d", "weight": 0.25},
]


class TestRegistry:
    def test_areas_from_list(self):
        registry = TrustAreaRegistry(["moderation", "hosting"])
        assert registry.list() == ["hosting", "moderation"]
        assert isinstance(registry.get("hosting"), TrustNet)
        assert len(registry) == 2

    def test_areas_from_mapping(self):
        registry = TrustAreaRegistry({"moderation": {"threshold": 0.7}, "hosting": None})
        assert registry.get("moderation").config.threshold == 0.7
        assert registry.get("hosting").config.threshold == 0.5

    def test_areas_are_independent(self):
        registry = TrustAreaRegistry(["x", "y"])
        registry.load("x", "a", ASSIGNMENTS)
        assert registry.get_most_trusted("x") == {"b", "c", "d"}
        assert registry.get_most_trusted("y") == set()

    def test_load_adds_unknown_area(self):
        registry = TrustAreaRegistry()
        registry.load("moderation", "a", ASSIGNMENTS, distrusted=["d"])
        assert "moderation" in registry
        assert registry.get_rankings("moderation") == {"b": 0.75, "c": 0.75}

    def test_single_area_is_the_default(self):
        registry = TrustAreaRegistry()
        registry.load("only", "a", ASSIGNMENTS)
        assert registry.get_most_trusted() == {"b", "c", "d"}
        assert registry.get_all_trusted()[-1] == "a"

    def test_ambiguous_default_returns_none(self):
        registry = TrustAreaRegistry(["x", "y"])
        assert registry.get_most_trusted() is None
        assert registry.get_rankings() is None
        assert TrustAreaRegistry().get_all_trusted() is None

    def test_unknown_area(self):
        registry = TrustAreaRegistry(["x"])
        assert registry.get("nope") is None
        assert registry.get_rankings("nope") is None
        with pytest.raises(AreaNotFoundError):
            registry.require("nope")

    def test_remove(self):
        registry = TrustAreaRegistry(["x"])
        assert registry.remove("x") is True
        assert registry.remove("x") is False
        assert registry.list() == []

    @pytest.mark.asyncio
    async def test_load_all(self):
        registry = TrustAreaRegistry(["x"])
        states = await registry.load_all(
            {
                "x": {"root_id": "a", "assignments": ASSIGNMENTS},
                "y": {"root_id": "a", "assignments": ASSIGNMENTS, "distrusted": ["b"]},
            }
        )
        assert set(states) == {"x", "y"}
        assert registry.get_most_trusted("x") == {"b", "c", "d"}
        assert registry.get_most_trusted("y") == {"c", "d"}
