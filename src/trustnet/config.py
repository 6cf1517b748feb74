"""Engine configuration."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

from . import defaults
from .exceptions import ConfigException

# camelCase names accepted by from_dict, as used by JSON callers
_ALIASES = {
    "maxIterations": "max_iterations",
    "decayFactor": "decay_factor",
    "convergenceEpsilon": "convergence_epsilon",
    "clusterCount": "cluster_count",
    "rankTolerance": "rank_tolerance",
    "backwardEdges": "backward_edges",
}

_ENV_SETTINGS = {
    "THRESHOLD": ("threshold", float),
    "MAX_ITERATIONS": ("max_iterations", int),
    "DECAY_FACTOR": ("decay_factor", float),
    "CONVERGENCE_EPSILON": ("convergence_epsilon", float),
}


@dataclass(frozen=True)
class TrustNetConfig:
    """Tunable parameters for one ranking engine.

    Attributes:
        threshold: Minimum direct weight for a vouch to count as high trust.
        max_iterations: Upper bound on propagation rounds.
        decay_factor: Fraction of a node's energy spread to its trustees
            each round; the rest is retained as the node's rank.
        convergence_epsilon: Propagation stops once the circulating energy
            sums to less than this.
        cluster_count: Number of trust tiers the ranking is split into.
        rank_tolerance: Distance within which a clustered score is matched
            back to a ranked id.
        backward_edges: Give every non-root node a virtual edge back to the
            root, so that energy reaching a dead end is recycled.
    """

    threshold: float = defaults.DEFAULT_THRESHOLD
    max_iterations: int = defaults.DEFAULT_MAX_ITERATIONS
    decay_factor: float = defaults.DEFAULT_DECAY_FACTOR
    convergence_epsilon: float = defaults.DEFAULT_CONVERGENCE_EPSILON
    cluster_count: int = defaults.DEFAULT_CLUSTER_COUNT
    rank_tolerance: float = defaults.DEFAULT_RANK_TOLERANCE
    backward_edges: bool = defaults.DEFAULT_BACKWARD_EDGES

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        for name in ("threshold", "decay_factor", "convergence_epsilon", "rank_tolerance"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value):
                raise ConfigException(f"{name} must be a number, got {value!r}", setting=name, value=value)

        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigException(
                f"threshold must be between 0.0 and 1.0, got {self.threshold}",
                setting="threshold",
                value=self.threshold,
            )
        if not 0.0 < self.decay_factor < 1.0:
            raise ConfigException(
                f"decay_factor must be strictly between 0.0 and 1.0, got {self.decay_factor}",
                setting="decay_factor",
                value=self.decay_factor,
            )
        if self.convergence_epsilon < 0:
            raise ConfigException(
                f"convergence_epsilon must be >= 0, got {self.convergence_epsilon}",
                setting="convergence_epsilon",
                value=self.convergence_epsilon,
            )
        if self.rank_tolerance < 0:
            raise ConfigException(
                f"rank_tolerance must be >= 0, got {self.rank_tolerance}",
                setting="rank_tolerance",
                value=self.rank_tolerance,
            )
        if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int) or self.max_iterations < 1:
            raise ConfigException(
                f"max_iterations must be a positive integer, got {self.max_iterations!r}",
                setting="max_iterations",
                value=self.max_iterations,
            )
        if isinstance(self.cluster_count, bool) or not isinstance(self.cluster_count, int) or self.cluster_count < 2:
            raise ConfigException(
                f"cluster_count must be an integer >= 2, got {self.cluster_count!r}",
                setting="cluster_count",
                value=self.cluster_count,
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrustNetConfig:
        """Build a config from a mapping, accepting camelCase keys too."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigException(f"Unknown setting: {key}", setting=key)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls, prefix: str = defaults.ENV_PREFIX) -> TrustNetConfig:
        """Build a config from ``TRUSTNET_*`` environment variables.

        Variables that are not set keep their defaults.
        """
        kwargs: dict[str, Any] = {}
        for suffix, (name, parse) in _ENV_SETTINGS.items():
            raw = os.environ.get(prefix + suffix)
            if raw is None or raw.strip() == "":
                continue
            try:
                kwargs[name] = parse(raw.strip())
            except ValueError as e:
                raise ConfigException(
                    f"Invalid value for {prefix + suffix}: {raw!r}",
                    setting=name,
                    value=raw,
                ) from e
        return cls(**kwargs)

    def replace(self, **overrides: Any) -> TrustNetConfig:
        """Return a copy with the given fields overridden."""
        return self.from_dict({**self.to_dict(), **overrides})


DEFAULT_CONFIG = TrustNetConfig()
