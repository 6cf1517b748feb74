"""High-trust selection strategy.

Decides which identities make up the root's "most trusted" set, combining
the root's direct vouches, a confidence threshold and a three-tier
clustering of the propagated ranking.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from . import defaults
from .clustering import ckmeans
from .first_order import edges_to_rankings, first_order_edges
from .graph import TrustGraph

logger = logging.getLogger(__name__)

# id -> score; None means the id was never ranked
RankedTrust = dict[str, float | None]


def rank_to_id(
    rank: float,
    rankings: Mapping[str, float],
    tolerance: float = defaults.DEFAULT_RANK_TOLERANCE,
) -> str | None:
    """Find the id whose score is nearest to ``rank``, within ``tolerance``.

    On equal distance the id seen first wins.
    """
    best_id = None
    best_distance = tolerance
    for node_id, score in rankings.items():
        distance = abs(score - rank)
        if distance == 0.0:
            return node_id
        if distance < best_distance:
            best_id = node_id
            best_distance = distance
    return best_id


def cluster_high_trust(
    rankings: Mapping[str, float],
    cluster_count: int = defaults.DEFAULT_CLUSTER_COUNT,
    tolerance: float = defaults.DEFAULT_RANK_TOLERANCE,
) -> dict[str, float]:
    """Keep the ids in the upper tiers of the ranking.

    The positive scores are clustered into ``cluster_count`` tiers and the
    two highest tiers are returned. A synthetic zero score is clustered
    along with them so the lowest tier is never empty, even when every
    real score is high.
    """
    positive = {node_id: score for node_id, score in rankings.items() if score > 0}
    scores = list(positive.values())
    scores.append(0.0)

    result = ckmeans(scores, cluster_count)
    groups = result.groups
    # Drop the synthetic zero from the lowest tier
    groups[0] = [s for s in groups[0] if s > 0]
    logger.debug("Trust tiers (k=%d): %s", result.k, groups)

    high_scores = [s for group in reversed(groups[-2:]) for s in group]

    # Each id may be claimed once, so two ids with the same score both map
    remaining = dict(positive)
    selected: dict[str, float] = {}
    for score in high_scores:
        node_id = rank_to_id(score, remaining, tolerance)
        if node_id is None:
            logger.warning("No ranked id within %s of clustered score %s", tolerance, score)
            continue
        del remaining[node_id]
        selected[node_id] = positive[node_id]
    return selected


def missing_rankings(nodes: list[str], rankings: Mapping[str, float]) -> RankedTrust:
    """Look up each node's rank, None for nodes that were never ranked."""
    return {node: rankings.get(node) for node in nodes}


def select_most_trusted(
    graph: TrustGraph,
    root: str,
    rankings: Mapping[str, float],
    is_first_order: bool,
    threshold: float = defaults.DEFAULT_THRESHOLD,
    cluster_count: int = defaults.DEFAULT_CLUSTER_COUNT,
    tolerance: float = defaults.DEFAULT_RANK_TOLERANCE,
) -> RankedTrust:
    """Run the high-trust strategy over a loaded graph.

    1. Without any direct vouch at or above ``threshold`` the propagated
       tiers are not trustworthy context, so only the direct trustees are
       returned, with their rank if they have one.
    2. On a first-order graph the direct weights are the ranking.
    3. Otherwise the upper clustered tiers are returned, extended with any
       direct trustee they left out. A clustered entry is never replaced by
       such a fallback.
    """
    direct = [e for e in first_order_edges(graph, root) if e.dst != root]
    direct_nodes = [e.dst for e in direct]
    high_trust = [e for e in direct if e.weight >= threshold]

    if not high_trust:
        logger.debug("No direct vouches >= %s from %s; returning direct trustees only", threshold, root)
        return missing_rankings(direct_nodes, rankings)

    if is_first_order:
        logger.debug("First order graph; direct weights are the ranking")
        return dict(edges_to_rankings(direct))

    result: RankedTrust = dict(cluster_high_trust(rankings, cluster_count, tolerance))
    missing = [n for n in direct_nodes if n not in result]
    for node, rank in missing_rankings(missing, rankings).items():
        result.setdefault(node, rank)
    logger.debug("High trust result for %s: %s", root, result)
    return result
