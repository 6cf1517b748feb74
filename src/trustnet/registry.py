"""Named trust areas.

A peer may keep separate trust views for different areas (say, one for
moderation and one for file hosting). ``TrustAreaRegistry`` maps area names
to independent ``TrustNet`` instances and forwards loads and queries by
name. The caller owns the registry; there is no process-wide instance.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .config import TrustNetConfig
from .engine import TrustNet, TrustState
from .exceptions import AreaNotFoundError
from .models import TrustAssignment

logger = logging.getLogger(__name__)

ConfigLike = TrustNetConfig | Mapping[str, Any] | None


class TrustAreaRegistry:
    """Owns one ``TrustNet`` per area name."""

    def __init__(self, areas: Iterable[str] | Mapping[str, ConfigLike] = ()) -> None:
        self._areas: dict[str, TrustNet] = {}
        if isinstance(areas, Mapping):
            for area, config in areas.items():
                self.add(area, config)
        else:
            for area in areas:
                self.add(area)

    def __contains__(self, area: object) -> bool:
        return area in self._areas

    def __len__(self) -> int:
        return len(self._areas)

    def add(self, area: str, config: ConfigLike = None) -> TrustNet:
        """Register (or replace) the engine for ``area``."""
        if isinstance(config, Mapping):
            config = TrustNetConfig.from_dict(config)
        tnet = TrustNet(config)
        if area in self._areas:
            logger.info("Replacing trust area %s", area)
        self._areas[area] = tnet
        return tnet

    def get(self, area: str) -> TrustNet | None:
        return self._areas.get(area)

    def require(self, area: str) -> TrustNet:
        """Like ``get``, but raises AreaNotFoundError for unknown areas."""
        tnet = self._areas.get(area)
        if tnet is None:
            raise AreaNotFoundError(area)
        return tnet

    def list(self) -> list[str]:
        return sorted(self._areas)

    def remove(self, area: str) -> bool:
        """Drop an area. Returns False if it was not registered."""
        return self._areas.pop(area, None) is not None

    def load(
        self,
        area: str,
        root_id: Any,
        assignments: Iterable[TrustAssignment | Mapping[str, Any]],
        distrusted: Iterable[Any] = (),
    ) -> TrustState:
        """Load an area's trust view, registering the area if needed."""
        tnet = self._areas.get(area) or self.add(area)
        return tnet.load(root_id, assignments, distrusted)

    async def load_all(self, area_mapping: Mapping[str, Mapping[str, Any]]) -> dict[str, TrustState]:
        """Load several areas at once.

        Args:
            area_mapping: ``{area: {"root_id": ..., "assignments": [...],
                "distrusted": [...]}}``; ``distrusted`` is optional.

        Returns:
            The resulting state per area
        """

        async def _load(area: str, entry: Mapping[str, Any]) -> TrustState:
            tnet = self._areas.get(area) or self.add(area)
            return await tnet.aload(entry["root_id"], entry["assignments"], entry.get("distrusted", ()))

        areas = list(area_mapping)
        states = await asyncio.gather(*(_load(area, area_mapping[area]) for area in areas))
        return dict(zip(areas, states))

    def _resolve(self, area: str | None) -> TrustNet | None:
        # Without an explicit area, a registry holding exactly one area uses it
        if area is not None:
            return self._areas.get(area)
        if len(self._areas) == 1:
            return next(iter(self._areas.values()))
        return None

    def get_most_trusted(self, area: str | None = None) -> set[str] | None:
        tnet = self._resolve(area)
        return tnet.get_most_trusted() if tnet else None

    def get_rankings(self, area: str | None = None) -> dict[str, float] | None:
        tnet = self._resolve(area)
        return tnet.get_rankings() if tnet else None

    def get_all_trusted(self, area: str | None = None) -> list[str] | None:
        tnet = self._resolve(area)
        return tnet.get_all_trusted() if tnet else None
