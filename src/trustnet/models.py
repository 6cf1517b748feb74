"""Trust assignment and edge types.

A trust assignment is one directed statement "src trusts dst with weight".
Assignments arrive either as TrustAssignment instances or as plain mappings
(``{"src": ..., "dst": ..., "weight": ...}``) and are normalized by
``coerce_assignments`` before anything else sees them.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import ValidationException


@dataclass(frozen=True)
class TrustAssignment:
    """A directed, weighted trust statement."""

    src: str
    dst: str
    weight: float

    def __post_init__(self) -> None:
        _check_identity(self.src, "src")
        _check_identity(self.dst, "dst")
        _check_weight(self.weight)

    def to_dict(self) -> dict[str, Any]:
        return {"src": self.src, "dst": self.dst, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrustAssignment:
        """Build an assignment from a mapping, coercing ids to strings."""
        src = data.get("src")
        dst = data.get("dst")
        _check_identity(src, "src")
        _check_identity(dst, "dst")
        if "weight" not in data:
            raise ValidationException("Trust assignment is missing a weight", field="weight")
        return cls(src=str(src), dst=str(dst), weight=data["weight"])


@dataclass(frozen=True)
class Edge:
    """An outgoing edge as seen from its source node."""

    dst: str
    weight: float


def _check_identity(value: Any, field: str) -> None:
    if value is None or (isinstance(value, str) and not value):
        raise ValidationException(f"Trust assignment is missing {field}", field=field)


def _check_weight(weight: Any) -> None:
    if isinstance(weight, bool) or not isinstance(weight, int | float):
        raise ValidationException(
            f"weight must be a number, got {type(weight).__name__}",
            field="weight",
            value=weight,
        )
    if math.isnan(weight) or not 0.0 <= weight <= 1.0:
        raise ValidationException(
            f"weight must be between 0.0 and 1.0, got {weight}",
            field="weight",
            value=weight,
        )


def coerce_assignment(item: TrustAssignment | Mapping[str, Any]) -> TrustAssignment:
    """Normalize one assignment, validating it along the way."""
    if isinstance(item, TrustAssignment):
        if not isinstance(item.src, str) or not isinstance(item.dst, str):
            return TrustAssignment(src=str(item.src), dst=str(item.dst), weight=item.weight)
        return item
    if isinstance(item, Mapping):
        return TrustAssignment.from_dict(item)
    raise ValidationException(
        f"Trust assignment must be a TrustAssignment or mapping, got {type(item).__name__}",
    )


def coerce_assignments(
    assignments: Iterable[TrustAssignment | Mapping[str, Any]],
) -> list[TrustAssignment]:
    """Normalize a sequence of assignments.

    Raises:
        ValidationException: On the first malformed entry; ``index`` is set
            to its position in the input.
    """
    result = []
    for i, item in enumerate(assignments):
        try:
            result.append(coerce_assignment(item))
        except ValidationException as e:
            raise ValidationException(
                f"Invalid trust assignment at index {i}: {e.message}",
                field=e.field,
                value=e.value,
                index=i,
            ) from e
    return result


def filter_distrusted(
    assignments: Iterable[TrustAssignment],
    distrusted: Iterable[Any],
) -> list[TrustAssignment]:
    """Drop every assignment whose src or dst is distrusted."""
    excluded = {str(d) for d in distrusted}
    if not excluded:
        return list(assignments)
    return [a for a in assignments if a.src not in excluded and a.dst not in excluded]
