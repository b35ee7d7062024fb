"""Application rate limiting – Decision, DecisionSource."""
from __future__ import annotations

import dataclasses
from enum import Enum


class DecisionSource(str, Enum):
    """Which path produced an admission decision."""

    REMOTE = "REMOTE"
    FALLBACK = "FALLBACK"


@dataclasses.dataclass(frozen=True)
class Decision:
    """Outcome of one admission check."""

    allowed: bool
    source: DecisionSource
    key: str
    error: BaseException | None = dataclasses.field(default=None, compare=False)

    @property
    def degraded(self) -> bool:
        return self.source is DecisionSource.FALLBACK


__all__ = ["Decision", "DecisionSource"]
