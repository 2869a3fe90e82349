"""
Effect lifecycle - transient bursts that mark newly created nodes.
"""

import time
from typing import Callable, Iterable, Optional

from models import Effect, Vector3


EFFECT_TTL_MS = 2000.0


def now_ms() -> float:
    """Wall clock in epoch milliseconds."""
    return time.time() * 1000


class EffectManager:
    """
    Owns the effect set.

    Effects live independently of nodes: destroying the node that triggered
    an effect does not end the effect, and the only way an effect goes away
    is by aging past its ttl.
    """

    def __init__(self, ttl_ms: float = EFFECT_TTL_MS, clock: Callable[[], float] = now_ms):
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._effects: list[Effect] = []

    def spawn(self, position: Vector3, now: Optional[float] = None) -> Effect:
        """Create one effect at position, starting now."""
        effect = Effect(
            position=position,
            created_at=self._clock() if now is None else now,
            ttl_ms=self.ttl_ms,
        )
        self._effects.append(effect)
        return effect

    def spawn_all(self, positions: Iterable[Vector3], now: Optional[float] = None) -> int:
        """Spawn one effect per position, all sharing the same start time."""
        now = self._clock() if now is None else now
        count = 0
        for position in positions:
            self.spawn(position, now)
            count += 1
        return count

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop every expired effect. Returns how many were removed."""
        now = self._clock() if now is None else now
        alive = [e for e in self._effects if not e.expired(now)]
        removed = len(self._effects) - len(alive)
        self._effects = alive
        return removed

    def clear(self) -> None:
        self._effects = []

    @property
    def effects(self) -> list[Effect]:
        """Current effects (copy)."""
        return list(self._effects)

    def __len__(self) -> int:
        return len(self._effects)
