"""
Update Coalescer

Collapses any number of accessor calls inside one reading into a single
physics pass, so every value a host reads between two
``reset_for_next_reading()`` calls comes from the same simulated tick.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class UpdateCoalescer:
    """
    Freshness flag guarding a physics pass.

    Example:
        coalescer = UpdateCoalescer("fleet")
        coalescer.ensure_fresh(engine.step)   # runs step
        coalescer.ensure_fresh(engine.step)   # no-op, already fresh
        coalescer.reset_for_next_reading()
        coalescer.ensure_fresh(engine.step)   # runs step again
    """

    def __init__(self, name: str = "engine"):
        self.name = name
        self.tick = 0
        self._fresh = False

    @property
    def is_fresh(self) -> bool:
        return self._fresh

    def ensure_fresh(self, update_fn: Callable[[], None]) -> bool:
        """
        Run ``update_fn`` once if the current reading is stale.

        Returns:
            True if a physics pass ran
        """
        if self._fresh:
            return False
        update_fn()
        self.mark_fresh()
        return True

    def mark_fresh(self) -> None:
        """Record a completed pass (used by explicit stepping)."""
        self.tick += 1
        self._fresh = True
        logger.debug(f"{self.name}: physics pass {self.tick} complete")

    def reset_for_next_reading(self) -> None:
        """Allow the next accessor call to run a new physics pass."""
        self._fresh = False

    def invalidate(self) -> None:
        """Mark state stale after a control operation mutated it."""
        self.reset_for_next_reading()
