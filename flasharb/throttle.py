# flasharb/throttle.py
"""
Execution cooldown shared by every evaluator in the process.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ExecutionGate:
    """
    Minimum wall-clock interval between two execution attempts.

    try_acquire() checks and claims the slot under one lock, so two
    evaluators running in parallel threads can never both pass.
    The slot is claimed before submission and is not released on failure.
    """

    def __init__(self, cooldown_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_trade: Optional[float] = None

    @property
    def last_trade_timestamp(self) -> Optional[float]:
        return self._last_trade

    def try_acquire(self) -> bool:
        with self._lock:
            now = self._clock()
            if self._last_trade is not None and now - self._last_trade < self.cooldown_seconds:
                return False
            self._last_trade = now
            return True

    def remaining(self) -> float:
        """Seconds left in the current cooldown (0 when open)"""
        with self._lock:
            if self._last_trade is None:
                return 0.0
            elapsed = self._clock() - self._last_trade
            return max(0.0, self.cooldown_seconds - elapsed)
