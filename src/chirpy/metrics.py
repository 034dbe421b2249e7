"""
=============================================================================
HIT COUNTER
=============================================================================

Counts requests to the static /app/ subtree. The counter is created by
create_app() and passed to both sides that touch it:

    MetricsMiddleware ──increment()──►┌────────────┐
                                      │ HitCounter │◄──value── MetricsHandler.hits / .admin
                                      └────────────┘◄──reset()─ MetricsHandler.reset

Worker threads call these concurrently, so every access goes through one
lock. The lock is held for the single read or write and never while a
handler runs. The count lives in memory only and starts at zero on every
process start.

=============================================================================
"""

import threading


class HitCounter:
    """
    Thread-safe, non-negative request counter.

        hits = HitCounter()
        hits.increment()    # 1
        hits.value          # 1
        hits.reset()
        hits.value          # 0
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("start must be >= 0")
        self._value = start
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one hit. Returns the new count."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    def __repr__(self) -> str:
        return f"HitCounter(value={self.value})"
