"""Time-ordered ID generator for business IDs (order_id).

IDs sort by creation time within a process, which keeps log lines and
order-book dumps readable. Not globally unique across processes; order IDs
only live as long as the in-memory book that holds them.
"""

import threading
import time


class SequentialIdGenerator:
    """Layout: <millis since epoch><4-digit per-millisecond sequence>, prefixed."""

    _MAX_SEQUENCE = 9999

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._last_ms = -1
        self._sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now_ms = int(time.time() * 1000)
            if now_ms <= self._last_ms:
                # Same millisecond (or clock stepped back): keep counting on the last tick
                now_ms = self._last_ms
                self._sequence += 1
                if self._sequence > self._MAX_SEQUENCE:
                    now_ms += 1
                    self._sequence = 0
            else:
                self._sequence = 0
            self._last_ms = now_ms
            return f"{self._prefix}{now_ms}{self._sequence:04d}"


_order_ids = SequentialIdGenerator("ord_")


def generate_order_id() -> str:
    """Generate a unique, time-ordered order ID using the module-level generator."""
    return _order_ids.next_id()
