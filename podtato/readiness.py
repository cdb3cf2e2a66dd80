from __future__ import annotations

import logging
from threading import Event, Thread

logger = logging.getLogger(__name__)


class ReadinessGate:
    """Process-wide ready flag: written once, read by every /readyz call."""

    def __init__(self) -> None:
        self._ready = Event()

    def mark_ready(self) -> None:
        self._ready.set()

    def is_ready(self) -> bool:
        return self._ready.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._ready.wait(timeout)


def open_gate_async(gate: ReadinessGate) -> Thread:
    """Flip the gate from a background thread.

    Runs concurrently with the listener starting up, so /readyz may briefly
    answer "not ready" while other routes are already served.
    """

    def _flip() -> None:
        gate.mark_ready()
        logger.info("PodTatoHead is ready")

    thr = Thread(target=_flip, name="podtato-readiness", daemon=True)
    thr.start()
    return thr
