"""
Cooperative pause/resume/cancel channel shared by a caller and a scan worker.

The caller mutates the signal; the worker only reads it, at checkpoints
between files. Cancellation is terminal and always overrides a pause.
"""

from __future__ import annotations

import threading
from enum import Enum


class SignalState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class ControlSignal:
    """Tri-state control signal backed by a condition variable."""

    def __init__(self) -> None:
        self._state = SignalState.RUNNING
        self._cond = threading.Condition()

    @property
    def state(self) -> SignalState:
        with self._cond:
            return self._state

    @property
    def is_paused(self) -> bool:
        return self.state is SignalState.PAUSED

    @property
    def is_cancelled(self) -> bool:
        return self.state is SignalState.CANCELLED

    def pause(self) -> None:
        with self._cond:
            if self._state is SignalState.RUNNING:
                self._state = SignalState.PAUSED
                self._cond.notify_all()

    def resume(self) -> None:
        with self._cond:
            if self._state is SignalState.PAUSED:
                self._state = SignalState.RUNNING
                self._cond.notify_all()

    def cancel(self) -> None:
        with self._cond:
            self._state = SignalState.CANCELLED
            self._cond.notify_all()

    def checkpoint(self) -> bool:
        """
        Block while paused, then report whether work may continue.

        Returns False once the signal is cancelled, including when the
        cancellation arrives during the pause.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._state is not SignalState.PAUSED)
            return self._state is SignalState.RUNNING

    def sleep(self, seconds: float) -> bool:
        """Wait up to seconds, returning early (False) if cancelled."""
        with self._cond:
            if seconds > 0:
                self._cond.wait_for(lambda: self._state is SignalState.CANCELLED, timeout=seconds)
            return self._state is not SignalState.CANCELLED
