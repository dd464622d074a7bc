"""
decay.py - Cancellable periodic task that takes reps away while posture stays bad.
"""
import logging
import threading
import weakref
from typing import Callable, Optional

logger = logging.getLogger("DecayScheduler")


class DecayScheduler:
    """
    Runs `on_tick` every `period` seconds on a daemon thread until stopped.

    Every tick runs under the owner's lock and re-checks its cancellation token
    there first, so once stop() has returned no further tick takes effect.
    The callback is held weakly: when its owner is garbage collected the task
    ends on its next wake-up.
    """

    def __init__(self, on_tick: Callable[[], None], lock=None, period: float = 1.0, name: str = "decay"):
        if period <= 0:
            raise ValueError(f"Decay period must be positive, got {period}")
        if hasattr(on_tick, "__self__"):
            self._callback_ref = weakref.WeakMethod(on_tick)
        else:
            self._callback_ref = lambda: on_tick
        self._lock = lock if lock is not None else threading.RLock()
        self.period = period
        self.name = name
        self._cancel_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_active(self) -> bool:
        return self._cancel_event is not None

    def start(self) -> bool:
        """Start the task. Returns False (and does nothing) if one is already active."""
        with self._lock:
            if self._cancel_event is not None:
                return False
            token = threading.Event()
            self._cancel_event = token
            self._thread = threading.Thread(target=self._run, args=(token,), name=self.name, daemon=True)
            self._thread.start()
        logger.info(f"[{self.name}] started (period={self.period}s)")
        return True

    def stop(self) -> bool:
        """Cancel the active task. Returns False (and does nothing) if none is active."""
        with self._lock:
            token = self._cancel_event
            if token is None:
                return False
            token.set()
            self._cancel_event = None
            self._thread = None
        logger.info(f"[{self.name}] stopped")
        return True

    def tick(self, token: Optional[threading.Event] = None) -> bool:
        """
        Run one tick of the active task now.

        Returns False without calling back when the task was cancelled or its owner is gone.
        """
        with self._lock:
            if token is None:
                token = self._cancel_event
            if token is None or token.is_set():
                return False
            callback = self._callback_ref()
            if callback is None:
                token.set()
                return False
            callback()
            return True

    def _run(self, token: threading.Event) -> None:
        # Event.wait returns True as soon as the token is set, which ends the loop
        while not token.wait(self.period):
            if not self.tick(token):
                break
