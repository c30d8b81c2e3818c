"""Test fixtures for Underbar consumers.

These fixtures make the time-dependent decorators testable without
sleeping, and let tests count how often a wrapped function really ran.
"""

import threading
from typing import Any, Dict, List, Optional, Tuple


class FakeClock:
    """Manually advanced clock for ``throttle``.

    Reads in milliseconds, like the default clock. Pass an instance as the
    ``clock`` argument and move time with ``advance()``.

    Example:
        clock = FakeClock()
        throttled = throttle(handler, 100, clock=clock)
        throttled()          # runs
        clock.advance(50)
        throttled()          # dropped
    """

    def __init__(self, start_ms: float = 0):
        """Initialize the clock.

        Args:
            start_ms: Initial reading in milliseconds
        """
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> float:
        """Move the clock forward by ``ms`` milliseconds.

        Returns:
            The new reading
        """
        if ms < 0:
            raise ValueError("FakeClock cannot move backwards")
        self.now_ms += ms
        return self.now_ms

    def set(self, now_ms: float) -> None:
        """Jump to an absolute reading."""
        self.now_ms = now_ms


class CallRecorder:
    """Callable spy that records every call it receives.

    Optionally returns a fixed value or raises a fixed exception. A
    ``threading.Event`` is set on every call so tests of ``delay`` can wait
    for the deferred call without sleeping a fixed amount.
    """

    def __init__(self, return_value: Any = None, raises: Optional[BaseException] = None):
        self.return_value = return_value
        self.raises = raises
        self.calls: List[Tuple[Tuple[Any, ...], Dict[str, Any]]] = []
        self.called = threading.Event()

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        self.called.set()
        if self.raises is not None:
            raise self.raises
        return self.return_value

    @property
    def call_count(self) -> int:
        """Number of calls received so far."""
        return len(self.calls)

    @property
    def call_args(self) -> List[Tuple[Any, ...]]:
        """Positional arguments of every call, in order."""
        return [args for args, _ in self.calls]

    def wait(self, timeout: float = 1.0) -> bool:
        """Block until the first call arrives or ``timeout`` seconds pass."""
        return self.called.wait(timeout)
