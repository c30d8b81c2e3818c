"""Configuration system for Underbar.

This module defines the library-wide defaults: how malformed input is
handled, which clock throttled functions read, and where delayed calls are
scheduled. Nothing is read from files or the environment; applications call
``configure()`` once at startup if the defaults don't suit them.
"""

import time
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, List

from ..error_policies import BestEffortPolicy


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


class CollectionShape(Enum):
    """The shapes the traversal engine knows how to walk.

    Resolved exactly once per traversal call.
    """
    SEQUENCE = "sequence"        # Indexed 0..len-1
    MAPPING = "mapping"          # Keyed, mapping iteration order
    UNSUPPORTED = "unsupported"  # Scalars, strings, sets, generators, None


class DelayBackend(Enum):
    """Where ``delay`` schedules its deferred call."""
    AUTO = "auto"          # Running event loop if any, else a timer thread
    ASYNCIO = "asyncio"    # Always the running event loop
    THREAD = "thread"      # Always a daemon threading.Timer


@dataclass
class UnderbarConfig:
    """Library-wide defaults.

    Individual calls can still override the policy (``policy=``) and the
    throttle clock (``clock=``).
    """

    # Malformed-input handling
    input_policy: Any = field(default_factory=BestEffortPolicy)

    # Time source for throttle, in milliseconds
    clock: Callable[[], float] = monotonic_ms

    # Scheduling for delay
    delay_backend: DelayBackend = DelayBackend.AUTO

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not callable(getattr(self.input_policy, 'handle', None)):
            errors.append("input_policy must provide a handle() method")

        if not callable(self.clock):
            errors.append("clock must be callable")

        if not isinstance(self.delay_backend, DelayBackend):
            errors.append("delay_backend must be a DelayBackend member")

        return errors


_active_config = UnderbarConfig()


def get_config() -> UnderbarConfig:
    """Return the active configuration."""
    return _active_config


def configure(**overrides) -> UnderbarConfig:
    """Replace fields of the active configuration.

    Args:
        **overrides: Field names of UnderbarConfig and their new values

    Returns:
        The new active configuration

    Raises:
        ValueError: If a field name is unknown or the result does not validate
    """
    global _active_config

    known = {f.name for f in fields(UnderbarConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(
            f"Unknown config field(s): {', '.join(unknown)}. "
            f"Choose from: {', '.join(sorted(known))}"
        )

    candidate = replace(_active_config, **overrides)
    errors = candidate.validate()
    if errors:
        raise ValueError("Invalid configuration: " + "; ".join(errors))

    _active_config = candidate
    return _active_config


def reset_config() -> UnderbarConfig:
    """Restore the default configuration."""
    global _active_config
    _active_config = UnderbarConfig()
    return _active_config
