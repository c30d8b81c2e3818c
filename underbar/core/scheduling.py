"""Deferred invocation for Underbar.

``delay`` hands one call to the host's scheduler and returns at once. Inside
a running asyncio event loop the call is scheduled on that loop; elsewhere
it runs on a daemon timer thread.
"""

import asyncio
import logging
import threading
from typing import Any, Optional

from .._common.config import DelayBackend, get_config
from ..error_policies import InputPolicy, resolve_policy
from .decorators import _checked_wait

logger = logging.getLogger(__name__)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    """Return the running event loop, or None outside of one."""
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def delay(fn: Any = None,
          wait_ms: Any = 0,
          *args,
          policy: Optional[InputPolicy] = None,
          backend: Optional[DelayBackend] = None) -> None:
    """Call ``fn(*args)`` once, no earlier than ``wait_ms`` milliseconds from now.

    Returns immediately. Every call schedules its own task; tasks cannot be
    cancelled. Exceptions raised by ``fn`` are not caught here: they reach
    the event loop's exception handler or ``threading.excepthook``.

    Args:
        fn: Function to call later
        wait_ms: Minimum delay in milliseconds
        *args: Positional arguments for ``fn``
        policy: Input policy for malformed arguments (default from config)
        backend: Where to schedule the call (default from config)

    Example:
        >>> delay(print, 500, 'a', 'b')   # prints "a b" after half a second
    """
    if not callable(fn):
        return resolve_policy(policy).handle(
            'delay', f"expected a callable, got {type(fn).__name__}", None
        )

    wait_ms = _checked_wait('delay', wait_ms, policy)
    backend = backend or get_config().delay_backend
    loop = _running_loop() if backend is not DelayBackend.THREAD else None

    if backend is DelayBackend.ASYNCIO and loop is None:
        return resolve_policy(policy).handle(
            'delay', "asyncio backend requested outside a running event loop", None
        )

    if loop is not None:
        loop.call_later(wait_ms / 1000, fn, *args)
        logger.debug("delay: scheduled %r on event loop in %sms", fn, wait_ms)
        return None

    timer = threading.Timer(wait_ms / 1000, fn, args=args)
    timer.daemon = True
    timer.start()
    logger.debug("delay: scheduled %r on timer thread in %sms", fn, wait_ms)
    return None
