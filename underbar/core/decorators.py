"""Function decorators for Underbar.

Each decorator returns a small callable object that owns its private state:
``Once`` holds a flag and a result, ``Memoized`` a result cache,
``Throttled`` the time of its last invocation. Two decorations of the same
function never share state.

None of these are thread safe. They assume the caller's code runs on one
thread (or one event loop), so a state update can never interleave with
another call.
"""

import functools
import logging
import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from .._common.config import get_config
from .._common.markers import MISSING
from ..error_policies import InputPolicy, resolve_policy

logger = logging.getLogger(__name__)


def _noop(*args, **kwargs) -> None:
    """Stand-in for a function that was not callable."""


def _checked_function(operation: str, fn: Any, policy: Optional[InputPolicy]) -> Callable:
    """Return ``fn`` if callable, else whatever the policy substitutes."""
    if callable(fn):
        return fn
    return resolve_policy(policy).handle(
        operation, f"expected a callable, got {type(fn).__name__}", _noop
    )


def _checked_wait(operation: str, wait_ms: Any, policy: Optional[InputPolicy]) -> float:
    """Return ``wait_ms`` if it is a finite non-negative number, else the policy's choice."""
    if (isinstance(wait_ms, numbers.Real) and not isinstance(wait_ms, bool)
            and math.isfinite(wait_ms) and wait_ms >= 0):
        return wait_ms
    return resolve_policy(policy).handle(
        operation, f"wait must be a finite non-negative number of milliseconds, got {wait_ms!r}", 0
    )


class DecoratedFunction(ABC):
    """Base class for the stateful wrappers.

    Instances are callable and also work as method decorators: accessed
    through an instance, the receiver is passed to the wrapped function as
    its first argument. The state still belongs to the single decorated
    object, so it is shared by every instance of the class.
    """

    def __init__(self, fn: Callable):
        functools.update_wrapper(self, fn, updated=())

    def __call__(self, *args, **kwargs):
        return self._invoke((), args, kwargs)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return functools.partial(self._invoke_bound, instance)

    def _invoke_bound(self, instance, *args, **kwargs):
        return self._invoke((instance,), args, kwargs)

    @abstractmethod
    def _invoke(self, receiver: Tuple, args: Tuple, kwargs: Dict[str, Any]) -> Any:
        """Run one call of the wrapper.

        Args:
            receiver: Empty, or a 1-tuple with the bound instance
            args: Positional arguments of the call
            kwargs: Keyword arguments of the call
        """
        pass


class Once(DecoratedFunction):
    """Runs the wrapped function on the first call only.

    Later calls return the first result, whatever their arguments. If the
    first call raises, nothing is cached and the next call runs the
    function again.
    """

    def __init__(self, fn: Callable):
        super().__init__(fn)
        self.called = False
        self.result = None

    def _invoke(self, receiver, args, kwargs):
        if not self.called:
            self.result = self.__wrapped__(*receiver, *args, **kwargs)
            self.called = True
        return self.result


class Memoized(DecoratedFunction):
    """Caches results keyed on the first argument.

    Only single-argument functions of a primitive value are supported. The
    key is ``str(argument)``, so ``0`` and ``"0"`` share an entry and
    composite arguments with equal string forms collide. Further arguments
    are passed through but do not take part in the key. The cache grows for
    the lifetime of the wrapper; there is no eviction.
    """

    def __init__(self, fn: Callable):
        super().__init__(fn)
        self._cache: Dict[str, Any] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def cache_key(args: Tuple, kwargs: Optional[Dict[str, Any]] = None) -> str:
        """Cache key for a call with positional ``args`` and keyword ``kwargs``.

        A call passing its argument by keyword keys on that value.
        """
        if args:
            return str(args[0])
        if kwargs:
            return str(next(iter(kwargs.values())))
        return str(MISSING)

    def _invoke(self, receiver, args, kwargs):
        key = self.cache_key(args, kwargs)
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        self.misses += 1
        result = self.__wrapped__(*receiver, *args, **kwargs)
        self._cache[key] = result
        return result

    def cache_info(self) -> Dict[str, int]:
        """
        Get cache statistics.

        Returns:
            Dictionary with hits, misses and number of cached keys
        """
        return {
            'hits': self.hits,
            'misses': self.misses,
            'size': len(self._cache),
        }


class Throttled(DecoratedFunction):
    """Leading-edge throttle.

    The first call always runs. After that a call runs only if at least
    ``wait_ms`` milliseconds have passed since the last call that ran;
    other calls are dropped, never queued or replayed.
    """

    def __init__(self, fn: Callable, wait_ms: float, clock: Callable[[], float]):
        super().__init__(fn)
        self.wait_ms = wait_ms
        self.clock = clock
        self.cold = True
        self.last_called = None

    def _invoke(self, receiver, args, kwargs):
        now = self.clock()
        if not self.cold and now - self.last_called < self.wait_ms:
            logger.debug("%s: call dropped by throttle", getattr(self, '__name__', self))
            return None

        # Recorded before the call so a raising function still uses its window
        self.cold = False
        self.last_called = now
        return self.__wrapped__(*receiver, *args, **kwargs)


def once(fn: Any = None, *, policy: Optional[InputPolicy] = None) -> Once:
    """Return a wrapper that calls ``fn`` at most once.

    Args:
        fn: Function to wrap
        policy: Input policy for a non-callable ``fn`` (default from config)

    Returns:
        Once wrapper. Under the default policy a non-callable ``fn`` is
        replaced by a no-op.

    Example:
        >>> init = once(lambda: print("initializing"))
        >>> init(); init()
        initializing
    """
    return Once(_checked_function('once', fn, policy))


def memoize(fn: Any = None, *, policy: Optional[InputPolicy] = None) -> Memoized:
    """Return a wrapper that caches ``fn``'s results per argument.

    Args:
        fn: Single-argument function of a primitive value
        policy: Input policy for a non-callable ``fn`` (default from config)

    Returns:
        Memoized wrapper with a ``cache_info()`` method
    """
    return Memoized(_checked_function('memoize', fn, policy))


def throttle(fn: Any = None,
             wait_ms: Any = 0,
             *,
             clock: Optional[Callable[[], float]] = None,
             policy: Optional[InputPolicy] = None) -> Throttled:
    """Return a wrapper that runs ``fn`` at most once per ``wait_ms`` window.

    Args:
        fn: Function to wrap
        wait_ms: Minimum milliseconds between two invocations
        clock: Zero-argument callable returning milliseconds (default from config)
        policy: Input policy for malformed arguments (default from config)

    Returns:
        Throttled wrapper. It returns ``fn``'s result when it invokes it and
        None when the call is dropped.
    """
    fn = _checked_function('throttle', fn, policy)
    wait_ms = _checked_wait('throttle', wait_ms, policy)
    return Throttled(fn, wait_ms, clock or get_config().clock)
