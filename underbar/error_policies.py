"""
Input handling policies for Underbar.

Every public function accepts malformed input (a non-collection, a
non-callable visitor, a negative wait) without raising by default. This
module turns that best-effort behaviour into a pluggable policy so callers
who want malformed input reported can ask for it.

Policies only ever see problems with the arguments given to the library.
Exceptions raised inside caller-supplied callables never reach them.
"""

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class InputPolicy(ABC):
    """
    Base class for input handling policies.

    Subclasses decide what a library function does when its arguments
    cannot be used: return a benign default, report it, or raise.
    """

    @abstractmethod
    def handle(self, operation: str, reason: str, default: Any = None) -> Any:
        """
        Handle malformed input to a library function.

        Args:
            operation: Name of the library function (e.g., 'each')
            reason: What was wrong with the input
            default: The benign value the function falls back to

        Returns:
            The value the library function should use in place of the
            bad input, or raises to abort the call.
        """
        pass


class BestEffortPolicy(InputPolicy):
    """
    Policy that silently falls back to the default.

    This is the default behavior - malformed input degrades to a no-op or
    an empty result. The problem is logged at DEBUG level only.
    """

    def handle(self, operation: str, reason: str, default: Any = None) -> Any:
        """Return the default unchanged."""
        logger.debug("%s: %s; falling back to %r", operation, reason, default)
        return default


class WarnPolicy(InputPolicy):
    """
    Policy that records problems, warns, and falls back to the default.

    Useful while migrating code onto the library, to find call sites that
    rely on the silent fallback.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when input is rejected
        """
        self.problems: List[Dict[str, Any]] = []
        self.verbose = verbose

    def handle(self, operation: str, reason: str, default: Any = None) -> Any:
        """Record the problem and return the default."""
        self.problems.append({
            'operation': operation,
            'reason': reason,
            'default': default,
        })

        if self.verbose:
            print(f"\nWARNING: {operation} received invalid input: {reason}", file=sys.stderr)

        return default

    def get_statistics(self) -> dict:
        """
        Get statistics about rejected input.

        Returns:
            Dictionary with counts per operation and full details
        """
        by_operation: Dict[str, int] = {}
        for problem in self.problems:
            name = problem['operation']
            by_operation[name] = by_operation.get(name, 0) + 1

        return {
            'total_problems': len(self.problems),
            'by_operation': by_operation,
            'problems': self.problems,
        }


class StrictPolicy(InputPolicy):
    """
    Policy that raises on any malformed input.

    Use this where a silent no-op would hide a bug.
    """

    def handle(self, operation: str, reason: str, default: Any = None) -> Any:
        """Raise InvalidArgumentError."""
        raise InvalidArgumentError(operation, reason)


def resolve_policy(policy: InputPolicy = None) -> InputPolicy:
    """Return ``policy`` or, when it is None, the configured default."""
    if policy is not None:
        return policy

    from ._common.config import get_config
    return get_config().input_policy
