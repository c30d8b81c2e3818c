"""Exception types for Underbar.

The library raises these only under an opt-in strict input policy. Errors
raised by caller-supplied callables always propagate as they are.
"""


class UnderbarError(Exception):
    """Base class for errors raised by Underbar itself."""


class InvalidArgumentError(UnderbarError, TypeError):
    """A library function received input it cannot work with.

    Attributes:
        operation: Name of the library function that rejected the input
        reason: Human readable description of the problem
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation}: {reason}")
