"""Sentinel values shared across the library."""


class _MissingType:
    """Marks an argument the caller did not supply.

    Distinct from every caller value, including None, 0, False and ''.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_MissingType, ())


MISSING = _MissingType()
