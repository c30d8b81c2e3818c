"""Common components shared by the core engines, decorators and helpers.

This internal package contains configuration and sentinel values. It should
NOT be imported directly by users; everything public is re-exported from
``underbar``.

Important: This package must NEVER import from core or api to avoid
circular dependencies.
"""

from .config import (
    CollectionShape,
    DelayBackend,
    UnderbarConfig,
    get_config,
    configure,
    reset_config,
)
from .markers import MISSING

__all__ = [
    'CollectionShape',
    'DelayBackend',
    'UnderbarConfig',
    'get_config',
    'configure',
    'reset_config',
    'MISSING',
]
