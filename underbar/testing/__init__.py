"""Testing utilities for Underbar consumers."""

from .fixtures import CallRecorder, FakeClock

__all__ = ['CallRecorder', 'FakeClock']
