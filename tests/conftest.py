"""Pytest configuration and fixtures for method timing tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import method_timing
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from method_timing import MethodTimer, TimerConfig
from tests.doubles import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def method_timer() -> MethodTimer:
    """Isolated facility using the real monotonic clock."""
    return MethodTimer()


@pytest.fixture
def fake_timer(fake_clock: FakeClock) -> MethodTimer:
    """Isolated facility driven by the fake clock."""
    return MethodTimer(config=TimerConfig(), clock=fake_clock)


@pytest.fixture
def calculator_class():
    """Fresh plain class with a few methods (not instrumented)."""

    class Calculator:
        def __init__(self, base=0):
            self.base = base

        def add(self, value):
            return self.base + value

        def divide(self, a, b):
            return a / b

        def apply(self, func, *args, scale=1):
            return func(*args) * scale

        def _helper(self):
            return "private"

        @staticmethod
        def version():
            return "1.0"

        @classmethod
        def create(cls):
            return cls()

        @property
        def doubled(self):
            return self.base * 2

    return Calculator
