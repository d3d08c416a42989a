"""Tests for the logical clock."""

import pytest

from claim_registry.registry.clock import LogicalClock


def test_clock_starts_at_zero():
    assert LogicalClock().now() == 0


def test_clock_advance():
    clock = LogicalClock(height=5)
    assert clock.advance() == 6
    assert clock.advance(10) == 16
    assert clock.now() == 16


def test_clock_rejects_going_backwards():
    clock = LogicalClock()
    with pytest.raises(ValueError):
        clock.advance(-1)
    with pytest.raises(ValueError):
        LogicalClock(height=-3)
