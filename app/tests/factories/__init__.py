"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    FakeChannel,
    FakeTextGenerator,
    make_event,
    make_preference,
)

__all__ = [
    "FakeChannel",
    "FakeTextGenerator",
    "make_event",
    "make_preference",
]
