"""Shared fixtures for the Q-Maze tests."""

import pytest

from controls.input_state import InputState, InputTuning


class FakeClock:
    """Millisecond clock advanced by hand"""

    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def input_state(clock):
    return InputState(clock=clock)


@pytest.fixture
def instant_input(clock):
    """Input with no acceleration ramp: held directions move at full speed"""
    return InputState(InputTuning(acceleration_ms=0), clock=clock)


@pytest.fixture
def make_records():
    """Factory for raw question records with four options"""
    def factory(count, category="general", correct=0, **extra):
        return [
            {
                "id": i + 1,
                "text": f"Question {i + 1}?",
                "options": ["A", "B", "C", "D"],
                "correctAnswerIndex": correct,
                "category": category,
                **extra,
            }
            for i in range(count)
        ]
    return factory
