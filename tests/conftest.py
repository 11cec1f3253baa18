"""Shared test fixtures for QuietMind."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "quietmind.db"


@pytest.fixture
def mood_store(db_path):
    from mood import MoodStore

    return MoodStore(db_path)


@pytest.fixture
def known_wednesday():
    """Wednesday 2024-05-15 at 14:30 local time."""
    return datetime(2024, 5, 15, 14, 30)


@pytest.fixture
def populated_week(mood_store, known_wednesday):
    """Mon/Wed/Fri check-ins for user 1 in the week of ``known_wednesday``.

    Also adds one record the Sunday before and one for another user, both of
    which must stay out of user 1's week.
    """
    monday = datetime(2024, 5, 13, 9, 0)
    mood_store.create(1, "Happy", "Slept well,\n  walked   the dog", created_at=monday)
    mood_store.create(1, "Sad", None, created_at=known_wednesday)
    mood_store.create(1, "Happy", "Dinner with friends", created_at=monday + timedelta(days=4))
    mood_store.create(1, "Calm", "outside window", created_at=datetime(2024, 5, 12, 23, 59))
    mood_store.create(2, "Angry", "other user", created_at=known_wednesday)
    return mood_store


class StubGenerator:
    """Deterministic InsightGenerator that records every prompt."""

    def __init__(self, result=None):
        from mood import Insight

        self.result = result or Insight(insight="A steady week.", try_this="Stretch for a minute.")
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: str):
        self.prompts.append(prompt)
        return self.result


@pytest.fixture
def stub_generator():
    return StubGenerator()


@pytest.fixture
def make_generator():
    """Factory for StubGenerator with a chosen result."""
    return StubGenerator
