import pytest

from stellar_reality.utils.catalog import new_colony


@pytest.fixture
def colony():
    """Fresh colony in its starting state."""
    return new_colony()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedRandom:
    """Random source with scripted draws."""

    def __init__(self, draws=(), choice_index: int = 0):
        self.draws = list(draws)
        self.choice_index = choice_index

    def random(self) -> float:
        return self.draws.pop(0) if self.draws else 1.0

    def choice(self, seq):
        return seq[self.choice_index]


@pytest.fixture
def clock():
    return FakeClock()
