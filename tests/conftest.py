import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic (seconds)."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


CORRIDOR = """
..#..
..#..
S...E
..#..
..#..
"""

ISLAND = """
S.#..
..#..
###..
....E
"""


@pytest.fixture
def corridor_text():
    return CORRIDOR


@pytest.fixture
def island_text():
    return ISLAND
