import numpy as np
import pytest

from farmhand.config import GameConfig
from farmhand.state import create_initial_state


class StubRng:
    """Replays queued draws, then falls back to fixed values."""

    def __init__(self, randoms=(), integers=(), uniforms=(), default_random=0.99):
        self.randoms = list(randoms)
        self.integer_draws = list(integers)
        self.uniforms = list(uniforms)
        self.default_random = default_random
        self._bytes_calls = 0

    def random(self):
        return self.randoms.pop(0) if self.randoms else self.default_random

    def integers(self, low, high=None):
        if self.integer_draws:
            return self.integer_draws.pop(0)
        return 0 if high is None else low

    def uniform(self, low, high):
        return self.uniforms.pop(0) if self.uniforms else (low + high) / 2

    def bytes(self, length):
        self._bytes_calls += 1
        return self._bytes_calls.to_bytes(length, "big")


@pytest.fixture
def stub_rng():
    return StubRng


@pytest.fixture
def new_state():
    return create_initial_state(GameConfig(seed=1234), np.random.default_rng(1234))
