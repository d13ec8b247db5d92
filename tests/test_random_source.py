from __future__ import annotations

import pytest

from polymorph.random_source import NumpyRandomSource, RandomSource


def test_numpy_source_satisfies_protocol():
    assert isinstance(NumpyRandomSource(seed=0), RandomSource)


def test_uniform_in_range(rng):
    values = [rng.uniform(-2.0, 3.0) for _ in range(500)]
    assert min(values) >= -2.0
    assert max(values) < 3.0


def test_uniform_degenerate_range(rng):
    assert rng.uniform(4.5, 4.5) == 4.5


def test_uniform_int_inclusive(rng):
    values = {rng.uniform_int(1, 4) for _ in range(500)}
    assert values == {1, 2, 3, 4}


def test_uniform_int_rejects_inverted(rng):
    with pytest.raises(ValueError):
        rng.uniform_int(5, 2)


def test_seed_reproducible():
    a = NumpyRandomSource(seed=42)
    b = NumpyRandomSource(seed=42)
    assert [a.uniform(0, 1) for _ in range(5)] == [b.uniform(0, 1) for _ in range(5)]
