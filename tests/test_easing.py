from __future__ import annotations

import numpy as np
import pytest

from polymorph.modeling.easing import EASINGS, ease_in_out_cubic, ease_in_out_quad, get_easing


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_easing_endpoints(name):
    ease = get_easing(name)
    assert ease(0.0) == pytest.approx(0.0)
    assert ease(1.0) == pytest.approx(1.0)


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_easing_monotonic(name):
    ease = get_easing(name)
    values = np.array([ease(t) for t in np.linspace(0.0, 1.0, 501)])
    assert np.all(np.diff(values) >= -1e-12)
    assert values.min() >= 0.0
    assert values.max() <= 1.0


def test_cubic_known_values():
    assert ease_in_out_cubic(0.25) == pytest.approx(4 * 0.25**3)
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)
    assert ease_in_out_cubic(0.75) == pytest.approx(1 - 0.5**3 / 2)


def test_quad_midpoint():
    assert ease_in_out_quad(0.5) == pytest.approx(0.5)


def test_easing_clamps_input():
    assert ease_in_out_cubic(-0.5) == 0.0
    assert ease_in_out_cubic(1.5) == 1.0


def test_get_easing_unknown():
    with pytest.raises(ValueError):
        get_easing("bounce")


def test_get_easing_passes_callables_through():
    custom = lambda t: t  # noqa: E731
    assert get_easing(custom) is custom
