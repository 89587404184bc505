# -*- coding: utf-8 -*-

import math
import pytest

from pauliprop import PauliFreqTracker, PauliString, PauliSum, wrap_coefficients
from pauliprop.path_properties import (
    apply_cos,
    apply_sin,
    coefficient_value,
    is_zero,
    multiply_sign,
)


def test_defaults_and_scaling():
    pth = PauliFreqTracker(2.0)
    assert (pth.nsins, pth.ncos, pth.freq) == (0, 0, 0)
    scaled = pth * 0.5
    assert scaled.coeff == 1.0
    assert (scaled.nsins, scaled.ncos, scaled.freq) == (0, 0, 0)
    assert (0.5 * pth) == scaled
    assert (pth / 4).coeff == 0.5
    assert (-pth).coeff == -2.0
    assert abs(PauliFreqTracker(-3.0)) == 3.0
    assert float(pth) == 2.0


def test_branches_count_factors():
    pth = PauliFreqTracker(1.0)
    cos_branch = apply_cos(pth, 0.3)
    sin_branch = apply_sin(pth, 0.3, -1)
    assert cos_branch.coeff == pytest.approx(math.cos(0.3))
    assert (cos_branch.nsins, cos_branch.ncos, cos_branch.freq) == (0, 1, 1)
    assert sin_branch.coeff == pytest.approx(-math.sin(0.3))
    assert (sin_branch.nsins, sin_branch.ncos, sin_branch.freq) == (1, 0, 1)


def test_merge_adds_coeff_and_takes_minimum():
    a = PauliFreqTracker(1.0, nsins=3, ncos=1, freq=4)
    b = PauliFreqTracker(0.5, nsins=1, ncos=2, freq=3)
    merged = a + b
    assert merged.coeff == 1.5
    assert (merged.nsins, merged.ncos, merged.freq) == (1, 1, 3)
    assert (a - b).coeff == 0.5


def test_merge_rejects_plain_numbers():
    with pytest.raises(TypeError):
        PauliFreqTracker(1.0) + 1.0


def test_helpers_on_numbers():
    assert apply_cos(2.0, 0.0) == 2.0
    assert apply_sin(2.0, math.pi / 2, -1) == pytest.approx(-2.0)
    assert multiply_sign(3.0, -1) == -3.0
    assert multiply_sign(3.0, 1) == 3.0
    assert coefficient_value(1.5) == 1.5
    assert coefficient_value(PauliFreqTracker(1.5)) == 1.5
    assert is_zero(0.0)
    assert is_zero(PauliFreqTracker(0.0))
    assert not is_zero(PauliFreqTracker(1e-300))


def test_wrap_pauli_sum():
    psum = PauliSum(2, {"XX": 1.0, "ZI": -0.5})
    wrapped = wrap_coefficients(psum, PauliFreqTracker)
    assert isinstance(wrapped, PauliSum)
    assert all(isinstance(c, PauliFreqTracker) for _, c in wrapped.items())
    assert wrapped.get_coeff("ZI").coeff == -0.5
    # the original is untouched
    assert psum.get_coeff("ZI") == -0.5


def test_wrap_pauli_string():
    pstr = wrap_coefficients(PauliString.from_label("XY", 0.25))
    assert isinstance(pstr.coeff, PauliFreqTracker)
    assert pstr.tonumber() == 0.25


def test_wrapped_cancellation_drops_term():
    psum = wrap_coefficients(PauliSum(1, {"X": 1.0}))
    psum.add("X", PauliFreqTracker(-1.0))
    assert len(psum) == 0
