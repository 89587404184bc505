# -*- coding: utf-8 -*-

import random
import numpy as np
import pytest
from qiskit.quantum_info import Pauli, Statevector

from pauliprop import (
    PauliFreqTracker,
    PauliString,
    PauliSum,
    QubitCountError,
    expectation_product_state,
    filter_terms,
    overlap_by_orthogonality,
    overlap_with_computational,
    overlap_with_max_mixed,
    overlap_with_pauli_sum,
    overlap_with_plus,
    overlap_with_zero,
    wrap_coefficients,
    zero_filter,
)
from pauliprop.pauli_algebra import contains_x_or_y
from pauliprop.utils import to_qiskit_label


def random_state_label(n):
    return "".join(random.choice("01+-rl") for _ in range(n))


def random_psum(n, nterms):
    psum = PauliSum(n)
    for _ in range(nterms):
        label = "".join(random.choice("IXYZ") for _ in range(n))
        psum.add(label, random.uniform(-1, 1))
    return psum


def statevector_expectation(psum, state_label):
    """<psi| O |psi> for a product state given qubit 0 first."""
    # qiskit labels put qubit 0 rightmost, and use the same state symbols
    sv = Statevector.from_label(state_label[::-1])
    n = psum.nqubits
    return sum(coeff * sv.expectation_value(Pauli(to_qiskit_label(word, n)))
               for word, coeff in psum.items()).real


@pytest.mark.parametrize("trial", range(10))
def test_product_state_matches_statevector(trial):
    n = random.randint(1, 5)
    psum = random_psum(n, 8)
    label = random_state_label(n)
    assert expectation_product_state(psum, label) == pytest.approx(
        statevector_expectation(psum, label), abs=1e-10)


@pytest.mark.parametrize("trial", range(5))
def test_zero_and_plus_overlaps(trial):
    n = random.randint(1, 5)
    psum = random_psum(n, 10)
    assert overlap_with_zero(psum) == pytest.approx(expectation_product_state(psum, "0" * n))
    assert overlap_with_plus(psum) == pytest.approx(expectation_product_state(psum, "+" * n))


@pytest.mark.parametrize("trial", range(5))
def test_computational_overlap(trial):
    n = random.randint(1, 6)
    psum = random_psum(n, 10)
    ones = [q for q in range(n) if random.random() < 0.5]
    label = "".join("1" if q in ones else "0" for q in range(n))
    assert overlap_with_computational(psum, ones) == pytest.approx(
        expectation_product_state(psum, label))


def test_computational_parity():
    psum = PauliSum(3, {"ZII": 1.0, "ZZI": 2.0, "IIZ": 4.0, "XII": 8.0})
    # ones on qubit 0: ZII -> -1, ZZI -> -2, IIZ -> +4
    assert overlap_with_computational(psum, [0]) == pytest.approx(1.0)


def test_max_mixed():
    psum = PauliSum(2, {"II": 0.3, "ZZ": 1.0})
    assert overlap_with_max_mixed(psum) == 0.3
    assert overlap_with_max_mixed(PauliSum(2, {"ZZ": 1.0})) == 0.0


def test_pauli_string_input():
    assert overlap_with_zero(PauliString.from_label("ZZ", 0.5)) == 0.5
    assert overlap_with_zero(PauliString.from_label("XZ", 0.5)) == 0.0


def test_overlap_with_path_properties():
    psum = wrap_coefficients(PauliSum(2, {"ZI": 0.25, "XI": 1.0}))
    assert overlap_with_zero(psum) == 0.25
    assert expectation_product_state(psum, "00") == 0.25
    assert overlap_with_max_mixed(PauliSum(1, {"I": PauliFreqTracker(0.5)})) == 0.5


def test_custom_orthogonality():
    psum = PauliSum(2, {"ZZ": 1.0, "XI": 2.0})
    assert overlap_by_orthogonality(psum, lambda w: False) == 3.0
    assert overlap_by_orthogonality(psum, contains_x_or_y) == 1.0


def test_overlap_with_pauli_sum():
    a = PauliSum(2, {"XX": 1.0, "ZZ": 2.0, "YI": 3.0})
    b = PauliSum(2, {"ZZ": 0.5})
    assert overlap_with_pauli_sum(a, b) == 1.0
    assert overlap_with_pauli_sum(b, a) == 1.0
    with pytest.raises(QubitCountError):
        overlap_with_pauli_sum(a, PauliSum(3))


@pytest.mark.parametrize("trial", range(5))
def test_overlap_with_pauli_sum_is_normalized_trace(trial):
    n = 3
    a, b = random_psum(n, 6), random_psum(n, 6)
    ma = a.to_sparse_pauli_op().to_matrix()
    mb = b.to_sparse_pauli_op().to_matrix()
    assert overlap_with_pauli_sum(a, b) == pytest.approx(np.trace(ma @ mb).real / 2**n)


def test_label_length_mismatch():
    with pytest.raises(ValueError):
        expectation_product_state(PauliSum(2, {"ZZ": 1.0}), "0")


def test_filters():
    psum = PauliSum(2, {"ZZ": 1.0, "XI": 2.0, "IY": 3.0})
    kept = zero_filter(psum)
    assert len(kept) == 1 and len(psum) == 3
    assert zero_filter(psum, inplace=True) is psum
    assert len(psum) == 1
    assert len(filter_terms(PauliSum(2, {"ZZ": 1.0}), lambda w: True)) == 0
