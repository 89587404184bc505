# -*- coding: utf-8 -*-

import random
import numpy as np
import pytest
from qiskit.quantum_info import SparsePauliOp

from pauliprop import PauliString, PauliSum, QubitCountError
from pauliprop.pauli_algebra import encode_pauli
from pauliprop.pauli_sum import add_term, merge_terms
from pauliprop.utils import pauli_matrix


def psum_to_matrix(psum):
    """
    Reconstruct sum(alpha_j * P_j) from a PauliSum.
    """
    n = psum.nqubits
    total = np.zeros((2**n, 2**n), dtype=complex)
    for word, coeff in psum.items():
        total += coeff * pauli_matrix(word, n)
    return total


def random_psum(n, nterms):
    psum = PauliSum(n)
    for _ in range(nterms):
        label = "".join(random.choice("IXYZ") for _ in range(n))
        psum.add(label, random.uniform(-1, 1))
    return psum


def test_construct_from_labels_and_strings():
    psum = PauliSum(3, {"ZII": 1.0, "IXX": 0.5})
    assert len(psum) == 2
    assert psum.get_coeff("ZII") == 1.0
    assert psum.get_coeff(encode_pauli("IXX")) == 0.5
    assert psum.get_coeff("YYY") == 0.0

    other = PauliSum(3, [PauliString.from_label("ZII"), PauliString.from_label("IXX", 0.5)])
    assert other == psum


def test_integer_coefficients_become_float():
    psum = PauliSum(2, {"XX": 2})
    assert isinstance(psum.get_coeff("XX"), float)
    assert isinstance(PauliString.from_label("Z", 3).coeff, float)


def test_label_length_mismatch():
    with pytest.raises(QubitCountError):
        PauliSum(3, {"ZI": 1.0})


def test_add_cancellation_removes_entry():
    psum = PauliSum(2)
    psum.add("XZ", 0.3)
    psum.add("XZ", -0.3)
    assert len(psum) == 0
    assert "XZ" not in psum


def test_add_zero_is_not_stored():
    psum = PauliSum(2)
    psum.add("XZ", 0.0)
    assert len(psum) == 0


def test_set_and_delete():
    psum = PauliSum(2, {"XX": 1.0, "ZZ": 2.0})
    psum.set("XX", 5.0)
    assert psum.get_coeff("XX") == 5.0
    psum.set("XX", 0.0)
    assert "XX" not in psum
    psum.delete("ZZ")
    assert len(psum) == 0


def test_subtract():
    psum = PauliSum(1, {"X": 1.0})
    psum.subtract("X", 0.25)
    assert psum.get_coeff("X") == 0.75


def test_merge_absorbs_smaller_and_empties_other():
    big = random_psum(4, 30)
    small = PauliSum(4, {"XXXX": 1.0})
    expected = big + small
    n_big = len(big)

    small.merge(big)
    assert small == expected
    assert len(big) == 0
    assert len(small) >= n_big


def test_merge_terms_returns_larger_dict():
    d1 = {1: 1.0}
    d2 = {2: 1.0, 3: 1.0, 1: -1.0}
    merged, emptied = merge_terms(d1, d2)
    assert merged is d2
    assert emptied is d1
    assert merged == {2: 1.0, 3: 1.0}
    assert emptied == {}


def test_add_term_dict_helper():
    d = {}
    add_term(d, 5, 1.0)
    add_term(d, 5, 1.0)
    assert d == {5: 2.0}
    add_term(d, 5, -2.0)
    assert d == {}


def test_qubit_mismatch_on_binary_ops():
    a = PauliSum(2, {"XX": 1.0})
    b = PauliSum(3, {"XXX": 1.0})
    with pytest.raises(QubitCountError):
        a + b
    with pytest.raises(QubitCountError):
        a - b
    with pytest.raises(QubitCountError):
        a.merge(b)
    with pytest.raises(QubitCountError):
        a.add_pauli_string(PauliString.from_label("ZZZ"))
    with pytest.raises(QubitCountError):
        a.isapprox(b)


def test_arithmetic_does_not_alias():
    a = PauliSum(2, {"XX": 1.0})
    b = PauliSum(2, {"ZZ": 2.0})
    c = a + b
    c.add("XX", 1.0)
    assert a.get_coeff("XX") == 1.0
    d = a * 3
    assert d.get_coeff("XX") == 3.0
    assert a.get_coeff("XX") == 1.0
    assert (a / 2).get_coeff("XX") == 0.5
    assert (-a).get_coeff("XX") == -1.0
    assert (a - a) == PauliSum(2)


def test_string_arithmetic_gives_sum():
    x = PauliString.from_label("XI")
    z = PauliString.from_label("IZ", 0.5)
    psum = x + z
    assert isinstance(psum, PauliSum)
    assert psum.get_coeff("IZ") == 0.5
    assert (x - x) == PauliSum(2)
    assert (2 * x).coeff == 2.0
    assert (-x).coeff == -1.0


def test_mult_in_place():
    psum = PauliSum(2, {"XX": 1.0, "YY": -2.0})
    psum.mult(0.5)
    assert psum.get_coeff("YY") == -1.0
    psum.mult(0)
    assert len(psum) == 0


def test_isapprox_checks_both_directions():
    a = PauliSum(2, {"XX": 1.0})
    b = PauliSum(2, {"XX": 1.0 + 1e-12, "ZZ": 0.5})
    assert not a.isapprox(b)
    assert not b.isapprox(a)
    c = PauliSum(2, {"XX": 1.0 + 1e-12})
    assert a.isapprox(c)
    assert c.isapprox(a)
    assert a != c
    nan = PauliSum(1, {"Z": float("nan")})
    one = PauliSum(1, {"Z": 1.0})
    assert not nan.isapprox(one)
    assert not one.isapprox(nan)
    assert not nan.isapprox(nan)


def test_builtin_sum():
    a = PauliSum(2, {"XX": 1.0})
    b = PauliSum(2, {"XX": 0.5, "ZI": 2.0})
    total = sum([a, b])
    assert total == PauliSum(2, {"XX": 1.5, "ZI": 2.0})
    assert a == PauliSum(2, {"XX": 1.0})
    assert (0 + a) is not a
    with pytest.raises(TypeError):
        1 + a


def test_prune():
    psum = PauliSum(2, {"XX": 1e-12, "ZZ": 1.0})
    psum.prune(1e-10)
    assert len(psum) == 1
    assert "ZZ" in psum


def test_copy_and_similar():
    psum = PauliSum(2, {"XX": 1.0})
    cp = psum.copy()
    cp.add("ZZ", 1.0)
    assert len(psum) == 1
    empty = psum.similar()
    assert empty.nqubits == 2 and len(empty) == 0


def test_iteration_yields_pauli_strings():
    psum = PauliSum(2, {"XX": 1.0, "ZY": 2.0})
    strings = psum.to_pauli_strings()
    assert {s.to_label(): s.coeff for s in strings} == {"XX": 1.0, "ZY": 2.0}
    assert all(s.nqubits == 2 for s in psum)


def test_to_arrays():
    psum = PauliSum(3, {"XII": 1.0, "IIZ": -0.5})
    words, coeffs = psum.to_arrays()
    assert words.dtype == np.uint8
    assert dict(zip(words.tolist(), coeffs.tolist())) == {1: 1.0, encode_pauli("IIZ"): -0.5}


@pytest.mark.parametrize("trial", range(5))
def test_sparse_pauli_op_matches_matrix(trial):
    psum = random_psum(3, 6)
    op = psum.to_sparse_pauli_op()
    assert isinstance(op, SparsePauliOp)
    assert np.allclose(op.to_matrix(), psum_to_matrix(psum))


def test_empty_sparse_pauli_op():
    op = PauliSum(2).to_sparse_pauli_op()
    assert np.allclose(op.to_matrix(), np.zeros((4, 4)))


@pytest.mark.parametrize("trial", range(10))
def test_commutator_matches_matrices(trial):
    a, b = random_psum(3, 4), random_psum(3, 4)
    comm = a.commutator(b)
    ma, mb = psum_to_matrix(a), psum_to_matrix(b)
    assert np.allclose(psum_to_matrix(comm), ma @ mb - mb @ ma)
    assert a.commutes(a)


def test_commutes():
    x = PauliSum(1, {"X": 1.0})
    z = PauliSum(1, {"Z": 1.0})
    assert not x.commutes(z)
    assert PauliSum(2, {"ZZ": 1.0}).commutes(PauliSum(2, {"XX": 1.0}))


def test_repr():
    assert "XZ" in repr(PauliSum(2, {"XZ": 1.0}))
    assert repr(PauliString.from_label("XZ", -2.0)) == "-2*XZ"
