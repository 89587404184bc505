# -*- coding: utf-8 -*-

import itertools
import random
import numpy as np
import pytest
from qiskit.quantum_info import Pauli

from pauliprop.pauli_algebra import (
    alternating_mask,
    calculate_sign,
    check_word,
    commutes,
    contains_x_or_y,
    contains_y_or_z,
    count_weight,
    count_xy,
    count_yz,
    decode_pauli,
    encode_pauli,
    get_pauli,
    local_index,
    pauli_product,
    set_local,
    set_pauli,
    symbol_to_int,
    word_bits,
    word_dtype,
)
from pauliprop.utils import from_qiskit_pauli, pauli_matrix, to_qiskit_pauli

LABELS_1Q = list("IXYZ")
LABELS_2Q = ["".join(p) for p in itertools.product("IXYZ", repeat=2)]


def random_label(n):
    return "".join(random.choice("IXYZ") for _ in range(n))


def test_symbol_codes():
    assert [symbol_to_int(s) for s in "IXYZ"] == [0, 1, 2, 3]
    assert symbol_to_int("y") == 2
    assert symbol_to_int(3) == 3
    with pytest.raises(ValueError):
        symbol_to_int("A")
    with pytest.raises(ValueError):
        symbol_to_int(4)


def test_encode_layout():
    # qubit q occupies bits 2q and 2q+1
    assert encode_pauli("X") == 0b01
    assert encode_pauli("Y") == 0b10
    assert encode_pauli("Z") == 0b11
    assert encode_pauli("XZ") == 0b1101
    assert encode_pauli("IIY") == 0b100000
    assert encode_pauli(["Z", "X"], qinds=[3, 1]) == (3 << 6) | (1 << 2)


def test_encode_errors():
    with pytest.raises(ValueError):
        encode_pauli("XY", qinds=[0])
    with pytest.raises(ValueError):
        encode_pauli("X", qinds=[5], nqubits=3)
    with pytest.raises(ValueError):
        encode_pauli("X", qinds=[-1])


@pytest.mark.parametrize("n", [1, 3, 4, 7, 32, 33, 64, 65, 128, 150])
def test_round_trip(n):
    for _ in range(10):
        label = random_label(n)
        word = encode_pauli(label)
        assert decode_pauli(word, n) == label
        check_word(word, n)


def test_check_word_rejects_high_bits():
    with pytest.raises(ValueError):
        check_word(encode_pauli("X", qinds=[3]), 3)
    with pytest.raises(ValueError):
        check_word(-1, 3)


def test_get_set_pauli():
    word = encode_pauli("XYZI")
    assert [get_pauli(word, q) for q in range(4)] == [1, 2, 3, 0]
    new = set_pauli(word, "Z", 1)
    assert decode_pauli(new, 4) == "XZZI"
    assert decode_pauli(word, 4) == "XYZI"
    assert decode_pauli(set_pauli(new, 0, 0), 4) == "IZZI"


def test_local_index_roundtrip():
    word = encode_pauli("XYZIZ")
    qinds = (4, 1)
    local = local_index(word, qinds)
    assert decode_pauli(local, 2) == "ZY"
    assert set_local(word, encode_pauli("XX"), qinds) == encode_pauli("XXZIX")


@pytest.mark.parametrize("n,bits", [(1, 8), (4, 8), (5, 16), (8, 16), (9, 32), (16, 32),
                                    (17, 64), (32, 64), (33, 128), (64, 128), (65, 256),
                                    (128, 256), (129, None)])
def test_word_bits(n, bits):
    assert word_bits(n) == bits


def test_word_dtype():
    assert word_dtype(4) == np.uint8
    assert word_dtype(32) == np.uint64
    assert word_dtype(33) == np.dtype(object)


def test_alternating_mask():
    assert alternating_mask(1) == 0b01
    assert alternating_mask(3) == 0b010101


@pytest.mark.parametrize("a", LABELS_2Q)
@pytest.mark.parametrize("b", LABELS_2Q)
def test_commutes_matches_qiskit(a, b):
    wa, wb = encode_pauli(a), encode_pauli(b)
    expected = to_qiskit_pauli(wa, 2).commutes(to_qiskit_pauli(wb, 2))
    assert commutes(wa, wb) == expected
    assert commutes(wb, wa) == expected


@pytest.mark.parametrize("trial", range(30))
def test_commutes_random_long(trial):
    n = random.randint(1, 80)
    a, b = random_label(n), random_label(n)
    expected = Pauli(a[::-1]).commutes(Pauli(b[::-1]))
    assert commutes(encode_pauli(a), encode_pauli(b)) == expected


@pytest.mark.parametrize("a", LABELS_1Q)
@pytest.mark.parametrize("b", LABELS_1Q)
def test_single_qubit_products(a, b):
    wa, wb = encode_pauli(a), encode_pauli(b)
    word, sign = pauli_product(wa, wb)
    lhs = pauli_matrix(wa, 1) @ pauli_matrix(wb, 1)
    assert np.allclose(lhs, sign * pauli_matrix(word, 1))


@pytest.mark.parametrize("trial", range(20))
def test_product_matches_matrices(trial):
    n = random.randint(1, 5)
    wa, wb = encode_pauli(random_label(n)), encode_pauli(random_label(n))
    word, sign = pauli_product(wa, wb)
    assert sign in (1, -1, 1j, -1j)
    lhs = pauli_matrix(wa, n) @ pauli_matrix(wb, n)
    assert np.allclose(lhs, sign * pauli_matrix(word, n))


@pytest.mark.parametrize("trial", range(20))
def test_product_involution(trial):
    n = random.randint(1, 40)
    a, b = encode_pauli(random_label(n)), encode_pauli(random_label(n))
    assert pauli_product(pauli_product(a, b)[0], b)[0] == a


def test_restricted_sign_matches_full():
    for _ in range(50):
        n = 6
        a = encode_pauli(random_label(n))
        qinds = random.sample(range(n), 2)
        b = encode_pauli(random_label(2), qinds)
        assert calculate_sign(a, b, qinds) == calculate_sign(a, b)


def test_levi_civita_signs():
    x, y, z = (encode_pauli(s) for s in "XYZ")
    assert calculate_sign(x, y) == 1j
    assert calculate_sign(y, z) == 1j
    assert calculate_sign(z, x) == 1j
    assert calculate_sign(y, x) == -1j
    assert calculate_sign(z, y) == -1j
    assert calculate_sign(x, z) == -1j
    assert calculate_sign(x, x) == 1
    assert calculate_sign(0, z) == 1


@pytest.mark.parametrize("trial", range(20))
def test_counts(trial):
    n = random.randint(1, 100)
    label = random_label(n)
    word = encode_pauli(label)
    assert count_weight(word) == sum(c != "I" for c in label)
    assert count_xy(word) == sum(c in "XY" for c in label)
    assert count_yz(word) == sum(c in "YZ" for c in label)
    assert contains_x_or_y(word) == any(c in "XY" for c in label)
    assert contains_y_or_z(word) == any(c in "YZ" for c in label)


def test_counts_of_identity():
    assert count_weight(0) == 0
    assert count_xy(0) == 0
    assert count_yz(0) == 0
    assert not contains_x_or_y(0)


@pytest.mark.parametrize("trial", range(10))
def test_qiskit_round_trip(trial):
    n = random.randint(1, 12)
    label = random_label(n)
    word = encode_pauli(label)
    p = to_qiskit_pauli(word, n)
    assert p.to_label() == label[::-1]
    assert from_qiskit_pauli(p) == word
