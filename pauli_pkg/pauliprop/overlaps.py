# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/overlaps.py
"""
Overlaps of a propagated Pauli sum with initial states and operators.

For a state rho and a Pauli sum O = sum_P c_P P this evaluates tr(rho O).
Stabilizer-like states reduce to dropping every term orthogonal to the state
and summing the rest.
"""

from __future__ import annotations

from typing import Callable, Iterable

import numpy as np

from .exceptions import QubitCountError
from .pauli_algebra import contains_x_or_y, contains_y_or_z
from .pauli_sum import PauliSum
from .pauli_term import PauliString
from .path_properties import coefficient_value

__all__ = [
    "overlap_by_orthogonality",
    "overlap_with_zero",
    "overlap_with_plus",
    "overlap_with_computational",
    "overlap_with_max_mixed",
    "overlap_with_pauli_sum",
    "expectation_product_state",
    "filter_terms",
    "zero_filter",
]


def _items(obj):
    if isinstance(obj, PauliString):
        return ((obj.word, obj.coeff),)
    return obj.terms.items()


def overlap_by_orthogonality(psum, orthogonal: Callable[[int], bool]):
    """
    Sum of the coefficients of every term not rejected by ``orthogonal``.

    Parameters
    ----------
    psum : PauliSum | PauliString
        Operator to evaluate
    orthogonal : Callable[[int], bool]
        Returns True for words with zero overlap, e.g. ``contains_x_or_y``
        for the all-zero state.
    """
    val = 0.0
    for word, coeff in _items(psum):
        if not orthogonal(word):
            val += coefficient_value(coeff)
    return val


def overlap_with_zero(psum):
    """Overlap with ``|0...0><0...0|``."""
    return overlap_by_orthogonality(psum, contains_x_or_y)


def overlap_with_plus(psum):
    """Overlap with ``|+...+><+...+|``."""
    return overlap_by_orthogonality(psum, contains_y_or_z)


def overlap_with_computational(psum, one_bit_indices: Iterable[int]):
    """
    Overlap with the computational basis state that has ones on
    ``one_bit_indices`` and zeros elsewhere.

    Each I/Z-only term contributes its coefficient times -1 per Z on a
    one-bit; terms with an X or Y contribute nothing.
    """
    ones = 0
    for q in one_bit_indices:
        ones |= 1 << (2 * q)
    val = 0.0
    for word, coeff in _items(psum):
        if contains_x_or_y(word):
            continue
        # on I/Z-only words the low bit marks a Z
        parity = (word & ones).bit_count() % 2
        val += -coefficient_value(coeff) if parity else coefficient_value(coeff)
    return val


def overlap_with_max_mixed(psum):
    """Overlap with ``I / 2**n``, i.e. the identity coefficient."""
    for word, coeff in _items(psum):
        if word == 0:
            return coefficient_value(coeff)
    return 0.0


def overlap_with_pauli_sum(psum1: PauliSum, psum2: PauliSum):
    """
    Normalized trace ``tr(A B) / 2**n`` of two Pauli sums.

    Only words present in both contribute; the shorter sum is scanned.
    """
    if psum1.nqubits != psum2.nqubits:
        raise QubitCountError(psum1.nqubits, psum2.nqubits)
    longer, shorter = psum1.terms, psum2.terms
    if len(longer) < len(shorter):
        longer, shorter = shorter, longer
    val = 0.0
    for word, coeff in shorter.items():
        if word in longer:
            val += coefficient_value(coeff) * coefficient_value(longer[word])
    return val


# -------- Product-state expectation lookup table --------
# State indices mapping for different basis states
_STATE_IDX = {'0': 0, '1': 1, '+': 2, '-': 3, 'r': 4, 'l': 5}
# <s| P |s> for P = I, X, Y, Z
_EXP_TABLE = np.zeros((6, 4), dtype=float)
_EXP_TABLE[_STATE_IDX['0']] = [1, 0, 0, 1]   # |0> state
_EXP_TABLE[_STATE_IDX['1']] = [1, 0, 0, -1]  # |1> state
_EXP_TABLE[_STATE_IDX['+']] = [1, 1, 0, 0]   # |+> state
_EXP_TABLE[_STATE_IDX['-']] = [1, -1, 0, 0]  # |-> state
_EXP_TABLE[_STATE_IDX['r']] = [1, 0, 1, 0]   # |r> state
_EXP_TABLE[_STATE_IDX['l']] = [1, 0, -1, 0]  # |l> state


def expectation_product_state(psum, product_label: str) -> float:
    """
    Expectation value of a Pauli sum on a product state.

    Parameters
    ----------
    psum : PauliSum | PauliString
        Operator to evaluate
    product_label : str
        One of "01+-rl" per qubit, qubit 0 first (e.g. '0+1--')

    Returns
    -------
    float
        Real part of the expectation value

    Raises
    ------
    ValueError
        If label length doesn't match qubit count
    """
    if len(product_label) != psum.nqubits:
        raise ValueError("Label length mismatch")
    rows = [_EXP_TABLE[_STATE_IDX[ch]] for ch in product_label]

    total = 0.0
    for word, coeff in _items(psum):
        prod = 1.0
        for q, row in enumerate(rows):
            val = row[(word >> (2 * q)) & 3]
            if val == 0.0:  # Early termination if product becomes zero
                prod = 0.0
                break
            prod *= val
        if prod:
            total += complex(coefficient_value(coeff)).real * prod
    return float(total)


def filter_terms(psum: PauliSum, remove: Callable[[int], bool], inplace: bool = False) -> PauliSum:
    """
    Drop every term whose word satisfies ``remove``.

    Returns a new PauliSum unless ``inplace`` is set.
    """
    if inplace:
        for word in [w for w in psum.terms if remove(w)]:
            del psum.terms[word]
        return psum
    out = PauliSum(psum.nqubits)
    out.terms = {w: c for w, c in psum.terms.items() if not remove(w)}
    return out


def zero_filter(psum: PauliSum, inplace: bool = False) -> PauliSum:
    """Keep only the terms with non-zero overlap with the all-zero state."""
    return filter_terms(psum, contains_x_or_y, inplace=inplace)
