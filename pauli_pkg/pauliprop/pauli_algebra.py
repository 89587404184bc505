# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/pauli_algebra.py
"""
Bit-packed Pauli words and the algebra over them.

A Pauli string on n qubits is packed into one integer with two bits per qubit.
Qubit ``q`` occupies bits ``2q`` (low) and ``2q+1`` (high) and holds one of

    I = 0b00, X = 0b01, Y = 0b10, Z = 0b11

With this layout the product of two Pauli strings is, up to a phase, simply
the XOR of their words. Commutation, weight and X/Y/Z counts reduce to a
couple of mask, shift and popcount operations over the alternating mask
``...010101``.

Notes
-----
Words are plain Python ints so they work for any qubit count. The storage
width a fixed-width implementation would pick is still exposed through
:func:`word_bits` and :func:`word_dtype` for array export.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

__all__ = [
    "PAULI_SYMBOLS",
    "PRODUCT_PHASE",
    "word_bits",
    "word_dtype",
    "alternating_mask",
    "symbol_to_int",
    "int_to_symbol",
    "get_pauli",
    "set_pauli",
    "encode_pauli",
    "decode_pauli",
    "check_word",
    "commutes",
    "anticommuting_sites",
    "pauli_product",
    "calculate_sign",
    "count_weight",
    "count_xy",
    "count_yz",
    "contains_x_or_y",
    "contains_y_or_z",
    "local_index",
    "set_local",
]

PAULI_SYMBOLS = "IXYZ"
_SYMBOL_TO_INT = {s: i for i, s in enumerate(PAULI_SYMBOLS)}

# Phase of sigma_a * sigma_b; the resulting Pauli is a ^ b.
# XY = iZ, YZ = iX, ZX = iY and the reversed products pick up -i.
PRODUCT_PHASE = (
    (1,   1,   1,   1),    # I *
    (1,   1,  1j, -1j),    # X *
    (1, -1j,   1,  1j),    # Y *
    (1,  1j, -1j,   1),    # Z *
)

_WIDTHS = (8, 16, 32, 64, 128, 256)

PauliLabel = Union[str, int]


def word_bits(nqubits: int) -> int | None:
    """
    Smallest fixed storage width that holds ``nqubits`` Pauli slots.

    Parameters
    ----------
    nqubits : int
        Number of qubits.

    Returns
    -------
    int | None
        One of 8, 16, 32, 64, 128, 256, or None when an arbitrary-precision
        integer is needed.
    """
    if nqubits < 0:
        raise ValueError(f"nqubits must be non-negative, got {nqubits}")
    nbits = 2 * nqubits
    for width in _WIDTHS:
        if nbits <= width:
            return width
    return None


def word_dtype(nqubits: int) -> np.dtype:
    """numpy dtype used when exporting words of ``nqubits`` qubits as an array."""
    width = word_bits(nqubits)
    if width is not None and width <= 64:
        return np.dtype(f"uint{width}")
    return np.dtype(object)


@lru_cache(maxsize=None)
def alternating_mask(nqubits: int) -> int:
    """Mask ``...010101`` with one set bit (the low bit) per qubit slot."""
    return (4 ** nqubits - 1) // 3


def _nslots(*words: int) -> int:
    return (max(w.bit_length() for w in words) + 1) >> 1


def symbol_to_int(symbol: PauliLabel) -> int:
    """Map a Pauli label ('I', 'X', 'Y', 'Z' or 0..3) to its 2-bit code."""
    if isinstance(symbol, str):
        try:
            return _SYMBOL_TO_INT[symbol.upper()]
        except KeyError:
            raise ValueError(f"Unknown Pauli symbol '{symbol}'") from None
    code = int(symbol)
    if not 0 <= code <= 3:
        raise ValueError(f"Pauli code must be in 0..3, got {symbol}")
    return code


def int_to_symbol(code: int) -> str:
    return PAULI_SYMBOLS[code]


def get_pauli(word: int, qubit: int) -> int:
    """Pauli code held by ``qubit`` in ``word``."""
    return (word >> (2 * qubit)) & 3


def set_pauli(word: int, pauli: PauliLabel, qubit: int) -> int:
    """
    Return ``word`` with the slot of ``qubit`` replaced by ``pauli``.

    The input is not modified; the two bits are cleared and then set.
    """
    shift = 2 * qubit
    return (word & ~(3 << shift)) | (symbol_to_int(pauli) << shift)


def encode_pauli(labels: Union[str, Sequence[PauliLabel]],
                 qinds: Sequence[int] | None = None,
                 nqubits: int | None = None) -> int:
    """
    Pack a sequence of Pauli labels into a word.

    Parameters
    ----------
    labels : str | Sequence[str | int]
        Pauli labels, e.g. ``"XIZ"`` or ``["X", "Z"]``.
    qinds : Sequence[int], optional
        Qubit index of each label. Defaults to ``0, 1, ..., len(labels)-1``,
        i.e. the label string is read left to right as qubit 0, 1, ...
    nqubits : int, optional
        Register size; when given, every index is checked against it.

    Returns
    -------
    int
        The packed Pauli word.

    Examples
    --------
    >>> encode_pauli("XZ")
    13
    >>> encode_pauli("Y", qinds=[2])
    32
    """
    if qinds is None:
        qinds = range(len(labels))
    elif len(qinds) != len(labels):
        raise ValueError(
            f"Got {len(labels)} Pauli labels for {len(qinds)} qubit indices"
        )
    word = 0
    for label, q in zip(labels, qinds):
        if q < 0 or (nqubits is not None and q >= nqubits):
            raise ValueError(f"Qubit index {q} out of range for {nqubits} qubits")
        word |= symbol_to_int(label) << (2 * q)
    return word


def decode_pauli(word: int, nqubits: int) -> str:
    """Label string of ``word``, qubit 0 first."""
    return "".join(PAULI_SYMBOLS[(word >> (2 * q)) & 3] for q in range(nqubits))


def check_word(word: int, nqubits: int) -> None:
    """Raise ValueError if ``word`` has bits set beyond ``2 * nqubits``."""
    if word < 0 or word >> (2 * nqubits):
        raise ValueError(f"Pauli word {word:#x} does not fit on {nqubits} qubits")


def anticommuting_sites(word1: int, word2: int) -> int:
    """
    Bit flags (one per slot, on the low bit) of the qubits where the two
    words hold different non-identity Paulis.
    """
    mask = alternating_mask(_nslots(word1, word2))
    low1, high1 = word1 & mask, (word1 >> 1) & mask
    low2, high2 = word2 & mask, (word2 >> 1) & mask
    return (low1 & high2) ^ (high1 & low2)


def commutes(word1: int, word2: int) -> bool:
    """
    Whether two Pauli words commute.

    They commute iff they anticommute on an even number of qubits.
    """
    return anticommuting_sites(word1, word2).bit_count() % 2 == 0


def calculate_sign(word1: int, word2: int,
                   changed_indices: Iterable[int] | None = None) -> complex:
    """
    Phase of the product ``word1 * word2``.

    Parameters
    ----------
    word1, word2 : int
        Pauli words, left and right factor.
    changed_indices : Iterable[int], optional
        Qubits on which the factors may differ. When the right factor is a
        local gate generator this avoids a scan over the whole register.

    Returns
    -------
    complex
        One of ``1, -1, 1j, -1j``.
    """
    sign = 1
    if changed_indices is not None:
        for q in changed_indices:
            sign *= PRODUCT_PHASE[(word1 >> (2 * q)) & 3][(word2 >> (2 * q)) & 3]
        return sign

    flags = anticommuting_sites(word1, word2)
    while flags:
        lowest = flags & -flags
        shift = lowest.bit_length() - 1
        sign *= PRODUCT_PHASE[(word1 >> shift) & 3][(word2 >> shift) & 3]
        flags ^= lowest
    return sign


def pauli_product(word1: int, word2: int,
                  changed_indices: Iterable[int] | None = None) -> Tuple[int, complex]:
    """
    Product of two Pauli words.

    Returns
    -------
    Tuple[int, complex]
        ``(word1 ^ word2, sign)`` such that
        ``P(word1) @ P(word2) == sign * P(word1 ^ word2)``.
    """
    return word1 ^ word2, calculate_sign(word1, word2, changed_indices)


def count_weight(word: int) -> int:
    """Number of non-identity slots."""
    mask = alternating_mask(_nslots(word, 0))
    return ((word | (word >> 1)) & mask).bit_count()


def count_xy(word: int) -> int:
    """Number of X or Y slots (slots whose two bits differ)."""
    mask = alternating_mask(_nslots(word, 0))
    return ((word ^ (word >> 1)) & mask).bit_count()


def count_yz(word: int) -> int:
    """Number of Y or Z slots (slots with the high bit set)."""
    mask = alternating_mask(_nslots(word, 0))
    return ((word >> 1) & mask).bit_count()


def contains_x_or_y(word: int) -> bool:
    mask = alternating_mask(_nslots(word, 0))
    return ((word ^ (word >> 1)) & mask) != 0


def contains_y_or_z(word: int) -> bool:
    mask = alternating_mask(_nslots(word, 0))
    return ((word >> 1) & mask) != 0


def local_index(word: int, qinds: Sequence[int]) -> int:
    """Sub-word of ``word`` restricted to ``qinds``, packed as qubits 0, 1, ..."""
    idx = 0
    for k, q in enumerate(qinds):
        idx |= ((word >> (2 * q)) & 3) << (2 * k)
    return idx


def set_local(word: int, local: int, qinds: Sequence[int]) -> int:
    """Inverse of :func:`local_index`: write ``local`` back onto ``qinds``."""
    for k, q in enumerate(qinds):
        shift = 2 * q
        word = (word & ~(3 << shift)) | (((local >> (2 * k)) & 3) << shift)
    return word
