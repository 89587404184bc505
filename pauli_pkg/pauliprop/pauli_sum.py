# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/pauli_sum.py
"""
Sparse weighted sum of Pauli strings.

A :class:`PauliSum` is a map from packed Pauli word to coefficient on a fixed
number of qubits. No entry is ever stored with a coefficient that is exactly
zero: additions that cancel remove the entry.

The dict-level helpers :func:`add_term` and :func:`merge_terms` are shared
with the propagation engine, which works on raw dicts.
"""

from __future__ import annotations

import numbers
from typing import Dict, Iterator, Tuple

import numpy as np

from .exceptions import QubitCountError
from .pauli_algebra import (
    anticommuting_sites,
    calculate_sign,
    check_word,
    encode_pauli,
    word_dtype,
)
from .pauli_term import PauliString, _format_coeff
from .path_properties import coefficient_value, has_magnitude, is_zero

__all__ = ["PauliSum", "add_term", "merge_terms"]


def add_term(terms: Dict[int, object], word: int, coeff) -> None:
    """Add ``coeff`` onto ``terms[word]``, dropping the entry if it cancels."""
    if word in terms:
        total = terms[word] + coeff
        if is_zero(total):
            del terms[word]
        else:
            terms[word] = total
    elif not is_zero(coeff):
        terms[word] = coeff


def merge_terms(terms1: Dict[int, object], terms2: Dict[int, object]) -> Tuple[dict, dict]:
    """
    Fold the smaller of two dicts into the larger one.

    Returns
    -------
    Tuple[dict, dict]
        ``(merged, emptied)``: the larger dict, now holding every term, and
        the smaller one, cleared and ready for reuse.
    """
    if len(terms2) > len(terms1):
        terms1, terms2 = terms2, terms1
    for word, coeff in terms2.items():
        add_term(terms1, word, coeff)
    terms2.clear()
    return terms1, terms2


class PauliSum:
    """
    Weighted sum of Pauli strings on ``nqubits`` qubits.

    Parameters
    ----------
    nqubits : int
        Number of qubits
    terms : optional
        Initial content. One of a PauliString, an iterable of PauliStrings,
        or a dict keyed by packed word or by label string (qubit 0 first).

    Examples
    --------
    >>> psum = PauliSum(3, {"ZII": 1.0, "IXX": 0.5})
    >>> len(psum)
    2
    """

    __slots__ = ("nqubits", "terms")

    def __init__(self, nqubits: int, terms=None):
        self.nqubits = nqubits
        self.terms: Dict[int, object] = {}
        if terms is None:
            return
        if isinstance(terms, PauliString):
            terms = (terms,)
        if isinstance(terms, dict):
            for key, coeff in terms.items():
                self.add(self._as_word(key), coeff)
        else:
            for pstr in terms:
                self.add_pauli_string(pstr)

    def _as_word(self, key) -> int:
        if isinstance(key, str):
            if len(key) != self.nqubits:
                raise QubitCountError(self.nqubits, len(key))
            return encode_pauli(key)
        if isinstance(key, PauliString):
            self._check_nqubits(key)
            return key.word
        check_word(key, self.nqubits)
        return key

    def _check_nqubits(self, other) -> None:
        if self.nqubits != other.nqubits:
            raise QubitCountError(self.nqubits, other.nqubits)

    # ------------------------------------------------------------------
    # Element access and in-place updates
    # ------------------------------------------------------------------

    def get_coeff(self, key, default=0.0):
        """Coefficient of a word, label or PauliString (``default`` if absent)."""
        return self.terms.get(self._as_word(key), default)

    def add(self, key, coeff) -> "PauliSum":
        """Add ``coeff`` to the entry of ``key`` in place."""
        if isinstance(coeff, numbers.Integral):
            coeff = float(coeff)
        add_term(self.terms, self._as_word(key), coeff)
        return self

    def add_pauli_string(self, pstr: PauliString) -> "PauliSum":
        self._check_nqubits(pstr)
        add_term(self.terms, pstr.word, pstr.coeff)
        return self

    def subtract(self, key, coeff) -> "PauliSum":
        return self.add(key, -coeff)

    def set(self, key, coeff) -> "PauliSum":
        """Overwrite the entry of ``key``; setting an exact zero deletes it."""
        word = self._as_word(key)
        if is_zero(coeff):
            self.terms.pop(word, None)
        else:
            self.terms[word] = coeff
        return self

    def delete(self, key) -> "PauliSum":
        self.terms.pop(self._as_word(key), None)
        return self

    def clear(self) -> "PauliSum":
        self.terms.clear()
        return self

    def merge(self, other: "PauliSum") -> "PauliSum":
        """
        Absorb ``other`` into ``self`` and leave ``other`` empty.

        The smaller dict is always folded into the larger one; the two
        operands may swap their underlying dicts in the process.
        """
        self._check_nqubits(other)
        self.terms, other.terms = merge_terms(self.terms, other.terms)
        return self

    def mult(self, value) -> "PauliSum":
        """Scale every coefficient by ``value`` in place."""
        if value == 0:
            self.terms.clear()
            return self
        for word in self.terms:
            self.terms[word] = self.terms[word] * value
        return self

    def prune(self, min_abs_coeff: float) -> "PauliSum":
        """Drop entries whose magnitude is below ``min_abs_coeff``."""
        doomed = [w for w, c in self.terms.items()
                  if has_magnitude(c) and abs(c) < min_abs_coeff]
        for word in doomed:
            del self.terms[word]
        return self

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.terms)

    def __iter__(self) -> Iterator[PauliString]:
        for word, coeff in self.terms.items():
            yield PauliString(self.nqubits, word, coeff)

    def __contains__(self, key) -> bool:
        return self._as_word(key) in self.terms

    def items(self):
        return self.terms.items()

    def copy(self) -> "PauliSum":
        new = PauliSum(self.nqubits)
        new.terms = dict(self.terms)
        return new

    def similar(self) -> "PauliSum":
        """Empty sum on the same number of qubits."""
        return PauliSum(self.nqubits)

    def to_pauli_strings(self):
        return list(self)

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Export words and numerical coefficients as numpy arrays.

        Words use the smallest unsigned dtype that fits the register
        (object dtype beyond 32 qubits).
        """
        words = np.fromiter(self.terms.keys(), dtype=word_dtype(self.nqubits),
                            count=len(self.terms))
        coeffs = np.array([coefficient_value(c) for c in self.terms.values()])
        return words, coeffs

    def to_sparse_pauli_op(self):
        """Convert to a qiskit SparsePauliOp (numerical coefficients only)."""
        from qiskit.quantum_info import SparsePauliOp
        from .utils import to_qiskit_label

        if not self.terms:
            return SparsePauliOp(["I" * self.nqubits], coeffs=[0.0])
        return SparsePauliOp.from_list(
            [(to_qiskit_label(w, self.nqubits), coefficient_value(c))
             for w, c in self.terms.items()]
        )

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _coerce(self, other) -> "PauliSum":
        if isinstance(other, PauliString):
            other = PauliSum(other.nqubits, other)
        if not isinstance(other, PauliSum):
            raise TypeError(f"Cannot combine PauliSum with {type(other).__name__}")
        self._check_nqubits(other)
        return other

    def __add__(self, other):
        other = self._coerce(other)
        result = self.copy()
        for word, coeff in other.terms.items():
            add_term(result.terms, word, coeff)
        return result

    def __radd__(self, other):
        # 0 is the start value of the builtin sum()
        if isinstance(other, numbers.Number) and other == 0:
            return self.copy()
        return self.__add__(other)

    def __sub__(self, other):
        other = self._coerce(other)
        result = self.copy()
        for word, coeff in other.terms.items():
            add_term(result.terms, word, -coeff)
        return result

    def __neg__(self):
        return self * -1

    def __mul__(self, value):
        if isinstance(value, (PauliSum, PauliString)):
            return NotImplemented
        return self.copy().mult(value)

    __rmul__ = __mul__

    def __truediv__(self, value):
        return self.copy().mult(1 / value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PauliSum):
            return NotImplemented
        return self.nqubits == other.nqubits and self.terms == other.terms

    __hash__ = None

    def isapprox(self, other: "PauliSum", atol: float = 1e-8, rtol: float = 1e-5) -> bool:
        """
        Approximate equality, checked in both directions.

        A word missing on one side counts as a zero coefficient there.
        """
        other = self._coerce(other)
        for a, b in ((self, other), (other, self)):
            for word, coeff in a.terms.items():
                x = coefficient_value(coeff)
                y = coefficient_value(b.terms.get(word, 0.0))
                if not abs(x - y) <= atol + rtol * abs(y):
                    return False
        return True

    def commutator(self, other) -> "PauliSum":
        """
        ``self @ other - other @ self``.

        Only anticommuting pairs contribute, each with ``2 * P1 @ P2``.
        """
        other = self._coerce(other)
        result = PauliSum(self.nqubits)
        for w1, c1 in self.terms.items():
            for w2, c2 in other.terms.items():
                if anticommuting_sites(w1, w2).bit_count() % 2:
                    sign = calculate_sign(w1, w2)
                    add_term(result.terms, w1 ^ w2,
                             2 * sign * coefficient_value(c1) * coefficient_value(c2))
        return result

    def commutes(self, other, atol: float = 1e-12) -> bool:
        comm = self.commutator(other)
        return all(abs(c) <= atol for c in comm.terms.values())

    def __repr__(self) -> str:
        if not self.terms:
            return f"PauliSum(nqubits={self.nqubits}, 0)"
        shown = list(self.terms.items())[:20]
        body = "\n  ".join(f"{_format_coeff(c)}*{PauliString(self.nqubits, w).to_label()}"
                           for w, c in shown)
        more = f"\n  ... ({len(self.terms) - 20} more)" if len(self.terms) > 20 else ""
        return f"PauliSum(nqubits={self.nqubits}, {len(self.terms)} terms):\n  {body}{more}"
