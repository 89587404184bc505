# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/pauli_term.py
from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import Sequence

from .pauli_algebra import check_word, count_weight, decode_pauli, encode_pauli
from .path_properties import coefficient_value


def _format_coeff(coeff) -> str:
    if isinstance(coeff, numbers.Number):
        return f"{coeff:+g}"
    return repr(coeff)


@dataclass(frozen=True, slots=True)
class PauliString:
    """
    A single weighted Pauli string.

    Attributes
    ----------
    nqubits : int
        Number of qubits the string acts on
    word : int
        Packed Pauli word (2 bits per qubit, see :mod:`pauliprop.pauli_algebra`)
    coeff : float | complex | PathProperties
        Coefficient of the string. Integers are promoted to float.

    Notes
    -----
    Instances are immutable. Arithmetic returns new objects; adding two
    strings gives a :class:`~pauliprop.pauli_sum.PauliSum`.
    """
    nqubits: int
    word:    int
    coeff:   object = 1.0

    def __post_init__(self):
        check_word(self.word, self.nqubits)
        if isinstance(self.coeff, numbers.Integral):
            object.__setattr__(self, "coeff", float(self.coeff))

    @classmethod
    def from_label(cls, label: str, coeff=1.0) -> "PauliString":
        """
        Build a string from a full label, qubit 0 first.

        >>> PauliString.from_label("XIZ").word
        49
        """
        return cls(len(label), encode_pauli(label), coeff)

    @classmethod
    def from_symbols(cls, nqubits: int, symbols, qinds: Sequence[int] | int,
                     coeff=1.0) -> "PauliString":
        """
        Build a string acting with ``symbols`` on ``qinds``, identity elsewhere.

        Parameters
        ----------
        nqubits : int
            Register size
        symbols : str | Sequence
            Pauli labels, one per entry of ``qinds``
        qinds : Sequence[int] | int
            Target qubits (a single int is accepted for one symbol)
        coeff : optional
            Coefficient, 1.0 by default
        """
        if isinstance(qinds, numbers.Integral):
            qinds = (qinds,)
        return cls(nqubits, encode_pauli(symbols, qinds, nqubits), coeff)

    def to_label(self) -> str:
        """Label string such as 'XIZY', qubit 0 first."""
        return decode_pauli(self.word, self.nqubits)

    def weight(self) -> int:
        """Number of qubits on which the string acts non-trivially."""
        return count_weight(self.word)

    def tonumber(self):
        return coefficient_value(self.coeff)

    def __repr__(self) -> str:
        return f"{_format_coeff(self.coeff)}*{self.to_label()}"

    def __mul__(self, value):
        if isinstance(value, PauliString):
            return NotImplemented
        return replace(self, coeff=self.coeff * value)

    __rmul__ = __mul__

    def __truediv__(self, value):
        return replace(self, coeff=self.coeff / value)

    def __neg__(self):
        return replace(self, coeff=-self.coeff)

    def __add__(self, other):
        from .pauli_sum import PauliSum
        return PauliSum(self.nqubits, self) + other

    def __sub__(self, other):
        from .pauli_sum import PauliSum
        return PauliSum(self.nqubits, self) - other
