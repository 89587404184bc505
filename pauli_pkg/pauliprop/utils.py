# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/utils.py
from __future__ import annotations
from functools import lru_cache

import numpy as np
from qiskit.quantum_info import Pauli

from .pauli_algebra import decode_pauli

__all__ = [
    "to_qiskit_pauli",
    "from_qiskit_pauli",
    "to_qiskit_label",
    "pauli_matrix",
]

# qiskit (z, x) bits -> our 2-bit code
_ZX_TO_CODE = {(False, False): 0, (False, True): 1, (True, True): 2, (True, False): 3}


def to_qiskit_label(word: int, nqubits: int) -> str:
    """
    qiskit label of ``word``.

    qiskit writes qubit 0 rightmost, so this is the reverse of
    :func:`~pauliprop.pauli_algebra.decode_pauli`.
    """
    return decode_pauli(word, nqubits)[::-1]


@lru_cache(maxsize=1024)
def to_qiskit_pauli(word: int, nqubits: int) -> Pauli:
    """
    Unpack a Pauli word into a qiskit.Pauli.

    Parameters
    ----------
    word : int
        Packed Pauli word
    nqubits : int
        Number of qubits

    Returns
    -------
    Pauli
        Phase-free qiskit Pauli with qubit ``q`` matching slot ``q`` of the word
    """
    return Pauli(to_qiskit_label(word, nqubits))


def from_qiskit_pauli(p: Pauli) -> int:
    """
    Pack a qiskit.Pauli into a word.

    Parameters
    ----------
    p : Pauli
        Input Pauli operator. Its group phase is ignored.

    Returns
    -------
    int
        Packed Pauli word
    """
    word = 0
    for q in range(len(p.z)):
        word |= _ZX_TO_CODE[(bool(p.z[q]), bool(p.x[q]))] << (2 * q)
    return word


def pauli_matrix(word: int, nqubits: int) -> np.ndarray:
    """Dense matrix of ``word`` in qiskit's little-endian ordering."""
    return to_qiskit_pauli(word, nqubits).to_matrix()
