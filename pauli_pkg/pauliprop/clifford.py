# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/clifford.py
"""
Lookup tables for Clifford gates.

A Clifford gate on k <= 4 qubits permutes the 4**k local Pauli strings up to a
sign. Its table is indexed by the local sub-word (qubit ``qinds[0]`` in the
lowest slot) and returns ``(sign, new_local_word)`` for the Heisenberg action
``U^dagger P U``.

Tables live in a :class:`CliffordMap` registry object. Gates capture the
registry they were built with, :data:`default_clifford_map` unless told
otherwise. Tables are read-only once built; registering or resetting is an
explicit operation that must not run concurrently with a propagation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import numpy as np

from .exceptions import CliffordRelationError, UnknownCliffordError
from .pauli_algebra import calculate_sign, commutes, decode_pauli, encode_pauli

__all__ = [
    "CliffordTable",
    "CliffordMap",
    "create_clifford_map",
    "default_clifford_map",
    "DEFAULT_CLIFFORD_SYMBOLS",
]

logger = logging.getLogger(__name__)

MAX_CLIFFORD_QUBITS = 4


@dataclass(frozen=True, eq=False)
class CliffordTable:
    """
    Dense Clifford lookup table.

    Attributes
    ----------
    nqubits : int
        Number of qubits the table acts on.
    signs : np.ndarray
        ``int8`` array of length ``4**nqubits`` holding +1 or -1.
    words : np.ndarray
        ``uint8`` array of length ``4**nqubits`` holding the image local word.
    """
    nqubits: int
    signs:   np.ndarray
    words:   np.ndarray
    _lookup: Tuple[Tuple[int, int], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        size = 4 ** self.nqubits
        if self.signs.shape != (size,) or self.words.shape != (size,):
            raise CliffordRelationError(
                f"A {self.nqubits}-qubit Clifford table needs {size} entries"
            )
        self.signs.flags.writeable = False
        self.words.flags.writeable = False
        # python ints for the hot loop, numpy scalars are slow to index with
        object.__setattr__(self, "_lookup", tuple(
            (int(s), int(w)) for s, w in zip(self.signs, self.words)
        ))

    def __getitem__(self, local_word: int) -> Tuple[int, int]:
        return self._lookup[local_word]

    def __len__(self) -> int:
        return len(self._lookup)

    def relations(self) -> Dict[str, Tuple[int, str]]:
        """Human-readable form ``{"XI": (1, "XX"), ...}``."""
        return {
            decode_pauli(i, self.nqubits): (s, decode_pauli(w, self.nqubits))
            for i, (s, w) in enumerate(self._lookup)
        }


def _split_relation(value) -> Tuple[int, tuple]:
    if len(value) == 2:
        sign, labels = value
    else:
        sign, labels = value[0], value[1:]
    if isinstance(labels, int):
        labels = (labels,)
    return sign, tuple(labels)


def create_clifford_map(relations: Dict) -> CliffordTable:
    """
    Build a dense Clifford table from a relation set.

    Parameters
    ----------
    relations : Dict
        Maps input local labels to ``(sign, output_labels)``. Labels may be
        strings (``"XZ"``) or tuples (``("X", "Z")``), and the value may also be
        given flat as ``(sign, "X", "Z")``. Every one of the ``4**k`` local
        Pauli strings on the ``k`` acted-on qubits must appear exactly once.

    Returns
    -------
    CliffordTable
        Table ordered by the packed local input word.

    Raises
    ------
    CliffordRelationError
        If more than 4 qubits are covered, the label lengths are inconsistent,
        a sign is not +-1, or the relation set is incomplete.

    Examples
    --------
    >>> table = create_clifford_map({"I": (1, "I"), "X": (1, "Z"),
    ...                              "Y": (-1, "Y"), "Z": (1, "X")})
    >>> table[1]
    (1, 3)
    """
    if not relations:
        raise CliffordRelationError("Empty Clifford relation set")
    lengths = {len(tuple(k)) for k in relations}
    nq = max(lengths)
    if nq > MAX_CLIFFORD_QUBITS:
        raise CliffordRelationError(
            f"Clifford tables cover at most {MAX_CLIFFORD_QUBITS} qubits, got {nq}"
        )
    if len(lengths) != 1:
        raise CliffordRelationError(f"Inconsistent relation lengths {sorted(lengths)}")

    size = 4 ** nq
    signs = np.zeros(size, dtype=np.int8)
    words = np.zeros(size, dtype=np.uint8)
    seen = set()
    for key, value in relations.items():
        sign, out = _split_relation(value)
        if sign not in (1, -1):
            raise CliffordRelationError(f"Sign of {key} must be +1 or -1, got {sign}")
        if len(out) != nq:
            raise CliffordRelationError(f"Image of {key} acts on {len(out)} qubits, expected {nq}")
        try:
            idx = encode_pauli(tuple(key))
            signs[idx] = sign
            words[idx] = encode_pauli(out)
        except ValueError as exc:
            raise CliffordRelationError(str(exc)) from exc
        seen.add(idx)
    if len(seen) != size:
        missing = [decode_pauli(i, nq) for i in range(size) if i not in seen]
        raise CliffordRelationError(f"Missing Clifford relations for {missing}")
    if len(set(words.tolist())) != size:
        raise CliffordRelationError("Clifford relations are not a permutation")
    return CliffordTable(nq, signs, words)


def rotation_clifford_relations(generator: str) -> Dict[str, Tuple[int, str]]:
    """
    Relations of the Pauli rotation ``exp(-i pi/4 G)``.

    At angle pi/2 the rotation rule ``P -> cos(t) P + sin(t) i G P`` keeps a
    single branch, so the rotation is Clifford.
    """
    nq = len(generator)
    gword = encode_pauli(generator)
    relations = {}
    for idx in range(4 ** nq):
        if commutes(gword, idx):
            relations[decode_pauli(idx, nq)] = (1, decode_pauli(idx, nq))
        else:
            sign = int((1j * calculate_sign(gword, idx)).real)
            relations[decode_pauli(idx, nq)] = (sign, decode_pauli(gword ^ idx, nq))
    return relations


def _single_qubit(x: Tuple[int, str], y: Tuple[int, str], z: Tuple[int, str]):
    return {"I": (1, "I"), "X": x, "Y": y, "Z": z}


_DEFAULT_RELATIONS = {
    "H": _single_qubit((1, "Z"), (-1, "Y"), (1, "X")),
    "X": _single_qubit((1, "X"), (-1, "Y"), (-1, "Z")),
    "Y": _single_qubit((-1, "X"), (1, "Y"), (-1, "Z")),
    "Z": _single_qubit((-1, "X"), (-1, "Y"), (1, "Z")),
    "S": _single_qubit((-1, "Y"), (1, "X"), (1, "Z")),
    # control first, target second
    "CNOT": {
        "II": (1, "II"), "XI": (1, "XX"), "YI": (1, "YX"), "ZI": (1, "ZI"),
        "IX": (1, "IX"), "XX": (1, "XI"), "YX": (1, "YI"), "ZX": (1, "ZX"),
        "IY": (1, "ZY"), "XY": (1, "YZ"), "YY": (-1, "XZ"), "ZY": (1, "IY"),
        "IZ": (1, "ZZ"), "XZ": (-1, "YY"), "YZ": (1, "XY"), "ZZ": (1, "IZ"),
    },
    "ZZpihalf": rotation_clifford_relations("ZZ"),
    "SWAP": {a + b: (1, b + a) for a in "IXYZ" for b in "IXYZ"},
}

DEFAULT_CLIFFORD_SYMBOLS = tuple(_DEFAULT_RELATIONS)


class CliffordMap:
    """
    Registry of Clifford tables keyed by gate symbol.

    Parameters
    ----------
    include_defaults : bool
        Start with the default tables for H, X, Y, Z, S, CNOT, ZZpihalf
        and SWAP.

    Examples
    --------
    >>> cmap = CliffordMap()
    >>> table = cmap.register("SX", {"I": (1, "I"), "X": (1, "X"),
    ...                              "Y": (-1, "Z"), "Z": (1, "Y")})
    >>> "SX" in cmap
    True
    """

    def __init__(self, include_defaults: bool = True):
        self._tables: Dict[str, CliffordTable] = {}
        if include_defaults:
            self._load_defaults()

    def _load_defaults(self) -> None:
        self._tables = {sym: _DEFAULT_TABLES[sym] for sym in DEFAULT_CLIFFORD_SYMBOLS}

    def get(self, symbol: str) -> CliffordTable:
        """
        Table registered for ``symbol``.

        Raises
        ------
        UnknownCliffordError
            If nothing is registered under ``symbol``.
        """
        try:
            return self._tables[symbol]
        except KeyError:
            raise UnknownCliffordError(symbol) from None

    def register(self, symbol: str, table) -> CliffordTable:
        """Register a CliffordTable or a relation dict under ``symbol``."""
        if not isinstance(table, CliffordTable):
            table = create_clifford_map(table)
        if symbol in self._tables:
            logger.info("Overwriting Clifford table '%s'", symbol)
        self._tables[symbol] = table
        return table

    def register_relations(self, symbol: str, relations: Dict) -> CliffordTable:
        return self.register(symbol, create_clifford_map(relations))

    def unregister(self, symbol: str) -> None:
        self._tables.pop(symbol, None)

    def reset(self) -> None:
        """Drop every custom table and restore the defaults."""
        custom = sorted(set(self._tables) - set(DEFAULT_CLIFFORD_SYMBOLS))
        if custom:
            logger.warning("Resetting Clifford map, discarding custom tables %s", custom)
        self._load_defaults()

    def symbols(self) -> Iterable[str]:
        return tuple(self._tables)

    def __contains__(self, symbol) -> bool:
        return symbol in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"CliffordMap({', '.join(self._tables)})"


_DEFAULT_TABLES = {sym: create_clifford_map(rel) for sym, rel in _DEFAULT_RELATIONS.items()}

default_clifford_map = CliffordMap()
