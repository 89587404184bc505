# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/gates.py
"""
Gates and their Heisenberg-picture action on a single Pauli term.

Every gate implements

    apply(word, coeff, parameter=None) -> tuple of (word, coeff) pairs

returning one pair, or two when the term splits. When present, the first
pair always carries the input word so the propagation loop can update that
entry in place; a second pair always carries a new word.

Notes
-----
- ``StaticGate`` subclasses need no parameter, ``ParametrizedGate``
  subclasses consume one entry of the parameter list per application.
- ``prepare(nqubits)`` returns the object actually used in the hot loop,
  e.g. a Pauli rotation with its generator pre-packed into a word.
- Pauli rotations follow qiskit's convention ``exp(-i theta/2 P)``.
"""

from __future__ import annotations

import copy
import math
import numbers
from typing import Sequence, Tuple

from .clifford import CliffordMap, CliffordTable, default_clifford_map
from .exceptions import (
    InvalidGateError,
    NoiseStrengthError,
    ParameterCountError,
    QubitIndexError,
)
from .pauli_algebra import (
    PRODUCT_PHASE,
    calculate_sign,
    commutes,
    encode_pauli,
    get_pauli,
    int_to_symbol,
    local_index,
    set_local,
    symbol_to_int,
)
from .path_properties import apply_cos, apply_sin, multiply_sign

__all__ = [
    "Gate",
    "StaticGate",
    "ParametrizedGate",
    "PauliRotation",
    "MaskedPauliRotation",
    "CliffordGate",
    "PauliNoise",
    "DepolarizingNoise",
    "PauliXNoise",
    "PauliYNoise",
    "PauliZNoise",
    "DephasingNoise",
    "PauliXDamping",
    "PauliYDamping",
    "PauliZDamping",
    "AmplitudeDampingNoise",
    "FrozenGate",
    "freeze",
    "count_parameters",
]

Pair = Tuple[int, object]


def _as_qinds(qinds) -> Tuple[int, ...]:
    if isinstance(qinds, numbers.Integral):
        return (int(qinds),)
    return tuple(int(q) for q in qinds)


class Gate:
    """
    Base class of all gates.

    Attributes
    ----------
    qinds : Tuple[int, ...]
        Qubits the gate acts on (0-based).
    nparams : int
        Number of circuit parameters consumed per application (0 or 1).
    """

    nparams = 0

    def __init__(self, qinds):
        self.qinds = _as_qinds(qinds)
        name = type(self).__name__
        if not self.qinds:
            raise InvalidGateError(name, "acts on no qubits")
        if min(self.qinds) < 0:
            raise InvalidGateError(name, f"negative qubit index in {self.qinds}")
        if len(set(self.qinds)) != len(self.qinds):
            raise InvalidGateError(name, f"repeated qubit index in {self.qinds}")

    def apply(self, word: int, coeff, parameter=None) -> Tuple[Pair, ...]:
        raise NotImplementedError(f"No rule for gate '{type(self).__name__}'")

    def check_parameter(self, parameter) -> None:
        """Raise if ``parameter`` is not a valid value for this gate."""

    def check_qubits(self, nqubits: int) -> None:
        for q in self.qinds:
            if q >= nqubits:
                raise QubitIndexError(q, nqubits)

    def prepare(self, nqubits: int) -> "Gate":
        """Validate against the register size and return the form used in propagation."""
        self.check_qubits(nqubits)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(qinds={list(self.qinds)})"


class StaticGate(Gate):
    """A gate with no free parameter."""

    nparams = 0


class ParametrizedGate(Gate):
    """A gate that consumes one parameter per application."""

    nparams = 1


# ------------------------------------------------------------------------------------------------------------------------
# Pauli rotations
# ------------------------------------------------------------------------------------------------------------------------


class PauliRotation(ParametrizedGate):
    """
    Rotation ``exp(-i theta/2 G)`` generated by a local Pauli string ``G``.

    Parameters
    ----------
    symbols : str | Sequence
        Generator labels, e.g. ``"ZZ"`` or ``["X"]``.
    qinds : int | Sequence[int]
        Qubit of each generator label.

    Notes
    -----
    In the Heisenberg picture a Pauli string ``P`` that commutes with ``G`` is
    left alone. Otherwise

        P -> cos(theta) P + sin(theta) (i G P)

    and ``i G P`` is again a Pauli string up to a real sign.

    Examples
    --------
    >>> gate = PauliRotation("X", 0)
    >>> gate.apply(encode_pauli("Z"), 1.0, math.pi / 2)
    ((3, 6.123233995736766e-17), (2, 1.0))
    """

    def __init__(self, symbols, qinds):
        super().__init__(qinds)
        self.symbols = tuple(symbol_to_int(s) for s in symbols)
        if len(self.symbols) != len(self.qinds):
            raise InvalidGateError(
                type(self).__name__,
                f"{len(self.symbols)} symbols for {len(self.qinds)} qubits",
            )

    def _split(self, word: int, coeff, theta, new_word: int, phase: complex) -> Tuple[Pair, ...]:
        sign = (1j * phase).real
        return ((word, apply_cos(coeff, theta)),
                (new_word, apply_sin(coeff, theta, int(sign))))

    def apply(self, word: int, coeff, theta=None) -> Tuple[Pair, ...]:
        if theta == 0:
            return ((word, coeff),)
        n_anti = 0
        phase = 1
        new_word = word
        for s, q in zip(self.symbols, self.qinds):
            p = (word >> (2 * q)) & 3
            if s and p and s != p:
                n_anti += 1
            phase *= PRODUCT_PHASE[s][p]
            new_word ^= s << (2 * q)
        if n_anti % 2 == 0:
            return ((word, coeff),)
        return self._split(word, coeff, theta, new_word, phase)

    def generator_word(self) -> int:
        return encode_pauli(self.symbols, self.qinds)

    def prepare(self, nqubits: int) -> "MaskedPauliRotation":
        self.check_qubits(nqubits)
        return MaskedPauliRotation(self.symbols, self.qinds, nqubits)

    def to_masked(self, nqubits: int) -> "MaskedPauliRotation":
        return self.prepare(nqubits)

    def __repr__(self) -> str:
        label = "".join(int_to_symbol(s) for s in self.symbols)
        return f"{type(self).__name__}('{label}', qinds={list(self.qinds)})"


class MaskedPauliRotation(PauliRotation):
    """
    Pauli rotation with the generator pre-packed into a word.

    Produces exactly the same output as :class:`PauliRotation`; commutation
    and the product are bit operations instead of a symbol scan.
    """

    def __init__(self, symbols, qinds, nqubits: int):
        super().__init__(symbols, qinds)
        self.check_qubits(nqubits)
        self.nqubits = nqubits
        self.generator = self.generator_word()

    def apply(self, word: int, coeff, theta=None) -> Tuple[Pair, ...]:
        if theta == 0 or commutes(self.generator, word):
            return ((word, coeff),)
        phase = calculate_sign(self.generator, word, self.qinds)
        return self._split(word, coeff, theta, self.generator ^ word, phase)

    def prepare(self, nqubits: int) -> "MaskedPauliRotation":
        if nqubits == self.nqubits:
            return self
        return super().prepare(nqubits)


# ------------------------------------------------------------------------------------------------------------------------
# Clifford gates
# ------------------------------------------------------------------------------------------------------------------------


class CliffordGate(StaticGate):
    """
    Clifford gate applied through a lookup table.

    Parameters
    ----------
    symbol : str
        Name of the table, e.g. ``"H"`` or ``"CNOT"``.
    qinds : int | Sequence[int]
        Qubits the gate acts on, in table order (control first for CNOT).
    clifford_map : CliffordMap, optional
        Registry the table is looked up in, the module default if omitted.

    Notes
    -----
    Application never splits: the term is mapped to one term and its
    coefficient multiplied by +1 or -1.
    """

    def __init__(self, symbol: str, qinds, clifford_map: CliffordMap | None = None):
        super().__init__(qinds)
        self.symbol = symbol
        self.clifford_map = default_clifford_map if clifford_map is None else clifford_map
        self._table: CliffordTable | None = None
        if symbol in self.clifford_map:
            self._check_table(self.clifford_map.get(symbol))

    def _check_table(self, table: CliffordTable) -> None:
        if table.nqubits != len(self.qinds):
            raise InvalidGateError(
                f"CliffordGate '{self.symbol}'",
                f"table acts on {table.nqubits} qubits, gate on {len(self.qinds)}",
            )

    @property
    def table(self) -> CliffordTable:
        """
        The lookup table of this gate.

        Raises
        ------
        UnknownCliffordError
            If the symbol is not registered in the gate's Clifford map.
        """
        if self._table is not None:
            return self._table
        table = self.clifford_map.get(self.symbol)
        self._check_table(table)
        return table

    def apply(self, word: int, coeff, parameter=None) -> Tuple[Pair, ...]:
        table = self._table if self._table is not None else self.table
        sign, new_local = table[local_index(word, self.qinds)]
        return ((set_local(word, new_local, self.qinds), multiply_sign(coeff, sign)),)

    def prepare(self, nqubits: int) -> "CliffordGate":
        self.check_qubits(nqubits)
        bound = copy.copy(self)
        bound._table = self.table
        return bound

    def __repr__(self) -> str:
        return f"CliffordGate('{self.symbol}', qinds={list(self.qinds)})"


# ------------------------------------------------------------------------------------------------------------------------
# Noise channels
# ------------------------------------------------------------------------------------------------------------------------


class _NoiseChannel(ParametrizedGate):
    """
    Single-qubit noise channel with strength in [0, 1].

    Passing ``strength`` fixes it at construction time: the constructor then
    returns a ``FrozenGate`` around the channel, a static gate that consumes
    no circuit parameter.
    """

    def __new__(cls, qind=None, strength=None):
        if strength is not None:
            return FrozenGate(cls(qind), strength)
        return super().__new__(cls)

    def __init__(self, qind: int, strength: float | None = None):
        super().__init__(qind)
        if len(self.qinds) != 1:
            raise InvalidGateError(type(self).__name__, "acts on exactly one qubit")
        self.qind = self.qinds[0]

    def check_parameter(self, parameter) -> None:
        if not 0 <= parameter <= 1:
            raise NoiseStrengthError(type(self).__name__, parameter)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(qind={self.qind})"


class PauliNoise(_NoiseChannel):
    """
    Noise that is diagonal in the Pauli basis.

    Paulis in ``damped`` at the noise qubit are multiplied by ``1 - p``,
    everything else passes unchanged.
    """

    damped: frozenset = frozenset()

    def apply(self, word: int, coeff, p=None) -> Tuple[Pair, ...]:
        if get_pauli(word, self.qind) in self.damped:
            return ((word, coeff * (1 - p)),)
        return ((word, coeff),)


class DepolarizingNoise(PauliNoise):
    """Depolarizing channel, damps X, Y and Z by ``1 - p``."""
    damped = frozenset((1, 2, 3))


class PauliXNoise(PauliNoise):
    """
    Pauli-X noise, damps Y and Z by ``1 - p``.

    Equivalent to inserting an X with probability ``p/2``.
    """
    damped = frozenset((2, 3))


class PauliYNoise(PauliNoise):
    """
    Pauli-Y noise, damps X and Z by ``1 - p``.

    Equivalent to inserting a Y with probability ``p/2``.
    """
    damped = frozenset((1, 3))


class PauliZNoise(PauliNoise):
    """
    Pauli-Z (dephasing) noise, damps X and Y by ``1 - p``.

    Equivalent to inserting a Z with probability ``p/2``.
    """
    damped = frozenset((1, 2))


DephasingNoise = PauliZNoise


class PauliXDamping(PauliNoise):
    """Damps X only. Not a valid channel on its own."""
    damped = frozenset((1,))


class PauliYDamping(PauliNoise):
    """Damps Y only. Not a valid channel on its own."""
    damped = frozenset((2,))


class PauliZDamping(PauliNoise):
    """Damps Z only. Not a valid channel on its own."""
    damped = frozenset((3,))


class AmplitudeDampingNoise(_NoiseChannel):
    """
    Amplitude damping with decay probability ``gamma``.

    Notes
    -----
    Adjoint action on the noise qubit:

        I -> I
        X -> sqrt(1 - gamma) X
        Y -> sqrt(1 - gamma) Y
        Z -> (1 - gamma) Z + gamma I

    so Z terms split in two; this is the only noise channel that grows the sum.
    """

    def apply(self, word: int, coeff, gamma=None) -> Tuple[Pair, ...]:
        pauli = get_pauli(word, self.qind)
        if pauli == 0:
            return ((word, coeff),)
        if pauli != 3:
            return ((word, coeff * math.sqrt(1 - gamma)),)
        if gamma == 0:
            return ((word, coeff),)
        identity_word = word & ~(3 << (2 * self.qind))
        return ((word, coeff * (1 - gamma)), (identity_word, coeff * gamma))


# ------------------------------------------------------------------------------------------------------------------------
# Frozen gates
# ------------------------------------------------------------------------------------------------------------------------


class FrozenGate(StaticGate):
    """
    A parametrized gate with its parameter fixed at circuit construction.

    The parameter passed at application time is ignored.
    """

    def __init__(self, gate: Gate, parameter):
        if gate.nparams != 1:
            raise InvalidGateError(repr(gate), "only parametrized gates can be frozen")
        gate.check_parameter(parameter)
        self.gate = gate
        self.qinds = gate.qinds
        self.parameter = parameter

    def apply(self, word: int, coeff, parameter=None) -> Tuple[Pair, ...]:
        return self.gate.apply(word, coeff, self.parameter)

    def prepare(self, nqubits: int) -> "FrozenGate":
        return FrozenGate(self.gate.prepare(nqubits), self.parameter)

    def __repr__(self) -> str:
        return f"FrozenGate({self.gate!r}, theta={self.parameter:.3g})"


def count_parameters(circuit: Sequence[Gate]) -> int:
    """Number of parameters a circuit consumes."""
    return sum(gate.nparams for gate in circuit)


def freeze(gates, parameters):
    """
    Fix the parameters of parametrized gates.

    Parameters
    ----------
    gates : Gate | Sequence[Gate]
        A single parametrized gate or a whole circuit.
    parameters : number | Sequence[number]
        The parameter of the single gate, or one parameter per
        parametrized gate of the circuit in circuit order.

    Returns
    -------
    FrozenGate | list
        The frozen gate, or the circuit with every parametrized gate frozen.

    Raises
    ------
    ParameterCountError
        If the number of parameters does not match the circuit.
    """
    if isinstance(gates, Gate):
        return FrozenGate(gates, parameters)

    gates = list(gates)
    parameters = list(parameters)
    expected = count_parameters(gates)
    if expected != len(parameters):
        raise ParameterCountError(expected, len(parameters))
    frozen = []
    idx = 0
    for gate in gates:
        if gate.nparams:
            frozen.append(FrozenGate(gate, parameters[idx]))
            idx += 1
        else:
            frozen.append(gate)
    return frozen

