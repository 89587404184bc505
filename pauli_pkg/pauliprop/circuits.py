# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/circuits.py
"""
Circuit construction helpers.

Circuits are plain lists of gates in forward order. This module provides
qubit-pair topologies, a few standard ansatz builders, and the conversion
of a qiskit ``QuantumCircuit`` into a gate list plus parameter list.
"""

import math
from typing import Callable, Dict, List, Tuple

from .gates import CliffordGate, FrozenGate, Gate, PauliRotation

__all__ = [
    "bricklayer_topology",
    "staircase_topology",
    "staircase_topology_2d",
    "hardware_efficient_circuit",
    "tfi_trotter_circuit",
    "QiskitGateRules",
    "from_qiskit",
]


def bricklayer_topology(nqubits: int, periodic: bool = False) -> List[Tuple[int, int]]:
    """
    Nearest-neighbour pairs in brick order: even bonds first, then odd bonds.

    With ``periodic=True`` the wrap-around pair joins whichever sublayer
    leaves both its qubits free: the even one for an odd qubit count, the
    odd one otherwise.

    >>> bricklayer_topology(5)
    [(0, 1), (2, 3), (1, 2), (3, 4)]
    >>> bricklayer_topology(5, periodic=True)
    [(0, 1), (2, 3), (4, 0), (1, 2), (3, 4)]
    """
    wrap = [(nqubits - 1, 0)] if periodic and nqubits > 2 else []
    even = [(q, q + 1) for q in range(0, nqubits - 1, 2)]
    odd = [(q, q + 1) for q in range(1, nqubits - 1, 2)]
    if nqubits % 2:
        return even + wrap + odd
    return even + odd + wrap


def staircase_topology(nqubits: int, periodic: bool = False) -> List[Tuple[int, int]]:
    """Nearest-neighbour pairs in order (0, 1), (1, 2), ..."""
    edges = [(q, q + 1) for q in range(nqubits - 1)]
    if periodic and nqubits > 2:
        edges.append((nqubits - 1, 0))
    return edges


def staircase_topology_2d(nx: int, ny: int) -> List[Tuple[int, int]]:
    """
    Edges of the staircase walk over an nx x ny grid (row-major, 0-based).

    Parameters
    ----------
    nx : int
        Number of columns in the grid
    ny : int
        Number of rows in the grid

    Returns
    -------
    List[Tuple[int, int]]
        Ordered, de-duplicated list of qubit pairs
    """
    next_inds, temp_inds, edges = [0], [], []
    while next_inds:
        for ind in next_inds:
            if (ind + 1) % nx != 0:                 # step right
                edges.append((ind, ind + 1)); temp_inds.append(ind + 1)
            if ind // nx + 1 < ny:                  # step down
                edges.append((ind, ind + nx)); temp_inds.append(ind + nx)
        next_inds, temp_inds = temp_inds, []
    seen, uniq = set(), []
    for e in edges:                                 # preserve order, dedup
        if e not in seen:
            seen.add(e); uniq.append(e)
    return uniq


def hardware_efficient_circuit(nqubits: int, nlayers: int, topology=None) -> List[Gate]:
    """
    Hardware-efficient ansatz.

    Every layer applies X, Z, X rotations on each qubit followed by a YY
    rotation on each pair of ``topology`` (bricklayer by default). All
    rotations are parametrized.

    Examples
    --------
    >>> circuit = hardware_efficient_circuit(4, 2)
    >>> len(circuit)
    30
    """
    if topology is None:
        topology = bricklayer_topology(nqubits)
    circuit: List[Gate] = []
    for _ in range(nlayers):
        for q in range(nqubits):
            circuit.append(PauliRotation("X", q))
            circuit.append(PauliRotation("Z", q))
            circuit.append(PauliRotation("X", q))
        for pair in topology:
            circuit.append(PauliRotation("YY", pair))
    return circuit


def tfi_trotter_circuit(nqubits, nlayers, topology=None, start_with_ZZ=True):
    """
    Trotterized transverse-field Ising evolution.

    Parameters
    ----------
    nqubits : int
        Number of qubits in the circuit
    nlayers : int
        Number of Trotter layers
    topology : List[Tuple[int, int]], optional
        Qubit pairs of the ZZ interaction, bricklayer if None
    start_with_ZZ : bool, optional
        If True, every layer applies the ZZ rotations before the X
        rotations, otherwise the other way round. Default is True

    Returns
    -------
    List[Gate]
        Parametrized circuit with ``nlayers * (nqubits + len(topology))``
        parameters

    Examples
    --------
    >>> circuit = tfi_trotter_circuit(4, 3)
    >>> sum(g.nparams for g in circuit)
    21
    """
    if topology is None:
        topology = bricklayer_topology(nqubits)

    circuit: List[Gate] = []
    for _ in range(nlayers):
        zz_layer = [PauliRotation("ZZ", pair) for pair in topology]
        x_layer = [PauliRotation("X", q) for q in range(nqubits)]
        if start_with_ZZ:
            circuit += zz_layer + x_layer
        else:
            circuit += x_layer + zz_layer
    return circuit


# ------------------------------------------------------------------------------------------------------------------------
# qiskit import
# ------------------------------------------------------------------------------------------------------------------------


class QiskitGateRules:
    """
    Registry of conversion rules from qiskit instruction names to gates.

    A rule takes the tuple of qubit indices and the numerical instruction
    parameters and returns a list of ``(gate, parameter)`` pairs, where the
    parameter is None for gates that take none.

    Attributes
    ----------
    _registry : Dict[str, Callable]
        Dictionary mapping qiskit names to their conversion rules.
    _param_extractors : Dict[str, Callable]
        Dictionary mapping qiskit names to their parameter extraction functions.
    """
    _registry: Dict[str, Callable] = {}
    _param_extractors: Dict[str, Callable] = {}

    @classmethod
    def get(cls, name: str) -> Callable:
        """
        Get the conversion rule for a named qiskit instruction.

        Raises
        ------
        NotImplementedError
            If no rule exists for the requested gate.
        """
        if name not in cls._registry:
            raise NotImplementedError(f"No rule for gate '{name}'")
        return cls._registry[name]

    @classmethod
    def extract_params(cls, gate_name: str, instruction) -> tuple:
        """Extract numerical parameters for a gate from a qiskit instruction."""
        if gate_name in cls._param_extractors:
            return cls._param_extractors[gate_name](instruction)
        return tuple(float(p) for p in instruction.operation.params)

    @classmethod
    def register_param_extractor(cls, gate_name: str, extractor: Callable):
        cls._param_extractors[gate_name] = extractor

    @staticmethod
    def register_gate(*names: str):
        """
        Decorator to register a conversion rule under one or more names.

        Example
        -------
        @QiskitGateRules.register_gate("h")
        def _h(qinds):
            return [(CliffordGate("H", qinds), None)]
        """
        def decorator(func):
            for name in names:
                QiskitGateRules._registry[name] = func
            return func
        return decorator


_SKIPPED = {"barrier", "id", "delay"}


def _rotation_rule(symbols: str):
    def rule(qinds, theta):
        return [(PauliRotation(symbols, qinds), theta)]
    return rule


for _name, _symbols in (("rx", "X"), ("ry", "Y"), ("rz", "Z"), ("p", "Z"),
                        ("rxx", "XX"), ("ryy", "YY"), ("rzz", "ZZ")):
    QiskitGateRules.register_gate(_name)(_rotation_rule(_symbols))


def _clifford_rule(symbol: str):
    def rule(qinds):
        return [(CliffordGate(symbol, qinds), None)]
    return rule


for _name, _symbol in (("h", "H"), ("x", "X"), ("y", "Y"), ("z", "Z"),
                       ("s", "S"), ("cx", "CNOT"), ("swap", "SWAP")):
    QiskitGateRules.register_gate(_name)(_clifford_rule(_symbol))


@QiskitGateRules.register_gate("sdg")
def _sdg(qinds):
    # S^dagger = Z S
    return [(CliffordGate("S", qinds), None), (CliffordGate("Z", qinds), None)]


@QiskitGateRules.register_gate("cz")
def _cz(qinds):
    control, target = qinds
    return [(CliffordGate("H", target), None),
            (CliffordGate("CNOT", (control, target)), None),
            (CliffordGate("H", target), None)]


@QiskitGateRules.register_gate("t")
def _t(qinds):
    # T = RZ(pi/4) up to a global phase
    return [(FrozenGate(PauliRotation("Z", qinds), math.pi / 4), None)]


@QiskitGateRules.register_gate("tdg")
def _tdg(qinds):
    return [(FrozenGate(PauliRotation("Z", qinds), -math.pi / 4), None)]


@QiskitGateRules.register_gate("sx")
def _sx(qinds):
    return [(FrozenGate(PauliRotation("X", qinds), math.pi / 2), None)]


def from_qiskit(qc) -> Tuple[List[Gate], List[float]]:
    """
    Convert a qiskit QuantumCircuit into a gate list and its parameters.

    Parameters
    ----------
    qc : QuantumCircuit
        Circuit with bound (numerical) parameters

    Returns
    -------
    Tuple[List[Gate], List[float]]
        Gates in forward order and one parameter per parametrized gate

    Raises
    ------
    NotImplementedError
        If the circuit contains an instruction without a conversion rule
    """
    q2i = {q: i for i, q in enumerate(qc.qubits)}
    gates: List[Gate] = []
    parameters: List[float] = []
    for instr in qc.data:
        name = instr.operation.name
        if name in _SKIPPED:
            continue
        rule = QiskitGateRules.get(name)
        qidx = tuple(q2i[q] for q in instr.qubits)
        extra = QiskitGateRules.extract_params(name, instr)
        for gate, param in rule(qidx, *extra):
            gates.append(gate)
            if gate.nparams:
                parameters.append(param)
    return gates, parameters
