# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/__init__.py
"""
Pauli Propagation Package

This package back-propagates observables, stored as sparse sums of bit-packed
Pauli strings, through parametrized and noisy quantum circuits in the
Heisenberg picture, keeping the sums tractable by truncation.
"""

from .pauli_algebra import (
    encode_pauli,
    decode_pauli,
    get_pauli,
    set_pauli,
    commutes,
    pauli_product,
    count_weight,
    count_xy,
    count_yz,
    contains_x_or_y,
    contains_y_or_z,
    word_bits,
)
from .pauli_term import PauliString
from .pauli_sum import PauliSum
from .path_properties import PathProperties, PauliFreqTracker, wrap_coefficients
from .clifford import CliffordMap, CliffordTable, create_clifford_map, default_clifford_map
from .gates import (
    Gate,
    StaticGate,
    ParametrizedGate,
    PauliRotation,
    MaskedPauliRotation,
    CliffordGate,
    PauliNoise,
    DepolarizingNoise,
    PauliXNoise,
    PauliYNoise,
    PauliZNoise,
    DephasingNoise,
    PauliXDamping,
    PauliYDamping,
    PauliZDamping,
    AmplitudeDampingNoise,
    FrozenGate,
    freeze,
    count_parameters,
)
from .truncations import TruncationOptions, damping_truncation
from .propagator import propagate, propagate_inplace, PauliPropagator
from .overlaps import (
    overlap_by_orthogonality,
    overlap_with_zero,
    overlap_with_plus,
    overlap_with_computational,
    overlap_with_max_mixed,
    overlap_with_pauli_sum,
    expectation_product_state,
    filter_terms,
    zero_filter,
)
from .circuits import (
    bricklayer_topology,
    staircase_topology,
    staircase_topology_2d,
    hardware_efficient_circuit,
    tfi_trotter_circuit,
    from_qiskit,
)
from .exceptions import (
    QubitCountError,
    QubitIndexError,
    ParameterCountError,
    NoiseStrengthError,
    CliffordRelationError,
    InvalidGateError,
    UnknownCliffordError,
)

__all__ = [
    "encode_pauli",
    "decode_pauli",
    "get_pauli",
    "set_pauli",
    "commutes",
    "pauli_product",
    "count_weight",
    "count_xy",
    "count_yz",
    "contains_x_or_y",
    "contains_y_or_z",
    "word_bits",
    "PauliString",
    "PauliSum",
    "PathProperties",
    "PauliFreqTracker",
    "wrap_coefficients",
    "CliffordMap",
    "CliffordTable",
    "create_clifford_map",
    "default_clifford_map",
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
    "TruncationOptions",
    "damping_truncation",
    "propagate",
    "propagate_inplace",
    "PauliPropagator",
    "overlap_by_orthogonality",
    "overlap_with_zero",
    "overlap_with_plus",
    "overlap_with_computational",
    "overlap_with_max_mixed",
    "overlap_with_pauli_sum",
    "expectation_product_state",
    "filter_terms",
    "zero_filter",
    "bricklayer_topology",
    "staircase_topology",
    "staircase_topology_2d",
    "hardware_efficient_circuit",
    "tfi_trotter_circuit",
    "from_qiskit",
    "QubitCountError",
    "QubitIndexError",
    "ParameterCountError",
    "NoiseStrengthError",
    "CliffordRelationError",
    "InvalidGateError",
    "UnknownCliffordError",
]

# Version
__version__ = "0.1.0"
