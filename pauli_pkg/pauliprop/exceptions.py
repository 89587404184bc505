# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/exceptions.py
"""
Configuration and lookup errors raised by pauliprop.

All of them are raised eagerly, either when a gate is constructed or at the
start of a propagation. Truncation never raises.
"""


class QubitCountError(ValueError):
    """Raised when two operands disagree on the number of qubits."""

    def __init__(self, n1: int, n2: int) -> None:
        super().__init__(f"Qubit count mismatch: {n1} vs {n2}")


class QubitIndexError(ValueError):
    """Raised when a gate targets a qubit outside the register."""

    def __init__(self, target: int, n: int) -> None:
        super().__init__(f"Qubit index {target} exceeds system size {n}")


class ParameterCountError(ValueError):
    """Raised when the number of parameters does not match the circuit."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Expected {expected} parameters, got {got}")


class NoiseStrengthError(ValueError):
    """Raised when a noise probability lies outside [0, 1]."""

    def __init__(self, name: str, value) -> None:
        super().__init__(f"{name} strength must lie in [0, 1], got {value}")


class CliffordRelationError(ValueError):
    """Raised when a Clifford relation set cannot be turned into a table."""


class InvalidGateError(ValueError):
    """Raised when a gate is built from inconsistent symbols or qubits."""

    def __init__(self, gate: str, reason: str = "") -> None:
        msg = f"Invalid gate: {gate}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class UnknownCliffordError(KeyError):
    """Raised when a Clifford symbol has no registered table."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"No Clifford table registered for '{symbol}'")
        self.symbol = symbol

    def __str__(self) -> str:
        return self.args[0]
