# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/path_properties.py
"""
Coefficient wrappers that record properties of the Pauli path a term took.

A path-properties object wraps the numeric coefficient in its ``coeff`` field
and carries extra counters. Scaling touches ``coeff`` only; merging two paths
that land on the same Pauli word adds the coefficients and keeps the minimum
of every other field.

The module-level helpers (:func:`apply_cos`, :func:`apply_sin`,
:func:`multiply_sign`, :func:`coefficient_value`) are what gates call on a
coefficient. They accept plain numbers, path-properties objects and any other
type that offers ``*``, ``+``, ``as_cos_branch`` and ``as_sin_branch``, so a
deferred/symbolic coefficient can be dropped into the same propagation loop.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, fields, replace

__all__ = [
    "PathProperties",
    "PauliFreqTracker",
    "apply_cos",
    "apply_sin",
    "multiply_sign",
    "coefficient_value",
    "is_zero",
    "has_magnitude",
    "wrap_coefficients",
]


class PathProperties:
    """
    Base class for immutable coefficient wrappers.

    Subclasses are frozen dataclasses with a ``coeff`` field. Every operation
    returns a new object.
    """

    __slots__ = ()

    def tonumber(self):
        """Numerical coefficient carried by the wrapper."""
        return self.coeff

    def scale(self, value) -> "PathProperties":
        return replace(self, coeff=self.coeff * value)

    def merge_with(self, other: "PathProperties") -> "PathProperties":
        """Add the coefficients, take the minimum of every other field."""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot merge {type(self).__name__} with {type(other).__name__}"
            )
        updates = {}
        for f in fields(self):
            a, b = getattr(self, f.name), getattr(other, f.name)
            updates[f.name] = a + b if f.name == "coeff" else min(a, b)
        return replace(self, **updates)

    def as_cos_branch(self, theta: float, sign=1) -> "PathProperties":
        return self.scale(math.cos(theta) * sign)

    def as_sin_branch(self, theta: float, sign=1) -> "PathProperties":
        return self.scale(math.sin(theta) * sign)

    def __mul__(self, value):
        if isinstance(value, numbers.Number):
            return self.scale(value)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, value):
        if isinstance(value, numbers.Number):
            return self.scale(1 / value)
        return NotImplemented

    def __neg__(self):
        return self.scale(-1)

    def __add__(self, other):
        if isinstance(other, PathProperties):
            return self.merge_with(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, PathProperties):
            return self.merge_with(-other)
        return NotImplemented

    def __abs__(self):
        return abs(self.coeff)

    def __float__(self):
        return float(self.coeff)


@dataclass(frozen=True, slots=True)
class PauliFreqTracker(PathProperties):
    """
    Coefficient wrapper counting the sine and cosine factors of a path.

    Attributes
    ----------
    coeff : float
        Numerical coefficient.
    nsins : int
        Number of sine factors picked up from Pauli rotations.
    ncos : int
        Number of cosine factors picked up from Pauli rotations.
    freq : int
        ``nsins + ncos`` along the path, i.e. how often the path went
        through a non-commuting rotation.

    Notes
    -----
    When two paths merge the counters take the minimum over both, so the
    counters of a term are those of its "cheapest" contributing path.
    """
    coeff: float
    nsins: int = 0
    ncos:  int = 0
    freq:  int = 0

    def as_cos_branch(self, theta: float, sign=1) -> "PauliFreqTracker":
        return PauliFreqTracker(self.coeff * math.cos(theta) * sign,
                                self.nsins, self.ncos + 1, self.freq + 1)

    def as_sin_branch(self, theta: float, sign=1) -> "PauliFreqTracker":
        return PauliFreqTracker(self.coeff * math.sin(theta) * sign,
                                self.nsins + 1, self.ncos, self.freq + 1)


def apply_cos(coeff, theta: float, sign=1):
    """Coefficient of the cosine branch of a Pauli rotation."""
    if isinstance(coeff, numbers.Number):
        return coeff * math.cos(theta) * sign
    return coeff.as_cos_branch(theta, sign)


def apply_sin(coeff, theta: float, sign=1):
    """Coefficient of the sine branch of a Pauli rotation."""
    if isinstance(coeff, numbers.Number):
        return coeff * math.sin(theta) * sign
    return coeff.as_sin_branch(theta, sign)


def multiply_sign(coeff, sign):
    if sign == 1:
        return coeff
    return coeff * sign


def coefficient_value(coeff):
    """Plain number behind ``coeff`` (itself for numbers)."""
    if isinstance(coeff, numbers.Number):
        return coeff
    return coeff.tonumber()


def has_magnitude(coeff) -> bool:
    return isinstance(coeff, (numbers.Number, PathProperties))


def is_zero(coeff) -> bool:
    """Whether ``coeff`` is exactly the additive identity."""
    if isinstance(coeff, numbers.Number):
        return coeff == 0
    if isinstance(coeff, PathProperties):
        return coeff.coeff == 0
    return False


def wrap_coefficients(obj, cls=PauliFreqTracker):
    """
    Wrap the coefficient(s) of a PauliString or PauliSum into ``cls``.

    ``cls`` must be constructible from a single coefficient.

    Returns
    -------
    PauliString | PauliSum
        A new object of the same kind as ``obj``.
    """
    if hasattr(obj, "terms"):
        return type(obj)(obj.nqubits, {w: cls(c) for w, c in obj.terms.items()})
    return replace(obj, coeff=cls(obj.coeff))
