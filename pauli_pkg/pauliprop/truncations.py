# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/truncations.py
"""
Truncation predicates applied after every gate.

A predicate returns True when a term should be dropped. Truncation is an
approximation budget, never an error: it silently removes terms.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional

from .pauli_algebra import count_weight
from .path_properties import has_magnitude, is_zero

__all__ = [
    "TruncationOptions",
    "truncate_weight",
    "truncate_min_coeff",
    "truncate_frequency",
    "truncate_sins",
    "truncate_damping_coeff",
    "damping_truncation",
    "truncate",
]


def truncate_weight(word: int, max_weight) -> bool:
    return count_weight(word) > max_weight


def truncate_min_coeff(coeff, min_abs_coeff: float) -> bool:
    """True if ``|coeff| < min_abs_coeff``; coefficients without a magnitude never qualify."""
    return has_magnitude(coeff) and abs(coeff) < min_abs_coeff


def truncate_frequency(coeff, max_freq) -> bool:
    freq = getattr(coeff, "freq", None)
    return freq is not None and freq > max_freq


def truncate_sins(coeff, max_sins) -> bool:
    nsins = getattr(coeff, "nsins", None)
    return nsins is not None and nsins > max_sins


def truncate_damping_coeff(word: int, coeff, gamma: float, min_abs_coeff: float) -> bool:
    """
    Dissipation-assisted truncation.

    Drops a term if ``|coeff| * exp(-gamma * weight(word)) < min_abs_coeff``,
    i.e. high-weight terms are treated as if already damped by noise.
    """
    return abs(coeff) * math.exp(-gamma * count_weight(word)) < min_abs_coeff


def damping_truncation(gamma: float, min_abs_coeff: float) -> Callable[[int, object], bool]:
    """Predicate ``(word, coeff) -> bool`` for ``custom_truncate_fn``."""
    return partial(_damping_predicate, gamma=gamma, min_abs_coeff=min_abs_coeff)


def _damping_predicate(word, coeff, gamma, min_abs_coeff):
    return truncate_damping_coeff(word, coeff, gamma, min_abs_coeff)


@dataclass(frozen=True, slots=True)
class TruncationOptions:
    """
    Approximation budget of a propagation.

    Attributes
    ----------
    max_weight : int | float
        Drop terms acting on more qubits than this. Unlimited by default.
    min_abs_coeff : float
        Drop terms whose coefficient magnitude is below this.
    max_freq : int | float
        Drop terms whose path frequency exceeds this (path-property
        coefficients only).
    max_sins : int | float
        Drop terms whose sine count exceeds this (path-property
        coefficients only).
    custom_truncate_fn : Callable[[int, object], bool], optional
        Extra predicate on ``(word, coeff)``.

    Notes
    -----
    Predicates are OR-combined and evaluated in the fixed order weight,
    coefficient, frequency, sines, custom.
    """
    max_weight: float = math.inf
    min_abs_coeff: float = 1e-10
    max_freq: float = math.inf
    max_sins: float = math.inf
    custom_truncate_fn: Optional[Callable[[int, object], bool]] = None

    def __post_init__(self):
        for name in ("max_weight", "min_abs_coeff", "max_freq", "max_sins"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @classmethod
    def from_kwargs(cls, **kwargs) -> "TruncationOptions":
        """Build options from keyword arguments, ``None`` meaning the default."""
        return cls(**{k: v for k, v in kwargs.items() if v is not None})

    def should_truncate(self, word: int, coeff) -> bool:
        if self.max_weight != math.inf and truncate_weight(word, self.max_weight):
            return True
        if self.min_abs_coeff > 0 and truncate_min_coeff(coeff, self.min_abs_coeff):
            return True
        if self.max_freq != math.inf and truncate_frequency(coeff, self.max_freq):
            return True
        if self.max_sins != math.inf and truncate_sins(coeff, self.max_sins):
            return True
        if self.custom_truncate_fn is not None and self.custom_truncate_fn(word, coeff):
            return True
        return False


def truncate(terms, options: TruncationOptions) -> int:
    """
    Remove every term of ``terms`` (a PauliSum or a word->coeff dict) that
    an enabled predicate rejects, and any exact zero.

    Returns
    -------
    int
        Number of removed terms.
    """
    if not isinstance(terms, dict):
        terms = terms.terms
    doomed = [w for w, c in terms.items() if is_zero(c) or options.should_truncate(w, c)]
    for word in doomed:
        del terms[word]
    return len(doomed)


def _options_summary(options: TruncationOptions) -> Dict[str, object]:
    return {
        "max_weight": options.max_weight,
        "min_abs_coeff": options.min_abs_coeff,
        "max_freq": options.max_freq,
        "max_sins": options.max_sins,
        "custom": options.custom_truncate_fn is not None,
    }
