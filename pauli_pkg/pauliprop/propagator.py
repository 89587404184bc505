# -*- coding: utf-8 -*-

# pauli_pkg/pauliprop/propagator.py
"""
Heisenberg-picture propagation of a Pauli sum through a circuit.

The circuit is walked in reverse. For every gate each term is passed through
``gate.apply``; outputs that keep the input word are written back in place,
everything else is collected in an auxiliary dict that is merged into the
active one afterwards. The sum is truncated after every gate.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Sequence

from tqdm.auto import tqdm

from .exceptions import ParameterCountError, QubitCountError
from .gates import Gate, count_parameters
from .pauli_sum import PauliSum, add_term, merge_terms
from .pauli_term import PauliString
from .truncations import TruncationOptions, _options_summary, truncate

__all__ = ["propagate", "propagate_inplace", "PauliPropagator"]

logger = logging.getLogger(__name__)

# Threshold for parallel processing and maximum number of worker processes
_PARALLEL_THRESHOLD = 2000
_MAX_WORKERS = 8  # or os.cpu_count()


def _apply_gate_kernel_batch(args):
    """
    Apply one gate to a batch of terms without touching shared state.

    Parameters
    ----------
    args : tuple
        ``(gate, parameter, terms)`` with ``terms`` a list of (word, coeff).

    Returns
    -------
    Tuple[list, list, dict]
        In-place updates ``(word, coeff)``, words whose first output moved
        to another word, and the worker's private auxiliary dict.
    """
    gate, parameter, terms = args
    updates = []
    stale = []
    aux: Dict[int, object] = {}
    for word, coeff in terms:
        outputs = gate.apply(word, coeff, parameter)
        first_word, first_coeff = outputs[0]
        if first_word == word:
            updates.append((word, first_coeff))
        else:
            stale.append(word)
            add_term(aux, first_word, first_coeff)
        for new_word, new_coeff in outputs[1:]:
            add_term(aux, new_word, new_coeff)
    return updates, stale, aux


def _apply_to_all(gate: Gate, parameter, active: dict, aux: dict) -> None:
    """Sequential kernel: rewrite ``active`` in place, spill new words into ``aux``."""
    stale = []
    for word, coeff in active.items():
        outputs = gate.apply(word, coeff, parameter)
        first_word, first_coeff = outputs[0]
        if first_word == word:
            # overwriting an existing key keeps the dict size fixed
            active[word] = first_coeff
        else:
            stale.append(word)
            add_term(aux, first_word, first_coeff)
        for new_word, new_coeff in outputs[1:]:
            add_term(aux, new_word, new_coeff)
    for word in stale:
        del active[word]


def _apply_to_all_parallel(executor, nworkers: int, gate: Gate, parameter,
                           active: dict, aux: dict) -> dict:
    items = list(active.items())
    chunk_size = max(1, -(-len(items) // nworkers))
    chunks = [(gate, parameter, items[i:i + chunk_size])
              for i in range(0, len(items), chunk_size)]
    for updates, stale, chunk_aux in executor.map(_apply_gate_kernel_batch, chunks):
        for word, coeff in updates:
            active[word] = coeff
        for word in stale:
            del active[word]
        aux, _ = merge_terms(aux, chunk_aux)
    return aux


def _prepare_circuit(circuit: Sequence[Gate], nqubits: int) -> List[Gate]:
    return [gate.prepare(nqubits) for gate in circuit]


def _check_parameters(circuit: Sequence[Gate], parameters: Sequence) -> None:
    expected = count_parameters(circuit)
    if expected != len(parameters):
        raise ParameterCountError(expected, len(parameters))
    idx = 0
    for gate in circuit:
        if gate.nparams:
            gate.check_parameter(parameters[idx])
            idx += 1


def _resolve_options(options: TruncationOptions | None, kwargs: dict) -> TruncationOptions:
    if options is not None and kwargs:
        raise TypeError("Pass either options= or truncation keyword arguments, not both")
    if options is None:
        options = TruncationOptions.from_kwargs(**kwargs)
    return options


def _run(prepared: List[Gate], parameters: Sequence, active: dict, aux: dict,
         options: TruncationOptions, progress: bool = False,
         use_parallel: bool = False, max_workers: int | None = None) -> dict:
    """
    Core loop over prepared gates. Returns the dict holding the result,
    which is one of ``active`` or ``aux``.
    """
    nworkers = max_workers or _MAX_WORKERS
    executor = ProcessPoolExecutor(max_workers=nworkers) if use_parallel else None
    cursor = len(parameters)
    ngates = len(prepared)
    try:
        for step, gate in enumerate(tqdm(reversed(prepared), total=ngates,
                                         desc="Propagating", disable=not progress)):
            parameter = None
            if gate.nparams:
                cursor -= 1
                parameter = parameters[cursor]

            if executor is None or len(active) < _PARALLEL_THRESHOLD:
                _apply_to_all(gate, parameter, active, aux)
            else:
                aux = _apply_to_all_parallel(executor, nworkers, gate, parameter, active, aux)

            active, aux = merge_terms(active, aux)
            ndropped = truncate(active, options)
            logger.debug("gate %d/%d %r: %d terms, %d truncated",
                         step + 1, ngates, gate, len(active), ndropped)

            if not active:
                logger.debug("all terms truncated after %d gates", step + 1)
                break
    finally:
        if executor:
            executor.shutdown()
    return active


def _as_pauli_sum(observable) -> PauliSum:
    if isinstance(observable, PauliString):
        return PauliSum(observable.nqubits, observable)
    if isinstance(observable, PauliSum):
        return observable
    raise TypeError(f"Cannot propagate {type(observable).__name__}")


def propagate_inplace(circuit: Sequence[Gate], psum: PauliSum, parameters=None, *,
                      options: TruncationOptions | None = None,
                      progress: bool = False,
                      use_parallel: bool = False,
                      max_workers: int | None = None,
                      **truncation_kwargs) -> PauliSum:
    """
    Like :func:`propagate` but reuses and mutates ``psum``.

    Returns
    -------
    PauliSum
        ``psum`` itself, now holding the propagated terms.
    """
    parameters = [] if parameters is None else list(parameters)
    options = _resolve_options(options, truncation_kwargs)
    _check_parameters(circuit, parameters)
    prepared = _prepare_circuit(circuit, psum.nqubits)

    logger.debug("propagating %d terms through %d gates with %s",
                 len(psum), len(prepared), _options_summary(options))
    psum.terms = _run(prepared, parameters, psum.terms, {}, options,
                      progress=progress, use_parallel=use_parallel,
                      max_workers=max_workers)
    logger.info("propagation finished with %d terms", len(psum))
    return psum


def propagate(circuit: Sequence[Gate], observable, parameters=None, *,
              options: TruncationOptions | None = None,
              progress: bool = False,
              use_parallel: bool = False,
              max_workers: int | None = None,
              **truncation_kwargs) -> PauliSum:
    """
    Propagate an observable backwards through a circuit.

    Parameters
    ----------
    circuit : Sequence[Gate]
        Gates in circuit (forward) order.
    observable : PauliString | PauliSum
        Observable to propagate; it is not modified.
    parameters : Sequence[float], optional
        One value per parametrized gate, in forward circuit order.
    options : TruncationOptions, optional
        Approximation budget. Alternatively pass its fields as keywords
        (``max_weight``, ``min_abs_coeff``, ``max_freq``, ``max_sins``,
        ``custom_truncate_fn``).
    progress : bool
        Show a tqdm progress bar over the gates.
    use_parallel : bool
        Apply each gate to large sums in a process pool.
    max_workers : int, optional
        Pool size for ``use_parallel``.

    Returns
    -------
    PauliSum
        The propagated (Heisenberg-evolved, truncated) observable.

    Raises
    ------
    ParameterCountError
        If ``len(parameters)`` differs from the number of parametrized gates.
    QubitIndexError
        If a gate acts outside the observable's register.
    NoiseStrengthError
        If a noise parameter lies outside [0, 1].
    UnknownCliffordError
        If a Clifford gate has no registered table.

    Examples
    --------
    >>> circuit = [PauliRotation("X", 0)]
    >>> obs = PauliString.from_label("Z")
    >>> propagate(circuit, obs, [0.3])  # doctest: +SKIP
    """
    psum = _as_pauli_sum(observable).copy()
    return propagate_inplace(circuit, psum, parameters, options=options,
                             progress=progress, use_parallel=use_parallel,
                             max_workers=max_workers, **truncation_kwargs)


class PauliPropagator:
    """
    Reusable propagator bound to one circuit.

    Gates are validated and prepared once; the two term buffers are owned by
    the propagator and reused between calls.

    Attributes
    ----------
    circuit : List[Gate]
        The circuit in forward order.
    n : int
        Number of qubits.
    parameters : List[float]
        Default parameters (set when built from a qiskit circuit).
    """

    def __init__(self, circuit, nqubits: int | None = None, parameters=None):
        """
        Parameters
        ----------
        circuit : Sequence[Gate] | QuantumCircuit
            Gate list, or a qiskit circuit converted with
            :func:`pauliprop.circuits.from_qiskit`.
        nqubits : int, optional
            Register size, taken from the qiskit circuit if omitted.
        parameters : Sequence[float], optional
            Default parameters for :meth:`propagate`.
        """
        if hasattr(circuit, "num_qubits"):
            from .circuits import from_qiskit
            if nqubits is None:
                nqubits = circuit.num_qubits
            circuit, qc_params = from_qiskit(circuit)
            if parameters is None:
                parameters = qc_params
        if nqubits is None:
            raise ValueError("nqubits is required for a gate-list circuit")
        self.circuit = list(circuit)
        self.n = nqubits
        self.parameters = list(parameters) if parameters is not None else None
        self._prepared = _prepare_circuit(self.circuit, nqubits)
        self._aux: Dict[int, object] = {}

    @property
    def nparams(self) -> int:
        return count_parameters(self.circuit)

    def propagate(self, observable, parameters=None, *,
                  options: TruncationOptions | None = None,
                  progress: bool = False, use_parallel: bool = False,
                  max_workers: int | None = None,
                  **truncation_kwargs) -> PauliSum:
        """
        Propagate ``observable`` through the bound circuit.

        See :func:`propagate` for the arguments.
        """
        psum = _as_pauli_sum(observable)
        if psum.nqubits != self.n:
            raise QubitCountError(self.n, psum.nqubits)
        if parameters is None:
            parameters = self.parameters if self.parameters is not None else []
        parameters = list(parameters)
        _check_parameters(self.circuit, parameters)
        options = _resolve_options(options, truncation_kwargs)

        active = dict(psum.terms)
        self._aux.clear()
        result = _run(self._prepared, parameters, active, self._aux, options,
                      progress=progress, use_parallel=use_parallel,
                      max_workers=max_workers)
        # keep whichever dict was not handed out as the result
        if result is self._aux:
            self._aux = active
        self._aux.clear()
        out = PauliSum(self.n)
        out.terms = result
        logger.info("propagation finished with %d terms", len(out))
        return out

    def expectation(self, observable, product_label: str, parameters=None,
                    **kwargs) -> float:
        """
        Expectation of ``observable`` after the circuit, on a product state.

        Parameters
        ----------
        observable : PauliString | PauliSum
            Observable measured at the end of the circuit
        product_label : str
            Initial product state over "01+-rl", qubit 0 first
        """
        from .overlaps import expectation_product_state
        return expectation_product_state(self.propagate(observable, parameters, **kwargs),
                                         product_label)

    def __repr__(self) -> str:
        return f"PauliPropagator(n={self.n}, gates={len(self.circuit)}, nparams={self.nparams})"
