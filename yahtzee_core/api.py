"""High-level entry points used by the UI and command-line callers."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from time import perf_counter
from typing import Optional

import numpy as np

from .config import get_max_trials
from .data import SIMULATION_METHODS
from .models import SimulationResult
from .simulation import (
    InvalidTrialCountError,
    iter_trial_chunks,
    run_trials,
    run_trials_geometric,
    validate_trial_count,
)
from .stats import summarize_trials

logger = logging.getLogger(__name__)


def parse_trial_count(raw: object) -> int:
    """Convert user input into a validated trial count.

    Parameters
    ----------
    raw:
        Text typed by the user or a number from a widget. Integral floats
        such as ``100.0`` are accepted.

    Returns
    -------
    int
        The requested number of trials.

    Raises
    ------
    InvalidTrialCountError
        If the input is not a whole number, is below one, or exceeds the
        configured maximum.
    """

    if isinstance(raw, str):
        text = raw.strip()
        try:
            value: object = int(text)
        except ValueError as exc:
            raise InvalidTrialCountError(f"'{raw}' is not a whole number") from exc
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidTrialCountError(f"{raw} is not a whole number")
        value = int(raw)
    else:
        value = raw

    count = validate_trial_count(value)
    limit = get_max_trials()
    if count > limit:
        raise InvalidTrialCountError(f"Trial count {count} exceeds the maximum of {limit}")
    return count


class SimulationCancelledError(RuntimeError):
    """Raised when a simulation is stopped before any trial completed."""


def run_simulation(
    trials: int,
    seed: Optional[int] = None,
    method: str = "loop",
    chunk_size: Optional[int] = None,
    on_progress: Optional[Callable[[int], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SimulationResult:
    """Run a batch of trials and summarise it.

    Parameters
    ----------
    trials:
        Number of trials to run.
    seed:
        Optional seed for a reproducible batch. ``None`` draws fresh entropy.
    method:
        ``"loop"`` rolls dice directly, ``"geometric"`` samples the same
        distribution in closed form.
    chunk_size:
        When set, the dice loop runs in chunks of this many trials. The
        batch is identical to the unchunked one for the same seed.
        Ignored by the geometric method, which draws the whole batch at once.
    on_progress:
        Called with the number of finished trials after each chunk.
    should_stop:
        Checked before each chunk; returning True keeps the trials finished
        so far and marks the result as incomplete.

    Raises
    ------
    InvalidTrialCountError
        If ``trials`` is not a positive integer.
    ValueError
        If ``method`` is unknown.
    SimulationCancelledError
        If ``should_stop`` fired before the first chunk finished.
    """

    if method not in SIMULATION_METHODS:
        raise ValueError(f"Unknown simulation method '{method}'")
    count = validate_trial_count(trials)

    completed = True
    compute_start = perf_counter()
    if method == "geometric":
        results = run_trials_geometric(count, np.random.default_rng(seed))
        if on_progress is not None:
            on_progress(len(results))
    elif chunk_size is None and should_stop is None:
        results = run_trials(count, random.Random(seed))
        if on_progress is not None:
            on_progress(len(results))
    else:
        results, completed = collect_chunks(
            iter_trial_chunks(count, chunk_size or count, random.Random(seed)),
            on_progress=on_progress,
            should_stop=should_stop,
        )
    compute_seconds = perf_counter() - compute_start

    if not results:
        raise SimulationCancelledError("Simulation stopped before any trial finished.")

    summary = summarize_trials(results)
    logger.info(
        "Simulated %d/%d trials (%s) in %.3fs: mean=%.2f min=%d max=%d",
        len(results),
        count,
        method,
        compute_seconds,
        summary.mean,
        summary.minimum,
        summary.maximum,
    )
    return SimulationResult(
        results=results,
        summary=summary,
        seed=seed,
        method=method,
        compute_seconds=compute_seconds,
        requested_trials=count,
        completed=completed,
    )


def deadline_reached(
    time_limit: float,
    clock: Callable[[], float] = perf_counter,
) -> Callable[[], bool]:
    """Return a ``should_stop`` callback that fires ``time_limit`` seconds from now.

    Raises
    ------
    ValueError
        If ``time_limit`` is not positive.
    """

    if time_limit <= 0:
        raise ValueError("Time limit must be positive.")
    deadline = clock() + time_limit

    def _should_stop() -> bool:
        return clock() >= deadline

    return _should_stop


def collect_chunks(
    chunks: Iterable[list[int]],
    on_progress: Optional[Callable[[int], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> tuple[list[int], bool]:
    """Concatenate chunked trial results, reporting progress between chunks.

    Returns the collected results and whether every chunk was consumed.
    ``should_stop`` is checked before each chunk is requested, so no chunk
    is computed after it returns True.
    """

    collected: list[int] = []
    iterator = iter(chunks)
    while True:
        if should_stop is not None and should_stop():
            logger.info("Simulation cancelled after %d trials", len(collected))
            return collected, False
        try:
            chunk = next(iterator)
        except StopIteration:
            return collected, True
        collected.extend(chunk)
        if on_progress is not None:
            on_progress(len(collected))
