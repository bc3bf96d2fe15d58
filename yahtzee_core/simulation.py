"""Monte Carlo helpers for rolling dice until a Yahtzee appears."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from typing import Optional, Protocol

import numpy as np

from .data import DICE_PER_ROLL, DIE_FACES, WIN_PROBABILITY, Roll, TrialBatch

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that can draw an inclusive random integer, e.g. ``random.Random``."""

    def randint(self, a: int, b: int) -> int: ...


class InvalidTrialCountError(ValueError):
    """Raised when a trial count is not a positive integer."""


def validate_trial_count(count: object) -> int:
    """Return ``count`` unchanged if it is a positive ``int``.

    Raises
    ------
    InvalidTrialCountError
        If ``count`` is not an integer (booleans included) or is below one.
    """

    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidTrialCountError(
            f"Trial count must be a positive integer, received {count!r}"
        )
    if count < 1:
        raise InvalidTrialCountError(f"Trial count must be at least 1, received {count}")
    return int(count)


def roll_dice(rng: Optional[RandomSource] = None) -> Roll:
    """Roll five six-sided dice using ``rng`` or the process-wide generator."""

    source = rng if rng is not None else random
    return [source.randint(1, DIE_FACES) for _ in range(DICE_PER_ROLL)]


def is_yahtzee(roll: Roll) -> bool:
    """Return True when every die in ``roll`` shows the same face."""

    return len(set(roll)) == 1


def simulate_trial(rng: Optional[RandomSource] = None) -> int:
    """Roll repeatedly until a Yahtzee and return how many rolls it took.

    The loop has no upper bound; each roll wins with probability 1/1296.
    """

    attempts = 0
    while True:
        attempts += 1
        if is_yahtzee(roll_dice(rng)):
            return attempts


def sample_trial_geometric(rng: np.random.Generator) -> int:
    """Draw a trial result directly from the geometric distribution.

    Equivalent in distribution to :func:`simulate_trial`, but not in value
    for a given seed.
    """

    return int(rng.geometric(WIN_PROBABILITY))


def run_trials(count: int, rng: Optional[RandomSource] = None) -> TrialBatch:
    """Run ``count`` independent trials and return their roll counts in order.

    Parameters
    ----------
    count:
        Number of trials; must be a positive integer.
    rng:
        Random source shared by every trial. Defaults to the ``random`` module.

    Raises
    ------
    InvalidTrialCountError
        If ``count`` is not a positive integer. No trial is run in that case.
    """

    total = validate_trial_count(count)
    logger.debug("Running %d trials", total)
    results = [simulate_trial(rng) for _ in range(total)]
    logger.debug("Finished %d trials", total)
    return results


def run_trials_geometric(count: int, rng: Optional[np.random.Generator] = None) -> TrialBatch:
    """Vectorised counterpart of :func:`run_trials` using geometric draws."""

    total = validate_trial_count(count)
    generator = rng if rng is not None else np.random.default_rng()
    draws = generator.geometric(WIN_PROBABILITY, size=total)
    return [int(value) for value in draws]


def iter_trial_chunks(
    count: int,
    chunk_size: int,
    rng: Optional[RandomSource] = None,
) -> Iterator[TrialBatch]:
    """Yield consecutive sub-batches that together hold ``count`` trials.

    Concatenating the chunks gives the same results as ``run_trials(count, rng)``
    when ``rng`` starts from the same state. Callers may stop iterating between
    chunks to cancel the remaining work.
    """

    total = validate_trial_count(count)
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1.")
    remaining = total
    while remaining > 0:
        size = min(chunk_size, remaining)
        yield [simulate_trial(rng) for _ in range(size)]
        remaining -= size
