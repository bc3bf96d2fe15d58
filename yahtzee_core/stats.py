"""Summary statistics derived from trial batches."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from .models import TrialSummary


def summarize_trials(results: Sequence[int]) -> TrialSummary:
    """Compute mean, min, max and spread for a non-empty batch of results.

    Raises
    ------
    ValueError
        If ``results`` is empty.
    """

    if len(results) == 0:
        raise ValueError("Cannot summarise an empty trial batch.")
    values = np.asarray(results, dtype=np.int64)
    return TrialSummary(
        mean=float(values.mean()),
        minimum=int(values.min()),
        maximum=int(values.max()),
        median=float(np.median(values)),
        std_dev=float(values.std()),
        total_trials=int(values.size),
    )


def results_frame(results: Sequence[int]) -> pd.DataFrame:
    """Return the batch as a two-column frame with 1-based trial numbers."""

    return pd.DataFrame(
        {
            "trial": np.arange(1, len(results) + 1, dtype=np.int64),
            "rolls": np.asarray(results, dtype=np.int64),
        }
    )


def relative_error(observed_mean: float, expected: float) -> float:
    """Return the signed relative deviation of ``observed_mean`` from ``expected``."""

    if expected == 0:
        raise ValueError("Expected value must be non-zero.")
    return (observed_mean - expected) / expected
