"""Dataclasses shared across the simulation, statistics and UI modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TrialSummary:
    """Aggregate statistics over a batch of trial results."""

    mean: float
    minimum: int
    maximum: int
    median: float
    std_dev: float
    total_trials: int


@dataclass
class SimulationResult:
    """Bundle containing raw trial results and derived reporting artefacts."""

    results: list[int]
    summary: TrialSummary
    seed: Optional[int]
    method: str
    compute_seconds: float
    requested_trials: int = 0
    completed: bool = True
