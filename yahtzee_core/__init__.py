"""Monte Carlo engine and helpers for the Yahtzee simulator."""

from .api import (
    SimulationCancelledError,
    collect_chunks,
    deadline_reached,
    parse_trial_count,
    run_simulation,
)
from .charts import (
    MAX_CHART_POINTS,
    average_label,
    build_results_chart,
    register_chart_theme,
    thin_results_frame,
)
from .config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TRIALS,
    Settings,
    configure_logging,
    get_max_trials,
    load_settings,
    set_max_trials,
)
from .data import (
    DICE_PER_ROLL,
    DIE_FACES,
    EXPECTED_ROLLS_PER_TRIAL,
    SIMULATION_METHODS,
    WIN_PROBABILITY,
)
from .models import SimulationResult, TrialSummary
from .simulation import (
    InvalidTrialCountError,
    RandomSource,
    is_yahtzee,
    iter_trial_chunks,
    roll_dice,
    run_trials,
    run_trials_geometric,
    sample_trial_geometric,
    simulate_trial,
    validate_trial_count,
)
from .stats import relative_error, results_frame, summarize_trials

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_TRIALS",
    "DICE_PER_ROLL",
    "DIE_FACES",
    "EXPECTED_ROLLS_PER_TRIAL",
    "InvalidTrialCountError",
    "MAX_CHART_POINTS",
    "RandomSource",
    "SIMULATION_METHODS",
    "Settings",
    "SimulationCancelledError",
    "SimulationResult",
    "TrialSummary",
    "WIN_PROBABILITY",
    "average_label",
    "build_results_chart",
    "collect_chunks",
    "configure_logging",
    "deadline_reached",
    "get_max_trials",
    "is_yahtzee",
    "iter_trial_chunks",
    "load_settings",
    "parse_trial_count",
    "register_chart_theme",
    "relative_error",
    "results_frame",
    "roll_dice",
    "run_simulation",
    "run_trials",
    "run_trials_geometric",
    "sample_trial_geometric",
    "set_max_trials",
    "simulate_trial",
    "summarize_trials",
    "thin_results_frame",
    "validate_trial_count",
]
