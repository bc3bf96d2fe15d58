"""Streamlit front-end for the Yahtzee simulator."""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from yahtzee_core import (
    DEFAULT_TRIALS,
    EXPECTED_ROLLS_PER_TRIAL,
    MAX_CHART_POINTS,
    InvalidTrialCountError,
    SimulationCancelledError,
    SimulationResult,
    build_results_chart,
    configure_logging,
    deadline_reached,
    load_settings,
    parse_trial_count,
    register_chart_theme,
    relative_error,
    results_frame,
    run_simulation,
    set_max_trials,
)

METHOD_LABELS = {
    "loop": "Roll dice until Yahtzee",
    "geometric": "Geometric draw (fast)",
}


def ensure_session_state_defaults() -> None:
    """Populate Streamlit session state with expected default entries."""

    st.session_state.setdefault("trials_input", DEFAULT_TRIALS)
    st.session_state.setdefault("use_seed", False)
    st.session_state.setdefault("seed_input", 42)
    st.session_state.setdefault("method_input", "loop")
    st.session_state.setdefault("use_time_limit", False)
    st.session_state.setdefault("time_limit_input", 30.0)
    st.session_state.setdefault("simulation_result", None)
    st.session_state.setdefault("simulation_notice", None)


def handle_simulate(chunk_size: int) -> None:
    """Validate the trial input and run a simulation, ignoring invalid input."""

    try:
        count = parse_trial_count(st.session_state.trials_input)
    except InvalidTrialCountError:
        return

    seed = int(st.session_state.seed_input) if st.session_state.use_seed else None
    should_stop = (
        deadline_reached(float(st.session_state.time_limit_input))
        if st.session_state.use_time_limit
        else None
    )
    st.session_state.simulation_notice = None
    progress = st.progress(0.0, text="Simulating...")

    def report(done: int) -> None:
        progress.progress(done / count, text=f"Simulating... {done}/{count}")

    with st.spinner("🎲 Simulating..."):
        try:
            result = run_simulation(
                count,
                seed=seed,
                method=st.session_state.method_input,
                chunk_size=chunk_size,
                on_progress=report,
                should_stop=should_stop,
            )
        except SimulationCancelledError:
            st.session_state.simulation_notice = "Time limit reached before any trial finished."
            return
        finally:
            progress.empty()
    st.session_state.simulation_result = result
    if not result.completed:
        st.session_state.simulation_notice = (
            f"Time limit reached: showing {len(result.results)} of "
            f"{result.requested_trials} trials."
        )


def render_controls() -> bool:
    """Render the trial input row and return whether Simulate was pressed."""

    input_col, button_col = st.columns([3, 1], vertical_alignment="bottom")
    input_col.number_input(
        "Number of trials",
        step=1,
        format="%d",
        key="trials_input",
        placeholder="Number of trials",
    )
    pressed = button_col.button("Simulate", type="primary", use_container_width=True)

    with st.expander("Options"):
        st.radio(
            "Method",
            options=list(METHOD_LABELS),
            format_func=METHOD_LABELS.get,
            key="method_input",
            horizontal=True,
        )
        seed_col, value_col = st.columns(2)
        seed_col.checkbox("Use fixed seed", key="use_seed")
        value_col.number_input(
            "Seed",
            min_value=0,
            step=1,
            key="seed_input",
            disabled=not st.session_state.use_seed,
        )
        limit_col, seconds_col = st.columns(2)
        limit_col.checkbox(
            "Stop after a time limit",
            key="use_time_limit",
            help="Keeps the trials finished so far when the limit is reached.",
        )
        seconds_col.number_input(
            "Seconds",
            min_value=1.0,
            step=5.0,
            key="time_limit_input",
            disabled=not st.session_state.use_time_limit,
        )
    return pressed


def render_summary(result: SimulationResult) -> None:
    """Render average, min and max metrics for the latest batch."""

    summary = result.summary
    deviation = relative_error(summary.mean, EXPECTED_ROLLS_PER_TRIAL)
    with st.container(border=True):
        cols = st.columns(3)
        cols[0].metric(
            "Average rolls",
            f"{summary.mean:.2f}",
            delta=f"{deviation * 100:+.1f}% vs {EXPECTED_ROLLS_PER_TRIAL}",
            delta_color="off",
        )
        cols[1].metric("Min rolls", f"{summary.minimum}")
        cols[2].metric("Max rolls", f"{summary.maximum}")
        st.caption(
            f"{summary.total_trials} trials · median {summary.median:.1f} · "
            f"std dev {summary.std_dev:.1f} · {result.compute_seconds:.2f}s"
        )


def render_results_list(result: SimulationResult) -> None:
    """Render the per-trial list and a CSV download."""

    st.markdown("**Results:**")
    with st.container(height=300, border=True):
        st.markdown(
            "\n".join(
                f"- Trial {index}: {rolls} rolls"
                for index, rolls in enumerate(result.results, start=1)
            )
        )
    csv_bytes = results_frame(result.results).to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name="yahtzee_trials.csv",
        mime="text/csv",
    )


def apply_page_styling() -> None:
    """Set page config and inject CSS tweaks."""

    st.set_page_config(page_title="Yahtzee Simulator", page_icon="🎲", layout="centered")
    st.markdown(
        """
        <style>
        div[data-testid="stMetricValue"] {
            font-size: 1.8rem;
            font-weight: 600;
            color: #0f172a;
        }
        div[data-testid="stMetricLabel"] {
            font-size: 0.95rem;
            color: #475569;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


@st.cache_resource(show_spinner=False)
def initialise_process() -> int:
    """One-time process setup: logging, chart theme and trial limits."""

    settings = load_settings()
    configure_logging(level=settings.log_level)
    register_chart_theme()
    set_max_trials(settings.max_trials)
    return settings.chunk_size


def main() -> None:
    """Entry point used by Streamlit."""

    apply_page_styling()
    chunk_size = initialise_process()
    ensure_session_state_defaults()

    st.title("🎲 Yahtzee Simulator")
    if render_controls():
        handle_simulate(chunk_size)

    if st.session_state.simulation_notice:
        st.warning(st.session_state.simulation_notice)

    result = st.session_state.simulation_result
    if isinstance(result, SimulationResult):
        render_summary(result)
        if len(result.results) > MAX_CHART_POINTS:
            st.caption(
                f"Chart shows up to {MAX_CHART_POINTS} evenly spaced trials, including the min and max."
            )
        st.altair_chart(
            build_results_chart(result.results, result.summary),
            use_container_width=True,
            theme=None,
        )
        render_results_list(result)


if __name__ == "__main__":
    main()
