import logging

import pytest

from yahtzee_core import (
    InvalidTrialCountError,
    SimulationResult,
    SimulationCancelledError,
    collect_chunks,
    deadline_reached,
    iter_trial_chunks,
    parse_trial_count,
    run_simulation,
    set_max_trials,
)

from conftest import ScriptedRandom


class TestParseTrialCount:

    @pytest.mark.parametrize(
        "raw, expected",
        [("100", 100), (" 25 ", 25), (7, 7), (10.0, 10), ("1", 1)],
    )
    def test_accepts_whole_numbers(self, raw, expected):
        assert parse_trial_count(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "2.5", "0", "-5", 0, -3, 1.5, None, False])
    def test_rejects_invalid_input(self, raw):
        with pytest.raises(InvalidTrialCountError):
            parse_trial_count(raw)

    def test_rejects_counts_above_limit(self):
        set_max_trials(50)
        assert parse_trial_count("50") == 50
        with pytest.raises(InvalidTrialCountError, match="maximum"):
            parse_trial_count("51")


class TestRunSimulation:

    def test_returns_results_and_summary(self):
        result = run_simulation(4, seed=3)
        assert isinstance(result, SimulationResult)
        assert len(result.results) == 4
        assert result.summary.total_trials == 4
        assert result.summary.minimum == min(result.results)
        assert result.summary.maximum == max(result.results)
        assert result.seed == 3
        assert result.method == "loop"
        assert result.compute_seconds >= 0.0

    def test_seed_reproduces_batch(self):
        assert run_simulation(3, seed=11).results == run_simulation(3, seed=11).results

    def test_geometric_method(self):
        result = run_simulation(500, seed=1, method="geometric")
        assert len(result.results) == 500
        assert result.method == "geometric"
        assert result.results == run_simulation(500, seed=1, method="geometric").results

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown simulation method"):
            run_simulation(1, method="closed_form")

    @pytest.mark.parametrize("trials", [0, -5])
    def test_invalid_count(self, trials):
        with pytest.raises(InvalidTrialCountError):
            run_simulation(trials)

    def test_logs_completed_simulation(self, caplog):
        with caplog.at_level(logging.INFO, logger="yahtzee_core.api"):
            run_simulation(2, seed=5, method="geometric")
        assert "Simulated 2/2 trials (geometric)" in caplog.text


class TestCollectChunks:

    def test_collects_every_chunk(self):
        progress = []
        results, completed = collect_chunks(
            iter_trial_chunks(5, 2, ScriptedRandom([3])),
            on_progress=progress.append,
        )
        assert results == [1] * 5
        assert completed is True
        assert progress == [2, 4, 5]

    def test_stops_between_chunks(self):
        rng = ScriptedRandom([3])
        progress = []
        results, completed = collect_chunks(
            iter_trial_chunks(10, 3, rng),
            on_progress=progress.append,
            should_stop=lambda: len(progress) >= 2,
        )
        assert completed is False
        assert results == [1] * 6
        assert rng._position == 30

    def test_stop_before_first_chunk(self):
        rng = ScriptedRandom([3])
        results, completed = collect_chunks(
            iter_trial_chunks(4, 2, rng),
            should_stop=lambda: True,
        )
        assert results == []
        assert completed is False
        assert rng._position == 0


class TestChunkedSimulation:

    def test_chunked_batch_matches_unchunked(self):
        chunked = run_simulation(12, seed=21, chunk_size=5)
        assert chunked.results == run_simulation(12, seed=21).results
        assert chunked.completed is True
        assert chunked.requested_trials == 12

    def test_chunked_run_logs_completion(self, caplog):
        with caplog.at_level(logging.INFO, logger="yahtzee_core.api"):
            run_simulation(6, seed=2, chunk_size=4)
        assert "Simulated 6/6 trials (loop)" in caplog.text

    def test_reports_progress_per_chunk(self):
        progress = []
        run_simulation(7, seed=3, chunk_size=3, on_progress=progress.append)
        assert progress == [3, 6, 7]

    def test_geometric_reports_progress_once(self):
        progress = []
        run_simulation(40, seed=3, method="geometric", chunk_size=10, on_progress=progress.append)
        assert progress == [40]

    def test_stop_keeps_partial_batch(self, caplog):
        progress = []
        with caplog.at_level(logging.INFO, logger="yahtzee_core.api"):
            result = run_simulation(
                9,
                seed=8,
                chunk_size=2,
                on_progress=progress.append,
                should_stop=lambda: len(progress) >= 2,
            )
        assert result.completed is False
        assert result.requested_trials == 9
        assert result.results == run_simulation(4, seed=8).results
        assert result.summary.total_trials == 4
        assert "Simulated 4/9 trials (loop)" in caplog.text

    def test_stop_before_any_trial_raises(self):
        with pytest.raises(SimulationCancelledError):
            run_simulation(5, seed=1, chunk_size=2, should_stop=lambda: True)


class TestDeadlineReached:

    def test_fires_once_time_limit_passes(self):
        now = [100.0]
        should_stop = deadline_reached(5.0, clock=lambda: now[0])
        assert should_stop() is False
        now[0] = 104.9
        assert should_stop() is False
        now[0] = 105.0
        assert should_stop() is True

    @pytest.mark.parametrize("limit", [0, -1.5])
    def test_rejects_non_positive_limit(self, limit):
        with pytest.raises(ValueError):
            deadline_reached(limit)

    def test_drives_partial_simulation(self):
        ticks = iter(range(100))
        should_stop = deadline_reached(2, clock=lambda: float(next(ticks)))
        result = run_simulation(10, seed=4, chunk_size=1, should_stop=should_stop)
        assert result.completed is False
        assert 0 < len(result.results) < 10
