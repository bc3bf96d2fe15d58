import pandas as pd
import pytest

import simulate


class TestSimulateScript:

    def test_prints_summary(self, capsys):
        exit_code = simulate.main(["--trials", "20", "--seed", "4", "--method", "geometric"])
        assert exit_code == 0
        output = capsys.readouterr().out
        assert "Trials:        20" in output
        assert "Average rolls:" in output
        assert "Min rolls:" in output
        assert "Max rolls:" in output

    def test_writes_csv(self, tmp_path, capsys):
        target = tmp_path / "out" / "trials.csv"
        exit_code = simulate.main(["--trials", "3", "--seed", "9", "--csv", str(target)])
        assert exit_code == 0
        frame = pd.read_csv(target)
        assert frame["trial"].tolist() == [1, 2, 3]
        assert (frame["rolls"] >= 1).all()
        assert str(target) in capsys.readouterr().out

    def test_invalid_trial_count(self, capsys):
        assert simulate.main(["--trials", "abc"]) == 2
        assert "Invalid trial count" in capsys.readouterr().err

    def test_zero_trials_rejected(self, capsys):
        assert simulate.main(["--trials", "0"]) == 2

    def test_unknown_log_level_is_rejected(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            simulate.main(["--trials", "2", "--log-level", "chatty"])
        assert excinfo.value.code == 2
        assert "--log-level" in capsys.readouterr().err

    def test_time_limit_allows_full_batch(self, capsys):
        exit_code = simulate.main(
            ["--trials", "2", "--seed", "1", "--time-limit", "60", "--chunk-size", "1"]
        )
        assert exit_code == 0
        output = capsys.readouterr().out
        assert "Trials:        2" in output
        assert "Stopped early" not in output
