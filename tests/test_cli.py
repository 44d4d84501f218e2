"""Tests for the command-line entry point."""

import json
import os
from unittest.mock import patch

import pytest

from combo_sim.cli import EXIT_INVALID_CONFIG, build_parser, main


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with patch("combo_sim.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestBuildParser:
    """Tests for the argument parser."""

    def test_defaults(self, monkeypatch):
        """Flags default to the original tool's values."""
        for name in ("COMBO_SIM_RUNS", "COMBO_SIM_SEED", "COMBO_SIM_DECK_SIZE"):
            monkeypatch.delenv(name, raising=False)
        args = build_parser().parse_args([])

        assert args.deck_size == 99
        assert args.lands == 37
        assert args.combos == 4
        assert args.required == 2
        assert args.runs == 10_000_000
        assert args.seed is None
        assert args.json is False

    def test_flags(self):
        """Flags are parsed into their fields."""
        args = build_parser().parse_args(
            ["--deck-size", "60", "--lands", "24", "--runs", "10", "--seed", "3", "--json"]
        )

        assert args.deck_size == 60
        assert args.lands == 24
        assert args.runs == 10
        assert args.seed == 3
        assert args.json is True


class TestMain:
    """Tests for main."""

    def test_text_output(self, capsys):
        """A run prints the seed and the results."""
        code = main(["--runs", "200", "--seed", "42", "--workers", "1"])
        out = capsys.readouterr().out

        assert code == 0
        assert "booting up" in out
        assert "RNG seed: 42" in out
        assert "trials:                200" in out
        assert "avg draws to win" in out

    def test_json_output(self, capsys):
        """--json prints a SimulationResult document."""
        code = main(["--runs", "100", "--seed", "7", "--workers", "1", "--json"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["trials"] == 100
        assert data["base_seed"] == 7
        assert data["config"]["deck_size"] == 99

    def test_json_is_reproducible(self, capsys):
        """Same seed gives the same JSON document."""
        main(["--runs", "100", "--seed", "7", "--workers", "1", "--json"])
        first = capsys.readouterr().out
        main(["--runs", "100", "--seed", "7", "--workers", "2", "--json"])
        second = capsys.readouterr().out

        assert first == second

    def test_invalid_config(self, capsys):
        """Invalid configurations exit with status 2 and a reason."""
        code = main(["--required", "0", "--runs", "10"])
        captured = capsys.readouterr()

        assert code == EXIT_INVALID_CONFIG
        assert "invalid config" in captured.err
        assert "at least 1" in captured.err
        assert "RNG seed" not in captured.out

    def test_invalid_workers(self, capsys):
        """A zero worker count is reported as an error."""
        code = main(["--runs", "10", "--seed", "1", "--workers", "0"])

        assert code == EXIT_INVALID_CONFIG
        assert "max_workers" in capsys.readouterr().err

    def test_configures_logging(self, mock_setup_logging, monkeypatch):
        """Logging is configured from the flags."""
        monkeypatch.delenv("COMBO_SIM_LOG_DIR", raising=False)
        main(
            ["--runs", "10", "--seed", "1", "--workers", "1", "--log-level", "DEBUG", "--log-file"]
        )

        mock_setup_logging.assert_called_once_with(
            log_level="DEBUG",
            enable_file=True,
            log_dir=None,
        )

    def test_log_level_case_insensitive(self, mock_setup_logging):
        """Lowercase log levels are accepted."""
        main(["--runs", "10", "--seed", "1", "--workers", "1", "--log-level", "debug"])
        assert mock_setup_logging.call_args.kwargs["log_level"] == "DEBUG"

    def test_unknown_log_level(self, capsys):
        """An unknown log level is a usage error, not a crash."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--runs", "10", "--log-level", "VERBOSE"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err


class TestSeedSelection:
    """How the CLI picks the base seed."""

    def test_zero_seed_overrides_environment(self, capsys):
        """--seed 0 seeds from the clock even when COMBO_SIM_SEED is set."""
        with patch.dict(os.environ, {"COMBO_SIM_SEED": "5"}):
            with patch("combo_sim.cli.seed_from_clock", return_value=987654321):
                code = main(["--runs", "10", "--seed", "0", "--workers", "1", "--json"])

        assert code == 0
        assert json.loads(capsys.readouterr().out)["base_seed"] == 987654321

    def test_environment_seed_used_without_flag(self, capsys):
        """Without --seed the COMBO_SIM_SEED value is used."""
        with patch.dict(os.environ, {"COMBO_SIM_SEED": "5"}):
            main(["--runs", "10", "--workers", "1", "--json"])

        assert json.loads(capsys.readouterr().out)["base_seed"] == 5

    def test_explicit_seed_overrides_environment(self, capsys):
        """A non-zero --seed wins over COMBO_SIM_SEED."""
        with patch.dict(os.environ, {"COMBO_SIM_SEED": "5"}):
            main(["--runs", "10", "--seed", "8", "--workers", "1", "--json"])

        assert json.loads(capsys.readouterr().out)["base_seed"] == 8


class TestErrorReporting:
    """Only configuration problems are turned into exit codes."""

    def test_simulation_errors_propagate(self):
        """Errors raised during the run are not reported as bad settings."""
        with patch("combo_sim.cli.run_simulation", side_effect=ValueError("broken trial")):
            with pytest.raises(ValueError, match="broken trial"):
                main(["--runs", "10", "--seed", "1", "--workers", "1"])

    def test_invalid_batch_size(self, capsys):
        """A zero batch size is reported before any trial runs."""
        with patch("combo_sim.cli.run_simulation") as mock_run:
            code = main(["--runs", "10", "--seed", "1", "--batch-size", "0"])

        assert code == EXIT_INVALID_CONFIG
        assert "batch_size" in capsys.readouterr().err
        mock_run.assert_not_called()
