"""Tests for the command line entry point."""

import json
import logging

import pytest

from ratio_app.__main__ import main


def _cycle(ask_b: float = 90.0, bid_b: float = 88.0, second: int = 0) -> str:
    return json.dumps([
        {
            "stock": "ABC",
            "top_ask": {"price": 100.0, "size": 1},
            "top_bid": {"price": 98.0, "size": 1},
            "timestamp": f"2024-01-01T00:00:{second:02d}",
        },
        {
            "stock": "DEF",
            "top_ask": {"price": ask_b, "size": 1},
            "top_bid": {"price": bid_b, "size": 1},
            "timestamp": f"2024-01-01T00:00:{second:02d}",
        },
    ])


@pytest.fixture
def quotes_file(tmp_path):
    path = tmp_path / "quotes.jsonl"
    path.write_text(
        "\n".join([
            _cycle(second=0),
            "",
            _cycle(ask_b=0.0, bid_b=0.0, second=1),
            _cycle(ask_b=100.0, bid_b=98.0, second=2),
        ])
        + "\n"
    )
    return path


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing.yaml")]


class TestCli:
    def test_writes_rows(self, quotes_file, no_config, capsys):
        exit_code = main(["--input", str(quotes_file), *no_config])

        captured = capsys.readouterr()
        rows = [json.loads(line) for line in captured.out.splitlines()]

        assert exit_code == 0
        assert len(rows) == 2
        assert rows[0]["signal"] == "HOLD"
        assert rows[0]["trigger_alert"] == pytest.approx(1.11236, rel=1e-5)
        assert rows[1]["signal"] is None
        assert rows[1]["trigger_alert"] is None
        assert "skipped 1" in captured.err

    def test_halt(self, quotes_file, no_config, capsys):
        exit_code = main(["--input", str(quotes_file), "--on-invalid", "halt", *no_config])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert len(captured.out.splitlines()) == 1
        assert "Stopped after 1 rows" in captured.err

    def test_window_override(self, quotes_file, no_config, capsys):
        exit_code = main(["--input", str(quotes_file), "--window", "1", *no_config])

        rows = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert exit_code == 0
        assert rows[1]["moving_average"] == pytest.approx(1.0)

    @pytest.mark.parametrize("flag,value", [("--window", "0"), ("--threshold", "1.5")])
    def test_invalid_configuration(self, quotes_file, no_config, capsys, flag, value):
        exit_code = main(["--input", str(quotes_file), flag, value, *no_config])

        assert exit_code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "content",
        [
            "log_level: loud\n",
            "threshold: [\n",
            "- 1\n- 2\n",
            "window_capacity: many\n",
        ],
    )
    def test_bad_config_file(self, quotes_file, tmp_path, capsys, content):
        """A broken config file is reported, not raised."""
        config = tmp_path / "ratio_signal.yaml"
        config.write_text(content)

        exit_code = main(["--input", str(quotes_file), "--config", str(config)])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "Invalid configuration" in captured.err
        assert captured.out == ""

    def test_log_level_from_config(self, quotes_file, tmp_path, capsys):
        config = tmp_path / "ratio_signal.yaml"
        config.write_text("log_level: warning\n")
        root = logging.getLogger()
        previous = root.level

        try:
            assert main(["--input", str(quotes_file), "--config", str(config)]) == 0
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
