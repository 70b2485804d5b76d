"""
Tests for the cli module.
"""

import io

import pytest
from fitsim.cli import main


class TestUsage:
    """Test cases for the algorithm selector."""

    def test_missing_selector(self, capsys):
        """Test that a missing selector prints usage and exits cleanly."""
        assert main([]) == 0

        out = capsys.readouterr().out
        assert out.startswith("Usage: fitsim fit-type")
        assert "w   for worst fit" in out

    def test_invalid_selector(self, capsys, monkeypatch):
        """Test that an invalid selector prints usage without reading input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("not read"))

        assert main(["x"]) == 0

        out = capsys.readouterr().out
        assert "Usage:" in out
        assert "Finished reading" not in out

    def test_invalid_memory_size(self):
        """Test that a non-positive memory size is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(["f", "--memory-size", "0"])
        assert exc.value.code == 2


class TestRun:
    """Test cases for complete runs."""

    def test_event_log_and_summary(self, capsys, monkeypatch):
        """Test the printed output of a first fit run."""
        monkeypatch.setattr("sys.stdin", io.StringIO("0 100 1\n"))

        assert main(["f", "-n", "1"]) == 0

        out = capsys.readouterr().out
        order = [
            "Finished reading",
            "Time: 0 START",
            "Time: 0 ARRIVED:P0",
            "Time: 0 INMEMORY:P0",
            "  Memory [PID,start,size]: ->[P0,0,100]",
            "Time: 1 FINISHED:P0",
            "Time: 100 END",
            "Using the first fit algorithm",
            "\tTotal unserviced time is 0",
            "\tTotal service required is 1",
            "\tPercent unserviced is 0%",
        ]
        positions = [out.index(text) for text in order]
        assert positions == sorted(positions)

    def test_configuration_options(self, capsys, monkeypatch):
        """Test memory size and horizon overrides."""
        monkeypatch.setattr("sys.stdin", io.StringIO("0 30 10\n"))

        assert main(["n", "-n", "1", "--memory-size", "40", "--total-time", "4", "--debug"]) == 0

        out = capsys.readouterr().out
        assert "->[P0,0,30]->[H,30,10]" in out
        assert "Time: 4 END" in out
        assert "Using the next fit algorithm" in out
        assert "Percent unserviced is 60%" in out

    def test_csv_workload(self, capsys, tmp_path):
        """Test reading the workload from a CSV file."""
        path = tmp_path / "processes.csv"
        path.write_text("arrival,size,service\n0,10,2\n1,20,2\n", encoding="utf-8")

        assert main(["w", "--csv", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Time: 1 INMEMORY:P1" in out
        assert "Using the worst fit algorithm" in out

    def test_short_input(self, capsys, monkeypatch):
        """Test that an incomplete workload stops before simulating."""
        monkeypatch.setattr("sys.stdin", io.StringIO("0 10 5\n"))

        assert main(["b", "-n", "3"]) == 1

        captured = capsys.readouterr()
        assert "Error:" in captured.err
        assert "Finished reading" not in captured.out

    def test_missing_csv(self, capsys, tmp_path):
        """Test that a missing CSV file is reported."""
        assert main(["f", "--csv", str(tmp_path / "nope.csv")]) == 1
        assert "CSV file not found" in capsys.readouterr().err
