"""Tests for CLI entry point."""
from __future__ import annotations

import subprocess
import sys


def _run_cli(*args: str) -> subprocess.CompletedProcess:
    """Run the CLI with the given arguments."""
    return subprocess.run(
        [sys.executable, "-m", "chaos_lab", *args],
        capture_output=True, text=True, timeout=120,
    )


class TestCLI:
    def test_version(self):
        result = _run_cli("version")
        assert result.returncode == 0
        assert "chaos-lab 0.1.0" in result.stdout

    def test_no_args(self):
        result = _run_cli()
        assert result.returncode == 0
        assert "Usage:" in result.stdout

    def test_help_flag(self):
        result = _run_cli("-h")
        assert result.returncode == 0
        assert "mandelbrot" in result.stdout

    def test_unknown_command(self):
        result = _run_cli("nonexistent")
        assert result.returncode == 1
        assert "Unknown command" in result.stdout

    def test_lorenz(self):
        result = _run_cli("lorenz", "300")
        assert result.returncode == 0
        assert "Lorenz: 300 steps" in result.stdout

    def test_pendulum(self):
        result = _run_cli("pendulum", "100")
        assert result.returncode == 0
        assert "energy" in result.stdout

    def test_logistic(self):
        result = _run_cli("logistic", "2.5")
        assert result.returncode == 0
        assert "stable" in result.stdout

    def test_julia_preset(self):
        result = _run_cli("julia", "dendrite")
        assert result.returncode == 0
        assert "-0.75" in result.stdout

    def test_presets(self):
        result = _run_cli("presets")
        assert result.returncode == 0
        assert "seahorse" in result.stdout
