"""
vecdist CLI Tests

Runs the CLI the way users do:
    python -m metal0.vecdist eval "[0, 1]" "[3, 2]" --op "<->"
    python -m metal0.vecdist operators --json
"""

import json
import math
import os
import subprocess
import sys
from pathlib import Path

import pytest

from metal0.vecdist import __version__

PYTHON_DIR = Path(__file__).parent.parent


def run_cli(args: list, env: dict = None) -> subprocess.CompletedProcess:
    """Run the vecdist CLI via python -m."""
    cmd = [sys.executable, "-m", "metal0.vecdist"] + args
    run_env = dict(os.environ)
    run_env.pop("VECDIST_METRIC", None)
    run_env.pop("VECDIST_LOG_LEVEL", None)
    run_env["PYTHONPATH"] = os.pathsep.join(
        p for p in [str(PYTHON_DIR), run_env.get("PYTHONPATH", "")] if p
    )
    if env:
        run_env.update(env)
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=30,
        env=run_env,
    )


class TestCLIVersionHelp:
    """Test version and help commands."""

    def test_version(self):
        result = run_cli(["--version"])
        assert result.returncode == 0
        assert result.stdout.strip() == f"vecdist {__version__}"

    def test_help(self):
        result = run_cli(["--help"])
        assert result.returncode == 0
        assert "eval" in result.stdout
        assert "operators" in result.stdout

    def test_no_command_prints_help(self):
        result = run_cli([])
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()


class TestCLIEval:
    """Test the eval command."""

    def test_squared_euclidean(self):
        result = run_cli(["eval", "[0, 1]", "[3, 2]", "--op", "<->"])
        assert result.returncode == 0, result.stderr
        assert float(result.stdout.strip()) == 10.0

    def test_dot_product_by_metric(self):
        result = run_cli(["eval", "[5, 1]", "[1, 2]", "--metric", "dot"])
        assert result.returncode == 0, result.stderr
        assert float(result.stdout.strip()) == 7.0

    def test_cosine_json(self):
        result = run_cli(["eval", "[4, 4]", "[2, 2]", "--op", "<=>", "--json"])
        assert result.returncode == 0, result.stderr

        data = json.loads(result.stdout)
        assert data["operator"] == "<=>"
        assert data["metric"] == "cosine"
        assert data["function"] == "cosine_distance"
        assert data["distance"] == pytest.approx(1.0)

    def test_cosine_nan(self):
        result = run_cli(["eval", "[0, 0]", "[1, 1]", "--op", "<=>"])
        assert result.returncode == 0, result.stderr
        assert math.isnan(float(result.stdout.strip()))

    def test_cosine_nan_json_is_null(self):
        result = run_cli(["eval", "[0, 0]", "[1, 1]", "--op", "<=>", "--json"])
        assert result.returncode == 0, result.stderr
        assert json.loads(result.stdout)["distance"] is None

    def test_uses_configured_metric(self):
        result = run_cli(["eval", "[5, 1]", "[1, 2]"], env={"VECDIST_METRIC": "<#>"})
        assert result.returncode == 0, result.stderr
        assert float(result.stdout.strip()) == 7.0

    def test_default_metric(self):
        result = run_cli(["eval", "[0, 1]", "[3, 2]"])
        assert result.returncode == 0, result.stderr
        assert float(result.stdout.strip()) == 10.0

    def test_dimension_mismatch(self):
        result = run_cli(["eval", "[1, 2]", "[1, 2, 3]", "--op", "<->"])
        assert result.returncode == 1
        assert "wrong dimension: left(2) != right(3)" in result.stderr

    def test_unknown_operator(self):
        result = run_cli(["eval", "[1]", "[1]", "--op", "<~>"])
        assert result.returncode == 1
        assert "Unknown operator" in result.stderr

    def test_invalid_json(self):
        result = run_cli(["eval", "[1,", "[1]"])
        assert result.returncode == 1
        assert "Error" in result.stderr

    def test_not_an_array(self):
        result = run_cli(["eval", "1", "[1]"])
        assert result.returncode == 1
        assert "JSON array" in result.stderr

    def test_null_element_is_rejected(self):
        result = run_cli(["eval", "[null, 1]", "[1, 1]", "--op", "<->"])
        assert result.returncode == 1
        assert "numeric vector elements" in result.stderr
        assert result.stdout == ""

    def test_invalid_config(self):
        result = run_cli(["eval", "[1]", "[1]"], env={"VECDIST_METRIC": "hamming"})
        assert result.returncode == 2
        assert "VECDIST_METRIC" in result.stderr

    def test_debug_logging_goes_to_stderr(self):
        result = run_cli(["--log-level", "DEBUG", "eval", "[0, 1]", "[3, 2]"])
        assert result.returncode == 0, result.stderr
        assert float(result.stdout.strip()) == 10.0
        assert "Evaluating <->" in result.stderr


class TestCLIOperators:
    """Test the operators command."""

    def test_table(self):
        result = run_cli(["operators"])
        assert result.returncode == 0, result.stderr
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 3
        assert "squared_euclidean_distance" in lines[0]
        assert lines[0].startswith("*")  # default metric marker
        assert "immutable, parallel_safe" in lines[2]

    def test_json(self):
        result = run_cli(["operators", "--json"])
        assert result.returncode == 0, result.stderr

        data = json.loads(result.stdout)
        assert [d["operator"] for d in data] == ["<->", "<#>", "<=>"]
        assert all(d["properties"] == ["immutable", "parallel_safe"] for d in data)
