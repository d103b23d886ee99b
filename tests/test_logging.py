"""Tests for JSON solver reports."""

import json

import numpy as np
import pytest

from dualopt import AutoDiffTerm, Function, NewtonSolver
from dualopt.logging import _safe_float, create_report, format_human_readable, save_report


@pytest.fixture
def solved(rosenbrock_pair):
    x, y = np.array([-1.2]), np.array([1.0])
    f = Function()
    f.add_term(AutoDiffTerm(rosenbrock_pair, 1, 1), x, y)
    solver = NewtonSolver(maximum_iterations=5)
    return solver, solver.solve(f)


class TestSafeFloat:
    def test_conversions(self):
        assert _safe_float(np.float64(1.5)) == 1.5
        assert isinstance(_safe_float(np.int64(3)), float)
        assert _safe_float(np.array([1.0, 2.0])) == [1.0, 2.0]
        assert _safe_float(np.nan) is None
        assert _safe_float("newton") == "newton"


class TestReport:
    def test_create_report(self, solved):
        solver, results = solved
        report = json.loads(create_report(results, solver.options(), {"name": "rosenbrock"}))

        assert report["meta"]["framework"] == "dualopt"
        assert report["options"]["maximum_iterations"] == 5
        assert report["problem"]["name"] == "rosenbrock"
        assert report["results"]["solver"] == "NewtonSolver"
        assert report["results"]["exit_condition"] == results.exit_condition.value
        assert report["results"]["n_scalars"] == 2
        assert len(report["history"]) == results.iterations
        assert set(report["timing"]) == set(results.timing())

    def test_save_report(self, solved, tmp_path):
        solver, results = solved
        report = create_report(results, solver.options())
        path = save_report(report, output_dir=str(tmp_path / "logs"))
        assert path.endswith(".log")
        with open(path) as f:
            assert json.load(f) == json.loads(report)

    def test_human_readable(self, solved):
        solver, results = solved
        text = format_human_readable(create_report(results, solver.options()))
        assert "DUALOPT SOLVER REPORT" in text
        assert "## OPTIONS" in text
        assert "## PROBLEM" not in text
        assert f"## HISTORY: {results.iterations} iterations" in text
