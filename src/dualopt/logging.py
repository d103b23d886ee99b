"""Machine-readable logging of solver runs.

Creates JSON reports containing options, final statistics, timing and the
full iteration history for later analysis.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .solver.results import SolverResults


def _safe_float(val: Any) -> Any:
    """Convert numpy types to Python native types for JSON serialization."""
    if isinstance(val, (np.floating, np.integer)):
        return float(val)
    if isinstance(val, np.ndarray):
        return val.tolist()
    if isinstance(val, (list, dict, tuple)):
        return val
    if pd.isna(val):
        return None
    return val


def extract_history(results: SolverResults) -> list:
    """Per-iteration records with JSON-safe values."""
    records = []
    for _, row in results.history_frame().iterrows():
        records.append({col: _safe_float(row[col]) for col in row.index})
    return records


def create_report(
    results: SolverResults,
    options: Optional[Dict[str, Any]] = None,
    problem: Optional[Dict[str, Any]] = None,
) -> str:
    """Generate a JSON log for one solver run.

    Args:
        results: Solver results
        options: Solver options (Solver.options())
        problem: Free-form problem description (name, sizes, ...)

    Returns:
        JSON string containing the full report
    """
    report = {
        "meta": {
            "generated": datetime.now().isoformat(),
            "version": "1.0",
            "framework": "dualopt",
        },
        "options": options or {},
        "problem": problem or {},
        "results": {
            "solver": results._solver,
            "exit_condition": results.exit_condition.value,
            "converged": results.converged,
            "iterations": results.iterations,
            "n_scalars": results._n_scalars,
            "function_value": _safe_float(results.function_value),
            "gradient_norm": _safe_float(results.gradient_norm),
        },
        "timing": {k: _safe_float(v) for k, v in results.timing().items()},
        "history": extract_history(results),
    }

    return json.dumps(report, indent=2, default=str)


def save_report(report: str, output_dir: str = "logs") -> str:
    """Save report to timestamped log file.

    Args:
        report: JSON string report
        output_dir: Directory to save report

    Returns:
        Path to saved report file
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = f"{output_dir}/solve_{timestamp}.log"
    with open(path, "w") as f:
        f.write(report)
    return path


def format_human_readable(report_json: str) -> str:
    """Format report as human-readable text with JSON sections."""
    report = json.loads(report_json)

    lines = []
    lines.append("=" * 80)
    lines.append("DUALOPT SOLVER REPORT")
    lines.append(f"Generated: {report['meta']['generated']}")
    lines.append("=" * 80)
    lines.append("")

    # Options
    lines.append("## OPTIONS")
    lines.append(json.dumps(report["options"], indent=2))
    lines.append("")

    # Problem
    if report.get("problem"):
        lines.append("## PROBLEM")
        lines.append(json.dumps(report["problem"], indent=2))
        lines.append("")

    # Results
    lines.append("## RESULTS")
    lines.append(json.dumps(report["results"], indent=2))
    lines.append("")

    # Timing
    if report.get("timing"):
        lines.append("## TIMING")
        lines.append(json.dumps(report["timing"], indent=2))
        lines.append("")

    # History count
    lines.append(f"## HISTORY: {len(report['history'])} iterations")
    lines.append("")

    lines.append("=" * 80)
    lines.append("END REPORT")
    lines.append("=" * 80)

    return "\n".join(lines)
