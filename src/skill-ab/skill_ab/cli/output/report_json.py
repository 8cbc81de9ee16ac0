"""report.json serialization of an AggregateReport."""

import json
from pathlib import Path
from typing import Any

from skill_ab.cli.output.aggregator import AggregateReport

type JsonDict = dict[str, Any]

REPORT_FILENAME = "report.json"


def build_report_json(report: AggregateReport) -> JsonDict:
    """Return the machine-readable report; numbers rounded to 2 decimals."""
    return {
        "trials": report.valid_trials,
        "attempted": report.attempted_trials,
        "dimensions": {
            d.dimension: {
                "control": round(d.control, 2),
                "treatment": round(d.treatment, 2),
                "delta": round(d.delta, 2),
                "impact": str(d.impact),
            }
            for d in report.dimensions
        },
        "overall": {
            "control": round(report.overall.control, 2),
            "treatment": round(report.overall.treatment, 2),
            "delta": round(report.overall.delta, 2),
            "impact": str(report.overall.impact),
            "interpretation": report.overall.interpretation,
        },
    }


def write_report(report: AggregateReport, eval_dir: Path) -> Path:
    """Write report.json into eval_dir and return its path."""
    path = eval_dir / REPORT_FILENAME
    path.write_text(json.dumps(build_report_json(report=report), indent=2), encoding="utf-8")
    return path
