#!/usr/bin/env python3
"""Run a scenario (and optionally a forecast) from the command line.

Usage:
    python scripts/scenario_report.py team_expansion=50 pricing_strategy=premium
    python scripts/scenario_report.py marketing_budget=80 --iterations 5000 --seed 7
    python scripts/scenario_report.py --baseline GO=72 EC=45 PT=85 PF=60 TO=68
    python scripts/scenario_report.py --history history.csv --model polynomial_regression
    python scripts/scenario_report.py automation_level=70 --out result.json

History CSV columns: timestamp, axis, value.
JSON output lands in ``reports/`` at the project root.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BACKEND_DIR = Path(__file__).resolve().parent.parent
PROJECT_DIR = BACKEND_DIR.parent
REPORTS_DIR = PROJECT_DIR / "reports"

sys.path.insert(0, str(BACKEND_DIR))

from scenario_engine.forecasting.engine import predict_all_axes  # noqa: E402
from scenario_engine.ml.forecast_models import DEFAULT_MODEL_ID  # noqa: E402
from scenario_engine.models.axis import AXES, Axis  # noqa: E402
from scenario_engine.models.forecast import TimeSeriesPoint  # noqa: E402
from scenario_engine.models.scenario import MonteCarloConfig  # noqa: E402
from scenario_engine.simulation.engine import ScenarioEngine  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parsing helpers
# ---------------------------------------------------------------------------
def parse_assignment(pairs: list[str]) -> dict:
    """``key=value`` pairs → dict; numbers and true/false are converted."""
    values = {}
    for pair in pairs:
        if "=" not in pair:
            raise SystemExit(f"Expected key=value, got {pair!r}")
        key, raw = pair.split("=", 1)
        if raw.lower() in ("true", "false"):
            values[key] = raw.lower() == "true"
            continue
        try:
            values[key] = float(raw)
        except ValueError:
            values[key] = raw
    return values


def load_history(path: Path) -> dict[Axis, list[TimeSeriesPoint]]:
    df = pd.read_csv(path, parse_dates=["timestamp"])
    missing = {"timestamp", "axis", "value"} - set(df.columns)
    if missing:
        raise SystemExit(f"History file is missing columns: {sorted(missing)}")
    history: dict[Axis, list[TimeSeriesPoint]] = {}
    for axis_code, group in df.sort_values("timestamp").groupby("axis"):
        history[Axis(axis_code)] = [
            TimeSeriesPoint(timestamp=row.timestamp.to_pydatetime(), value=float(row.value))
            for row in group.itertuples()
        ]
    return history


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------
def scenario_table(result) -> pd.DataFrame:
    rows = []
    for axis in AXES:
        bounds = result.confidence_interval[axis]
        rows.append({
            "axis": axis.value,
            "baseline": result.baseline_scores[axis],
            "projected": result.projected_scores[axis],
            "lower": bounds.lower,
            "upper": bounds.upper,
            "volatility": result.risk_metrics.volatility[axis],
            "p_above": result.risk_metrics.probability[axis],
        })
    return pd.DataFrame(rows).set_index("axis").round(3)


def forecast_table(forecasts) -> pd.DataFrame:
    rows = []
    for axis, result in forecasts.items():
        for step, point in enumerate(result.predictions, start=1):
            rows.append({
                "axis": axis.value,
                "step": step,
                "value": point.value,
                "lower": point.lower_bound,
                "upper": point.upper_bound,
                "confidence": point.confidence,
            })
    return pd.DataFrame(rows).set_index(["axis", "step"]).round(2)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    parser = argparse.ArgumentParser(description="Run a what-if scenario report")
    parser.add_argument("values", nargs="*", help="Variable assignments as key=value")
    parser.add_argument("--baseline", nargs="*", default=[], help="Baseline scores as AXIS=score")
    parser.add_argument("--iterations", type=int, default=1000)
    parser.add_argument("--confidence", type=float, default=95.0)
    parser.add_argument("--variability", type=float, default=0.15)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--history", help="CSV of timestamp,axis,value for forecasting")
    parser.add_argument("--periods", type=int, default=6)
    parser.add_argument("--model", default=DEFAULT_MODEL_ID, help="Forecast model id")
    parser.add_argument("--out", help="Write JSON output to reports/<name>")
    args = parser.parse_args()

    baseline = {Axis(k): v for k, v in parse_assignment(args.baseline).items()}
    engine = ScenarioEngine(baseline_scores=baseline)
    config = MonteCarloConfig(
        iterations=args.iterations,
        confidence_interval=args.confidence,
        variability_factor=args.variability,
        seed=args.seed,
        workers=args.workers,
    )

    logger.info("Running scenario (%d iterations)...", config.iterations)
    result = engine.run_scenario(parse_assignment(args.values), config)
    logger.info("\n%s", scenario_table(result).to_string())

    for adjustment in result.adjustments:
        logger.info("  adjusted %s: %r -> %r (%s)",
                    adjustment.key, adjustment.requested, adjustment.applied, adjustment.reason)
    for rec in result.recommendations:
        logger.info("  [%s] %s: %s", rec.priority.value, rec.title, rec.description)

    output = {"scenario": result.model_dump(mode="json")}

    if args.history:
        logger.info("Forecasting %d periods with %s...", args.periods, args.model)
        forecasts = predict_all_axes(load_history(Path(args.history)), args.periods, args.model)
        logger.info("\n%s", forecast_table(forecasts).to_string())
        output["forecasts"] = {
            axis.value: r.model_dump(mode="json") for axis, r in forecasts.items()
        }

    if args.out:
        REPORTS_DIR.mkdir(exist_ok=True)
        out_path = REPORTS_DIR / args.out
        out_path.write_text(json.dumps(output, indent=2) + "\n", encoding="utf-8")
        logger.info("Wrote %s", out_path)


if __name__ == "__main__":
    main()
