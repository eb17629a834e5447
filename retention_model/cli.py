# retention_model/cli.py
# Command-line driver: load scenarios, run the engine, print summaries.
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from pydantic import ValidationError

from retention_model.config.loaders import ConfigLoadError, load_scenario_config, load_scenario_directory
from retention_model.config.models import CompanyInputs, ScenarioConfig, SimulationSettings
from retention_model.config.validation import clamp_inputs, consistency_warnings
from retention_model.dynamics.service_quality import DegenerateInputError
from retention_model.engines.calculation import compute_cost_savings, compute_revenue_impact
from retention_model.logging_config import DEFAULT_LOG_DIR, ERROR_LOGGER, setup_logging
from retention_model.mc import SimulationAbortedError
from retention_model.reporting.summary import (
    DataWriteError,
    build_summary_record,
    format_currency,
    write_results,
)

logger = logging.getLogger(__name__)
error_logger = logging.getLogger(ERROR_LOGGER)

CURRENCY_FIELDS = {
    "Current Recruiting Costs",
    "Projected Savings",
    "Customer Experience Impact",
    "Team Expertise Value",
    "Customer Loyalty Benefit",
    "Total Annual Impact",
    "Simulated Impact Lower",
    "Simulated Impact Upper",
}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Estimate the financial impact of improved retention.")

    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Scenario YAML file, or a directory of scenarios to run in turn."
    )
    parser.add_argument(
        "--mode",
        choices=["cost", "revenue"],
        default=None,
        help="Override the scenario's mode."
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Monte Carlo trials (overrides the scenario)."
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible simulations."
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used for Monte Carlo batches."
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to write CSV/JSON results to."
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(DEFAULT_LOG_DIR),
        help=f"Directory to store log files (default: {DEFAULT_LOG_DIR})"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def apply_overrides(scenario: ScenarioConfig, args: argparse.Namespace) -> ScenarioConfig:
    """
    Apply CLI overrides and clamp the company inputs to their allowed ranges.

    Raises:
        pydantic.ValidationError: an override breaks a simulation bound (e.g. ``--workers 0``).
    """
    sim_overrides = {
        key: value
        for key, value in (("iterations", args.iterations), ("seed", args.seed), ("workers", args.workers))
        if value is not None
    }
    return ScenarioConfig(
        name=scenario.name,
        mode=args.mode or scenario.mode,
        company_inputs=CompanyInputs(**clamp_inputs(scenario.company_inputs.model_dump())),
        estimations=scenario.estimations,
        simulation=SimulationSettings(**{**scenario.simulation.model_dump(), **sim_overrides}),
    )


def load_scenarios(config: str, args: argparse.Namespace) -> List[ScenarioConfig]:
    """Load one scenario file, or every scenario in a directory, with CLI overrides applied."""
    path = Path(config)
    if path.is_dir():
        loaded = list(load_scenario_directory(path).values())
    else:
        loaded = [load_scenario_config(path)]
    return [apply_overrides(scenario, args) for scenario in loaded]


def run_scenario(scenario: ScenarioConfig):
    if scenario.mode == "cost":
        return compute_cost_savings(scenario.company_inputs)
    return compute_revenue_impact(scenario.company_inputs, scenario.estimations, scenario.simulation)


def render_summary(record: dict) -> str:
    rows = [
        (label, format_currency(value) if label in CURRENCY_FIELDS else value)
        for label, value in record.items()
    ]
    frame = pd.DataFrame(rows, columns=["Metric", "Value"]).set_index("Metric")
    return frame.to_string()


def report_scenario(scenario: ScenarioConfig, output_dir: Optional[str]) -> int:
    """Run one scenario, print its summary and optionally write its outputs. Returns an exit code."""
    logger.info(f"Running scenario '{scenario.name}' in {scenario.mode} mode")
    for message in consistency_warnings(scenario.company_inputs):
        print(f"Warning: {message}", file=sys.stderr)

    try:
        result = run_scenario(scenario)
    except (DegenerateInputError, SimulationAbortedError) as e:
        error_logger.error(f"Estimation failed for '{scenario.name}': {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Scenario: {scenario.name} ({scenario.mode})")
    print(render_summary(build_summary_record(scenario.company_inputs, result)))

    if result.kind == "revenue":
        for warning in result.revenue_impact.statistics.validation_results.warnings:
            print(f"Assumption warning: {warning}")

    if output_dir:
        try:
            paths = write_results(result, Path(output_dir), scenario.company_inputs, file_prefix=scenario.name)
        except DataWriteError as e:
            error_logger.error(str(e))
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {paths['csv']} and {paths['json']}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(Path(args.log_dir), debug=args.debug)

    try:
        scenarios = load_scenarios(args.config, args)
    except (ConfigLoadError, ValidationError) as e:
        error_logger.error(f"Could not load scenario: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # every scenario runs even if an earlier one fails
    exit_code = 0
    for scenario in scenarios:
        exit_code = max(exit_code, report_scenario(scenario, args.output_dir))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
