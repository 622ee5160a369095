from __future__ import annotations

import sys
from typing import Optional

import typer

from index_bench.config import get_settings
from index_bench.errors import BenchmarkError
from index_bench.orchestrator import drop as drop_schema_set
from index_bench.orchestrator import generate as generate_records
from index_bench.orchestrator import measure as measure_schema_set
from index_bench.orchestrator import run_all
from index_bench.reporter import print_generation_summary, print_report
from index_bench.scenarios import BATTERY
from index_bench.schemas.definitions import available_schema_sets, get_schema_set
from index_bench.utils.logging import configure_logging

app = typer.Typer(help="Index benchmark CLI.")

SuiteOption = typer.Option(
    None,
    "--suite",
    "-s",
    help="Schema set to use (index_comparison, design_comparison). Default from settings.",
)


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"records={settings.bench_records} batch={settings.bench_batch_size} "
        f"seed={settings.bench_seed} suite={settings.bench_suite}"
    )


@app.command()
def suites() -> None:
    """
    List schema sets, their variants, and the scenario battery.
    """
    for name in available_schema_sets():
        suite = get_schema_set(name)
        typer.echo(f"{suite.name}: {suite.description}")
        for variant in suite.variants:
            typer.echo(f"  - {variant.name} ({variant.label}, {len(variant.indexes)} indexes)")
    typer.echo("Scenarios: " + ", ".join(scenario.name for scenario in BATTERY))


@app.command()
def generate(
    records: Optional[int] = typer.Option(
        None, "--records", "-n", min=0, help="Records to generate (default from settings)."
    ),
    suite: Optional[str] = SuiteOption,
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed for reproducible data."),
    no_reset: bool = typer.Option(
        False, "--no-reset", help="Insert into the existing variants instead of recreating them."
    ),
) -> None:
    """
    Recreate the schema set and fill every variant with identical synthetic sessions.
    """
    _setup_logging()
    settings = get_settings()
    count = settings.bench_records if records is None else records
    summary = generate_records(count, suite, reset=not no_reset, seed=seed)
    print_generation_summary(summary)


@app.command()
def measure(
    suite: Optional[str] = SuiteOption,
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
) -> None:
    """
    Run the scenario battery once against an already populated schema set.
    """
    _setup_logging()
    report = measure_schema_set(suite)
    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        print_report(report)


@app.command()
def run(
    records: Optional[int] = typer.Option(
        None, "--records", "-n", min=0, help="Records to generate (default from settings)."
    ),
    suite: Optional[str] = SuiteOption,
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed for reproducible data."),
    drop_after: bool = typer.Option(False, "--drop-after", help="Drop the variants afterwards."),
    persist: bool = typer.Option(False, "--persist", help="Save results under results/."),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
) -> None:
    """
    Generate data and measure it in one go.
    """
    _setup_logging()
    settings = get_settings()
    count = settings.bench_records if records is None else records
    typer.echo(f"Running suite='{suite or settings.bench_suite}' for records={count}.")
    report = run_all(count, suite, seed=seed, drop_after=drop_after, persist=persist)
    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        print_report(report)


@app.command()
def drop(suite: Optional[str] = SuiteOption) -> None:
    """
    Drop every variant table of the schema set.
    """
    _setup_logging()
    drop_schema_set(suite)
    typer.echo("Dropped.")


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
    except BenchmarkError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
