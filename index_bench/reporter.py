from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from index_bench.domain.models import GenerationSummary
from index_bench.domain.report import BenchmarkReport, Ratio
from index_bench.errors import UnknownScenarioError
from index_bench.scenarios import get_scenario


def _format_ratio(ratio: Optional[Ratio]) -> str:
    if ratio is None:
        return "-"
    if ratio.undefined:
        return "[yellow]undefined[/yellow]"
    return f"{ratio.value:.2f}x"


def _scenario_title(name: str) -> str:
    try:
        return get_scenario(name).title
    except UnknownScenarioError:
        return name


def print_report(report: BenchmarkReport, console: Optional[Console] = None) -> None:
    """
    Render a benchmark report as rich tables.

    One table lists every (scenario, variant) ranked fastest first with the
    ratio to the next-faster variant. When the schema set defines a
    good/bad pair, a second table summarizes the degradation per scenario.
    """
    console = console or Console()

    if not report.scenarios:
        console.print("[yellow]No measurements to display.[/yellow]")
        return

    title = "Index Benchmark Results"
    if report.schema_set:
        title = f"{title}\n[dim]Schema set: {report.schema_set}[/dim]"

    table = Table(
        title=title,
        box=box.ROUNDED,
        caption="Ranked by elapsed time (ascending) within each scenario",
    )
    table.add_column("Scenario", style="cyan", no_wrap=True)
    table.add_column("Run", justify="right", style="blue")
    table.add_column("Variant", style="magenta")
    table.add_column("Time (us)", justify="right", style="green")
    table.add_column("Time (ms)", justify="right", style="bold green")
    table.add_column("Rows", justify="right", style="yellow")
    table.add_column("vs. faster", justify="right", style="red")

    for section in report.scenarios:
        title_cell = _scenario_title(section.scenario)
        for entry in section.entries:
            table.add_row(
                title_cell if entry.rank == 1 else "",
                str(section.run) if entry.rank == 1 else "",
                entry.label or entry.variant,
                f"{entry.elapsed_us:,}",
                f"{entry.elapsed_ms:.3f}",
                f"{entry.rows_examined:,}",
                _format_ratio(entry.ratio_to_previous),
            )
        table.add_section()

    console.print(table)

    if report.degradation_pair is None:
        return

    good, bad = report.degradation_pair
    summary = Table(title="Good vs. Bad Design", box=box.ROUNDED)
    summary.add_column("Scenario", style="cyan", no_wrap=True)
    summary.add_column("Run", justify="right", style="blue")
    summary.add_column(f"{good} (us)", justify="right", style="green")
    summary.add_column(f"{bad} (us)", justify="right", style="red")
    summary.add_column("Degradation", justify="right", style="bold")

    for section in report.scenarios:
        good_entry = section.entry(good)
        bad_entry = section.entry(bad)
        summary.add_row(
            _scenario_title(section.scenario),
            str(section.run),
            f"{good_entry.elapsed_us:,}" if good_entry else "N/A",
            f"{bad_entry.elapsed_us:,}" if bad_entry else "N/A",
            _format_ratio(section.degradation),
        )

    console.print(summary)


def print_generation_summary(summary: GenerationSummary, console: Optional[Console] = None) -> None:
    console = console or Console()

    table = Table(title="Data Generation", box=box.ROUNDED)
    table.add_column("Schema set", style="cyan", no_wrap=True)
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Variants", justify="right", style="blue")
    table.add_column("Duration (s)", justify="right", style="green")
    table.add_column("Records/s", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")

    mem_bytes = summary.peak_rss_bytes or 0
    table.add_row(
        summary.schema_set or "-",
        f"{summary.records:,}",
        str(len(summary.variants)),
        f"{summary.duration_seconds:.2f}",
        f"{summary.throughput_records_per_sec:,.2f}",
        f"{mem_bytes / (1024 * 1024):.2f}",
    )
    console.print(table)


__all__ = ["print_report", "print_generation_summary"]
