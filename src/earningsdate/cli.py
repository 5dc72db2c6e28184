"""Command line entry point: plan earnings trades from a backtest CSV."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from earningsdate.backtest import load_backtests
from earningsdate.config import DEFAULT_SOURCES, EarningsDateConfig, SourceType
from earningsdate.errors import EarningsDateError
from earningsdate.planner import EarningsPlanner
from earningsdate.report import plans_to_frame

app = typer.Typer(add_completion=False, help="Earnings date consensus and trade scheduling.")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_sources(raw: str | None) -> list[SourceType]:
    if not raw:
        return list(DEFAULT_SOURCES)
    try:
        return [SourceType(name.strip().lower()) for name in raw.split(",") if name.strip()]
    except ValueError as exc:
        supported = ", ".join(st.value for st in SourceType)
        raise typer.BadParameter(f"{exc}. Supported: {supported}") from exc


@app.callback()
def callback() -> None:
    """Earnings date consensus and trade scheduling."""


@app.command("plan")
def plan(
    csv_path: Path = typer.Argument(..., help="Backtest results CSV."),
    cache_path: Path = typer.Option(
        Path("data/earnings_cache.json"),
        "--cache",
        help="Consensus cache file (read before, rewritten after the run).",
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore cached consensus results."),
    sources: str | None = typer.Option(
        None,
        "--sources",
        help="Comma-separated sources (default: bloomberg,finviz,yahoo,zacks).",
    ),
    timeout: float = typer.Option(10.0, "--timeout", min=0.1, help="Per-request timeout in seconds."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
) -> None:
    """Estimate earnings dates for every symbol in CSV_PATH and schedule trades."""
    _setup_logging(log_level)
    console = Console(width=200)

    try:
        backtests = load_backtests(csv_path)
    except (OSError, EarningsDateError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        console.print(f"[red]Error:[/red] cannot read {csv_path}: {exc}")
        raise typer.Exit(1)

    config = EarningsDateConfig(
        sources=_parse_sources(sources),
        cache_path=str(cache_path),
        use_cache=not no_cache,
        request_timeout=timeout,
    )
    plans = EarningsPlanner(config).plan(backtests)
    df = plans_to_frame(plans)

    t = Table(title=f"Earnings trades ({len(plans)} symbols)")
    for col in df.columns:
        t.add_column(col)
    for _, row in df.iterrows():
        t.add_row(*["" if pd.isna(v) else str(v) for v in row.tolist()])
    console.print(t)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
