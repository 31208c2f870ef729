from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from finpulse.pipelines.analysis_run import run_analysis
from finpulse.providers.factory import PROVIDER_KINDS, build_company_provider

CATEGORIES = ["undervalued", "overvalued", "growth", "stable", "neutral"]
STATUS_STYLES = {"ok": "green", "warning": "yellow", "error": "red"}


def _print_diagnostics(report: dict) -> None:
    if not report.get("diagnostics"):
        return

    table = Table(title=f"Run diagnostics ({report.get('status', 'unknown')})")
    for name in ("Stage", "Status", "ms", "Detail"):
        table.add_column(name)

    for item in report["diagnostics"]:
        status = item.get("status", "unknown")
        style = STATUS_STYLES.get(status, "white")
        if item.get("error"):
            note = f"{item.get('error_type', 'Error')}: {item['error']}"
        else:
            note = item.get("detail", "")
        table.add_row(item["stage"], f"[{style}]{status}[/{style}]", f"{item['duration_ms']:.1f}", note)

    Console().print(table)


def _read_watchlist(path: str) -> list[str]:
    """One ticker per line. Blank lines and `#` comments are skipped, repeats dropped."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"watchlist not found: {path}")
    tickers: list[str] = []
    for line in p.read_text(encoding="utf-8").splitlines():
        ticker = line.split("#", 1)[0].strip().upper()
        if ticker and ticker not in tickers:
            tickers.append(ticker)
    return tickers


def _fmt(v: float | None, digits: int = 1) -> str:
    return "-" if v is None else f"{v:,.{digits}f}"


def _run(args: argparse.Namespace) -> dict:
    symbols = _read_watchlist(args.watchlist)
    provider = build_company_provider(args.provider)
    report = run_analysis(
        watchlist=symbols,
        provider=provider,
        output_dir=getattr(args, "output_dir", None),
    )

    _print_diagnostics(report)

    status = report.get("status", "ok")
    if status == "failed":
        Console().print(f"[red]Analysis failed at stage: {report.get('failed_stage', 'unknown')}[/red]")
        raise SystemExit(1)
    if status == "degraded":
        Console().print("[yellow]Analysis finished degraded: some stages failed and were skipped.[/yellow]")
    return report


def cmd_analyze(args: argparse.Namespace) -> None:
    if args.category and args.category not in CATEGORIES:
        raise ValueError(f"unknown category: {args.category}")
    report = _run(args)

    table = Table(title="Company analysis")
    table.add_column("Ticker")
    table.add_column("Sector")
    table.add_column("Health")
    table.add_column("Underval.")
    table.add_column("Momentum")
    table.add_column("Risk")
    table.add_column("Category")
    table.add_column("Next revenue")
    table.add_column("Next profit")
    table.add_column("Insights")

    for item in report["analyses"]:
        category = item["classification"]["category"]
        if args.category and category != args.category:
            continue
        insights = "; ".join(f"[{i['kind']}] {i['text']}" for i in item["insights"])
        table.add_row(
            item["ticker"],
            item["sector"],
            _fmt(item["health_score"], 0),
            _fmt(item["undervaluation_score"]),
            _fmt(item["momentum_score"]),
            item["risk_level"],
            f"{category} ({item['classification']['confidence']:.2f})",
            _fmt(item["predicted_revenue"]),
            _fmt(item["predicted_profit"]),
            insights,
        )

    console = Console()
    console.print(table)
    if report.get("file"):
        console.print(f"\nReport saved: {report['file']}")


def cmd_sectors(args: argparse.Namespace) -> None:
    report = _run(args)

    table = Table(title="Sector ranking")
    table.add_column("#")
    table.add_column("Sector")
    table.add_column("Avg momentum")
    table.add_column("Avg health")
    table.add_column("Blended")

    for rank, item in enumerate(report["sector_ranking"], start=1):
        table.add_row(
            str(rank),
            item["sector"],
            _fmt(item["average_momentum"]),
            _fmt(item["average_health"]),
            _fmt(item["blended_score"]),
        )

    Console().print(table)


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--watchlist", type=str, required=True, help="ticker file, one per line")
    p.add_argument(
        "--provider",
        type=str,
        default="mock",
        choices=PROVIDER_KINDS,
        help="company data source (mock/yfinance)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finpulse")
    sub = parser.add_subparsers(required=True)

    analyze = sub.add_parser("analyze", help="score, classify and forecast every company")
    _add_common(analyze)
    analyze.add_argument("--output-dir", type=str, default=None, help="write a JSON report here")
    analyze.add_argument("--category", type=str, default=None, choices=CATEGORIES, help="only show one category")
    analyze.set_defaults(func=cmd_analyze)

    sectors = sub.add_parser("sectors", help="rank sectors by blended momentum and health")
    _add_common(sectors)
    sectors.set_defaults(func=cmd_sectors)
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
