from __future__ import annotations

import json
import time
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from finpulse.config import AppConfig
from finpulse.engine import AnalysisEngine
from finpulse.log import setup_logger
from finpulse.providers.base import CompanyDataProvider
from finpulse.skills.screens import (
    find_growth_leaders,
    find_overvalued,
    find_stable_companies,
    find_undervalued,
)

logger = setup_logger("finpulse.pipeline")


def _diag(
    stage: str,
    status: str,
    started_at: float,
    detail: str = "",
    exc: Exception | None = None,
    **meta: object,
) -> dict:
    entry = {
        "stage": stage,
        "status": status,
        "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
        "detail": detail,
        "meta": meta,
    }
    if exc is not None:
        entry["error_type"] = type(exc).__name__
        entry["error"] = str(exc)
    return entry


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def run_analysis(
    watchlist: list[str],
    provider: CompanyDataProvider,
    config: AppConfig | None = None,
    output_dir: str | None = None,
) -> dict:
    cfg = config or AppConfig()
    diagnostics: list[dict] = []
    status = "ok"
    failed_stage = ""

    companies = []
    analyses = []
    ranking = []
    screens: dict[str, list[str]] = {}

    t = time.perf_counter()
    try:
        companies = provider.get_companies(watchlist)
        diagnostics.append(
            _diag(
                "company_data",
                "ok",
                t,
                "company records loaded",
                provider=type(provider).__name__,
                company_count=len(companies),
            )
        )
        logger.info("loaded %d companies via %s", len(companies), type(provider).__name__)
    except Exception as e:
        status = "failed"
        failed_stage = "company_data"
        diagnostics.append(_diag("company_data", "error", t, exc=e, provider=type(provider).__name__))
        logger.error("company data stage failed: %s: %s", type(e).__name__, e)

    engine = AnalysisEngine(companies, cfg)

    if status != "failed":
        t = time.perf_counter()
        try:
            analyses = engine.analyze_all()
            categories: dict[str, int] = {}
            for a in analyses:
                categories[a.classification.category] = categories.get(a.classification.category, 0) + 1
            diagnostics.append(
                _diag(
                    "analysis",
                    "ok",
                    t,
                    "scoring and classification done",
                    analysis_count=len(analyses),
                    categories=categories,
                )
            )
            logger.info("analyzed %d companies", len(analyses))
        except Exception as e:
            status = "failed"
            failed_stage = "analysis"
            diagnostics.append(_diag("analysis", "error", t, exc=e))
            logger.error("analysis stage failed: %s: %s", type(e).__name__, e)

    if status != "failed":
        t = time.perf_counter()
        try:
            ranking = engine.sector_ranking()
            diagnostics.append(
                _diag("sector_ranking", "ok", t, "sector ranking done", sector_count=len(ranking))
            )
        except Exception as e:
            status = "degraded"
            diagnostics.append(
                _diag(
                    "sector_ranking",
                    "warning",
                    t,
                    "sector ranking failed, report continues without it",
                    exc=e,
                )
            )
            logger.warning("sector ranking degraded: %s: %s", type(e).__name__, e)
            ranking = []

        t = time.perf_counter()
        try:
            screens = {
                "undervalued": [h.company.ticker for h in find_undervalued(companies, cfg.screens)],
                "overvalued": [h.company.ticker for h in find_overvalued(companies, cfg.screens)],
                "growth_leaders": [h.company.ticker for h in find_growth_leaders(companies, cfg.screens)],
                "stable": [h.company.ticker for h in find_stable_companies(companies, cfg.screens)],
            }
            diagnostics.append(
                _diag(
                    "screens",
                    "ok",
                    t,
                    "screens done",
                    **{k: len(v) for k, v in screens.items()},
                )
            )
        except Exception as e:
            status = "degraded"
            diagnostics.append(
                _diag(
                    "screens",
                    "warning",
                    t,
                    "screens failed, report continues without them",
                    exc=e,
                )
            )
            logger.warning("screens degraded: %s: %s", type(e).__name__, e)
            screens = {}

    report = {
        "generated_at": _utcnow().isoformat(),
        "status": status,
        "failed_stage": failed_stage,
        "watchlist_size": len(watchlist),
        "provider": type(provider).__name__,
        "policy": {
            "undervaluation_weights": asdict(cfg.undervaluation),
            "momentum": asdict(cfg.momentum),
            "risk_bands": asdict(cfg.risk),
            "sector_blend": asdict(cfg.sector),
        },
        "diagnostics": diagnostics,
        "analyses": [a.to_dict() for a in analyses],
        "sector_ranking": [asdict(s) for s in ranking],
        "screens": screens,
    }

    if output_dir is not None:
        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        out_file = out_dir / f"analysis_{_utcnow().strftime('%Y%m%d_%H%M%S')}.json"
        out_file.write_text(
            json.dumps(report, ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )
        report["file"] = str(out_file)
        logger.info("report written to %s", out_file)

    return report
