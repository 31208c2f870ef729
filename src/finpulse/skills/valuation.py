from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from finpulse.config import UndervaluationWeights
from finpulse.models import Company, Metrics
from finpulse.skills.metrics import calculate_metrics, clamp, is_valid_number


def normalize(v: float, low: float, high: float) -> float:
    if high == low:
        return 0.5
    return (v - low) / (high - low)


def _bounds(values: Iterable[float]) -> tuple[float, float]:
    finite = [v for v in values if is_valid_number(v)]
    if not finite:
        return 0.0, 0.0
    return min(finite), max(finite)


@dataclass(slots=True, frozen=True)
class PopulationStats:
    """Min/max of the normalised metrics across one population snapshot."""

    pe_min: float
    pe_max: float
    margin_min: float
    margin_max: float
    debt_min: float
    debt_max: float

    @classmethod
    def from_metrics(cls, metrics: Iterable[Metrics]) -> PopulationStats:
        items = list(metrics)
        pe_min, pe_max = _bounds(m.price_to_equity for m in items)
        margin_min, margin_max = _bounds(m.profit_margin for m in items)
        debt_min, debt_max = _bounds(m.debt_to_equity for m in items)
        return cls(
            pe_min=pe_min,
            pe_max=pe_max,
            margin_min=margin_min,
            margin_max=margin_max,
            debt_min=debt_min,
            debt_max=debt_max,
        )

    @classmethod
    def from_companies(cls, population: Iterable[Company]) -> PopulationStats:
        return cls.from_metrics(calculate_metrics(c) for c in population)


def undervaluation_features(
    m: Metrics,
    stats: PopulationStats,
    roe_ceiling: float = 30.0,
) -> dict[str, float]:
    return {
        # lower P/E and lower leverage score higher
        "valuation": 1 - normalize(m.price_to_equity, stats.pe_min, stats.pe_max),
        "profitability": normalize(m.profit_margin, stats.margin_min, stats.margin_max),
        "debt": 1 - normalize(m.debt_to_equity, stats.debt_min, stats.debt_max),
        "roe": clamp(m.return_on_equity / roe_ceiling, 0.0, 1.0),
    }


def undervaluation_score(
    company: Company,
    stats: PopulationStats,
    weights: UndervaluationWeights | None = None,
) -> float:
    w = weights or UndervaluationWeights()
    f = undervaluation_features(calculate_metrics(company), stats, w.roe_ceiling)
    score = (
        f["valuation"] * w.valuation
        + f["profitability"] * w.profitability
        + f["debt"] * w.debt
        + f["roe"] * w.roe
    )
    return clamp(score * 100)
