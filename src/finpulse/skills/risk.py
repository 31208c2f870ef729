from __future__ import annotations

from finpulse.config import RiskBands
from finpulse.models import Company, Metrics, RiskLevel
from finpulse.skills.metrics import calculate_metrics

LEVERAGE_RISK: list[tuple[float, float]] = [
    (3.0, 45.0),
    (2.0, 30.0),
    (1.0, 15.0),
]

PROFITABILITY_RISK: list[tuple[float, float]] = [
    (0.0, 40.0),
    (5.0, 25.0),
    (10.0, 10.0),
]

VALUATION_RISK: list[tuple[float, float]] = [
    (12.0, 20.0),
    (7.0, 10.0),
]


def risk_score(m: Metrics) -> float:
    """Additive risk points; not bounded to 0-100."""
    score = 0.0
    for threshold, points in LEVERAGE_RISK:
        if m.debt_to_equity > threshold:
            score += points
            break
    for threshold, points in PROFITABILITY_RISK:
        if m.profit_margin < threshold:
            score += points
            break
    for threshold, points in VALUATION_RISK:
        if m.price_to_equity > threshold:
            score += points
            break
    return score


def risk_band(score: float, bands: RiskBands | None = None) -> RiskLevel:
    bands = bands or RiskBands()
    if score >= bands.high:
        return "high"
    if score >= bands.medium:
        return "medium"
    return "low"


def risk_level(company: Company, bands: RiskBands | None = None) -> RiskLevel:
    return risk_band(risk_score(calculate_metrics(company)), bands)
