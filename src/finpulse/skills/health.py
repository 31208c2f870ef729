from __future__ import annotations

from finpulse.models import Company, Metrics
from finpulse.skills.metrics import calculate_metrics, clamp, growth_rate

# (threshold, points), checked top-down, strict comparisons
PROFITABILITY_BUCKETS: list[tuple[float, float]] = [
    (20.0, 20.0),
    (10.0, 15.0),
    (5.0, 10.0),
    (0.0, 5.0),
]

LEVERAGE_BUCKETS: list[tuple[float, float]] = [
    (0.5, 30.0),
    (1.0, 20.0),
    (2.0, 10.0),
    (3.0, 5.0),
]

GROWTH_BUCKETS: list[tuple[float, float]] = [
    (20.0, 15.0),
    (10.0, 10.0),
    (5.0, 5.0),
]


def _points_above(value: float, buckets: list[tuple[float, float]]) -> float:
    for threshold, points in buckets:
        if value > threshold:
            return points
    return 0.0


def _points_below(value: float, buckets: list[tuple[float, float]]) -> float:
    for threshold, points in buckets:
        if value < threshold:
            return points
    return 0.0


def profitability_points(m: Metrics) -> float:
    return _points_above(m.profit_margin, PROFITABILITY_BUCKETS) + _points_above(
        m.return_on_equity, PROFITABILITY_BUCKETS
    )


def leverage_points(m: Metrics) -> float:
    return _points_below(m.debt_to_equity, LEVERAGE_BUCKETS)


def growth_points(company: Company) -> float:
    if company.periods < 2:
        return 0.0
    prev, curr = company.records[-2], company.records[-1]
    revenue_growth = growth_rate(prev.revenue, curr.revenue)
    profit_growth = growth_rate(prev.net_profit, curr.net_profit)
    return _points_above(revenue_growth, GROWTH_BUCKETS) + _points_above(
        profit_growth, GROWTH_BUCKETS
    )


def health_breakdown(company: Company) -> dict[str, float]:
    m = calculate_metrics(company)
    return {
        "profitability": profitability_points(m),
        "leverage": leverage_points(m),
        "growth": growth_points(company),
    }


def health_score(company: Company) -> float:
    return clamp(sum(health_breakdown(company).values()))
