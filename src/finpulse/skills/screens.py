from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from finpulse.config import RiskBands, ScreenThresholds
from finpulse.models import Company, Metrics, RiskLevel
from finpulse.skills.health import health_score
from finpulse.skills.metrics import amount, calculate_metrics, clamp, growth_rate
from finpulse.skills.risk import risk_level


@dataclass(slots=True)
class ScreenHit:
    company: Company
    metrics: Metrics
    health_score: float


@dataclass(slots=True)
class RiskReturnPoint:
    name: str
    ticker: str
    sector: str
    risk_level: RiskLevel
    potential_return: float
    health_score: float
    metrics: Metrics


def _hits(population: Sequence[Company], keep) -> list[ScreenHit]:
    out: list[ScreenHit] = []
    for c in population:
        m = calculate_metrics(c)
        h = health_score(c)
        if keep(c, m, h):
            out.append(ScreenHit(company=c, metrics=m, health_score=h))
    return out


def find_undervalued(
    population: Sequence[Company], t: ScreenThresholds | None = None
) -> list[ScreenHit]:
    t = t or ScreenThresholds()
    return _hits(
        population,
        lambda c, m, h: h > t.undervalued_min_health
        and m.price_to_equity < t.undervalued_max_pe
        and m.profit_margin > t.undervalued_min_margin
        and m.debt_to_equity < t.undervalued_max_debt,
    )


def find_overvalued(
    population: Sequence[Company], t: ScreenThresholds | None = None
) -> list[ScreenHit]:
    t = t or ScreenThresholds()
    return _hits(
        population,
        lambda c, m, h: h < t.overvalued_max_health
        and (
            m.price_to_equity > t.overvalued_min_pe
            or m.profit_margin < 0
            or m.debt_to_equity > t.overvalued_min_debt
        ),
    )


def _always_growing(c: Company) -> bool:
    return all(
        amount(curr.revenue) > amount(prev.revenue)
        and amount(curr.net_profit) > amount(prev.net_profit)
        for prev, curr in zip(c.records, c.records[1:])
    )


def find_growth_leaders(
    population: Sequence[Company], t: ScreenThresholds | None = None
) -> list[ScreenHit]:
    t = t or ScreenThresholds()
    return _hits(
        population,
        lambda c, m, h: c.periods >= t.history_min_periods and _always_growing(c),
    )


def find_stable_companies(
    population: Sequence[Company], t: ScreenThresholds | None = None
) -> list[ScreenHit]:
    t = t or ScreenThresholds()
    return _hits(
        population,
        lambda c, m, h: c.periods >= t.history_min_periods
        and m.market_cap > t.stable_min_market_cap
        and m.debt_to_equity < t.stable_max_debt
        and h > t.stable_min_health
        and all(amount(r.net_profit) > 0 for r in c.records),
    )


def potential_return(company: Company) -> float:
    m = calculate_metrics(company)
    potential = health_score(company)

    if m.price_to_equity < 2:
        potential += 20
    if m.profit_margin > 15:
        potential += 15
    if m.debt_to_equity < 0.5:
        potential += 10

    if company.periods >= 2:
        growth = growth_rate(company.records[-2].revenue, company.records[-1].revenue)
        if growth > 20:
            potential += 15
        elif growth > 10:
            potential += 10

    return clamp(potential)


def risk_return_data(
    population: Sequence[Company], bands: RiskBands | None = None
) -> list[RiskReturnPoint]:
    return [
        RiskReturnPoint(
            name=c.name,
            ticker=c.ticker,
            sector=c.sector,
            risk_level=risk_level(c, bands),
            potential_return=potential_return(c),
            health_score=health_score(c),
            metrics=calculate_metrics(c),
        )
        for c in population
    ]
