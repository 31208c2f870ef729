from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from finpulse.config import MomentumPolicy, SectorBlend
from finpulse.models import Company, SectorSummary
from finpulse.skills.health import health_score
from finpulse.skills.metrics import amount, growth_rate, safe_divide
from finpulse.skills.momentum import momentum_score


@dataclass(slots=True)
class SectorStats:
    sector: str
    companies: int
    total_revenue: float
    total_profit: float
    average_margin: float


@dataclass(slots=True)
class GrowthMetrics:
    average_revenue_growth: float
    average_profit_growth: float
    consistent_growth: bool
    revenue_growth: list[float] = field(default_factory=list)
    profit_growth: list[float] = field(default_factory=list)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def sectors(population: Sequence[Company]) -> list[str]:
    # dict keeps first-occurrence order
    return [s for s in dict.fromkeys(c.sector for c in population) if s]


def companies_by_sector(population: Sequence[Company], sector: str) -> list[Company]:
    if sector == "all":
        return list(population)
    return [c for c in population if c.sector == sector]


def search_companies(population: Sequence[Company], query: str) -> list[Company]:
    q = query.lower()
    return [
        c
        for c in population
        if q in c.name.lower() or q in c.ticker.lower() or q in c.sector.lower()
    ]


def top_by_market_cap(population: Sequence[Company], limit: int = 10) -> list[Company]:
    ranked = sorted(population, key=lambda c: amount(c.latest.market_cap), reverse=True)
    return ranked[:limit]


def sector_stats(population: Sequence[Company]) -> list[SectorStats]:
    out: list[SectorStats] = []
    for sector in sectors(population):
        members = companies_by_sector(population, sector)
        latest = [c.latest for c in members if amount(c.latest.revenue) > 0]
        out.append(
            SectorStats(
                sector=sector,
                companies=len(members),
                total_revenue=sum(amount(r.revenue) for r in latest),
                total_profit=sum(amount(r.net_profit) for r in latest),
                average_margin=_mean([safe_divide(r.net_profit, r.revenue) * 100 for r in latest]),
            )
        )
    return out


def growth_metrics(company: Company) -> GrowthMetrics | None:
    if company.periods < 2:
        return None
    pairs = list(zip(company.records, company.records[1:]))
    revenue = [growth_rate(prev.revenue, curr.revenue) for prev, curr in pairs]
    profit = [growth_rate(prev.net_profit, curr.net_profit) for prev, curr in pairs]
    return GrowthMetrics(
        average_revenue_growth=_mean(revenue),
        average_profit_growth=_mean(profit),
        consistent_growth=all(g > 0 for g in revenue) and all(g > 0 for g in profit),
        revenue_growth=revenue,
        profit_growth=profit,
    )


def sector_ranking(
    population: Sequence[Company],
    blend: SectorBlend | None = None,
    momentum_policy: MomentumPolicy | None = None,
) -> list[SectorSummary]:
    b = blend or SectorBlend()
    # every company has a sector key here, including an empty one
    names = list(dict.fromkeys(c.sector for c in population))

    out: list[SectorSummary] = []
    for sector in names:
        members = [c for c in population if c.sector == sector]
        avg_momentum = _mean([momentum_score(c, momentum_policy) for c in members])
        avg_health = _mean([health_score(c) for c in members])
        out.append(
            SectorSummary(
                sector=sector,
                average_momentum=avg_momentum,
                average_health=avg_health,
                blended_score=avg_momentum * b.momentum + avg_health * b.health,
            )
        )

    # stable sort: ties keep first-occurrence order
    out.sort(key=lambda s: s.blended_score, reverse=True)
    return out
