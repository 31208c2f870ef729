from __future__ import annotations

from finpulse.config import MomentumPolicy
from finpulse.models import Company
from finpulse.skills.metrics import amount, clamp, growth_rate


def _share_increasing(values: list[float]) -> float:
    steps = len(values) - 1
    if steps <= 0:
        return 0.0
    ups = sum(1 for prev, curr in zip(values, values[1:]) if curr > prev)
    return ups / steps


def momentum_score(company: Company, policy: MomentumPolicy | None = None) -> float:
    p = policy or MomentumPolicy()
    if company.periods < p.min_periods:
        return p.neutral_score

    revenues = [amount(r.revenue) for r in company.records]
    profits = [amount(r.net_profit) for r in company.records]

    revenue_momentum = _share_increasing(revenues)
    profit_momentum = _share_increasing(profits)

    rates = [growth_rate(prev, curr) for prev, curr in zip(revenues, revenues[1:])]
    acceleration = _share_increasing(rates) if len(rates) >= 2 else 0.0

    composite = (
        revenue_momentum * p.revenue_weight
        + profit_momentum * p.profit_weight
        + acceleration * p.acceleration_weight
    )
    return clamp(composite * p.output_scale)
