from __future__ import annotations

import math

from finpulse.models import Company, Metrics


def clamp(v: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, v))


def is_valid_number(v: object) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def amount(v: float | None) -> float:
    # missing, NaN and infinite fields all read as 0
    return float(v) if is_valid_number(v) else 0.0


def safe_divide(a: float | None, b: float | None) -> float:
    b = amount(b)
    if b == 0:
        return 0.0
    return amount(a) / b


def growth_rate(prev: float | None, curr: float | None) -> float:
    """Period-over-period change in percent, 0 when ``prev`` is zero or missing."""
    prev = amount(prev)
    if prev == 0:
        return 0.0
    return (amount(curr) - prev) / prev * 100


def calculate_metrics(company: Company) -> Metrics:
    # latest record only, trailing snapshot
    r = company.latest
    return Metrics(
        profit_margin=safe_divide(r.net_profit, r.revenue) * 100,
        return_on_equity=safe_divide(r.net_profit, r.total_equity) * 100,
        debt_to_equity=safe_divide(r.total_debt, r.total_equity),
        price_to_equity=safe_divide(r.market_cap, r.total_equity),
        price_to_sales=safe_divide(r.market_cap, r.revenue),
        revenue=amount(r.revenue),
        net_profit=amount(r.net_profit),
        total_debt=amount(r.total_debt),
        total_equity=amount(r.total_equity),
        market_cap=amount(r.market_cap),
    )
