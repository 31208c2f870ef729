"""
tests/conftest.py
=================
Shared fixtures and record builders for the finpulse test suite.
"""
from __future__ import annotations

import pytest

from finpulse.models import Company, FiscalYearRecord, Metrics
from finpulse.skills.classifier import ScoreSnapshot


def make_company(
    ticker: str = "ACME",
    sector: str = "Technology",
    revenue: list[float] | None = None,
    net_profit: list[float] | None = None,
    total_debt: float | list[float] = 200.0,
    total_equity: float | list[float] = 500.0,
    market_cap: float | list[float] = 1500.0,
    first_fy: int = 2021,
) -> Company:
    revenue = revenue if revenue is not None else [1000.0]
    net_profit = net_profit if net_profit is not None else [100.0] * len(revenue)

    def at(v: float | list[float], i: int) -> float:
        return v[i] if isinstance(v, list) else v

    records = tuple(
        FiscalYearRecord(
            period=f"FY{first_fy + i}",
            revenue=revenue[i],
            net_profit=net_profit[i],
            total_debt=at(total_debt, i),
            total_equity=at(total_equity, i),
            market_cap=at(market_cap, i),
        )
        for i in range(len(revenue))
    )
    return Company(name=f"{ticker} Ltd", ticker=ticker, sector=sector, records=records)


def make_metrics(**overrides: float) -> Metrics:
    values = dict(
        profit_margin=10.0,
        return_on_equity=15.0,
        debt_to_equity=1.0,
        price_to_equity=5.0,
        price_to_sales=1.0,
        revenue=1000.0,
        net_profit=100.0,
        total_debt=500.0,
        total_equity=500.0,
        market_cap=2500.0,
    )
    values.update(overrides)
    return Metrics(**values)


def make_snapshot(
    health: float = 50.0,
    risk: str = "medium",
    undervaluation: float = 50.0,
    momentum: float = 50.0,
    **metric_overrides: float,
) -> ScoreSnapshot:
    return ScoreSnapshot(
        metrics=make_metrics(**metric_overrides),
        health_score=health,
        risk_level=risk,
        undervaluation_score=undervaluation,
        momentum_score=momentum,
    )


@pytest.fixture
def single_year_company() -> Company:
    """revenue=1000, profit=100, debt=200, equity=500, market cap=1500."""
    return make_company()


@pytest.fixture
def population() -> list[Company]:
    return [
        make_company(
            "GROW",
            "Technology",
            revenue=[1000, 1300, 1700, 2300],
            net_profit=[150, 210, 300, 420],
            total_debt=100,
            total_equity=1000,
            market_cap=2000,
        ),
        make_company(
            "DEBT",
            "Energy",
            revenue=[5000, 4800, 4500],
            net_profit=[100, -50, -200],
            total_debt=4000,
            total_equity=1000,
            market_cap=15000,
        ),
        make_company(
            "BANK",
            "Banking",
            revenue=[40000, 42000, 44000],
            net_profit=[6000, 6300, 6600],
            total_debt=20000,
            total_equity=60000,
            market_cap=90000,
        ),
        make_company(
            "SOFT",
            "Technology",
            revenue=[800, 820],
            net_profit=[80, 70],
            total_debt=300,
            total_equity=400,
            market_cap=4000,
        ),
    ]
