from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class UndervaluationWeights:
    valuation: float = 0.35
    profitability: float = 0.30
    debt: float = 0.20
    roe: float = 0.15
    roe_ceiling: float = 30.0


@dataclass(slots=True)
class MomentumPolicy:
    min_periods: int = 3
    neutral_score: float = 50.0
    revenue_weight: float = 40.0
    profit_weight: float = 40.0
    acceleration_weight: float = 20.0
    # composite is already on a 0-100 scale; the extra factor saturates it
    output_scale: float = 100.0


@dataclass(slots=True)
class ForecastPolicy:
    min_periods: int = 3


@dataclass(slots=True)
class RiskBands:
    high: float = 65.0
    medium: float = 35.0


@dataclass(slots=True)
class SectorBlend:
    momentum: float = 0.6
    health: float = 0.4


@dataclass(slots=True)
class ScreenThresholds:
    undervalued_min_health: float = 60.0
    undervalued_max_pe: float = 3.0
    undervalued_min_margin: float = 5.0
    undervalued_max_debt: float = 2.0
    overvalued_max_health: float = 40.0
    overvalued_min_pe: float = 5.0
    overvalued_min_debt: float = 3.0
    stable_min_market_cap: float = 50000.0
    stable_max_debt: float = 1.0
    stable_min_health: float = 50.0
    history_min_periods: int = 3


@dataclass(slots=True)
class AppConfig:
    undervaluation: UndervaluationWeights = field(default_factory=UndervaluationWeights)
    momentum: MomentumPolicy = field(default_factory=MomentumPolicy)
    forecast: ForecastPolicy = field(default_factory=ForecastPolicy)
    risk: RiskBands = field(default_factory=RiskBands)
    sector: SectorBlend = field(default_factory=SectorBlend)
    screens: ScreenThresholds = field(default_factory=ScreenThresholds)
