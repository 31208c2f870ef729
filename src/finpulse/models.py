from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Literal

RiskLevel = Literal["low", "medium", "high"]
Category = Literal["undervalued", "overvalued", "growth", "stable", "neutral"]
InsightKind = Literal["positive", "negative", "warning"]


@dataclass(slots=True, frozen=True)
class FiscalYearRecord:
    period: str
    revenue: float | None = 0.0
    net_profit: float | None = 0.0
    total_debt: float | None = 0.0
    total_equity: float | None = 0.0
    market_cap: float | None = 0.0


@dataclass(slots=True, frozen=True)
class Company:
    name: str
    ticker: str
    sector: str
    records: tuple[FiscalYearRecord, ...] = ()

    @property
    def latest(self) -> FiscalYearRecord:
        return self.records[-1]

    @property
    def periods(self) -> int:
        return len(self.records)


@dataclass(slots=True)
class Metrics:
    profit_margin: float
    return_on_equity: float
    debt_to_equity: float
    price_to_equity: float
    price_to_sales: float
    revenue: float
    net_profit: float
    total_debt: float
    total_equity: float
    market_cap: float


@dataclass(slots=True)
class Classification:
    category: Category
    confidence: float


@dataclass(slots=True)
class Prediction:
    predicted_revenue: float | None
    predicted_profit: float | None


@dataclass(slots=True)
class Insight:
    kind: InsightKind
    text: str


@dataclass(slots=True)
class SectorSummary:
    sector: str
    average_momentum: float
    average_health: float
    blended_score: float


@dataclass(slots=True)
class CompanyAnalysis:
    name: str
    ticker: str
    sector: str
    records: tuple[FiscalYearRecord, ...]
    metrics: Metrics
    health_score: float
    risk_level: RiskLevel
    undervaluation_score: float
    momentum_score: float
    classification: Classification
    predicted_revenue: float | None
    predicted_profit: float | None
    insights: list[Insight] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = asdict(self)
        out["records"] = [asdict(r) for r in self.records]
        return out
