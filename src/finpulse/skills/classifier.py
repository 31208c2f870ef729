from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from finpulse.models import Category, Classification, Metrics, RiskLevel


@dataclass(slots=True, frozen=True)
class ScoreSnapshot:
    """Scores of one company taken from the same latest-period metrics."""

    metrics: Metrics
    health_score: float
    risk_level: RiskLevel
    undervaluation_score: float
    momentum_score: float


@dataclass(slots=True, frozen=True)
class ClassificationRule:
    name: str
    predicate: Callable[[ScoreSnapshot], bool]
    category: Category
    confidence: float


CLASSIFICATION_RULES: list[ClassificationRule] = [
    ClassificationRule(
        "undervalued",
        lambda s: s.undervaluation_score > 70 and s.health_score > 60,
        "undervalued",
        0.90,
    ),
    ClassificationRule(
        "overvalued",
        lambda s: s.health_score < 40
        and (s.metrics.debt_to_equity > 3 or s.metrics.profit_margin < 0),
        "overvalued",
        0.85,
    ),
    ClassificationRule(
        "growth",
        lambda s: s.momentum_score > 75 and s.health_score > 50,
        "growth",
        0.80,
    ),
    ClassificationRule(
        "stable",
        lambda s: s.risk_level == "low"
        and s.metrics.market_cap > 50000
        and s.health_score > 50,
        "stable",
        0.85,
    ),
]

FALLBACK = Classification(category="neutral", confidence=0.50)


def classify(
    snapshot: ScoreSnapshot,
    rules: list[ClassificationRule] | None = None,
) -> Classification:
    # first match wins
    for rule in CLASSIFICATION_RULES if rules is None else rules:
        if rule.predicate(snapshot):
            return Classification(category=rule.category, confidence=rule.confidence)
    return Classification(category=FALLBACK.category, confidence=FALLBACK.confidence)
