from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from finpulse.models import Insight, InsightKind
from finpulse.skills.classifier import ScoreSnapshot

Branch = tuple[Callable[[ScoreSnapshot], bool], InsightKind, str]


@dataclass(slots=True, frozen=True)
class InsightRule:
    category: str
    branches: tuple[Branch, ...]

    def evaluate(self, snapshot: ScoreSnapshot) -> Insight | None:
        for predicate, kind, text in self.branches:
            if predicate(snapshot):
                return Insight(kind=kind, text=text)
        return None


INSIGHT_RULES: list[InsightRule] = [
    InsightRule(
        "health",
        (
            (lambda s: s.health_score > 70, "positive", "Strong financial health with solid fundamentals"),
            (lambda s: s.health_score < 40, "negative", "Weak financial health - caution advised"),
        ),
    ),
    InsightRule(
        "valuation",
        (
            (lambda s: s.undervaluation_score > 70, "positive", "Potentially undervalued with good upside"),
            (lambda s: s.metrics.price_to_equity > 8, "warning", "High valuation - may be overpriced"),
        ),
    ),
    InsightRule(
        "momentum",
        (
            (lambda s: s.momentum_score > 75, "positive", "Strong positive momentum in growth"),
            (lambda s: s.momentum_score < 30, "negative", "Declining momentum - growth slowing"),
        ),
    ),
    InsightRule(
        "leverage",
        (
            (lambda s: s.metrics.debt_to_equity > 3, "negative", "High debt levels pose risk"),
            (lambda s: s.metrics.debt_to_equity < 0.5, "positive", "Low debt provides financial flexibility"),
        ),
    ),
    InsightRule(
        "profitability",
        (
            (lambda s: s.metrics.profit_margin > 20, "positive", "Excellent profit margins"),
            (lambda s: s.metrics.profit_margin < 0, "negative", "Company is currently unprofitable"),
        ),
    ),
]


def generate_insights(
    snapshot: ScoreSnapshot,
    rules: list[InsightRule] | None = None,
) -> list[Insight]:
    out: list[Insight] = []
    for rule in INSIGHT_RULES if rules is None else rules:
        insight = rule.evaluate(snapshot)
        if insight is not None:
            out.append(insight)
    return out
