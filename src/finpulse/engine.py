from __future__ import annotations

from collections.abc import Sequence

from finpulse.config import AppConfig
from finpulse.log import setup_logger
from finpulse.models import (
    Classification,
    Company,
    CompanyAnalysis,
    Insight,
    Metrics,
    Prediction,
    RiskLevel,
    SectorSummary,
)
from finpulse.skills import sectors as sector_skills
from finpulse.skills.classifier import ScoreSnapshot, classify
from finpulse.skills.forecast import forecast
from finpulse.skills.health import health_score
from finpulse.skills.insights import generate_insights
from finpulse.skills.metrics import calculate_metrics
from finpulse.skills.momentum import momentum_score
from finpulse.skills.risk import risk_level
from finpulse.skills.valuation import PopulationStats, undervaluation_score

logger = setup_logger("finpulse.engine")


class AnalysisEngine:
    """
    Scores companies against one population snapshot.

    Nothing is cached: every method recomputes from the records it is given.
    ``analyze_all`` builds the population statistics once and reuses them for
    each company; single-company calls rescan the population.
    """

    def __init__(self, population: Sequence[Company], config: AppConfig | None = None) -> None:
        self.population: tuple[Company, ...] = tuple(population)
        self.config = config or AppConfig()

    def metrics(self, company: Company) -> Metrics:
        return calculate_metrics(company)

    def health_score(self, company: Company) -> float:
        return health_score(company)

    def risk_level(self, company: Company) -> RiskLevel:
        return risk_level(company, self.config.risk)

    def population_stats(self) -> PopulationStats:
        return PopulationStats.from_companies(self.population)

    def undervaluation_score(
        self, company: Company, stats: PopulationStats | None = None
    ) -> float:
        stats = stats or self.population_stats()
        return undervaluation_score(company, stats, self.config.undervaluation)

    def momentum_score(self, company: Company) -> float:
        return momentum_score(company, self.config.momentum)

    def forecast(self, company: Company) -> Prediction:
        return forecast(company, self.config.forecast)

    def snapshot(self, company: Company, stats: PopulationStats | None = None) -> ScoreSnapshot:
        return ScoreSnapshot(
            metrics=self.metrics(company),
            health_score=self.health_score(company),
            risk_level=self.risk_level(company),
            undervaluation_score=self.undervaluation_score(company, stats),
            momentum_score=self.momentum_score(company),
        )

    def classify(self, company: Company, stats: PopulationStats | None = None) -> Classification:
        return classify(self.snapshot(company, stats))

    def insights(self, company: Company, stats: PopulationStats | None = None) -> list[Insight]:
        return generate_insights(self.snapshot(company, stats))

    def analyze(self, company: Company, stats: PopulationStats | None = None) -> CompanyAnalysis:
        snap = self.snapshot(company, stats)
        prediction = self.forecast(company)
        return CompanyAnalysis(
            name=company.name,
            ticker=company.ticker,
            sector=company.sector,
            records=company.records,
            metrics=snap.metrics,
            health_score=snap.health_score,
            risk_level=snap.risk_level,
            undervaluation_score=snap.undervaluation_score,
            momentum_score=snap.momentum_score,
            classification=classify(snap),
            predicted_revenue=prediction.predicted_revenue,
            predicted_profit=prediction.predicted_profit,
            insights=generate_insights(snap),
        )

    def analyze_all(self) -> list[CompanyAnalysis]:
        stats = self.population_stats()
        logger.debug("analyzing %d companies", len(self.population))
        return [self.analyze(c, stats) for c in self.population]

    def sector_ranking(self) -> list[SectorSummary]:
        return sector_skills.sector_ranking(
            self.population, self.config.sector, self.config.momentum
        )


def analyze_all(
    population: Sequence[Company], config: AppConfig | None = None
) -> list[CompanyAnalysis]:
    return AnalysisEngine(population, config).analyze_all()


def sector_ranking(
    population: Sequence[Company], config: AppConfig | None = None
) -> list[SectorSummary]:
    return AnalysisEngine(population, config).sector_ranking()
