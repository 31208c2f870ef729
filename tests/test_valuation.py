import pytest

from finpulse.config import UndervaluationWeights
from finpulse.skills.metrics import calculate_metrics
from finpulse.skills.valuation import (
    PopulationStats,
    normalize,
    undervaluation_features,
    undervaluation_score,
)

from conftest import make_company


def _pe_company(ticker, market_cap):
    # margin 10, D/E 0.5, ROE 100 -> roe feature saturates at 1
    return make_company(
        ticker,
        revenue=[1000],
        net_profit=[100],
        total_debt=50,
        total_equity=100,
        market_cap=market_cap,
    )


@pytest.fixture
def pe_population():
    return [_pe_company("LOW", 200), _pe_company("MID", 500), _pe_company("HIGH", 1000)]


@pytest.mark.parametrize("v,lo,hi,expected", [(5, 0, 10, 0.5), (2, 2, 10, 0.0), (10, 2, 10, 1.0), (-1, -3, 1, 0.5)])
def test_normalize(v, lo, hi, expected):
    assert normalize(v, lo, hi) == pytest.approx(expected)


@pytest.mark.parametrize("v", [-100, 0, 3, 1e9])
def test_normalize_flat_range_is_midpoint(v):
    assert normalize(v, 4, 4) == 0.5


def test_population_stats_bounds(pe_population):
    stats = PopulationStats.from_companies(pe_population)
    assert (stats.pe_min, stats.pe_max) == (2, 10)
    assert stats.margin_min == stats.margin_max == pytest.approx(10)
    assert stats.debt_min == stats.debt_max == pytest.approx(0.5)


def test_empty_population_is_degenerate():
    stats = PopulationStats.from_companies([])
    assert stats.pe_min == stats.pe_max == 0


def test_valuation_feature_extremes(pe_population):
    stats = PopulationStats.from_companies(pe_population)
    low = undervaluation_features(calculate_metrics(pe_population[0]), stats)
    high = undervaluation_features(calculate_metrics(pe_population[2]), stats)
    assert low["valuation"] == 1
    assert high["valuation"] == 0
    assert low["profitability"] == 0.5
    assert low["debt"] == 0.5
    assert low["roe"] == 1


def test_weighted_scores(pe_population):
    stats = PopulationStats.from_companies(pe_population)
    scores = [undervaluation_score(c, stats) for c in pe_population]
    assert scores[0] == pytest.approx(75.0)
    assert scores[1] == pytest.approx(61.875)
    assert scores[2] == pytest.approx(40.0)


def test_custom_weights(pe_population):
    stats = PopulationStats.from_companies(pe_population)
    only_valuation = UndervaluationWeights(valuation=1.0, profitability=0, debt=0, roe=0)
    assert undervaluation_score(pe_population[0], stats, only_valuation) == pytest.approx(100)


def test_score_depends_on_population(pe_population):
    target = pe_population[1]
    small = PopulationStats.from_companies(pe_population[:2])
    full = PopulationStats.from_companies(pe_population)
    assert undervaluation_score(target, small) != undervaluation_score(target, full)


def test_score_ignores_population_order(pe_population):
    target = pe_population[1]
    forward = PopulationStats.from_companies(pe_population)
    backward = PopulationStats.from_companies(list(reversed(pe_population)))
    assert forward == backward
    assert undervaluation_score(target, forward) == undervaluation_score(target, backward)


def test_score_is_bounded():
    outlier = make_company("OUT", revenue=[10], net_profit=[-500], total_debt=1e6, total_equity=1, market_cap=1e9)
    peers = [outlier, make_company("A"), make_company("B", market_cap=40)]
    stats = PopulationStats.from_companies(peers)
    for c in peers:
        assert 0 <= undervaluation_score(c, stats) <= 100
