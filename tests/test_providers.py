import pandas as pd
import pytest

from finpulse.models import Company
from finpulse.providers.base import validate_population
from finpulse.providers.factory import build_company_provider
from finpulse.providers.mock_provider import MockCompanyDataProvider
from finpulse.providers.yfinance_provider import YFinanceCompanyDataProvider

from conftest import make_company


def test_mock_provider_is_deterministic():
    p = MockCompanyDataProvider()
    first = p.get_companies(["AAA", "BBB", "CCC"])
    second = p.get_companies(["AAA", "BBB", "CCC"])
    assert first == second
    assert [c.ticker for c in first] == ["AAA", "BBB", "CCC"]
    assert all(c.periods == 5 for c in first)
    assert [r.period for r in first[0].records] == ["FY2021", "FY2022", "FY2023", "FY2024", "FY2025"]


def test_validate_population_rejects_empty_history():
    with pytest.raises(ValueError, match="no fiscal records"):
        validate_population([Company(name="X", ticker="X", sector="S", records=())])


def test_validate_population_rejects_duplicate_tickers():
    with pytest.raises(ValueError, match="duplicate ticker"):
        validate_population([make_company("DUP"), make_company("DUP")])


def test_factory():
    assert isinstance(build_company_provider("mock"), MockCompanyDataProvider)
    assert isinstance(build_company_provider(" YFinance "), YFinanceCompanyDataProvider)
    with pytest.raises(ValueError):
        build_company_provider("csv")


class _FakeTicker:
    def __init__(self, symbol: str) -> None:
        cols = [pd.Timestamp("2024-03-31"), pd.Timestamp("2023-03-31"), pd.Timestamp("2022-03-31")]
        self.income_stmt = pd.DataFrame(
            {cols[0]: [1200.0, 150.0], cols[1]: [1000.0, 100.0], cols[2]: [900.0, float("nan")]},
            index=["Total Revenue", "Net Income"],
        )
        self.balance_sheet = pd.DataFrame(
            {cols[0]: [200.0, 500.0, 10.0], cols[1]: [250.0, 450.0, 10.0], cols[2]: [300.0, 400.0, None]},
            index=["Total Debt", "Stockholders Equity", "Ordinary Shares Number"],
        )
        self.info = {"shortName": f"{symbol} Corp", "sector": "Industrials"}
        self.fast_info = {"marketCap": 2500.0}

    def history(self, **kwargs):
        idx = pd.date_range("2021-01-31", periods=48, freq=pd.offsets.MonthEnd())
        return pd.DataFrame({"Close": [100.0 + i for i in range(len(idx))]}, index=idx)


class _FakeYF:
    Ticker = _FakeTicker


def test_yfinance_company_mapping():
    c = YFinanceCompanyDataProvider(scale=1.0)._company(_FakeYF, "XYZ")
    assert c.name == "XYZ Corp"
    assert c.sector == "Industrials"
    assert [r.period for r in c.records] == ["FY2022", "FY2023", "FY2024"]

    oldest, _, latest = c.records
    assert oldest.net_profit == 0
    # no share count for the oldest year and it is not the latest
    assert oldest.market_cap == 0
    assert latest.revenue == 1200
    assert latest.total_equity == 500
    # 10 shares at the March 2024 month-end close
    assert latest.market_cap == pytest.approx(10 * (100.0 + 38))
