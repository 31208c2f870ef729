from __future__ import annotations

from finpulse.providers.base import CompanyDataProvider
from finpulse.providers.mock_provider import MockCompanyDataProvider
from finpulse.providers.yfinance_provider import YFinanceCompanyDataProvider

PROVIDER_KINDS = ["mock", "yfinance"]


def build_company_provider(kind: str) -> CompanyDataProvider:
    mode = kind.strip().lower()
    if mode == "mock":
        return MockCompanyDataProvider()
    if mode == "yfinance":
        return YFinanceCompanyDataProvider()
    raise ValueError(f"unsupported company data provider: {kind}")
