from __future__ import annotations

from finpulse.models import Company, FiscalYearRecord
from finpulse.providers.base import CompanyDataProvider, validate_population


class MockCompanyDataProvider(CompanyDataProvider):
    SECTORS = ["Technology", "Banking", "Energy", "Consumer"]

    def __init__(self, years: int = 5, first_fy: int = 2021) -> None:
        self.years = years
        self.first_fy = first_fy

    def get_companies(self, tickers: list[str]) -> list[Company]:
        out: list[Company] = []
        for i, ticker in enumerate(tickers):
            base_revenue = 8000.0 + i * 4500.0
            growth = 1.0 + ((i % 5) - 1) * 0.06
            margin = 0.04 + (i % 4) * 0.05
            leverage = 0.3 + (i % 6) * 0.6

            records: list[FiscalYearRecord] = []
            for y in range(self.years):
                revenue = round(base_revenue * growth**y, 2)
                equity = round(revenue * 0.45, 2)
                records.append(
                    FiscalYearRecord(
                        period=f"FY{self.first_fy + y}",
                        revenue=revenue,
                        net_profit=round(revenue * (margin + y * 0.004 * (1 - i % 2 * 2)), 2),
                        total_debt=round(equity * leverage, 2),
                        total_equity=equity,
                        market_cap=round(equity * (1.5 + (i % 7) * 1.4), 2),
                    )
                )

            out.append(
                Company(
                    name=f"{ticker}_NAME",
                    ticker=ticker,
                    sector=self.SECTORS[i % len(self.SECTORS)],
                    records=tuple(records),
                )
            )
        return validate_population(out)
