from __future__ import annotations

from abc import ABC, abstractmethod

from finpulse.models import Company


class CompanyDataProvider(ABC):
    @abstractmethod
    def get_companies(self, tickers: list[str]) -> list[Company]:
        raise NotImplementedError


def validate_population(companies: list[Company]) -> list[Company]:
    seen: set[str] = set()
    for c in companies:
        if not c.records:
            raise ValueError(f"company has no fiscal records: {c.ticker}")
        if c.ticker in seen:
            raise ValueError(f"duplicate ticker in population: {c.ticker}")
        seen.add(c.ticker)
    return companies
