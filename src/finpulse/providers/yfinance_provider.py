from __future__ import annotations

import math

from finpulse.log import setup_logger
from finpulse.models import Company, FiscalYearRecord
from finpulse.providers.base import CompanyDataProvider, validate_population

logger = setup_logger("finpulse.providers.yfinance")

# yfinance reports raw currency units; the scoring thresholds assume crores
CRORE = 1e7

REVENUE_ROWS = ["Total Revenue", "Operating Revenue"]
PROFIT_ROWS = ["Net Income", "Net Income Common Stockholders"]
DEBT_ROWS = ["Total Debt", "Long Term Debt"]
EQUITY_ROWS = ["Stockholders Equity", "Common Stock Equity", "Total Equity Gross Minority Interest"]
SHARES_ROWS = ["Ordinary Shares Number", "Share Issued"]


def _safe_float(v: object) -> float | None:
    if v is None:
        return None
    try:
        out = float(v)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def _pick_row(frame, candidates: list[str], column) -> float | None:
    if frame is None or frame.empty or column not in frame.columns:
        return None
    for row in candidates:
        if row in frame.index:
            v = _safe_float(frame.at[row, column])
            if v is not None:
                return v
    return None


class YFinanceCompanyDataProvider(CompanyDataProvider):
    def __init__(self, scale: float = CRORE, default_sector: str = "Unknown") -> None:
        self.scale = scale
        self.default_sector = default_sector

    def _scaled(self, v: float | None) -> float:
        return 0.0 if v is None else v / self.scale

    @staticmethod
    def _close_on_or_before(hist, when) -> float | None:
        if hist is None or hist.empty:
            return None
        closes = hist["Close"].dropna()
        index = closes.index.tz_localize(None) if closes.index.tz is not None else closes.index
        closes.index = index
        before = closes[closes.index <= when]
        if before.empty:
            return None
        return _safe_float(before.iloc[-1])

    def _company(self, yf, ticker: str) -> Company | None:
        t = yf.Ticker(ticker)
        income = t.income_stmt
        balance = t.balance_sheet
        if income is None or income.empty:
            return None

        periods = sorted(income.columns)
        hist = t.history(period="10y", interval="1mo", auto_adjust=False)

        info = {}
        try:
            info = t.info or {}
        except Exception as e:
            logger.warning("%s: info unavailable (%s: %s)", ticker, type(e).__name__, e)

        latest_cap = None
        try:
            latest_cap = _safe_float(t.fast_info.get("marketCap"))
        except Exception as e:
            logger.warning("%s: fast_info unavailable (%s: %s)", ticker, type(e).__name__, e)

        records: list[FiscalYearRecord] = []
        for i, col in enumerate(periods):
            shares = _pick_row(balance, SHARES_ROWS, col)
            price = self._close_on_or_before(hist, col)
            market_cap = shares * price if shares is not None and price is not None else None
            if market_cap is None and i == len(periods) - 1:
                market_cap = latest_cap

            records.append(
                FiscalYearRecord(
                    period=f"FY{col.year}",
                    revenue=self._scaled(_pick_row(income, REVENUE_ROWS, col)),
                    net_profit=self._scaled(_pick_row(income, PROFIT_ROWS, col)),
                    total_debt=self._scaled(_pick_row(balance, DEBT_ROWS, col)),
                    total_equity=self._scaled(_pick_row(balance, EQUITY_ROWS, col)),
                    market_cap=self._scaled(market_cap),
                )
            )

        return Company(
            name=str(info.get("shortName") or ticker),
            ticker=ticker,
            sector=str(info.get("sector") or self.default_sector),
            records=tuple(records),
        )

    def get_companies(self, tickers: list[str]) -> list[Company]:
        try:
            import yfinance as yf
        except Exception as e:
            raise RuntimeError("yfinance is not installed, install the project dependencies first.") from e

        out: list[Company] = []
        failures: list[str] = []
        for ticker in tickers:
            try:
                company = self._company(yf, ticker)
            except Exception as e:
                failures.append(f"{ticker}: {type(e).__name__}: {e}")
                logger.warning("%s: fetch failed (%s: %s)", ticker, type(e).__name__, e)
                continue
            if company is None:
                failures.append(f"{ticker}: empty income statement")
                continue
            out.append(company)

        if tickers and not out:
            sample = "; ".join(failures[:3]) if failures else "unknown"
            raise RuntimeError(f"yfinance returned no companies (0/{len(tickers)}). Sample reasons: {sample}")

        return validate_population(out)
