from __future__ import annotations

from finpulse.config import ForecastPolicy
from finpulse.models import Company, Prediction
from finpulse.skills.metrics import amount


def fit_linear_trend(values: list[float]) -> tuple[float, float]:
    """
    Ordinary least squares over x = 0..n-1.

    Returns (slope, intercept). A single point gives a flat line through it.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0
    xs = range(n)
    sum_x = sum(xs)
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in zip(xs, values))
    sum_x2 = sum(x * x for x in xs)

    denom = n * sum_x2 - sum_x * sum_x
    slope = 0.0 if denom == 0 else (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def predict_next(values: list[float]) -> float:
    slope, intercept = fit_linear_trend(values)
    return slope * len(values) + intercept


def forecast(company: Company, policy: ForecastPolicy | None = None) -> Prediction:
    p = policy or ForecastPolicy()
    if company.periods < p.min_periods:
        return Prediction(predicted_revenue=None, predicted_profit=None)

    revenues = [amount(r.revenue) for r in company.records]
    profits = [amount(r.net_profit) for r in company.records]
    return Prediction(
        # no negative revenue, profit may project a loss
        predicted_revenue=max(0.0, predict_next(revenues)),
        predicted_profit=predict_next(profits),
    )
