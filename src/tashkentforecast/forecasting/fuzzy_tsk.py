"""
Fuzzy TSK Price Forecast Model

Takagi-Sugeno-Kang inference over two linguistic variables:
- time horizon in months (short, medium, long)
- market activity on a 0-1 scale (high, medium, low)

Each of the nine rules carries a constant consequent: the expected
fractional price change. A rule fires with the minimum of its two Gaussian
memberships and the output is the firing-strength weighted average of the
consequents, shifted by 30% of the observed trend and scaled by a
housing class multiplier.

The model has no trained state; identical inputs give identical outputs.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from tashkentforecast.core.constants import (
    CATEGORY_COEFFICIENTS,
    DEFAULT_CATEGORY_COEFFICIENT,
    DEFAULT_MARKET_ACTIVITY,
    FALLBACK_CHANGE,
    FIRING_THRESHOLD,
    FORECAST_HORIZONS,
    TREND_WEIGHT,
)
from tashkentforecast.core.models import ForecastPoint
from tashkentforecast.exceptions import ValidationError
from tashkentforecast.logging_config import get_logger
from tashkentforecast.utils.price_parser import round_half_up

logger = get_logger(__name__)

# (center, sigma) of each Gaussian term
TIME_TERMS: Dict[str, Tuple[float, float]] = {
    "short": (6.0, 3.0),
    "medium": (12.0, 4.0),
    "long": (24.0, 6.0),
}

ACTIVITY_TERMS: Dict[str, Tuple[float, float]] = {
    "high": (0.7, 0.2),
    "medium": (0.5, 0.2),
    "low": (0.3, 0.2),
}


@dataclass(frozen=True)
class FuzzyRule:
    """IF time IS <time> AND activity IS <activity> THEN change = <consequent>."""

    time: str
    activity: str
    consequent: float


DEFAULT_RULES: Tuple[FuzzyRule, ...] = (
    FuzzyRule("short", "high", 0.06),
    FuzzyRule("short", "medium", 0.03),
    FuzzyRule("short", "low", 0.01),
    FuzzyRule("medium", "high", 0.12),
    FuzzyRule("medium", "medium", 0.07),
    FuzzyRule("medium", "low", 0.03),
    FuzzyRule("long", "high", 0.20),
    FuzzyRule("long", "medium", 0.12),
    FuzzyRule("long", "low", 0.06),
)


def gaussian(x, center: float, sigma: float):
    """Gaussian membership exp(-((x - center) / sigma)^2).

    Works on scalars and numpy arrays alike.
    """
    return np.exp(-np.square((x - center) / sigma))


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number", field=name, value=value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite", field=name, value=value)
    return value


class FuzzyTSKModel:
    """Rule-based forecaster of fractional price change."""

    def __init__(
        self,
        rules: Optional[Sequence[FuzzyRule]] = None,
        time_terms: Optional[Dict[str, Tuple[float, float]]] = None,
        activity_terms: Optional[Dict[str, Tuple[float, float]]] = None,
        horizons: Sequence[int] = FORECAST_HORIZONS,
    ):
        self.rules = tuple(rules if rules is not None else DEFAULT_RULES)
        self.time_terms = dict(time_terms or TIME_TERMS)
        self.activity_terms = dict(activity_terms or ACTIVITY_TERMS)
        self.horizons = tuple(horizons)

        # Per-rule parameter vectors so all rules fire in one numpy pass
        self._time_centers = np.array([self.time_terms[r.time][0] for r in self.rules])
        self._time_sigmas = np.array([self.time_terms[r.time][1] for r in self.rules])
        self._activity_centers = np.array([self.activity_terms[r.activity][0] for r in self.rules])
        self._activity_sigmas = np.array([self.activity_terms[r.activity][1] for r in self.rules])
        self._consequents = np.array([r.consequent for r in self.rules])

    def firing_strengths(self, time_months: float, market_activity: float) -> np.ndarray:
        """Firing strength of every rule, in rule order.

        Args:
            time_months: Forecast horizon in months.
            market_activity: Market activity, 0-1.

        Returns:
            Array of min(time membership, activity membership) per rule.
        """
        time_months = _require_finite("time_months", time_months)
        market_activity = _require_finite("market_activity", market_activity)

        w_time = gaussian(time_months, self._time_centers, self._time_sigmas)
        w_activity = gaussian(market_activity, self._activity_centers, self._activity_sigmas)
        return np.minimum(w_time, w_activity)

    def base_change(self, time_months: float, market_activity: float) -> float:
        """Weighted average of the consequents of the rules that fire.

        Rules at or below the firing threshold are ignored. If none fire,
        the fallback change is returned.
        """
        strengths = self.firing_strengths(time_months, market_activity)
        active = strengths > FIRING_THRESHOLD

        total_weight = float(strengths[active].sum())
        if total_weight <= 0:
            logger.debug(
                "No rule fired for time=%s activity=%s, using fallback %.2f",
                time_months, market_activity, FALLBACK_CHANGE,
            )
            return FALLBACK_CHANGE

        weighted_sum = float((strengths[active] * self._consequents[active]).sum())
        return weighted_sum / total_weight

    @staticmethod
    def class_coefficient(category: Optional[str]) -> float:
        """Multiplier for a housing class.

        Example:
            >>> FuzzyTSKModel.class_coefficient("Премиум")
            1.25
            >>> FuzzyTSKModel.class_coefficient("Комфорт")
            1.0
        """
        label = str(category or "").lower()
        for keyword, coefficient in CATEGORY_COEFFICIENTS:
            if keyword in label:
                return coefficient
        return DEFAULT_CATEGORY_COEFFICIENT

    def predict(
        self,
        time_months: float,
        market_activity: float,
        trend: float,
        category: Optional[str],
    ) -> float:
        """Predict the fractional price change over a horizon.

        Args:
            time_months: Forecast horizon in months.
            market_activity: Market activity, 0-1.
            trend: Observed fractional price change.
            category: Housing class label.

        Returns:
            Predicted fractional change (0.07 means +7%).
        """
        trend = _require_finite("trend", trend)
        change = self.base_change(time_months, market_activity)
        change += trend * TREND_WEIGHT
        return change * self.class_coefficient(category)

    def forecast(
        self,
        base_price: float,
        category: Optional[str],
        trend: float,
        market_activity: float = DEFAULT_MARKET_ACTIVITY,
    ) -> List[ForecastPoint]:
        """Project a price over every forecast horizon.

        Args:
            base_price: Current price.
            category: Housing class label.
            trend: Observed fractional price change.
            market_activity: Market activity, 0-1.

        Returns:
            One ForecastPoint per horizon, in horizon order.
        """
        base_price = _require_finite("base_price", base_price)

        points = []
        for months in self.horizons:
            change = self.predict(months, market_activity, trend, category)
            points.append(ForecastPoint(
                months=months,
                price=round_half_up(base_price * (1 + change)),
                change=round(change * 100, 1),
            ))
        return points
