"""
Price forecasting.

Provides the fuzzy TSK model that projects class prices over fixed horizons.
"""

from tashkentforecast.forecasting.fuzzy_tsk import (
    DEFAULT_RULES,
    FuzzyRule,
    FuzzyTSKModel,
    gaussian,
)

__all__ = [
    "DEFAULT_RULES",
    "FuzzyRule",
    "FuzzyTSKModel",
    "gaussian",
]
