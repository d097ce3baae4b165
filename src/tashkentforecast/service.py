"""
Analysis Refresh Service

Tracks the lifecycle of sheet refreshes:

    IDLE -> LOADING -> READY (analysis) | FAILED (error)

Each refresh fetches the sheet and rebuilds the analysis from scratch.
Refreshes are numbered; when several overlap, only the most recently
started one may publish its outcome.
"""

import threading
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional

from tashkentforecast.config import get_config
from tashkentforecast.core.models import MarketAnalysis, SheetTable
from tashkentforecast.exceptions import TashkentForecastError
from tashkentforecast.forecasting.fuzzy_tsk import FuzzyTSKModel
from tashkentforecast.logging_config import get_logger
from tashkentforecast.pipeline.analysis import analyze
from tashkentforecast.source.sheets import load_sheet

logger = get_logger(__name__)


class RefreshState(str, Enum):
    """Lifecycle state of the latest refresh."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class AnalysisService:
    """Holds the latest market analysis and the state of its refresh."""

    def __init__(
        self,
        loader: Optional[Callable[[], SheetTable]] = None,
        model: Optional[FuzzyTSKModel] = None,
        market_activity: Optional[float] = None,
    ):
        """Initialize the service.

        Args:
            loader: Callable returning the sheet table. Defaults to fetching
                the configured Google Sheet.
            model: Forecast model.
            market_activity: Market activity for forecasts. Defaults to config.
        """
        self.loader = loader or load_sheet
        self.model = model or FuzzyTSKModel()
        if market_activity is None:
            market_activity = get_config().forecast.market_activity
        self.market_activity = market_activity

        self._lock = threading.Lock()
        self._generation = 0
        self._state = RefreshState.IDLE
        self._analysis: Optional[MarketAnalysis] = None
        self._error: Optional[str] = None
        self._last_update: Optional[str] = None

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def analysis(self) -> Optional[MarketAnalysis]:
        """Analysis of the last successful refresh, if the state is READY."""
        with self._lock:
            return self._analysis if self._state == RefreshState.READY else None

    @property
    def error(self) -> Optional[str]:
        return self._error

    def refresh(self) -> RefreshState:
        """Fetch the sheet and rebuild the analysis.

        Terminal errors (fetch, payload, unusable dataset) move the service
        to FAILED; the previous analysis is not kept.

        Returns:
            The state after this refresh.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._state = RefreshState.LOADING
            self._error = None

        logger.info("Refresh #%d started", generation)

        analysis: Optional[MarketAnalysis] = None
        error: Optional[str] = None
        try:
            table = self.loader()
            analysis = analyze(
                table.headers,
                table.rows,
                model=self.model,
                market_activity=self.market_activity,
            )
        except TashkentForecastError as e:
            error = e.message
            logger.error("Refresh #%d failed: %s", generation, e)
        except Exception as e:
            # Never leave the service stuck in LOADING
            error = f"Unexpected error: {e}"
            logger.error("Refresh #%d failed unexpectedly: %s", generation, e, exc_info=True)

        with self._lock:
            if generation != self._generation:
                logger.info("Refresh #%d superseded by #%d, discarding", generation, self._generation)
                return self._state

            if analysis is not None:
                self._state = RefreshState.READY
                self._analysis = analysis
                self._last_update = analysis.generated_at
                logger.info(
                    "Refresh #%d ready: %d complexes", generation, len(analysis.all_entities)
                )
            else:
                self._state = RefreshState.FAILED
                self._analysis = None
                self._error = error
            return self._state

    def snapshot(self) -> Dict[str, Any]:
        """State summary for status endpoints."""
        with self._lock:
            summary = {
                "state": self._state.value,
                "error": self._error,
                "last_update": self._last_update,
                "refresh_count": self._generation,
                "checked_at": datetime.now().isoformat(),
            }
            if self._state == RefreshState.READY and self._analysis is not None:
                summary["complexes"] = len(self._analysis.all_entities)
                summary["classes"] = list(self._analysis.class_stats)
            return summary
