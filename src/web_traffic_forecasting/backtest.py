from __future__ import annotations

import logging

import pandas as pd
from prophet import Prophet
from prophet.diagnostics import cross_validation, performance_metrics
from rich.console import Console

from .config import ProjectConfig

logger = logging.getLogger(__name__)


def run_cross_validation(model: Prophet, cfg: ProjectConfig = ProjectConfig(), console: Console | None = None) -> pd.DataFrame:
    """Rolling-origin cross-validation on a fitted model (sequential, days units)."""
    console = console or Console()
    with console.status("[bold]Cross-validating[/bold] …", spinner="dots"):
        cv = cross_validation(
            model,
            initial=f'{cfg.cv_initial_days} days',
            period=f'{cfg.cv_period_days} days',
            horizon=f'{cfg.cv_horizon_days} days',
            parallel=None,
            disable_tqdm=True,
        )

    logger.info('Cross-validation: %d cutoffs, %d rows', cv['cutoff'].nunique(), len(cv))
    return cv


def cv_performance(cv: pd.DataFrame, rolling_window: float = 0.1) -> pd.DataFrame:
    return performance_metrics(cv, rolling_window=rolling_window)


def cv_metric_by_horizon(cv: pd.DataFrame, metric: str = 'rmse', rolling_window: float = 0.1) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Smoothed and point-wise values of one metric, horizon in days."""
    smooth = performance_metrics(cv, metrics=[metric], rolling_window=rolling_window)
    points = performance_metrics(cv, metrics=[metric], rolling_window=-1)

    for df in (smooth, points):
        df['horizon_days'] = df['horizon'].dt.total_seconds() / 86400.0

    return smooth, points
