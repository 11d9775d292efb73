from __future__ import annotations

import logging
import time

import pandas as pd
from prophet import Prophet
from rich.console import Console

from .config import ProjectConfig

logger = logging.getLogger(__name__)


def build_model(holidays: pd.DataFrame | None, cfg: ProjectConfig = ProjectConfig()) -> Prophet:
    """Additive Prophet model: linear trend, yearly + weekly seasonality, spike holidays."""
    return Prophet(
        daily_seasonality=cfg.daily_seasonality,
        yearly_seasonality=cfg.yearly_seasonality,
        weekly_seasonality=cfg.weekly_seasonality,
        holidays=holidays if holidays is not None and len(holidays) else None,
    )


def fit_model(model: Prophet, train: pd.DataFrame, console: Console | None = None) -> Prophet:
    for c in ('ds', 'y'):
        if c not in train.columns:
            raise ValueError(f'Missing required column: {c}')

    console = console or Console()
    with console.status(f"[bold]Fitting[/bold] Prophet on {len(train):,} days …", spinner="dots"):
        t0 = time.perf_counter()
        model.fit(train)
        fit_s = time.perf_counter() - t0

    logger.info('Fitted Prophet in %.2fs', fit_s)
    return model
