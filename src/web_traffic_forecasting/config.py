from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pandas as pd


@dataclass(frozen=True)
class ProjectConfig:
    # Paths (repo-relative by default)
    data_path: Path = Path('web-search-traffic-16mos.csv')
    forecast_out_path: Path = Path('web_traffic_forecast_results.csv')
    fig_dir: Path = Path('reports/figures')

    # Spike detection (election days get a longer effect window)
    spike_quantile: float = 0.95
    extended_spike_dates: List[pd.Timestamp] = field(
        default_factory=lambda: [pd.Timestamp('2023-11-07'), pd.Timestamp('2024-11-05')]
    )
    extended_upper_window: int = 2
    default_upper_window: int = 1

    # Splits / horizon
    test_days: int = 60
    forecast_periods: int = 60

    # Cross-validation (days)
    cv_initial_days: int = 365
    cv_period_days: int = 15
    cv_horizon_days: int = 15

    # Model
    yearly_seasonality: bool = True
    weekly_seasonality: bool = True
    daily_seasonality: bool = False

    # Figures
    residual_binwidth: float = 50.0
    save_png: bool = False
