"""End-to-end run: read -> spike-cap -> split -> fit -> cross-validate -> forecast -> score -> write -> plot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import pandas as pd
from prophet import Prophet
from rich.console import Console
from rich.table import Table

from .backtest import cv_metric_by_horizon, cv_performance, run_cross_validation
from .config import ProjectConfig
from .metrics import score_block
from .modeling import build_model, fit_model
from .prediction import compare_test_window, forecast_future, forecast_summary, write_forecast
from .series import load_clicks, summarize_clicks, to_model_frame, train_test_split
from .spikes import detect_and_cap
from .viz_utils import (
    fig_actual_vs_predicted,
    fig_components,
    fig_cv_metric,
    fig_forecast,
    fig_residual_histogram,
    fig_residuals_over_time,
    save_plotly,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    threshold: float
    spikes: pd.DataFrame
    holidays: pd.DataFrame
    train: pd.DataFrame
    test: pd.DataFrame
    cv: pd.DataFrame
    performance: pd.DataFrame
    forecast: pd.DataFrame
    comparison: pd.DataFrame
    metrics: Dict[str, float]
    model: Prophet
    written: List[Path] = field(default_factory=list)


def _frame_table(df: pd.DataFrame, title: str, max_rows: int = 20) -> Table:
    table = Table(title=title)
    for c in df.columns:
        table.add_column(str(c))
    for row in df.head(max_rows).itertuples(index=False):
        table.add_row(*[f'{v:,.2f}' if isinstance(v, float) else str(v) for v in row])
    return table


def _metrics_table(metrics: Dict[str, float]) -> Table:
    table = Table(title='Test Set Performance Metrics')
    table.add_column('Metric')
    table.add_column('Value', justify='right')
    for k, v in metrics.items():
        table.add_row(k.replace('test_', ''), f'{v:,.2f}')
    return table


def render_figures(result: PipelineResult, cfg: ProjectConfig) -> List[Path]:
    smooth, points = cv_metric_by_horizon(result.cv, metric='rmse')

    figures = {
        'fig01_cv_rmse': fig_cv_metric(smooth, points, metric='rmse'),
        'fig02_test_actual_vs_predicted': fig_actual_vs_predicted(result.comparison),
        'fig03_residuals_over_time': fig_residuals_over_time(result.comparison),
        'fig04_residual_distribution': fig_residual_histogram(result.comparison, binwidth=cfg.residual_binwidth),
        'fig05_forecast': fig_forecast(result.model, result.forecast),
        'fig06_components': fig_components(result.forecast),
    }

    written: List[Path] = []
    for name, fig in figures.items():
        html_out = cfg.fig_dir / f'{name}.html'
        png_out = cfg.fig_dir / f'{name}.png' if cfg.save_png else None
        written += save_plotly(fig, html_out, png_out)
    return written


def run_pipeline(cfg: ProjectConfig = ProjectConfig(), make_figures: bool = True, console: Console | None = None) -> PipelineResult:
    console = console or Console()

    # Step 1: load and inspect
    raw = load_clicks(cfg.data_path)
    console.print(summarize_clicks(raw).to_string())

    # Step 2: spikes -> holidays, then cap
    spikes = detect_and_cap(raw, cfg)
    console.print(f'Detected spikes with {cfg.spike_quantile:.0%} percentile threshold ({spikes.threshold:,.2f}):')
    console.print(_frame_table(spikes.spikes, 'Spikes'))

    # Step 3: ds/y + split
    data = to_model_frame(spikes.capped)
    train, test = train_test_split(data, test_days=cfg.test_days)
    console.print(f'[dim]Train/Test rows:[/dim] {len(train):,} / {len(test):,}')

    # Step 4: fit
    model = fit_model(build_model(spikes.holidays, cfg), train, console=console)

    # Step 5: cross-validation
    cv = run_cross_validation(model, cfg, console=console)
    performance = cv_performance(cv)
    console.print(_frame_table(performance, 'Cross-Validation Performance Metrics'))

    # Step 6: forecast + test scoring
    forecast = forecast_future(model, periods=cfg.forecast_periods)
    comparison = compare_test_window(forecast, test)
    metrics = score_block('test', comparison['actual'], comparison['predicted'])
    console.print(_metrics_table(metrics))

    result = PipelineResult(
        threshold=spikes.threshold,
        spikes=spikes.spikes,
        holidays=spikes.holidays,
        train=train,
        test=test,
        cv=cv,
        performance=performance,
        forecast=forecast,
        comparison=comparison,
        metrics=metrics,
        model=model,
    )

    # Step 7: save
    result.written.append(write_forecast(forecast_summary(forecast), cfg.forecast_out_path))

    # Step 8: figures
    if make_figures:
        result.written += render_figures(result, cfg)

    logger.info('Done. Wrote %d files', len(result.written))
    return result
