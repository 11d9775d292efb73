from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots
from prophet import Prophet

logger = logging.getLogger(__name__)


def save_plotly(fig: go.Figure, html_out: Path, png_out: Path | None = None, width: int = 1500, height: int = 520) -> List[Path]:
    html_out.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(
        html_out,
        include_plotlyjs='cdn',
        config={'responsive': True, 'displayModeBar': False},
    )
    written = [html_out]

    if png_out is not None:
        png_out.parent.mkdir(parents=True, exist_ok=True)
        # Requires `kaleido`
        try:
            fig.write_image(png_out, width=width, height=height, scale=2)
            written.append(png_out)
        except (ValueError, ImportError, RuntimeError) as e:
            logger.warning('Could not write PNG %s: %s', png_out.name, e)

    return written


def _layout(fig: go.Figure, title: str, x_title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        template='plotly_white',
        title=dict(text=title, x=0.02, xanchor='left'),
        xaxis_title=x_title,
        yaxis_title=y_title,
        margin=dict(l=80, r=40, t=95, b=70),
    )
    return fig


def fig_cv_metric(smooth: pd.DataFrame, points: pd.DataFrame, metric: str = 'rmse') -> go.Figure:
    """Point-wise errors (grey) with the rolling-window curve over them."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=points['horizon_days'],
        y=points[metric],
        mode='markers',
        name='Per prediction',
        marker=dict(color='gray', size=4),
        opacity=0.4,
    ))
    fig.add_trace(go.Scatter(
        x=smooth['horizon_days'],
        y=smooth[metric],
        mode='lines',
        name='Rolling mean',
        line=dict(color='blue', width=3),
    ))
    return _layout(fig, f'Cross-Validation {metric.upper()}', 'Horizon (days)', metric.upper())


def fig_actual_vs_predicted(comparison: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=comparison['ds'], y=comparison['actual'], mode='lines', name='Actual', line=dict(color='blue')))
    fig.add_trace(go.Scatter(x=comparison['ds'], y=comparison['predicted'], mode='lines', name='Predicted', line=dict(color='red')))
    fig = _layout(fig, 'Actual vs. Predicted Clicks for Test Set', 'Date', 'Clicks')
    fig.update_layout(hovermode='x unified', legend_title_text='Legend')
    return fig


def fig_residuals_over_time(comparison: pd.DataFrame) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=comparison['ds'],
        y=comparison['residual'],
        mode='lines',
        name='Residuals',
        line=dict(color='purple'),
        showlegend=False,
    ))
    fig.add_hline(y=0, line_dash='dash')
    return _layout(fig, 'Residuals Over Time', 'Date', 'Residuals')


def fig_residual_histogram(comparison: pd.DataFrame, binwidth: float = 50.0) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Histogram(
        x=comparison['residual'],
        xbins=dict(size=binwidth),
        marker=dict(color='blue', line=dict(color='black', width=1)),
        showlegend=False,
    ))
    return _layout(fig, 'Residual Distribution', 'Residuals', 'Frequency')


def fig_forecast(model: Prophet, forecast: pd.DataFrame) -> go.Figure:
    """Training points, forecast line and uncertainty band."""
    history = model.history

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=pd.concat([forecast['ds'], forecast['ds'][::-1]]),
        y=pd.concat([forecast['yhat_upper'], forecast['yhat_lower'][::-1]]),
        fill='toself',
        name='Uncertainty interval',
        hoverinfo='skip',
        line=dict(width=0),
        fillcolor='rgba(0, 114, 178, 0.2)',
    ))
    fig.add_trace(go.Scatter(
        x=history['ds'],
        y=history['y'],
        mode='markers',
        name='Actual',
        marker=dict(color='black', size=4),
    ))
    fig.add_trace(go.Scatter(
        x=forecast['ds'],
        y=forecast['yhat'],
        mode='lines',
        name='Predicted',
        line=dict(color='#0072B2', width=2),
    ))
    fig = _layout(fig, 'Forecasted Website Traffic with Confidence Intervals', 'Date', 'Clicks')
    fig.update_layout(hovermode='x unified')
    return fig


COMPONENTS = ['trend', 'holidays', 'weekly', 'yearly']


def fig_components(forecast: pd.DataFrame) -> go.Figure:
    """One row per additive component present in the forecast, with its interval."""
    names = [c for c in COMPONENTS if c in forecast.columns]
    fig = make_subplots(rows=len(names), cols=1, shared_xaxes=True, subplot_titles=names, vertical_spacing=0.06)

    for i, name in enumerate(names, start=1):
        lower, upper = f'{name}_lower', f'{name}_upper'
        if lower in forecast.columns and upper in forecast.columns:
            fig.add_trace(go.Scatter(
                x=pd.concat([forecast['ds'], forecast['ds'][::-1]]),
                y=pd.concat([forecast[upper], forecast[lower][::-1]]),
                fill='toself',
                hoverinfo='skip',
                line=dict(width=0),
                fillcolor='rgba(0, 114, 178, 0.2)',
                showlegend=False,
            ), row=i, col=1)
        fig.add_trace(go.Scatter(
            x=forecast['ds'],
            y=forecast[name],
            mode='lines',
            name=name,
            line=dict(color='#0072B2', width=2),
            showlegend=False,
        ), row=i, col=1)

    fig.update_layout(
        template='plotly_white',
        title=dict(text='Forecast Components', x=0.02, xanchor='left'),
        height=max(300, 250 * len(names)),
        margin=dict(l=80, r=40, t=95, b=70),
    )
    return fig
