"""Percentile spike detection, capping and the spike holiday table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from .config import ProjectConfig
from .series import CLICKS_COL, DATE_COL

logger = logging.getLogger(__name__)

HOLIDAY_NAME = 'Spike'


@dataclass(frozen=True)
class SpikeResult:
    threshold: float
    spikes: pd.DataFrame
    holidays: pd.DataFrame
    capped: pd.DataFrame


def spike_threshold(values, q: float = 0.95) -> float:
    """Linear-interpolation quantile, e.g. [1..100] at 0.95 -> 95.05."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError('Cannot compute a spike threshold on an empty series')
    return float(np.quantile(arr, q))


def flag_spikes(df: pd.DataFrame, threshold: float) -> pd.DataFrame:
    out = df.copy()
    out['IsSpike'] = out[CLICKS_COL] > threshold
    return out


def build_spike_holidays(
    spikes: pd.DataFrame,
    extended_dates: Iterable[pd.Timestamp] = (),
    extended_window: int = 2,
    default_window: int = 1,
) -> pd.DataFrame:
    """One holiday row per spike day; extended dates get the longer upper window."""
    ds = pd.to_datetime(spikes[DATE_COL]).reset_index(drop=True)
    extended = pd.DatetimeIndex(pd.to_datetime(list(extended_dates))).normalize()

    return pd.DataFrame({
        'ds': ds,
        'holiday': HOLIDAY_NAME,
        'lower_window': 0,
        'upper_window': np.where(ds.dt.normalize().isin(extended), extended_window, default_window).astype(int),
    })


def cap_spikes(df: pd.DataFrame, threshold: float) -> pd.DataFrame:
    out = df.copy()
    out[CLICKS_COL] = out[CLICKS_COL].clip(upper=threshold)
    return out


def detect_and_cap(df: pd.DataFrame, cfg: ProjectConfig = ProjectConfig()) -> SpikeResult:
    threshold = spike_threshold(df[CLICKS_COL], cfg.spike_quantile)
    flagged = flag_spikes(df, threshold)
    spikes = flagged[flagged['IsSpike']].copy()

    logger.info('Detected %d spikes above the %.0fth percentile (%.2f)', len(spikes), cfg.spike_quantile * 100, threshold)

    holidays = build_spike_holidays(
        spikes,
        extended_dates=cfg.extended_spike_dates,
        extended_window=cfg.extended_upper_window,
        default_window=cfg.default_upper_window,
    )

    return SpikeResult(
        threshold=threshold,
        spikes=spikes.reset_index(drop=True),
        holidays=holidays,
        capped=cap_spikes(flagged, threshold),
    )
