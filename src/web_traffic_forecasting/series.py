from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

import pandas as pd

logger = logging.getLogger(__name__)

DATE_COL = 'Date'
CLICKS_COL = 'Clicks'


def load_clicks(path: Path) -> pd.DataFrame:
    """Read the daily clicks CSV (Date, Clicks), parsed and in date order."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Data file not found: {path}')

    df = pd.read_csv(path)
    for c in (DATE_COL, CLICKS_COL):
        if c not in df.columns:
            raise ValueError(f'Missing required column: {c}')

    df = df[[DATE_COL, CLICKS_COL]].copy()
    df[DATE_COL] = pd.to_datetime(df[DATE_COL], format='%Y-%m-%d', errors='coerce')
    bad = int(df[DATE_COL].isna().sum())
    if bad:
        raise ValueError(f'{bad} rows have a malformed {DATE_COL} (expected YYYY-MM-DD)')

    df[CLICKS_COL] = pd.to_numeric(df[CLICKS_COL], errors='raise').astype(float)

    logger.info('Loaded %s: %d rows', path, len(df))
    return df.sort_values(DATE_COL, kind='stable').reset_index(drop=True)


def summarize_clicks(df: pd.DataFrame) -> pd.Series:
    s = df[CLICKS_COL].describe()
    s['first_date'] = df[DATE_COL].min().date()
    s['last_date'] = df[DATE_COL].max().date()
    return s


def to_model_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Rename to the ds/y column convention the forecaster expects."""
    return df.rename(columns={DATE_COL: 'ds', CLICKS_COL: 'y'})[['ds', 'y']].reset_index(drop=True)


def train_test_split(df: pd.DataFrame, test_days: int = 60) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Positional split: the last `test_days` rows are the test window."""
    if test_days <= 0:
        raise ValueError(f'test_days must be positive, got {test_days}')
    if len(df) <= test_days:
        raise ValueError(f'Need more than {test_days} rows to hold out a test window, got {len(df)}')

    cut = len(df) - test_days
    train = df.iloc[:cut].reset_index(drop=True)
    test = df.iloc[cut:].reset_index(drop=True)
    return train, test
