from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd
from prophet import Prophet

logger = logging.getLogger(__name__)

SUMMARY_COLS = ['ds', 'yhat', 'yhat_lower', 'yhat_upper']


def forecast_future(model: Prophet, periods: int = 60) -> pd.DataFrame:
    """Predict over the training history plus `periods` days past its end."""
    future = model.make_future_dataframe(periods=periods)
    return model.predict(future)


def compare_test_window(forecast: pd.DataFrame, test: pd.DataFrame) -> pd.DataFrame:
    """Match forecast rows to the test window by date."""
    test_ds = pd.to_datetime(test['ds'])
    yhat = forecast.set_index(pd.to_datetime(forecast['ds']))['yhat']
    yhat = yhat[~yhat.index.duplicated(keep='last')]

    missing = test_ds[~test_ds.isin(yhat.index)]
    if len(missing):
        raise ValueError(
            f'Forecast is missing {len(missing)} of {len(test_ds)} test dates '
            f'(first missing: {missing.iloc[0].date()})'
        )

    predicted = yhat.reindex(test_ds).to_numpy(dtype=float)
    actual = test['y'].to_numpy(dtype=float)

    if np.any(actual <= 0):
        logger.warning('Test window contains non-positive actuals; MAPE is not meaningful')

    return pd.DataFrame({
        'ds': test_ds.to_numpy(),
        'actual': actual,
        'predicted': predicted,
        'residual': actual - predicted,
    })


def forecast_summary(forecast: pd.DataFrame) -> pd.DataFrame:
    return forecast[SUMMARY_COLS].copy()


def write_forecast(summary: pd.DataFrame, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(path, index=False)
    logger.info('Wrote %s (%d rows)', path, len(summary))
    return path
