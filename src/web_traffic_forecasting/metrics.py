from __future__ import annotations

import numpy as np


def rmse(y, yhat) -> float:
    y = np.asarray(y, dtype=float)
    yhat = np.asarray(yhat, dtype=float)
    return float(np.sqrt(np.mean((y - yhat) ** 2)))


def mae(y, yhat) -> float:
    y = np.asarray(y, dtype=float)
    yhat = np.asarray(yhat, dtype=float)
    return float(np.mean(np.abs(y - yhat)))


def mape(y, yhat, eps: float = 1e-9) -> float:
    y = np.asarray(y, dtype=float)
    yhat = np.asarray(yhat, dtype=float)
    denom = np.maximum(np.abs(y), eps)
    return float(np.mean(np.abs((y - yhat) / denom)) * 100.0)


def pct_of_mean(value: float, y) -> float:
    """Express an error in the units of y as a percentage of mean(y)."""
    mean_y = float(np.mean(np.asarray(y, dtype=float)))
    return 100.0 * value / mean_y


def score_block(tag: str, y, yhat) -> dict:
    """Test-window metrics, including MAE/RMSE relative to the mean actual."""
    m = mae(y, yhat)
    r = rmse(y, yhat)
    return {
        f"{tag}_MAE": m,
        f"{tag}_MAE_%": pct_of_mean(m, y),
        f"{tag}_RMSE": r,
        f"{tag}_RMSE_%": pct_of_mean(r, y),
        f"{tag}_MAPE_%": mape(y, yhat),
    }
