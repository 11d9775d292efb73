import numpy as np
import pandas as pd
import pytest


@pytest.fixture(scope='session')
def clicks_df():
    """Sixteen months of synthetic daily clicks with weekly shape and a few spikes."""
    rng = np.random.default_rng(7)
    dates = pd.date_range('2023-08-01', periods=486, freq='D')
    weekly = 120 * np.sin(2 * np.pi * dates.dayofweek / 7)
    trend = np.linspace(0, 150, len(dates))
    clicks = 1000 + weekly + trend + rng.normal(0, 30, len(dates))

    df = pd.DataFrame({'Date': dates, 'Clicks': clicks})
    for d, bump in [('2023-11-07', 2500), ('2024-11-05', 3000), ('2024-02-14', 1800)]:
        df.loc[df['Date'] == pd.Timestamp(d), 'Clicks'] += bump
    return df


@pytest.fixture(scope='session')
def clicks_csv(tmp_path_factory, clicks_df):
    path = tmp_path_factory.mktemp('data') / 'web-search-traffic-16mos.csv'
    out = clicks_df.copy()
    out['Date'] = out['Date'].dt.strftime('%Y-%m-%d')
    out.to_csv(path, index=False)
    return path
