"""
End-to-end run of the forecasting pipeline on synthetic daily clicks.
"""

import numpy as np
import pandas as pd
import pytest

pytest.importorskip('prophet')

from rich.console import Console

from web_traffic_forecasting.config import ProjectConfig
from web_traffic_forecasting.pipeline import run_pipeline


@pytest.fixture(scope='module')
def cfg(tmp_path_factory, clicks_csv):
    out_dir = tmp_path_factory.mktemp('run')
    return ProjectConfig(
        data_path=clicks_csv,
        forecast_out_path=out_dir / 'web_traffic_forecast_results.csv',
        fig_dir=out_dir / 'figures',
    )


@pytest.fixture(scope='module')
def result(cfg):
    return run_pipeline(cfg, make_figures=True, console=Console(quiet=True))


class TestOutputs:

    def test_split_and_scores(self, result):
        assert len(result.test) == 60
        assert len(result.train) == 486 - 60
        assert len(result.comparison) == 60
        assert result.train['y'].max() <= result.threshold
        assert set(result.metrics) == {'test_MAE', 'test_MAE_%', 'test_RMSE', 'test_RMSE_%', 'test_MAPE_%'}
        assert 'rmse' in result.performance.columns

    def test_comparison_matches_test_dates(self, result):
        pd.testing.assert_series_equal(
            result.comparison['ds'], pd.to_datetime(result.test['ds']), check_names=False
        )
        yhat = result.forecast.set_index('ds')['yhat']
        np.testing.assert_allclose(result.comparison['predicted'], yhat.loc[result.test['ds']].to_numpy())

    def test_forecast_csv(self, cfg, result):
        out = pd.read_csv(cfg.forecast_out_path)
        assert list(out.columns) == ['ds', 'yhat', 'yhat_lower', 'yhat_upper']
        assert len(out) == 486
        assert cfg.forecast_out_path in result.written

    def test_figures(self, cfg, result):
        html = sorted(p.name for p in cfg.fig_dir.glob('*.html'))
        assert len(html) == 6
        assert 'fig05_forecast.html' in html
        assert 'fig06_components.html' in html


class TestModelConfiguration:

    def test_seasonalities(self, result):
        assert set(result.model.seasonalities) == {'yearly', 'weekly'}

    def test_spike_holidays_reach_model(self, result):
        hol = result.model.holidays
        assert hol is not None
        assert len(hol) == len(result.holidays)
        assert set(pd.to_datetime(hol['ds'])) == set(result.holidays['ds'])
        assert 'holidays' in result.forecast.columns

    def test_cross_validation_windows(self, result):
        cv = result.cv
        horizon = cv['ds'] - cv['cutoff']
        assert horizon.max() == pd.Timedelta(days=15)
        assert horizon.min() > pd.Timedelta(0)

        cutoffs = pd.Series(sorted(cv['cutoff'].unique()))
        assert len(cutoffs) >= 2
        assert (cutoffs.diff().dropna() == pd.Timedelta(days=15)).all()
        assert cutoffs.iloc[0] - result.train['ds'].min() >= pd.Timedelta(days=365)


def test_forecast_shorter_than_test_window_is_rejected(tmp_path, clicks_csv):
    cfg = ProjectConfig(
        data_path=clicks_csv,
        forecast_out_path=tmp_path / 'out.csv',
        fig_dir=tmp_path / 'figures',
        test_days=60,
        forecast_periods=30,
    )
    with pytest.raises(ValueError, match="missing 30 of 60 test dates"):
        run_pipeline(cfg, make_figures=False, console=Console(quiet=True))
    assert not (tmp_path / 'out.csv').exists()
