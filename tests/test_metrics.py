"""
Tests for the point-forecast accuracy metrics.
"""

import numpy as np
import pytest

from web_traffic_forecasting.metrics import mae, mape, pct_of_mean, rmse, score_block


class TestMetrics:

    def test_hand_computed_pair(self):
        actual, predicted = [10, 20], [12, 18]

        assert mae(actual, predicted) == pytest.approx(2.0)
        assert rmse(actual, predicted) == pytest.approx(2.0)
        assert mape(actual, predicted) == pytest.approx(15.0)

    def test_perfect_forecast(self):
        y = np.array([5.0, 6.0, 7.0])
        assert mae(y, y) == 0.0
        assert rmse(y, y) == 0.0
        assert mape(y, y) == 0.0

    def test_rmse_weights_large_errors(self):
        actual = [0, 0, 0, 0]
        predicted = [0, 0, 0, 4]
        assert mae(actual, predicted) == pytest.approx(1.0)
        assert rmse(actual, predicted) == pytest.approx(2.0)

    def test_mape_zero_actual_is_finite(self):
        assert np.isfinite(mape([0.0, 10.0], [1.0, 10.0]))

    def test_pct_of_mean(self):
        assert pct_of_mean(2.0, [10, 30]) == pytest.approx(10.0)


class TestScoreBlock:

    def test_keys_and_values(self):
        out = score_block('test', [10, 20], [12, 18])

        assert list(out) == ['test_MAE', 'test_MAE_%', 'test_RMSE', 'test_RMSE_%', 'test_MAPE_%']
        assert out['test_MAE'] == pytest.approx(2.0)
        assert out['test_MAE_%'] == pytest.approx(2.0 / 15.0 * 100)
        assert out['test_RMSE_%'] == pytest.approx(2.0 / 15.0 * 100)
        assert out['test_MAPE_%'] == pytest.approx(15.0)
