import numpy as np
import pandas as pd
import pytest
from statsmodels.tsa.api import VAR

from varcast import VARModel, forecast, InvalidHorizonError
from varcast.utils import VARUtils


def test_reproduces_noise_free_continuation(exact_var1):
    model = VARModel(exact_var1.iloc[:100], nlag=1)
    result = model.forecast(20)

    np.testing.assert_allclose(result.point.values, exact_var1.iloc[100:].values, atol=1e-6)
    assert list(result.point.columns) == ['pm25', 'dewp']


def test_forecast_is_deterministic(noisy_var2):
    model = VARModel(noisy_var2, nlag=2)
    first = forecast(model, 15)
    second = forecast(model, 15)

    assert np.array_equal(first.point.values, second.point.values)
    assert np.array_equal(first.upper.values, second.upper.values)


@pytest.mark.parametrize('steps', [0, -3, 2.5, True])
def test_invalid_horizon(noisy_var2, steps):
    model = VARModel(noisy_var2, nlag=1)
    with pytest.raises(InvalidHorizonError):
        model.forecast(steps)


def test_matches_statsmodels(noisy_var2):
    model = VARModel(noisy_var2, nlag=2)
    ref = VAR(noisy_var2.values).fit(2, trend='c')
    mid, lower, upper = ref.forecast_interval(noisy_var2.values[-2:], steps=10, alpha=0.05)

    result = model.forecast(10, ci=0.95)
    np.testing.assert_allclose(result.point.values, mid, atol=1e-8)
    np.testing.assert_allclose(result.lower.values, lower, atol=1e-8)
    np.testing.assert_allclose(result.upper.values, upper, atol=1e-8)


def test_intervals_widen_with_horizon(noisy_var2):
    result = VARModel(noisy_var2, nlag=2).forecast(12, ci=0.9)

    assert (result.lower.values <= result.point.values).all()
    assert (result.point.values <= result.upper.values).all()
    assert (np.diff(result.stderr.values, axis=0) >= -1e-12).all()
    # the one-step standard error is the residual standard deviation
    model = VARModel(noisy_var2, nlag=2)
    np.testing.assert_allclose(result.stderr.values[0], np.sqrt(np.diag(model.sigma.values)))


def test_seasonal_dummies_continue_past_sample(seasonal_series):
    train = seasonal_series.iloc[:-3]
    model = VARModel(train, nlag=1, season=7)
    point = model.forecast(2).point.values

    coefs = model.params.values
    last = train.values[-1]
    dummies = VARUtils.seasonal_dummies(2, 7, start=len(train))
    step1 = np.concatenate([[1.0], last, dummies[0]]) @ coefs
    step2 = np.concatenate([[1.0], step1, dummies[1]]) @ coefs

    np.testing.assert_allclose(point[0], step1)
    np.testing.assert_allclose(point[1], step2)


def test_seasonal_forecast_matches_statsmodels_exog(seasonal_series):
    model = VARModel(seasonal_series, nlag=2, season=7)
    n = len(seasonal_series)
    exog = VARUtils.seasonal_dummies(n, 7)
    ref = VAR(seasonal_series.values, exog=exog).fit(2, trend='c')
    mid, lower, upper = ref.forecast_interval(
        seasonal_series.values[-2:], steps=9, alpha=0.1,
        exog_future=VARUtils.seasonal_dummies(9, 7, start=n)
    )

    result = model.forecast(9, ci=0.9)
    np.testing.assert_allclose(result.point.values, mid, atol=1e-8)
    np.testing.assert_allclose(result.lower.values, lower, atol=1e-8)
    np.testing.assert_allclose(result.upper.values, upper, atol=1e-8)


def test_uses_forecasts_once_history_runs_out(noisy_var2):
    model = VARModel(noisy_var2, nlag=3)
    long_run = model.forecast(5).point.values
    short_run = model.forecast(2).point.values

    np.testing.assert_array_equal(long_run[:2], short_run)


def test_forecast_index_continues_calendar(noisy_var2):
    result = VARModel(noisy_var2, nlag=1).forecast(3)

    expected = pd.date_range(noisy_var2.index[-1] + pd.Timedelta(days=1), periods=3, freq='D')
    assert list(result.point.index) == list(expected)
    assert len(result) == 3


def test_forecast_index_without_dates(exact_var1):
    result = VARModel(exact_var1.iloc[:100], nlag=1).forecast(4)
    assert list(result.point.index) == [100, 101, 102, 103]


def test_to_frame_groups_by_variable(noisy_var2):
    frame = VARModel(noisy_var2, nlag=1).forecast(3).to_frame()
    assert frame.shape == (3, 6)
    assert set(frame.columns.get_level_values(0)) == {'pm25', 'dewp'}
    assert set(frame.columns.get_level_values(1)) == {'forecast', 'lower', 'upper'}


def test_invalid_coverage(noisy_var2):
    model = VARModel(noisy_var2, nlag=1)
    with pytest.raises(ValueError):
        model.forecast(3, ci=1.5)
