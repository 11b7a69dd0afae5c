import numpy as np
import pandas as pd
import pytest
from statsmodels.tsa.api import VAR

from varcast import VARModel, SingularDesignError
from varcast.utils import VARUtils
from conftest import A1, CONST


def test_recovers_noise_free_coefficients(exact_var1):
    model = VARModel(exact_var1.iloc[:100], nlag=1)

    np.testing.assert_allclose(model.params.loc['const'].values, CONST, atol=1e-6)
    np.testing.assert_allclose(model.lag_coefficients[1].values, A1, atol=1e-6)
    assert model.is_stable


def test_regressor_layout(noisy_var2):
    model = VARModel(noisy_var2, nlag=2, season=7)

    assert list(model.params.index) == [
        'const', 'pm25_lag1', 'dewp_lag1', 'pm25_lag2', 'dewp_lag2',
        'season1', 'season2', 'season3', 'season4', 'season5', 'season6',
    ]
    assert list(model.params.columns) == ['pm25', 'dewp']
    assert model.ntotcoeff == 11
    assert model.nobse == len(noisy_var2) - 2
    assert model.resid.index[0] == noisy_var2.index[2]


@pytest.mark.parametrize('nlag, season', [(1, None), (2, None), (3, 7)])
def test_residuals_have_zero_mean(noisy_var2, nlag, season):
    model = VARModel(noisy_var2, nlag=nlag, season=season)
    np.testing.assert_allclose(model.resid.mean().values, 0.0, atol=1e-10)


def test_matches_statsmodels(noisy_var2):
    model = VARModel(noisy_var2, nlag=2)
    ref = VAR(noisy_var2.values).fit(2, trend='c')

    np.testing.assert_allclose(model.params.values, ref.params, atol=1e-8)
    np.testing.assert_allclose(model.sigma.values, ref.sigma_u, atol=1e-8)
    np.testing.assert_allclose(model.stderr.values, ref.stderr, atol=1e-8)
    np.testing.assert_allclose(model.resid.values, ref.resid, atol=1e-8)


def test_companion_matrix(noisy_var2):
    model = VARModel(noisy_var2, nlag=2)

    assert model.Fcomp.shape == (4, 4)
    np.testing.assert_allclose(model.Fcomp[:2, :2], model.lag_coefficients[1].values)
    np.testing.assert_allclose(model.Fcomp[:2, 2:], model.lag_coefficients[2].values)
    np.testing.assert_allclose(model.Fcomp[2:, :2], np.eye(2))
    np.testing.assert_allclose(model.Fcomp[2:, 2:], 0.0)


def test_fitted_arrays_are_read_only(noisy_var2):
    model = VARModel(noisy_var2, nlag=1)
    with pytest.raises(ValueError):
        model.coefs[0, 0] = 1.0
    with pytest.raises(ValueError):
        model.history[-1, 0] = 1.0


def test_collinear_design_raises(rng):
    x = rng.standard_normal(80)
    data = pd.DataFrame({'a': x, 'b': 2.0 * x})
    with pytest.raises(SingularDesignError):
        VARModel(data, nlag=1)


def test_too_few_rows_raises():
    data = pd.DataFrame({'a': [1.0, 2.0, 0.5, 3.0, 1.5], 'b': [0.2, 0.1, 0.4, 0.3, 0.9]})
    # 3 usable rows for 5 regressors
    with pytest.raises(SingularDesignError):
        VARModel(data, nlag=2)


@pytest.mark.parametrize('nlag', [0, -1, 1.5, 2.0])
def test_invalid_lag_order(noisy_var2, nlag):
    with pytest.raises(ValueError):
        VARModel(noisy_var2, nlag=nlag)


def test_rejects_missing_values(noisy_var2):
    data = noisy_var2.copy()
    data.iloc[5, 0] = np.nan
    with pytest.raises(ValueError):
        VARModel(data, nlag=1)


def test_summary_lists_every_equation(noisy_var2):
    text = VARModel(noisy_var2, nlag=1).summary()
    assert 'Equation pm25' in text
    assert 'Equation dewp' in text
    assert 'Residual covariance' in text


def test_seasonal_dummies_cycle():
    dummies = VARUtils.seasonal_dummies(5, 3, start=4)
    expected = np.array([[0, 1], [0, 0], [1, 0], [0, 1], [0, 0]], dtype=float)
    np.testing.assert_array_equal(dummies, expected)
    assert VARUtils.seasonal_dummies(4, None).shape == (4, 0)
    assert VARUtils.seasonal_dummies(4, 1).shape == (4, 0)


def test_make_lags_order():
    data = np.arange(10, dtype=float).reshape(5, 2)
    lags = VARUtils.var_make_lags(data, 2)
    # row for t=2: [y_1, y_0]
    np.testing.assert_array_equal(lags[0], [2.0, 3.0, 0.0, 1.0])
    assert lags.shape == (3, 4)


def test_fitted_model_is_immutable(noisy_var2):
    model = VARModel(noisy_var2, nlag=2)
    with pytest.raises(AttributeError):
        model.nlag = 5
    with pytest.raises(AttributeError):
        model.params = None
    assert model.nlag == 2
    assert len(model.forecast(3)) == 3


@pytest.mark.parametrize('season', [7.0, 0])
def test_invalid_season(seasonal_series, season):
    with pytest.raises(ValueError):
        VARModel(seasonal_series, nlag=1, season=season)


def test_seasonal_model_matches_statsmodels_exog(seasonal_series):
    model = VARModel(seasonal_series, nlag=2, season=7)
    exog = VARUtils.seasonal_dummies(len(seasonal_series), 7)
    ref = VAR(seasonal_series.values, exog=exog).fit(2, trend='c')

    np.testing.assert_allclose(model.params.loc['const'].values, ref.params[0])
    np.testing.assert_allclose(model.params.loc[[f'season{j}' for j in range(1, 7)]].values,
                               ref.params[1:7])
    np.testing.assert_allclose(model.Fp[1].values, ref.coefs[0])
    np.testing.assert_allclose(model.sigma.values, ref.sigma_u)


def test_single_variable_rejected(noisy_var2):
    with pytest.raises(ValueError, match='at least two variables'):
        VARModel(noisy_var2[['pm25']], nlag=1)
