import numpy as np
import pandas as pd
import pytest

CONST = np.array([1.0, -0.5])
A1 = np.array([[0.9, -0.3],
               [0.3, 0.9]])


def simulate_var(coefs, const, nobs, rng=None, scale=0.0, y0=None, burn=0):
    """Simulate y_t = const + sum_l coefs[l] y_{t-l} + scale * e_t."""
    coefs = [np.asarray(c, dtype=float) for c in coefs]
    nlag = len(coefs)
    nvar = len(const)
    total = nobs + burn
    y = np.zeros((total, nvar))
    if y0 is not None:
        y[:nlag] = y0
    for t in range(nlag, total):
        y[t] = const + sum(coefs[l] @ y[t - l - 1] for l in range(nlag))
        if scale:
            y[t] += scale * rng.standard_normal(nvar)
    return y[burn:]


@pytest.fixture
def rng():
    return np.random.default_rng(20240501)


@pytest.fixture
def exact_var1():
    """Noise-free bivariate VAR(1), 120 steps, spiralling towards its mean."""
    y = simulate_var([A1], CONST, 120, y0=[10.0, -6.0])
    return pd.DataFrame(y, columns=['pm25', 'dewp'])


@pytest.fixture
def noisy_var2(rng):
    """Bivariate VAR(2) with Gaussian noise on a daily calendar."""
    coefs = [np.array([[0.5, 0.1], [0.0, 0.4]]),
             np.array([[-0.3, 0.0], [0.0, -0.3]])]
    y = simulate_var(coefs, np.array([2.0, 1.0]), 400, rng=rng, scale=1.0, burn=50)
    index = pd.date_range('2014-01-01', periods=len(y), freq='D')
    return pd.DataFrame(y, index=index, columns=['pm25', 'dewp'])


@pytest.fixture
def seasonal_series(rng):
    """Bivariate VAR(1) with a weekly pattern in the intercept."""
    pattern = np.array([[0.0, 0.0], [1.5, -0.5], [2.0, 0.5], [-1.0, 1.0],
                        [0.5, -1.5], [-2.0, 0.0], [1.0, 0.5]])
    A = np.array([[0.4, 0.1], [-0.2, 0.5]])
    y = np.zeros((300, 2))
    for t in range(1, 300):
        y[t] = pattern[t % 7] + A @ y[t - 1] + 0.5 * rng.standard_normal(2)
    return pd.DataFrame(y, columns=['pm25', 'dewp'])


def granger_pair(rng, nobs=300):
    """y is driven by lagged x; x is white noise."""
    x = rng.standard_normal(nobs)
    y = np.zeros(nobs)
    y[1:] = 0.8 * x[:-1] + 0.5 * rng.standard_normal(nobs - 1)
    return x, y
