import numpy as np
import pandas as pd
import pytest

from mean_model import diagnose_residuals, fit_arma, fit_auto_arima
from models import ArimaResult, ResidualDiagnostics

@pytest.fixture
def auto_arima_result(gjr_prices):
    return fit_auto_arima(gjr_prices, box_cox=True)

def test_auto_arima_differences_prices(auto_arima_result, gjr_prices):
    """Test a random-walk price level is differenced at least once"""
    p, d, q = auto_arima_result.order
    assert d >= 1
    assert len(auto_arima_result.residuals) == len(gjr_prices) - d
    assert auto_arima_result.residuals.index[-1] == gjr_prices.index[-1]
    assert isinstance(auto_arima_result.box_cox_lambda, float)
    assert auto_arima_result.label.startswith(f"ARIMA({p},{d},{q})")
    assert "Box Cox" in auto_arima_result.summary()

def test_auto_arima_without_box_cox(gjr_prices):
    result = fit_auto_arima(gjr_prices.iloc[:400], box_cox=False)
    assert result.box_cox_lambda is None
    assert np.isfinite(result.aic)

def test_auto_arima_rejects_non_positive_prices(gjr_prices):
    prices = gjr_prices.copy()
    prices.iloc[0] = 0.0
    with pytest.raises(ValueError, match="Box-Cox"):
        fit_auto_arima(prices, box_cox=True)

def test_diagnose_arima_residuals(auto_arima_result):
    diagnostics = diagnose_residuals(auto_arima_result, lags=10, arch_lags=10)
    assert isinstance(diagnostics, ResidualDiagnostics)
    p, _, q = auto_arima_result.order
    assert diagnostics.ljung_box.lags == max(10, p + q + 3)
    assert diagnostics.arch_lm.lags == 10
    # price innovations inherit the volatility clustering of the returns
    assert not diagnostics.is_homoskedastic

def test_fit_arma_on_returns(gjr_returns):
    result = fit_arma(gjr_returns, order=(1, 1), scale=100.0)
    assert result.order == (1, 0, 1)
    assert len(result.residuals) == len(gjr_returns)
    pd.testing.assert_index_equal(result.residuals.index, gjr_returns.index)
    # residuals are on the percentage scale
    assert 0.3 < result.residuals.std() < 3.0
    assert result.label == "ARIMA(1,0,1) with non-zero mean"

def test_diagnose_large_arma_order_keeps_degrees_of_freedom(white_noise):
    result = ArimaResult(order=(5, 1, 5), residuals=white_noise,
                         aic=0.0, bic=0.0, model=None)
    diagnostics = diagnose_residuals(result, lags=10)
    assert diagnostics.ljung_box.lags == 13
    assert np.isfinite(diagnostics.ljung_box.p_value)
