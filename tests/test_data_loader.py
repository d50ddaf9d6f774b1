import numpy as np
import pandas as pd
import pytest

from config import AnalysisConfig
from data_manager import PriceLoader, PriceValidator
import data_manager.data_loader as data_loader

@pytest.fixture
def download_frame():
    """Frame shaped like a recent yfinance download: (field, ticker) columns"""
    dates = pd.bdate_range('2016-01-04', periods=150)
    np.random.seed(42)
    close = 2000 * np.exp(np.cumsum(np.random.normal(0, 0.01, len(dates))))
    columns = pd.MultiIndex.from_product([['Adj Close', 'Close'], ['^GSPC']])
    frame = pd.DataFrame(np.column_stack([close, close]), index=dates, columns=columns)
    frame.iloc[10, 0] = np.nan
    return frame

@pytest.fixture
def loader():
    return PriceLoader(price_column='Adj Close')

def test_fetch_prices_cleans_download(loader, download_frame, monkeypatch):
    """Test missing rows are dropped and ticker columns flattened"""
    calls = {}

    def fake_download(ticker, **kwargs):
        calls['ticker'] = ticker
        calls.update(kwargs)
        return download_frame.copy()

    monkeypatch.setattr(data_loader.yf, 'download', fake_download)
    prices = loader.fetch_prices('^GSPC', start='2016-01-01')

    assert calls['ticker'] == '^GSPC'
    assert calls['auto_adjust'] is False
    assert len(prices) == len(download_frame) - 1
    assert not prices.isna().any()
    assert prices.index.is_monotonic_increasing
    assert prices.name == '^GSPC'

def test_fetch_prices_empty_download(loader, monkeypatch):
    monkeypatch.setattr(data_loader.yf, 'download', lambda *a, **k: pd.DataFrame())
    with pytest.raises(ValueError, match="No price data"):
        loader.fetch_prices('^GSPC', start='2016-01-01')

def test_fetch_prices_missing_column(download_frame, monkeypatch):
    monkeypatch.setattr(data_loader.yf, 'download', lambda *a, **k: download_frame.copy())
    with pytest.raises(ValueError, match="Open"):
        PriceLoader(price_column='Open').fetch_prices('^GSPC', start='2016-01-01')

def test_saved_prices_reload_identically(loader, gjr_prices, tmp_path):
    path = loader.save_prices(gjr_prices, tmp_path / "data" / "prices.csv")
    reloaded = loader.load_prices(path)

    assert path.exists()
    assert reloaded.name == gjr_prices.name
    pd.testing.assert_index_equal(reloaded.index, gjr_prices.index, check_names=False)
    np.testing.assert_allclose(reloaded.values, gjr_prices.values)

def test_get_prices_prefers_pinned_file(loader, gjr_prices, tmp_path, monkeypatch):
    """Test the network is not touched when a data file exists"""
    data_file = loader.save_prices(gjr_prices, tmp_path / "prices.csv")

    def fail_download(*args, **kwargs):
        raise AssertionError("download should not be called")

    monkeypatch.setattr(data_loader.yf, 'download', fail_download)
    prices = loader.get_prices(AnalysisConfig(data_file=data_file))
    assert len(prices) == len(gjr_prices)

def test_get_prices_caches_download(loader, download_frame, tmp_path, monkeypatch):
    monkeypatch.setattr(data_loader.yf, 'download', lambda *a, **k: download_frame.copy())
    data_file = tmp_path / "cache" / "prices.csv"

    prices = loader.get_prices(AnalysisConfig(data_file=data_file))

    assert data_file.exists()
    assert len(loader.load_prices(data_file)) == len(prices)

class TestPriceValidator:
    def test_valid_series(self, gjr_prices):
        is_valid, issues = PriceValidator().validate(gjr_prices)
        assert is_valid
        assert issues == []

    def test_non_positive_prices(self, gjr_prices):
        prices = gjr_prices.copy()
        prices.iloc[5] = -1.0
        is_valid, issues = PriceValidator().validate(prices)
        assert not is_valid
        assert any("non-positive" in issue for issue in issues)

    def test_unordered_dates(self, gjr_prices):
        is_valid, issues = PriceValidator().validate(gjr_prices.iloc[::-1])
        assert not is_valid
        assert any("chronological" in issue for issue in issues)

    def test_too_short(self, gjr_prices):
        with pytest.raises(ValueError, match="Insufficient observations"):
            PriceValidator(min_observations=100).check(gjr_prices.iloc[:50])

    def test_missing_values(self, gjr_prices):
        prices = gjr_prices.copy()
        prices.iloc[3] = np.nan
        is_valid, issues = PriceValidator().validate(prices)
        assert not is_valid
        assert any("missing" in issue for issue in issues)
