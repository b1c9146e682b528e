"""
Tests for individual indicator implementations.
"""
import pytest
import pandas as pd
import numpy as np

from signal_engine.indicators.base import Indicator, ScalarIndicator
from signal_engine.indicators.implementations import (
    SMAIndicator,
    EMAIndicator,
    RSIIndicator,
    ATRIndicator,
    VWAPIndicator,
    BollingerBandsIndicator,
    MACDIndicator,
)
from signal_engine.indicators.technical import BollingerBands, MacdResult, rsi, macd


@pytest.fixture
def sample_ohlcv():
    """Create sample OHLCV data."""
    rng = np.random.default_rng(7)
    dates = pd.date_range('2020-01-01', periods=80, freq='D')
    base = 100 + np.arange(80) * 0.5
    noise = rng.normal(0, 2, 80)
    close = base + noise
    df = pd.DataFrame({
        'Open': close,
        'High': close + np.abs(noise) + 1,
        'Low': close - np.abs(noise) - 1,
        'Close': close,
        'Volume': rng.integers(1_000_000, 5_000_000, 80).astype(float),
    }, index=dates)
    return df


ALL_INDICATORS = [
    SMAIndicator(10),
    EMAIndicator(10),
    RSIIndicator(14),
    ATRIndicator(14),
    VWAPIndicator(20),
    BollingerBandsIndicator(20, 2.0),
    MACDIndicator(12, 26, 9),
]


class TestIndicatorInterface:
    """Test that all indicators implement the Indicator interface."""

    @pytest.mark.parametrize("indicator", ALL_INDICATORS, ids=lambda i: i.name)
    def test_implements_interface(self, indicator):
        assert isinstance(indicator, Indicator)

    def test_scalar_indicators(self):
        """Single-value indicators share the float series behaviour."""
        for cls in (SMAIndicator, EMAIndicator, RSIIndicator, ATRIndicator, VWAPIndicator):
            assert issubclass(cls, ScalarIndicator)
        assert not issubclass(MACDIndicator, ScalarIndicator)
        assert not issubclass(BollingerBandsIndicator, ScalarIndicator)

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            Indicator()


class TestLookback:
    """Lookback matches the first bar with a value."""

    @pytest.mark.parametrize("indicator", ALL_INDICATORS, ids=lambda i: i.name)
    def test_lookback_boundary(self, indicator, sample_ohlcv):
        n = indicator.lookback
        assert indicator.calculate(sample_ohlcv.iloc[: n - 1]) is None
        assert indicator.calculate(sample_ohlcv.iloc[:n]) is not None

    def test_lookback_values(self):
        assert RSIIndicator(14).lookback == 15
        assert ATRIndicator(14).lookback == 15
        assert MACDIndicator(12, 26, 9).lookback == 35
        assert BollingerBandsIndicator(20).lookback == 20


class TestRSIIndicator:
    """Test RSI indicator implementation."""

    def test_calculate_delegates(self, sample_ohlcv):
        assert RSIIndicator(14).calculate(sample_ohlcv) == rsi(sample_ohlcv, 14)

    def test_series_shape(self, sample_ohlcv):
        series = RSIIndicator(14).calculate_series(sample_ohlcv)
        assert len(series) == len(sample_ohlcv)
        assert series.index.equals(sample_ohlcv.index)
        assert series.iloc[:14].isna().all()
        assert series.iloc[14:].notna().all()
        assert series.dtype == float

    def test_series_matches_point_values(self, sample_ohlcv):
        """Each series point equals the point value on the prefix window."""
        series = RSIIndicator(14).calculate_series(sample_ohlcv)
        for i in (14, 30, len(sample_ohlcv) - 1):
            assert series.iloc[i] == rsi(sample_ohlcv.iloc[: i + 1], 14)


class TestStructuredIndicators:
    """Bollinger and MACD series carry result objects."""

    def test_macd_calculate(self, sample_ohlcv):
        result = MACDIndicator().calculate(sample_ohlcv)
        assert isinstance(result, MacdResult)
        assert result == macd(sample_ohlcv)

    def test_macd_series(self, sample_ohlcv):
        series = MACDIndicator(12, 26, 9).calculate_series(sample_ohlcv)
        assert series.iloc[33] is None
        assert isinstance(series.iloc[34], MacdResult)
        assert series.iloc[-1] == macd(sample_ohlcv)

    def test_bollinger_series(self, sample_ohlcv):
        series = BollingerBandsIndicator(20).calculate_series(sample_ohlcv)
        assert series.iloc[18] is None
        assert isinstance(series.iloc[19], BollingerBands)
        assert series.name == "bollinger_bands"


class TestSMAIndicator:
    """Test SMA indicator implementation."""

    def test_series_equals_rolling_mean(self, sample_ohlcv):
        series = SMAIndicator(10).calculate_series(sample_ohlcv)
        expected = sample_ohlcv['Close'].rolling(10).mean()
        np.testing.assert_allclose(series.to_numpy(), expected.to_numpy(), rtol=1e-12)
