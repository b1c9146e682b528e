"""
Tests for the VWAP deviation strategy.
"""
import pytest
import pandas as pd
import numpy as np

from signal_engine.shared.types import HoldReason, PositionSnapshot, SignalType
from signal_engine.strategies.vwap import VwapStrategy
from signal_engine.strategies.parameters import VwapParameters


def make_frame(closes, volumes=None):
    """Zero-range bars so the typical price equals the close."""
    closes = np.asarray(closes, dtype=float)
    dates = pd.date_range('2024-03-01', periods=len(closes), freq='D')
    if volumes is None:
        volumes = np.full(len(closes), 1_000.0)
    return pd.DataFrame({
        'Open': closes,
        'High': closes,
        'Low': closes,
        'Close': closes,
        'Volume': np.asarray(volumes, dtype=float),
    }, index=dates)


@pytest.fixture
def strategy():
    return VwapStrategy()


@pytest.fixture
def params():
    return VwapParameters(period=5, deviation_threshold_percent=2.0)


@pytest.fixture
def position():
    return PositionSnapshot(quantity=1, entry_price=100.0)


class TestVwapSignals:
    """Deviation thresholds around VWAP."""

    def test_buy_below_vwap(self, strategy, params):
        # VWAP of the last 5 closes = 99, close 95 is about 4% below
        signal = strategy.evaluate(make_frame([100.0] * 5 + [95.0]), None, params)
        assert signal.signal_type == SignalType.BUY
        assert signal.indicator_values['vwap'] == pytest.approx(99.0)
        assert signal.indicator_values['deviation_percent'] == pytest.approx(-4 / 99 * 100)
        assert signal.stop_loss < signal.entry_price < signal.take_profit

    def test_sell_above_vwap(self, strategy, params, position):
        signal = strategy.evaluate(make_frame([100.0] * 5 + [105.0]), position, params)
        assert signal.signal_type == SignalType.SELL
        assert signal.indicator_values['vwap'] == pytest.approx(101.0)

    def test_within_threshold_holds(self, strategy, params):
        signal = strategy.evaluate(make_frame([100.0] * 5 + [100.5]), None, params)
        assert signal.is_hold
        assert signal.hold_reason == HoldReason.NO_SIGNAL

    def test_below_vwap_with_position_holds(self, strategy, params, position):
        assert strategy.evaluate(make_frame([100.0] * 5 + [95.0]), position, params).is_hold

    def test_volume_weighting_moves_vwap(self, strategy, params):
        """A heavy bar at 110 drags VWAP up, so 104 is well below it."""
        volumes = [1_000.0] * 5 + [1_000.0]
        volumes[2] = 20_000.0
        frame = make_frame([100.0, 100.0, 110.0, 110.0, 110.0, 104.0], volumes=volumes)
        signal = strategy.evaluate(frame, None, params)
        assert signal.is_buy


class TestVwapEdgeCases:
    """Zero volume and short windows."""

    def test_zero_volume_holds(self, strategy, params):
        frame = make_frame([100.0] * 6, volumes=[0.0] * 6)
        signal = strategy.evaluate(frame, None, params)
        assert signal.is_hold
        assert signal.hold_reason == HoldReason.INDICATOR_UNAVAILABLE

    def test_insufficient_data(self, strategy, params):
        signal = strategy.evaluate(make_frame([100.0] * 4), None, params)
        assert signal.hold_reason == HoldReason.INSUFFICIENT_DATA

    def test_min_bars_equals_period(self, strategy, params):
        assert strategy.min_bars(params) == 5
