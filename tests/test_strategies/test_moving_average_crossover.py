"""
Tests for the moving average crossover strategy.
"""
import pytest
import pandas as pd
import numpy as np

from signal_engine.indicators.technical import atr
from signal_engine.shared.types import HoldReason, PositionSnapshot, SignalType
from signal_engine.strategies.moving_average_crossover import MovingAverageCrossoverStrategy
from signal_engine.strategies.parameters import (
    MovingAverageCrossoverParameters,
    MovingAverageType,
    RsiMeanReversionParameters,
)


def make_frame(closes, volumes=None, spread=0.5):
    closes = np.asarray(closes, dtype=float)
    dates = pd.date_range('2023-01-01', periods=len(closes), freq='D')
    if volumes is None:
        volumes = np.full(len(closes), 1_000.0)
    return pd.DataFrame({
        'Open': closes,
        'High': closes + spread,
        'Low': closes - spread,
        'Close': closes,
        'Volume': np.asarray(volumes, dtype=float),
    }, index=dates)


@pytest.fixture
def strategy():
    return MovingAverageCrossoverStrategy()


@pytest.fixture
def params():
    return MovingAverageCrossoverParameters(fast_period=2, slow_period=3)


@pytest.fixture
def position():
    return PositionSnapshot(quantity=10, entry_price=10.0)


class TestCrossoverEdge:
    """Crossovers are edge-triggered on the previous vs current bar."""

    def test_bullish_crossover_buys_when_flat(self, strategy, params):
        """Fast equals slow on the previous bar and exceeds it now."""
        signal = strategy.evaluate(make_frame([10, 10, 10, 11]), None, params)
        assert signal.signal_type == SignalType.BUY
        assert signal.entry_price == pytest.approx(11.0)
        assert signal.confidence == pytest.approx(0.75)
        assert signal.indicator_values['fast_ma'] == pytest.approx(10.5)
        assert signal.indicator_values['prev_fast_ma'] == pytest.approx(10.0)

    def test_bullish_crossover_holds_with_position(self, strategy, params, position):
        signal = strategy.evaluate(make_frame([10, 10, 10, 11]), position, params)
        assert signal.signal_type == SignalType.HOLD
        assert signal.hold_reason == HoldReason.NO_SIGNAL

    def test_bearish_crossover_sells_with_position(self, strategy, params, position):
        signal = strategy.evaluate(make_frame([10, 10, 10, 9]), position, params)
        assert signal.signal_type == SignalType.SELL
        assert signal.entry_price == pytest.approx(9.0)
        assert signal.stop_loss is None

    def test_bearish_crossover_holds_when_flat(self, strategy, params):
        signal = strategy.evaluate(make_frame([10, 10, 10, 9]), None, params)
        assert signal.is_hold

    def test_no_signal_while_trend_continues(self, strategy, params):
        """Fast already above slow on both bars is not a crossover."""
        signal = strategy.evaluate(make_frame([10, 10, 11, 12]), None, params)
        assert signal.is_hold
        assert signal.hold_reason == HoldReason.NO_SIGNAL

    def test_ema_crossover(self, strategy):
        params = MovingAverageCrossoverParameters(
            fast_period=2, slow_period=3, ma_type=MovingAverageType.EMA
        )
        signal = strategy.evaluate(make_frame([12, 11, 10, 10, 13]), None, params)
        assert signal.is_buy
        assert signal.indicator_values['prev_fast_ma'] < signal.indicator_values['prev_slow_ma']
        assert signal.indicator_values['fast_ma'] == pytest.approx(217 / 18)
        assert signal.indicator_values['slow_ma'] == pytest.approx(11.75)
        assert "EMA" in signal.reason


class TestInsufficientData:
    """Windows shorter than max(fast, slow) + 1 hold."""

    def test_short_window(self, strategy, params):
        signal = strategy.evaluate(make_frame([10, 10, 11]), None, params)
        assert signal.is_hold
        assert signal.hold_reason == HoldReason.INSUFFICIENT_DATA
        assert "need 4 bars" in signal.reason

    def test_min_bars(self, strategy):
        assert strategy.min_bars(MovingAverageCrossoverParameters()) == 22


class TestStops:
    """Stop-loss and take-profit levels."""

    def test_percentage_stops(self, strategy, params):
        signal = strategy.evaluate(make_frame([10, 10, 10, 11]), None, params)
        assert signal.stop_loss == pytest.approx(11 * 0.95)
        assert signal.take_profit == pytest.approx(11 * 1.10)
        assert signal.position_size_percent == pytest.approx(100.0)

    def test_atr_stops(self, strategy):
        params = MovingAverageCrossoverParameters(
            fast_period=2, slow_period=3, use_atr_for_stops=True, atr_multiplier=2.0
        )
        frame = make_frame([10] * 19 + [11])
        signal = strategy.evaluate(frame, None, params)
        assert signal.is_buy
        assert signal.stop_loss == pytest.approx(11 - atr(frame, 14) * 2.0)
        assert signal.stop_loss < signal.entry_price < signal.take_profit

    def test_atr_stops_fall_back_to_percentage(self, strategy):
        """With fewer than 15 bars ATR(14) is unavailable."""
        params = MovingAverageCrossoverParameters(
            fast_period=2, slow_period=3, use_atr_for_stops=True
        )
        signal = strategy.evaluate(make_frame([10, 10, 10, 11]), None, params)
        assert signal.stop_loss == pytest.approx(11 * 0.95)


class TestVolumeConfirmation:
    """Volume filter only applies when enabled."""

    def test_low_volume_holds(self, strategy):
        params = MovingAverageCrossoverParameters(
            fast_period=2, slow_period=3, require_volume_confirmation=True
        )
        signal = strategy.evaluate(make_frame([10, 10, 10, 11]), None, params)
        assert signal.is_hold
        assert signal.hold_reason == HoldReason.CONFIRMATION_FAILED

    def test_high_volume_buys(self, strategy):
        params = MovingAverageCrossoverParameters(
            fast_period=2, slow_period=3, require_volume_confirmation=True
        )
        frame = make_frame([10, 10, 10, 11], volumes=[1000, 1000, 1000, 2000])
        assert strategy.evaluate(frame, None, params).is_buy


class TestContract:
    """Parameter type checks."""

    def test_wrong_parameter_type_raises(self, strategy):
        with pytest.raises(TypeError, match="MovingAverageCrossoverParameters"):
            strategy.evaluate(make_frame([10] * 30), None, RsiMeanReversionParameters())

    def test_accepts_price_bars(self, strategy, params):
        from signal_engine.shared.types import bars_from_frame
        bars = bars_from_frame(make_frame([10, 10, 10, 11]))
        assert strategy.evaluate(bars, None, params).is_buy
