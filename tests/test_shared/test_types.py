"""
Tests for shared types: signals, price bars and bar-window conversion.
"""
import dataclasses

import pytest
import pandas as pd

from signal_engine.shared.types import (
    HoldReason,
    PositionSnapshot,
    PriceBar,
    SignalType,
    TradingSignal,
    bars_from_frame,
    to_frame,
)


@pytest.fixture
def bars():
    dates = pd.date_range('2024-01-01', periods=3, freq='D')
    return [
        PriceBar(timestamp=dates[i], open=10.0 + i, high=11.0 + i, low=9.0 + i,
                 close=10.5 + i, volume=100.0 * (i + 1))
        for i in range(3)
    ]


class TestTradingSignal:
    """Test TradingSignal invariants."""

    def test_buy_requires_prices(self):
        with pytest.raises(ValueError, match="BUY signal requires"):
            TradingSignal(signal_type=SignalType.BUY, entry_price=10.0)

    def test_buy_with_prices(self):
        signal = TradingSignal(
            signal_type=SignalType.BUY,
            entry_price=10.0,
            stop_loss=9.5,
            take_profit=11.0,
            confidence=0.7,
        )
        assert signal.is_buy
        assert not signal.is_hold

    def test_confidence_bounds(self):
        with pytest.raises(ValueError, match="confidence"):
            TradingSignal(signal_type=SignalType.HOLD, confidence=1.5)

    def test_hold_reason_only_on_hold(self):
        with pytest.raises(ValueError, match="hold_reason"):
            TradingSignal(
                signal_type=SignalType.SELL,
                entry_price=10.0,
                hold_reason=HoldReason.NO_SIGNAL,
            )

    def test_immutable(self):
        signal = TradingSignal(signal_type=SignalType.HOLD, hold_reason=HoldReason.NO_SIGNAL)
        with pytest.raises(dataclasses.FrozenInstanceError):
            signal.reason = "changed"

    def test_indicator_values_not_shared(self):
        a = TradingSignal(signal_type=SignalType.HOLD)
        b = TradingSignal(signal_type=SignalType.HOLD)
        assert a.indicator_values is not b.indicator_values


class TestBarWindow:
    """Test conversion between PriceBar sequences and DataFrames."""

    def test_to_frame_from_bars(self, bars):
        frame = to_frame(bars)
        assert list(frame.columns) == ['Open', 'High', 'Low', 'Close', 'Volume']
        assert len(frame) == 3
        assert frame['Close'].iloc[-1] == pytest.approx(12.5)
        assert frame.index[0] == bars[0].timestamp

    def test_to_frame_passes_dataframe_through(self, bars):
        frame = to_frame(bars)
        assert to_frame(frame) is frame

    def test_to_frame_missing_columns(self):
        with pytest.raises(ValueError, match="missing columns"):
            to_frame(pd.DataFrame({'Close': [1.0, 2.0]}))

    def test_round_trip(self, bars):
        assert bars_from_frame(to_frame(bars)) == bars

    def test_trade_count_column(self, bars):
        frame = to_frame(bars)
        frame['Trades'] = [5, 6, 7]
        assert [b.trade_count for b in bars_from_frame(frame)] == [5, 6, 7]

    def test_trade_count_survives_round_trip(self, bars):
        """PriceBar -> frame -> PriceBar keeps trade counts, including missing ones."""
        counted = [dataclasses.replace(b, trade_count=7) for b in bars[:2]] + [bars[2]]
        frame = to_frame(counted)
        assert 'Trades' in frame.columns
        assert bars_from_frame(frame) == counted

    def test_no_trades_column_without_counts(self, bars):
        assert 'Trades' not in to_frame(bars).columns

    def test_empty_sequence(self):
        assert len(to_frame([])) == 0


class TestPositionSnapshot:
    """Test PositionSnapshot."""

    def test_optional_fields_default_to_none(self):
        position = PositionSnapshot(quantity=1.0, entry_price=100.0)
        assert position.entry_time is None
        assert position.unrealized_pnl is None
