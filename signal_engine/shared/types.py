"""
Shared types for the signal-evaluation engine.

This module consolidates the price bar, position snapshot and signal types
that are used across the indicator and strategy modules, plus the helpers
that turn a window of bars into the OHLCV DataFrame the indicators work on.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

OHLCV_COLUMNS = ("Open", "High", "Low", "Close", "Volume")


class SignalType(Enum):
    """Type of trading signal."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class HoldReason(Enum):
    """Why a strategy returned HOLD instead of acting."""
    INSUFFICIENT_DATA = "insufficient_data"  # Window shorter than lookback; more bars will fix it
    INDICATOR_UNAVAILABLE = "indicator_unavailable"  # Indicator could not be computed (e.g. zero volume)
    CONFIRMATION_FAILED = "confirmation_failed"  # Volume or momentum filter rejected the bar
    NO_SIGNAL = "no_signal"  # Indicators computed, entry/exit rule did not fire


@dataclass(frozen=True)
class PriceBar:
    """One OHLCV sample for a fixed timeframe. Not re-validated here."""
    timestamp: Union[pd.Timestamp, datetime]
    open: float
    high: float
    low: float
    close: float
    volume: float
    trade_count: Optional[int] = None


@dataclass(frozen=True)
class PositionSnapshot:
    """
    Read-only view of the open position for one symbol and strategy.

    Owned by the portfolio/backtest collaborator. Strategies only look at
    whether a snapshot is present; ``None`` means flat.
    """
    quantity: float
    entry_price: float
    entry_time: Optional[Union[pd.Timestamp, datetime]] = None
    current_value: Optional[float] = None
    unrealized_pnl: Optional[float] = None


@dataclass(frozen=True)
class TradingSignal:
    """
    Result of one strategy evaluation.

    Built fresh on every ``evaluate`` call and never mutated afterwards.
    A BUY always carries entry, stop-loss and take-profit prices.
    """
    signal_type: SignalType
    reason: str = ""
    timestamp: Optional[pd.Timestamp] = None
    entry_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    position_size_percent: Optional[float] = None
    confidence: float = 0.0
    hold_reason: Optional[HoldReason] = None

    # Indicator readings at decision time (for analysis and logging)
    indicator_values: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence}")
        if self.signal_type == SignalType.BUY and (
            self.entry_price is None or self.stop_loss is None or self.take_profit is None
        ):
            raise ValueError("BUY signal requires entry_price, stop_loss and take_profit")
        if self.hold_reason is not None and self.signal_type != SignalType.HOLD:
            raise ValueError(f"hold_reason is only valid on HOLD signals, got {self.signal_type.value}")

    @property
    def is_buy(self) -> bool:
        return self.signal_type == SignalType.BUY

    @property
    def is_sell(self) -> bool:
        return self.signal_type == SignalType.SELL

    @property
    def is_hold(self) -> bool:
        return self.signal_type == SignalType.HOLD


BarWindow = Union[pd.DataFrame, Sequence[PriceBar]]


def to_frame(bars: BarWindow) -> pd.DataFrame:
    """
    Normalise a bar window to an OHLCV DataFrame.

    Args:
        bars: DataFrame with Open/High/Low/Close/Volume columns, or a
            sequence of PriceBar ordered by timestamp

    Returns:
        DataFrame indexed by timestamp. A DataFrame input is returned as-is.

    Raises:
        ValueError: If a DataFrame input lacks one of the OHLCV columns
    """
    if isinstance(bars, pd.DataFrame):
        missing = [c for c in OHLCV_COLUMNS if c not in bars.columns]
        if missing:
            raise ValueError(f"Bar frame is missing columns: {missing}")
        return bars

    bars = list(bars)
    columns = {
        "Open": [b.open for b in bars],
        "High": [b.high for b in bars],
        "Low": [b.low for b in bars],
        "Close": [b.close for b in bars],
        "Volume": [b.volume for b in bars],
    }
    # Optional column; missing counts become NaN
    if any(b.trade_count is not None for b in bars):
        columns["Trades"] = [float("nan") if b.trade_count is None else b.trade_count for b in bars]
    return pd.DataFrame(
        columns,
        index=pd.Index([b.timestamp for b in bars], name="Date"),
        dtype=float,
    )


def bars_from_frame(frame: pd.DataFrame) -> List[PriceBar]:
    """Convert an OHLCV DataFrame back into PriceBar records."""
    frame = to_frame(frame)
    trade_counts = frame["Trades"] if "Trades" in frame.columns else [None] * len(frame)
    return [
        PriceBar(
            timestamp=ts,
            open=float(o),
            high=float(h),
            low=float(lo),
            close=float(c),
            volume=float(v),
            trade_count=None if tc is None or pd.isna(tc) else int(tc),
        )
        for ts, o, h, lo, c, v, tc in zip(
            frame.index,
            frame["Open"],
            frame["High"],
            frame["Low"],
            frame["Close"],
            frame["Volume"],
            trade_counts,
        )
    ]
