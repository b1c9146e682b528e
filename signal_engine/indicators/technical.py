"""
Technical indicators computed from a window of price bars.

Provides SMA, EMA, RSI, ATR, Bollinger Bands, MACD and VWAP as pure
functions. Each function looks only at the window it is given and returns
None instead of raising when the window is shorter than the indicator's
lookback. Nothing is cached between calls.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from ..shared.types import BarWindow, to_frame
from ..shared.defaults import (
    RSI_PERIOD,
    ATR_STOP_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_STD_DEV,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    VOLUME_AVERAGE_WINDOW,
)


@dataclass(frozen=True)
class BollingerBands:
    """Bollinger Bands at the last bar of a window."""
    upper_band: float
    middle_band: float
    lower_band: float


@dataclass(frozen=True)
class MacdResult:
    """MACD components at the last bar of a window."""
    macd_line: float
    signal_line: float
    histogram: float


@dataclass(frozen=True)
class VwapBands:
    """VWAP with standard-deviation bands of the typical price."""
    vwap: float
    upper_band: float
    lower_band: float


def _seeded_smoothing(values: np.ndarray, period: int, alpha: float) -> np.ndarray:
    """
    Exponential smoothing seeded with the SMA of the first ``period`` values.

    Used for EMA (alpha = 2 / (period + 1)) and Wilder smoothing
    (alpha = 1 / period). Positions before the seed are NaN.
    """
    out = np.full(len(values), np.nan)
    if period < 1 or len(values) < period:
        return out
    seeded = pd.Series(np.array(values[period - 1:], dtype=float, copy=True))
    seeded.iloc[0] = values[:period].mean()
    out[period - 1:] = seeded.ewm(alpha=alpha, adjust=False).mean().to_numpy()
    return out


def _closes(bars: BarWindow) -> np.ndarray:
    return to_frame(bars)["Close"].to_numpy(dtype=float)


def typical_price(bars: BarWindow) -> pd.Series:
    """Typical price (High + Low + Close) / 3 per bar."""
    frame = to_frame(bars)
    return (frame["High"] + frame["Low"] + frame["Close"]) / 3.0


def true_range(bars: BarWindow) -> pd.Series:
    """
    True range per bar: max(high - low, |high - prev close|, |low - prev close|).

    The first bar has no previous close, so its value is high - low.
    """
    frame = to_frame(bars)
    high = frame["High"].to_numpy(dtype=float)
    low = frame["Low"].to_numpy(dtype=float)
    close = frame["Close"].to_numpy(dtype=float)
    if len(frame) == 0:
        return pd.Series([], index=frame.index, dtype=float, name="true_range")

    prev_close = np.concatenate(([close[0]], close[:-1]))
    tr = np.maximum.reduce([
        high - low,
        np.abs(high - prev_close),
        np.abs(low - prev_close),
    ])
    tr[0] = high[0] - low[0]
    return pd.Series(tr, index=frame.index, name="true_range")


def sma(bars: BarWindow, period: int) -> Optional[float]:
    """Simple Moving Average of the last ``period`` closes."""
    closes = _closes(bars)
    if period < 1 or len(closes) < period:
        return None
    return float(closes[-period:].mean())


def ema(bars: BarWindow, period: int) -> Optional[float]:
    """
    Exponential Moving Average of closes.

    Seeds from the SMA of the first ``period`` closes in the window and
    applies the smoothing factor 2 / (period + 1) to every later close.
    """
    closes = _closes(bars)
    if period < 1 or len(closes) < period:
        return None
    return float(_seeded_smoothing(closes, period, 2.0 / (period + 1))[-1])


def rsi(bars: BarWindow, period: int = RSI_PERIOD) -> Optional[float]:
    """
    Calculate Relative Strength Index (RSI) with Wilder's smoothing.

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    Needs ``period + 1`` bars. Returns 100 whenever the average loss is zero,
    including a window with no price movement at all.
    """
    closes = _closes(bars)
    if period < 1 or len(closes) < period + 1:
        return None

    delta = np.diff(closes)
    gains = np.where(delta > 0, delta, 0.0)
    losses = np.where(delta < 0, -delta, 0.0)

    avg_gain = _seeded_smoothing(gains, period, 1.0 / period)[-1]
    avg_loss = _seeded_smoothing(losses, period, 1.0 / period)[-1]

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100.0 - (100.0 / (1.0 + rs)))


def atr(bars: BarWindow, period: int = ATR_STOP_PERIOD) -> Optional[float]:
    """
    Average True Range with Wilder's smoothing.

    True ranges start at the second bar (the first has no previous close),
    so ``period + 1`` bars are needed. The first ATR is the mean of the first
    ``period`` true ranges; later values use alpha = 1 / period.
    """
    frame = to_frame(bars)
    if period < 1 or len(frame) < period + 1:
        return None
    tr = true_range(frame).to_numpy()[1:]
    return float(_seeded_smoothing(tr, period, 1.0 / period)[-1])


def bollinger_bands(
    bars: BarWindow,
    period: int = BOLLINGER_PERIOD,
    std_dev_multiplier: float = BOLLINGER_STD_DEV,
) -> Optional[BollingerBands]:
    """
    Bollinger Bands: SMA(period) +/- multiplier x population std of the same closes.

    Returns all three bands or None.
    """
    closes = _closes(bars)
    if period < 1 or len(closes) < period:
        return None
    window = closes[-period:]
    middle = float(window.mean())
    std = float(window.std(ddof=0))
    return BollingerBands(
        upper_band=middle + std_dev_multiplier * std,
        middle_band=middle,
        lower_band=middle - std_dev_multiplier * std,
    )


def macd(
    bars: BarWindow,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> Optional[MacdResult]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    MACD line = EMA(fast) - EMA(slow)
    Signal line = EMA(signal) of the MACD line series
    Histogram = MACD line - Signal line

    Needs max(fast, slow) + signal bars.
    """
    closes = _closes(bars)
    longest = max(fast, slow)
    if min(fast, slow, signal) < 1 or len(closes) < longest + signal:
        return None

    ema_fast = _seeded_smoothing(closes, fast, 2.0 / (fast + 1))
    ema_slow = _seeded_smoothing(closes, slow, 2.0 / (slow + 1))
    macd_line = (ema_fast - ema_slow)[longest - 1:]
    signal_line = _seeded_smoothing(macd_line, signal, 2.0 / (signal + 1))

    line = float(macd_line[-1])
    sig = float(signal_line[-1])
    return MacdResult(macd_line=line, signal_line=sig, histogram=line - sig)


def vwap(bars: BarWindow, period: Optional[int] = None) -> Optional[float]:
    """
    Volume Weighted Average Price over the trailing ``period`` bars.

    Uses the typical price (High + Low + Close) / 3. With ``period=None``
    the whole window is used. Returns None when total volume is zero.
    """
    frame = to_frame(bars)
    bars_to_use = len(frame) if period is None else period
    if bars_to_use < 1 or len(frame) < bars_to_use:
        return None

    recent = frame.iloc[-bars_to_use:]
    volume = recent["Volume"].to_numpy(dtype=float)
    total_volume = volume.sum()
    if total_volume == 0:
        return None
    return float((typical_price(recent).to_numpy() * volume).sum() / total_volume)


def vwap_bands(
    bars: BarWindow,
    period: Optional[int] = None,
    std_dev_multiplier: float = BOLLINGER_STD_DEV,
) -> Optional[VwapBands]:
    """VWAP +/- multiplier x population std of the typical prices in the same window."""
    center = vwap(bars, period)
    if center is None:
        return None
    frame = to_frame(bars)
    bars_to_use = len(frame) if period is None else period
    typical = typical_price(frame.iloc[-bars_to_use:]).to_numpy()
    std = float(np.sqrt(((typical - center) ** 2).mean()))
    return VwapBands(
        vwap=center,
        upper_band=center + std_dev_multiplier * std,
        lower_band=center - std_dev_multiplier * std,
    )


def average_volume(bars: BarWindow, window: int = VOLUME_AVERAGE_WINDOW) -> Optional[float]:
    """Mean volume of the last ``window`` bars (all bars if fewer are available)."""
    frame = to_frame(bars)
    if len(frame) == 0 or window < 1:
        return None
    return float(frame["Volume"].iloc[-window:].mean())
