"""
Individual indicator implementations following the Indicator interface.

These classes bind an indicator's periods once and delegate the math to the
pure functions in ``technical``, so point values and series values always
come from the same code path.
"""
from typing import Optional

from .base import Indicator, ScalarIndicator
from .technical import (
    BollingerBands,
    MacdResult,
    atr,
    bollinger_bands,
    ema,
    macd,
    rsi,
    sma,
    vwap,
)
from ..shared.types import BarWindow
from ..shared.defaults import (
    RSI_PERIOD,
    ATR_STOP_PERIOD,
    BOLLINGER_PERIOD, BOLLINGER_STD_DEV,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    VWAP_PERIOD,
)


class SMAIndicator(ScalarIndicator):
    """Simple Moving Average indicator."""

    name = "sma"

    def __init__(self, period: int):
        self.period = period

    @property
    def lookback(self) -> int:
        return self.period

    def calculate(self, bars: BarWindow) -> Optional[float]:
        return sma(bars, self.period)


class EMAIndicator(ScalarIndicator):
    """Exponential Moving Average indicator."""

    name = "ema"

    def __init__(self, period: int):
        self.period = period

    @property
    def lookback(self) -> int:
        return self.period

    def calculate(self, bars: BarWindow) -> Optional[float]:
        return ema(bars, self.period)


class RSIIndicator(ScalarIndicator):
    """Relative Strength Index indicator."""

    name = "rsi"

    def __init__(self, period: int = RSI_PERIOD):
        self.period = period

    @property
    def lookback(self) -> int:
        return self.period + 1

    def calculate(self, bars: BarWindow) -> Optional[float]:
        return rsi(bars, self.period)


class ATRIndicator(ScalarIndicator):
    """Average True Range indicator."""

    name = "atr"

    def __init__(self, period: int = ATR_STOP_PERIOD):
        self.period = period

    @property
    def lookback(self) -> int:
        return self.period + 1

    def calculate(self, bars: BarWindow) -> Optional[float]:
        return atr(bars, self.period)


class VWAPIndicator(ScalarIndicator):
    """Volume Weighted Average Price over a trailing window."""

    name = "vwap"

    def __init__(self, period: int = VWAP_PERIOD):
        self.period = period

    @property
    def lookback(self) -> int:
        return self.period

    def calculate(self, bars: BarWindow) -> Optional[float]:
        return vwap(bars, self.period)


class BollingerBandsIndicator(Indicator):
    """Bollinger Bands indicator (upper, middle, lower)."""

    name = "bollinger_bands"

    def __init__(self, period: int = BOLLINGER_PERIOD, std_dev_multiplier: float = BOLLINGER_STD_DEV):
        self.period = period
        self.std_dev_multiplier = std_dev_multiplier

    @property
    def lookback(self) -> int:
        return self.period

    def calculate(self, bars: BarWindow) -> Optional[BollingerBands]:
        return bollinger_bands(bars, self.period, self.std_dev_multiplier)


class MACDIndicator(Indicator):
    """MACD (Moving Average Convergence Divergence) indicator."""

    name = "macd"

    def __init__(
        self,
        fast: int = MACD_FAST,
        slow: int = MACD_SLOW,
        signal: int = MACD_SIGNAL,
    ):
        self.fast = fast
        self.slow = slow
        self.signal = signal

    @property
    def lookback(self) -> int:
        return max(self.fast, self.slow) + self.signal

    def calculate(self, bars: BarWindow) -> Optional[MacdResult]:
        return macd(bars, self.fast, self.slow, self.signal)


# Export all indicator classes
__all__ = [
    'SMAIndicator',
    'EMAIndicator',
    'RSIIndicator',
    'ATRIndicator',
    'VWAPIndicator',
    'BollingerBandsIndicator',
    'MACDIndicator',
]
