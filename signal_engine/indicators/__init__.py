"""
Indicator calculation module.

Provides all trading indicators:
- Pure functions (SMA, EMA, RSI, ATR, Bollinger Bands, MACD, VWAP)
- Indicator classes with per-bar series for analysis

All indicators follow a unified interface: a window of bars in, a value
(or None for insufficient history) out.
"""
from .technical import (
    BollingerBands,
    MacdResult,
    VwapBands,
    sma,
    ema,
    rsi,
    atr,
    bollinger_bands,
    macd,
    vwap,
    vwap_bands,
    average_volume,
    true_range,
    typical_price,
)
from .base import Indicator, ScalarIndicator
from .implementations import (
    SMAIndicator,
    EMAIndicator,
    RSIIndicator,
    ATRIndicator,
    VWAPIndicator,
    BollingerBandsIndicator,
    MACDIndicator,
)

__all__ = [
    'BollingerBands',
    'MacdResult',
    'VwapBands',
    'sma',
    'ema',
    'rsi',
    'atr',
    'bollinger_bands',
    'macd',
    'vwap',
    'vwap_bands',
    'average_volume',
    'true_range',
    'typical_price',
    'Indicator',
    'ScalarIndicator',
    'SMAIndicator',
    'EMAIndicator',
    'RSIIndicator',
    'ATRIndicator',
    'VWAPIndicator',
    'BollingerBandsIndicator',
    'MACDIndicator',
]
