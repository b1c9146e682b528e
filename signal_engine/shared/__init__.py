"""
Shared types and defaults for the signal engine.

This module provides:
- PriceBar, PositionSnapshot and the bar-window helpers
- SignalType / HoldReason enums and the TradingSignal dataclass
- Centralized default values for all indicator and strategy parameters
"""
from .types import (
    OHLCV_COLUMNS,
    BarWindow,
    HoldReason,
    PositionSnapshot,
    PriceBar,
    SignalType,
    TradingSignal,
    bars_from_frame,
    to_frame,
)
from .defaults import (
    # Risk management
    STOP_LOSS_PERCENT,
    TAKE_PROFIT_PERCENT,
    POSITION_SIZE_PERCENT,
    USE_ATR_FOR_STOPS,
    ATR_MULTIPLIER,
    ATR_STOP_PERIOD,
    # Volume confirmation
    REQUIRE_VOLUME_CONFIRMATION,
    VOLUME_MULTIPLIER,
    VOLUME_AVERAGE_WINDOW,
    # Strategy periods and thresholds
    MA_FAST_PERIOD,
    MA_SLOW_PERIOD,
    MACD_FAST,
    MACD_SLOW,
    MACD_SIGNAL,
    RSI_PERIOD,
    RSI_OVERSOLD,
    RSI_OVERBOUGHT,
    BOLLINGER_PERIOD,
    BOLLINGER_STD_DEV,
    REQUIRE_MOMENTUM_CONFIRMATION,
    VWAP_PERIOD,
    VWAP_DEVIATION_THRESHOLD_PERCENT,
    # Confidence
    CROSSOVER_CONFIDENCE,
    REVERSION_CONFIDENCE,
)

__all__ = [
    # Types
    'OHLCV_COLUMNS',
    'BarWindow',
    'HoldReason',
    'PositionSnapshot',
    'PriceBar',
    'SignalType',
    'TradingSignal',
    'bars_from_frame',
    'to_frame',
    # Defaults
    'STOP_LOSS_PERCENT',
    'TAKE_PROFIT_PERCENT',
    'POSITION_SIZE_PERCENT',
    'USE_ATR_FOR_STOPS',
    'ATR_MULTIPLIER',
    'ATR_STOP_PERIOD',
    'REQUIRE_VOLUME_CONFIRMATION',
    'VOLUME_MULTIPLIER',
    'VOLUME_AVERAGE_WINDOW',
    'MA_FAST_PERIOD',
    'MA_SLOW_PERIOD',
    'MACD_FAST',
    'MACD_SLOW',
    'MACD_SIGNAL',
    'RSI_PERIOD',
    'RSI_OVERSOLD',
    'RSI_OVERBOUGHT',
    'BOLLINGER_PERIOD',
    'BOLLINGER_STD_DEV',
    'REQUIRE_MOMENTUM_CONFIRMATION',
    'VWAP_PERIOD',
    'VWAP_DEVIATION_THRESHOLD_PERCENT',
    'CROSSOVER_CONFIDENCE',
    'REVERSION_CONFIDENCE',
]
