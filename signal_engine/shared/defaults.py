"""
Centralized default values for indicator and strategy parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
Parameter records, parameter definitions and the indicator functions
all import from here so the values shown to a configuration UI are the
values the engine actually runs with.
"""

# Shared risk management defaults (percentages are 0-100 scale, 5.0 = 5%)
STOP_LOSS_PERCENT = 5.0
TAKE_PROFIT_PERCENT = 10.0
POSITION_SIZE_PERCENT = 100.0  # Share of allocated capital per trade
USE_ATR_FOR_STOPS = False
ATR_MULTIPLIER = 2.0  # Stop = entry - ATR * multiplier
ATR_STOP_PERIOD = 14  # ATR period used for ATR-based stops

# Volume confirmation filter
REQUIRE_VOLUME_CONFIRMATION = False
VOLUME_MULTIPLIER = 1.3  # Current volume must be >= 1.3x the average
VOLUME_AVERAGE_WINDOW = 20  # Bars in the average-volume window

# Moving Average Crossover
MA_FAST_PERIOD = 9
MA_SLOW_PERIOD = 21

# MACD Crossover
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# RSI Mean Reversion
RSI_PERIOD = 14
RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0

# Bollinger Bands Breakout
BOLLINGER_PERIOD = 20
BOLLINGER_STD_DEV = 2.0
REQUIRE_MOMENTUM_CONFIRMATION = True

# VWAP deviation
VWAP_PERIOD = 20
VWAP_DEVIATION_THRESHOLD_PERCENT = 2.0

# Signal confidence per strategy family (informal 0-1 scale)
CROSSOVER_CONFIDENCE = 0.75  # MA and MACD crossovers
REVERSION_CONFIDENCE = 0.70  # RSI, Bollinger, VWAP
