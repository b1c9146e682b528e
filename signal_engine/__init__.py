"""
Signal-evaluation engine.

Provides unified interfaces for:
- Indicator calculations (SMA, EMA, RSI, ATR, Bollinger Bands, MACD, VWAP)
- Strategy parameters with declarative metadata and validation
- Strategies that turn a bar window and position into Buy/Sell/Hold signals
- YAML strategy configuration
"""
