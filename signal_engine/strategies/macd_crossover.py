"""
MACD crossover strategy.

Buys when the MACD line crosses above its signal line and sells when it
crosses below. MACD is computed on the full window and on the window
without its last bar to detect the crossing edge.
"""
from typing import Optional

import pandas as pd

from .base import Strategy, StrategyType
from .parameters import MacdCrossoverParameters
from ..indicators.technical import macd
from ..shared.types import HoldReason, PositionSnapshot, TradingSignal
from ..shared.defaults import CROSSOVER_CONFIDENCE


class MacdCrossoverStrategy(Strategy[MacdCrossoverParameters]):
    """Trend following on MACD / signal line crossovers."""

    name = "MACD Crossover"
    description = (
        "Trend following strategy that buys when the MACD line crosses above the "
        "signal line and sells when it crosses below"
    )
    strategy_type = StrategyType.TREND_FOLLOWING
    parameters_type = MacdCrossoverParameters

    def min_bars(self, parameters: MacdCrossoverParameters) -> int:
        # One extra bar so the previous window also has a MACD value
        return max(parameters.fast_period, parameters.slow_period) + parameters.signal_period + 1

    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: MacdCrossoverParameters,
    ) -> TradingSignal:
        current = macd(bars, parameters.fast_period, parameters.slow_period, parameters.signal_period)
        previous = macd(
            bars.iloc[:-1], parameters.fast_period, parameters.slow_period, parameters.signal_period
        )

        if current is None or previous is None:
            return self._hold(bars, "Unable to calculate MACD", HoldReason.INDICATOR_UNAVAILABLE)

        values = {
            "macd_line": current.macd_line,
            "signal_line": current.signal_line,
            "histogram": current.histogram,
            "prev_macd_line": previous.macd_line,
            "prev_signal_line": previous.signal_line,
        }

        volume_hold = self._volume_confirmation_hold(bars, parameters, values)
        if volume_hold is not None:
            return volume_hold

        crossed_up = (
            previous.macd_line <= previous.signal_line
            and current.macd_line > current.signal_line
        )
        crossed_down = (
            previous.macd_line >= previous.signal_line
            and current.macd_line < current.signal_line
        )

        if crossed_up and current_position is None:
            return self._buy(
                bars,
                parameters,
                f"Bullish MACD crossover: MACD ({current.macd_line:.4f}) crossed above "
                f"signal ({current.signal_line:.4f})",
                CROSSOVER_CONFIDENCE,
                values,
            )

        if crossed_down and current_position is not None:
            return self._sell(
                bars,
                f"Bearish MACD crossover: MACD ({current.macd_line:.4f}) crossed below "
                f"signal ({current.signal_line:.4f})",
                CROSSOVER_CONFIDENCE,
                values,
            )

        return self._hold(
            bars,
            f"No MACD crossover (histogram {current.histogram:.4f})",
            HoldReason.NO_SIGNAL,
            values,
        )
