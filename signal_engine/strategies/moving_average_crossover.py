"""
Moving average crossover strategy.

Buys when the fast MA crosses above the slow MA and sells when it crosses
back below. The crossover is edge-triggered: both averages are computed on
the full window and, independently, on the window without its last bar.
"""
from typing import Optional

import pandas as pd

from .base import Strategy, StrategyType
from .parameters import MovingAverageCrossoverParameters, MovingAverageType
from ..indicators.technical import ema, sma
from ..shared.types import HoldReason, PositionSnapshot, TradingSignal
from ..shared.defaults import CROSSOVER_CONFIDENCE


class MovingAverageCrossoverStrategy(Strategy[MovingAverageCrossoverParameters]):
    """Trend following on fast/slow SMA or EMA crossovers."""

    name = "Moving Average Crossover"
    description = (
        "Trend following strategy that buys when the fast moving average crosses "
        "above the slow moving average and sells when it crosses below"
    )
    strategy_type = StrategyType.TREND_FOLLOWING
    parameters_type = MovingAverageCrossoverParameters

    def min_bars(self, parameters: MovingAverageCrossoverParameters) -> int:
        return max(parameters.fast_period, parameters.slow_period) + 1

    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: MovingAverageCrossoverParameters,
    ) -> TradingSignal:
        average = ema if parameters.ma_type == MovingAverageType.EMA else sma
        previous = bars.iloc[:-1]

        fast = average(bars, parameters.fast_period)
        slow = average(bars, parameters.slow_period)
        prev_fast = average(previous, parameters.fast_period)
        prev_slow = average(previous, parameters.slow_period)

        if fast is None or slow is None or prev_fast is None or prev_slow is None:
            return self._hold(
                bars, "Unable to calculate moving averages", HoldReason.INDICATOR_UNAVAILABLE
            )

        values = {
            "fast_ma": fast,
            "slow_ma": slow,
            "prev_fast_ma": prev_fast,
            "prev_slow_ma": prev_slow,
        }
        label = parameters.ma_type.name

        volume_hold = self._volume_confirmation_hold(bars, parameters, values)
        if volume_hold is not None:
            return volume_hold

        crossed_up = prev_fast <= prev_slow and fast > slow
        crossed_down = prev_fast >= prev_slow and fast < slow

        if crossed_up and current_position is None:
            return self._buy(
                bars,
                parameters,
                f"Bullish {label} crossover: fast ({fast:.2f}) crossed above slow ({slow:.2f})",
                CROSSOVER_CONFIDENCE,
                values,
            )

        if crossed_down and current_position is not None:
            return self._sell(
                bars,
                f"Bearish {label} crossover: fast ({fast:.2f}) crossed below slow ({slow:.2f})",
                CROSSOVER_CONFIDENCE,
                values,
            )

        return self._hold(
            bars,
            f"No crossover (fast {fast:.2f}, slow {slow:.2f})",
            HoldReason.NO_SIGNAL,
            values,
        )
