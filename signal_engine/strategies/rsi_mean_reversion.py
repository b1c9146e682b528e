"""
RSI mean reversion strategy.

Buys while RSI is below the oversold threshold and sells while it is above
the overbought threshold. Level-triggered; position state decides which
side is considered.
"""
from typing import Optional

import pandas as pd

from .base import Strategy, StrategyType
from .parameters import RsiMeanReversionParameters
from ..indicators.technical import rsi
from ..shared.types import HoldReason, PositionSnapshot, TradingSignal
from ..shared.defaults import REVERSION_CONFIDENCE


class RsiMeanReversionStrategy(Strategy[RsiMeanReversionParameters]):
    """Mean reversion on RSI oversold / overbought zones."""

    name = "RSI Mean Reversion"
    description = (
        "Mean reversion strategy that buys when RSI is in oversold territory and "
        "sells when RSI is in overbought territory"
    )
    strategy_type = StrategyType.MEAN_REVERSION
    parameters_type = RsiMeanReversionParameters

    def min_bars(self, parameters: RsiMeanReversionParameters) -> int:
        return parameters.rsi_period + 1

    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: RsiMeanReversionParameters,
    ) -> TradingSignal:
        value = rsi(bars, parameters.rsi_period)
        if value is None:
            return self._hold(bars, "Unable to calculate RSI", HoldReason.INDICATOR_UNAVAILABLE)

        values = {"rsi": value}

        volume_hold = self._volume_confirmation_hold(bars, parameters, values)
        if volume_hold is not None:
            return volume_hold

        if value < parameters.oversold_threshold and current_position is None:
            return self._buy(
                bars,
                parameters,
                f"RSI in oversold zone ({value:.2f} < {parameters.oversold_threshold})",
                REVERSION_CONFIDENCE,
                values,
            )

        if value > parameters.overbought_threshold and current_position is not None:
            return self._sell(
                bars,
                f"RSI in overbought zone ({value:.2f} > {parameters.overbought_threshold})",
                REVERSION_CONFIDENCE,
                values,
            )

        return self._hold(bars, f"RSI neutral (RSI: {value:.2f})", HoldReason.NO_SIGNAL, values)
