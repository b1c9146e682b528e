"""
Bollinger Bands breakout strategy.

Buys when the low moves from on/above the lower band to on/below it
(optionally only with positive momentum) and sells when the high moves from
on/below the upper band to on/above it.
"""
import logging
from typing import Optional

import pandas as pd

from .base import Strategy, StrategyType
from .parameters import BollingerBandsBreakoutParameters
from ..indicators.technical import bollinger_bands
from ..shared.types import HoldReason, PositionSnapshot, TradingSignal
from ..shared.defaults import REVERSION_CONFIDENCE

logger = logging.getLogger(__name__)


class BollingerBandsBreakoutStrategy(Strategy[BollingerBandsBreakoutParameters]):
    """Band touch entries and exits."""

    name = "Bollinger Bands Breakout"
    description = (
        "Breakout strategy that buys when price touches the lower Bollinger Band "
        "and sells when price touches the upper band"
    )
    strategy_type = StrategyType.BREAKOUT
    parameters_type = BollingerBandsBreakoutParameters

    def min_bars(self, parameters: BollingerBandsBreakoutParameters) -> int:
        return parameters.period + 1

    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: BollingerBandsBreakoutParameters,
    ) -> TradingSignal:
        current = bollinger_bands(bars, parameters.period, parameters.standard_deviations)
        previous = bollinger_bands(bars.iloc[:-1], parameters.period, parameters.standard_deviations)

        if current is None or previous is None:
            return self._hold(
                bars, "Unable to calculate Bollinger Bands", HoldReason.INDICATOR_UNAVAILABLE
            )

        values = {
            "upper_band": current.upper_band,
            "middle_band": current.middle_band,
            "lower_band": current.lower_band,
        }

        volume_hold = self._volume_confirmation_hold(bars, parameters, values)
        if volume_hold is not None:
            return volume_hold

        prev_bar = bars.iloc[-2]
        curr_bar = bars.iloc[-1]

        touched_lower = (
            prev_bar["Low"] >= previous.lower_band
            and curr_bar["Low"] <= current.lower_band
        )
        touched_upper = (
            prev_bar["High"] <= previous.upper_band
            and curr_bar["High"] >= current.upper_band
        )

        if touched_lower and current_position is None:
            if parameters.require_momentum_confirmation and not self._has_momentum(bars):
                logger.debug(f"{self.name}: lower band touch without momentum")
                return self._hold(
                    bars,
                    f"Lower BB touch ({current.lower_band:.2f}) without momentum",
                    HoldReason.CONFIRMATION_FAILED,
                    values,
                )
            suffix = " with momentum" if parameters.require_momentum_confirmation else ""
            return self._buy(
                bars,
                parameters,
                f"Lower BB touch ({current.lower_band:.2f}){suffix}",
                REVERSION_CONFIDENCE,
                values,
            )

        if touched_upper and current_position is not None:
            return self._sell(
                bars,
                f"Upper BB touch ({current.upper_band:.2f})",
                REVERSION_CONFIDENCE,
                values,
            )

        return self._hold(bars, "No Bollinger Band breakout detected", HoldReason.NO_SIGNAL, values)
