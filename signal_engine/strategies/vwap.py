"""
VWAP deviation strategy.

Buys when the close sits at least ``deviation_threshold_percent`` below the
trailing VWAP and sells when it sits at least that far above it.
"""
from typing import Optional

import pandas as pd

from .base import Strategy, StrategyType
from .parameters import VwapParameters
from ..indicators.technical import vwap
from ..shared.types import HoldReason, PositionSnapshot, TradingSignal
from ..shared.defaults import REVERSION_CONFIDENCE


class VwapStrategy(Strategy[VwapParameters]):
    """Mean reversion around the volume weighted average price."""

    name = "VWAP"
    description = (
        "Mean reversion strategy that buys when price trades below VWAP by the "
        "deviation threshold and sells when it trades above it by the same margin"
    )
    strategy_type = StrategyType.MEAN_REVERSION
    parameters_type = VwapParameters

    def min_bars(self, parameters: VwapParameters) -> int:
        return parameters.period

    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: VwapParameters,
    ) -> TradingSignal:
        center = vwap(bars, parameters.period)
        if center is None or center == 0:
            return self._hold(
                bars, "Unable to calculate VWAP (zero volume)", HoldReason.INDICATOR_UNAVAILABLE
            )

        close = float(bars["Close"].iloc[-1])
        deviation_percent = (close - center) / center * 100.0
        values = {"vwap": center, "deviation_percent": deviation_percent}

        volume_hold = self._volume_confirmation_hold(bars, parameters, values)
        if volume_hold is not None:
            return volume_hold

        threshold = parameters.deviation_threshold_percent

        if deviation_percent <= -threshold and current_position is None:
            return self._buy(
                bars,
                parameters,
                f"Price {abs(deviation_percent):.2f}% below VWAP ({center:.2f})",
                REVERSION_CONFIDENCE,
                values,
            )

        if deviation_percent >= threshold and current_position is not None:
            return self._sell(
                bars,
                f"Price {deviation_percent:.2f}% above VWAP ({center:.2f})",
                REVERSION_CONFIDENCE,
                values,
            )

        return self._hold(
            bars,
            f"Price within {threshold}% of VWAP (deviation {deviation_percent:.2f}%)",
            HoldReason.NO_SIGNAL,
            values,
        )
