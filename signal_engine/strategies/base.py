"""
Strategy contract.

Every strategy implements the same capability set:
- evaluate(bars, current_position, parameters) -> TradingSignal
- default_parameters() / validate(parameters) / parameter_definitions()

Strategies keep no state between calls. All history needed for a decision
is in the bar window; the only position state is the snapshot passed in.
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Generic, List, Optional, Type, TypeVar

import pandas as pd

from .parameters import BaseParameters, ParameterDefinition
from ..indicators.technical import atr, average_volume
from ..shared.types import (
    BarWindow,
    HoldReason,
    PositionSnapshot,
    SignalType,
    TradingSignal,
    to_frame,
)
from ..shared.defaults import ATR_STOP_PERIOD, VOLUME_AVERAGE_WINDOW

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=BaseParameters)


class StrategyType(Enum):
    """Broad family a strategy belongs to."""
    TREND_FOLLOWING = "trend_following"
    MEAN_REVERSION = "mean_reversion"
    BREAKOUT = "breakout"


class Strategy(ABC, Generic[P]):
    """
    Base class for all strategies.

    Subclasses set the class attributes and implement ``min_bars`` and
    ``_evaluate``. The base class handles the parameter type check, the
    insufficient-history Hold, confirmation filters and stop/target math.
    """

    name: str = "strategy"
    description: str = ""
    strategy_type: StrategyType
    parameters_type: Type[P]

    def evaluate(
        self,
        bars: BarWindow,
        current_position: Optional[PositionSnapshot],
        parameters: P,
    ) -> TradingSignal:
        """
        Decide Buy, Sell or Hold at the last bar of the window.

        Args:
            bars: OHLCV window ordered by timestamp (DataFrame or PriceBars)
            current_position: Open position, or None when flat
            parameters: Validated parameters of this strategy's type

        Returns:
            TradingSignal for the last bar

        Raises:
            TypeError: If parameters are not of this strategy's parameter type
        """
        self._check_parameters_type(parameters)
        frame = to_frame(bars)

        required = self.min_bars(parameters)
        if len(frame) < required:
            return self._hold(
                frame,
                f"Insufficient data: need {required} bars, have {len(frame)}",
                HoldReason.INSUFFICIENT_DATA,
            )
        return self._evaluate(frame, current_position, parameters)

    @abstractmethod
    def min_bars(self, parameters: P) -> int:
        """Smallest window for which ``evaluate`` can produce Buy or Sell."""

    @abstractmethod
    def _evaluate(
        self,
        bars: pd.DataFrame,
        current_position: Optional[PositionSnapshot],
        parameters: P,
    ) -> TradingSignal:
        """Decision logic on a window that already satisfies ``min_bars``."""

    def default_parameters(self) -> P:
        return self.parameters_type()

    def validate(self, parameters: P) -> None:
        """
        Raises:
            TypeError: Wrong parameter type
            ParameterValidationError: A field or cross-field rule fails
        """
        self._check_parameters_type(parameters)
        parameters.validate()

    def parameter_definitions(self) -> List[ParameterDefinition]:
        return self.parameters_type.parameter_definitions()

    def _check_parameters_type(self, parameters: BaseParameters) -> None:
        if not isinstance(parameters, self.parameters_type):
            raise TypeError(
                f"{type(self).__name__} expects {self.parameters_type.__name__}, "
                f"got {type(parameters).__name__}"
            )

    # Signal builders

    def _hold(
        self,
        bars: pd.DataFrame,
        reason: str,
        hold_reason: HoldReason,
        indicator_values: Optional[Dict[str, float]] = None,
    ) -> TradingSignal:
        logger.debug(f"{self.name}: HOLD ({hold_reason.value}) {reason}")
        return TradingSignal(
            signal_type=SignalType.HOLD,
            reason=reason,
            timestamp=bars.index[-1] if len(bars) else None,
            hold_reason=hold_reason,
            indicator_values=dict(indicator_values or {}),
        )

    def _buy(
        self,
        bars: pd.DataFrame,
        parameters: P,
        reason: str,
        confidence: float,
        indicator_values: Dict[str, float],
    ) -> TradingSignal:
        entry = float(bars["Close"].iloc[-1])
        stop_loss = self._stop_loss(bars, entry, parameters)
        take_profit = self._take_profit(entry, parameters)
        logger.info(
            f"{self.name}: BUY at {entry:.4f} (stop {stop_loss:.4f}, target {take_profit:.4f}) - {reason}"
        )
        return TradingSignal(
            signal_type=SignalType.BUY,
            reason=reason,
            timestamp=bars.index[-1],
            entry_price=entry,
            stop_loss=stop_loss,
            take_profit=take_profit,
            position_size_percent=parameters.position_size_percent,
            confidence=confidence,
            indicator_values=dict(indicator_values),
        )

    def _sell(
        self,
        bars: pd.DataFrame,
        reason: str,
        confidence: float,
        indicator_values: Dict[str, float],
    ) -> TradingSignal:
        price = float(bars["Close"].iloc[-1])
        logger.info(f"{self.name}: SELL at {price:.4f} - {reason}")
        return TradingSignal(
            signal_type=SignalType.SELL,
            reason=reason,
            timestamp=bars.index[-1],
            entry_price=price,
            confidence=confidence,
            indicator_values=dict(indicator_values),
        )

    # Confirmation filters

    def _volume_confirmation_hold(
        self,
        bars: pd.DataFrame,
        parameters: P,
        indicator_values: Dict[str, float],
    ) -> Optional[TradingSignal]:
        """Hold signal when the volume filter is enabled and fails, else None."""
        if not parameters.require_volume_confirmation:
            return None
        avg_volume = average_volume(bars, VOLUME_AVERAGE_WINDOW)
        current_volume = float(bars["Volume"].iloc[-1])
        required = avg_volume * parameters.volume_multiplier
        if current_volume < required:
            logger.debug(
                f"{self.name}: volume confirmation failed. Current: {current_volume}, Required: {required}"
            )
            return self._hold(
                bars,
                f"Insufficient volume ({current_volume:.2f} < {required:.2f})",
                HoldReason.CONFIRMATION_FAILED,
                indicator_values,
            )
        return None

    @staticmethod
    def _has_momentum(bars: pd.DataFrame) -> bool:
        """Simple momentum: current close above the previous close."""
        closes = bars["Close"]
        return len(closes) >= 2 and closes.iloc[-1] > closes.iloc[-2]

    # Risk levels (long only)

    def _stop_loss(self, bars: pd.DataFrame, entry: float, parameters: P) -> float:
        if parameters.use_atr_for_stops:
            atr_value = atr(bars, ATR_STOP_PERIOD)
            if atr_value is not None and atr_value > 0:
                return entry - atr_value * parameters.atr_multiplier
            logger.debug(f"{self.name}: ATR unavailable, using percentage stop")
        return entry * (1 - parameters.stop_loss_percent / 100.0)

    @staticmethod
    def _take_profit(entry: float, parameters: P) -> float:
        return entry * (1 + parameters.take_profit_percent / 100.0)


__all__ = ['Strategy', 'StrategyType']
