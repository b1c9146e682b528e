"""
Base indicator interface.

All indicators follow this pattern:
1. Calculate the latest value from a window of price bars
2. Optionally expand that into a per-bar series for analysis and charts
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..shared.types import BarWindow, to_frame


class Indicator(ABC):
    """
    Base class for all indicators.

    Indicators calculate values from price bars that strategies use for
    signal generation. They do not generate signals directly.
    """

    name: str = "indicator"

    @property
    @abstractmethod
    def lookback(self) -> int:
        """Minimum number of bars needed before a value is produced."""

    @abstractmethod
    def calculate(self, bars: BarWindow) -> Optional[Any]:
        """
        Calculate the indicator value at the last bar of the window.

        Args:
            bars: OHLCV window ordered by timestamp

        Returns:
            Indicator value, or None if insufficient data
        """

    def calculate_series(self, bars: BarWindow) -> pd.Series:
        """
        Calculate the indicator at every bar of the window.

        Each point is computed from the prefix window ending at that bar, so
        series values equal what ``calculate`` returns for the same prefix.

        Returns:
            Series with the same index as the window; None before the lookback
        """
        frame = to_frame(bars)
        values = [
            self.calculate(frame.iloc[: i + 1]) if i + 1 >= self.lookback else None
            for i in range(len(frame))
        ]
        return pd.Series(values, index=frame.index, dtype=object, name=self.name)


class ScalarIndicator(Indicator):
    """Indicator producing a single float; series use NaN for missing values."""

    def calculate_series(self, bars: BarWindow) -> pd.Series:
        series = super().calculate_series(bars)
        return pd.Series(
            [np.nan if v is None else float(v) for v in series],
            index=series.index,
            dtype=float,
            name=self.name,
        )
