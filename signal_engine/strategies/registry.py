"""
Registry of the built-in strategies.

Maps a stable key (used in YAML configs and on the command line) to the
strategy class, so callers can look strategies up by name without
importing each module.
"""
from dataclasses import dataclass
from typing import Dict, List, Type

from .base import Strategy, StrategyType
from .parameters import ParameterDefinition
from .moving_average_crossover import MovingAverageCrossoverStrategy
from .macd_crossover import MacdCrossoverStrategy
from .rsi_mean_reversion import RsiMeanReversionStrategy
from .bollinger_bands_breakout import BollingerBandsBreakoutStrategy
from .vwap import VwapStrategy


STRATEGIES: Dict[str, Type[Strategy]] = {
    "moving_average_crossover": MovingAverageCrossoverStrategy,
    "macd_crossover": MacdCrossoverStrategy,
    "rsi_mean_reversion": RsiMeanReversionStrategy,
    "bollinger_bands_breakout": BollingerBandsBreakoutStrategy,
    "vwap": VwapStrategy,
}


@dataclass(frozen=True)
class StrategyInfo:
    """Summary of a registered strategy."""
    key: str
    name: str
    description: str
    strategy_type: StrategyType


def get_strategy(key: str) -> Strategy:
    """
    Create a strategy instance by key.

    Raises:
        KeyError: If no strategy is registered under ``key``
    """
    try:
        strategy_cls = STRATEGIES[key]
    except KeyError:
        raise KeyError(
            f"Unknown strategy '{key}'. Available: {', '.join(sorted(STRATEGIES))}"
        ) from None
    return strategy_cls()


def list_strategies() -> List[StrategyInfo]:
    """All registered strategies, sorted by display name."""
    infos = [
        StrategyInfo(
            key=key,
            name=cls.name,
            description=cls.description,
            strategy_type=cls.strategy_type,
        )
        for key, cls in STRATEGIES.items()
    ]
    return sorted(infos, key=lambda info: info.name)


def parameter_definitions_for(key: str) -> List[ParameterDefinition]:
    return get_strategy(key).parameter_definitions()


__all__ = [
    'STRATEGIES',
    'StrategyInfo',
    'get_strategy',
    'list_strategies',
    'parameter_definitions_for',
]
