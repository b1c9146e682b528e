"""
Trading strategies.

Provides the strategy contract, the parameter model shared by all
strategies, the five built-in strategies and a registry to look them up
by key.
"""
from .parameters import (
    ParameterType,
    MovingAverageType,
    ParameterValidationError,
    ParameterDefinition,
    BaseParameters,
    MovingAverageCrossoverParameters,
    MacdCrossoverParameters,
    RsiMeanReversionParameters,
    BollingerBandsBreakoutParameters,
    VwapParameters,
)
from .base import Strategy, StrategyType
from .moving_average_crossover import MovingAverageCrossoverStrategy
from .macd_crossover import MacdCrossoverStrategy
from .rsi_mean_reversion import RsiMeanReversionStrategy
from .bollinger_bands_breakout import BollingerBandsBreakoutStrategy
from .vwap import VwapStrategy
from .registry import (
    STRATEGIES,
    StrategyInfo,
    get_strategy,
    list_strategies,
    parameter_definitions_for,
)
from .config_loader import StrategyConfig, load_strategy_config, save_strategy_config

__all__ = [
    'ParameterType',
    'MovingAverageType',
    'ParameterValidationError',
    'ParameterDefinition',
    'BaseParameters',
    'MovingAverageCrossoverParameters',
    'MacdCrossoverParameters',
    'RsiMeanReversionParameters',
    'BollingerBandsBreakoutParameters',
    'VwapParameters',
    'Strategy',
    'StrategyType',
    'MovingAverageCrossoverStrategy',
    'MacdCrossoverStrategy',
    'RsiMeanReversionStrategy',
    'BollingerBandsBreakoutStrategy',
    'VwapStrategy',
    'STRATEGIES',
    'StrategyInfo',
    'get_strategy',
    'list_strategies',
    'parameter_definitions_for',
    'StrategyConfig',
    'load_strategy_config',
    'save_strategy_config',
]
