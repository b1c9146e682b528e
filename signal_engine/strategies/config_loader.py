"""
YAML configuration loader for strategies.

Loads a named strategy with its parameters from YAML so setups can be
shared and tweaked without code changes. Layout:

    name: rsi_default
    description: RSI 14 with volume filter
    strategy: rsi_mean_reversion
    parameters:
      rsi_period: 14
      require_volume_confirmation: true

Parameters are validated at load time (fail fast with clear errors).
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import yaml

from .parameters import BaseParameters
from .registry import STRATEGIES, get_strategy


@dataclass(frozen=True)
class StrategyConfig:
    """A registered strategy together with validated parameters."""
    name: str
    strategy_key: str
    parameters: BaseParameters
    description: str = ""


def load_strategy_config(yaml_path: Union[str, Path]) -> StrategyConfig:
    """
    Load a strategy configuration from a YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        StrategyConfig with validated parameters

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, names an unknown strategy, or has invalid parameters
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(
            f"Config file must contain a mapping at the top level, "
            f"got {type(config_dict).__name__}: {yaml_path}"
        )

    strategy_key = config_dict.get('strategy')
    if strategy_key not in STRATEGIES:
        raise ValueError(
            f"Unknown strategy '{strategy_key}' in {yaml_path}. "
            f"Available: {', '.join(sorted(STRATEGIES))}"
        )

    strategy = get_strategy(strategy_key)
    parameters = strategy.parameters_type.from_dict(config_dict.get('parameters') or {})
    strategy.validate(parameters)

    return StrategyConfig(
        name=config_dict.get('name', yaml_path.stem),
        strategy_key=strategy_key,
        parameters=parameters,
        description=config_dict.get('description', ''),
    )


def save_strategy_config(config: StrategyConfig, yaml_path: Union[str, Path]) -> None:
    """
    Save a strategy configuration to a YAML file.

    Args:
        config: StrategyConfig to save
        yaml_path: Path where YAML file should be saved
    """
    yaml_path = Path(yaml_path)

    config_dict = {
        'name': config.name,
        'description': config.description,
        'strategy': config.strategy_key,
        'parameters': config.parameters.to_dict(),
    }

    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with open(yaml_path, 'w') as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)


__all__ = ['StrategyConfig', 'load_strategy_config', 'save_strategy_config']
