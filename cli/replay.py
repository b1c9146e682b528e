#!/usr/bin/env python3
"""
Replay a strategy over historical bars.

Walks an OHLCV CSV bar by bar with a growing window, tracks a flat/long
position from the emitted signals and prints every Buy and Sell.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from signal_engine.shared.types import OHLCV_COLUMNS, PositionSnapshot, TradingSignal
from signal_engine.strategies.base import Strategy
from signal_engine.strategies.parameters import BaseParameters
from signal_engine.strategies.config_loader import load_strategy_config
from signal_engine.strategies.registry import STRATEGIES, get_strategy

logger = logging.getLogger(__name__)


def setup_logging(log_path: Optional[Path] = None, verbose: bool = False):
    """
    Setup logging to stdout and optionally to file.

    Args:
        log_path: Path to log file (None = stdout only)
        verbose: If True, use DEBUG level, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def load_bars(csv_path: Union[str, Path]) -> pd.DataFrame:
    """
    Load an OHLCV CSV with the date in the first column.

    Raises:
        FileNotFoundError: If the CSV doesn't exist
        ValueError: If an OHLCV column is missing
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found: {csv_path}")

    df = pd.read_csv(csv_path, index_col=0, parse_dates=True)
    if not isinstance(df.index, pd.DatetimeIndex):
        df.index = pd.to_datetime(df.index)
    df = df.sort_index()

    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path} is missing columns: {missing}")
    return df


def replay_signals(
    bars: pd.DataFrame,
    strategy: Strategy,
    parameters: BaseParameters,
    lookback: Optional[int] = None,
) -> List[TradingSignal]:
    """
    Evaluate ``strategy`` at every bar and return the Buy/Sell signals.

    A Buy opens a position at the signal's entry price and a Sell closes it,
    so the snapshot passed to the next evaluation always matches the signals
    emitted so far.

    Args:
        bars: OHLCV frame ordered by date
        strategy: Strategy to evaluate
        parameters: Parameters for ``strategy`` (validated here once)
        lookback: Cap on the window length per evaluation (None = all history)
    """
    strategy.validate(parameters)
    position: Optional[PositionSnapshot] = None
    actions: List[TradingSignal] = []

    for end in range(1, len(bars) + 1):
        start = 0 if lookback is None else max(0, end - lookback)
        signal = strategy.evaluate(bars.iloc[start:end], position, parameters)

        if signal.is_buy:
            position = PositionSnapshot(
                quantity=1.0,
                entry_price=signal.entry_price,
                entry_time=signal.timestamp,
            )
            actions.append(signal)
        elif signal.is_sell:
            position = None
            actions.append(signal)

    logger.info(f"Replayed {len(bars)} bars with {strategy.name}: {len(actions)} signals")
    return actions


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay a trading strategy over historical OHLCV bars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Replay a YAML-configured strategy
    python -m cli.replay --bars data/sp500.csv --config configs/rsi.yaml

    # Replay a built-in strategy with default parameters
    python -m cli.replay --bars data/sp500.csv --strategy macd_crossover
        """
    )
    parser.add_argument(
        "--bars", "-b",
        required=True,
        help="CSV file with a date column followed by Open/High/Low/Close/Volume",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--config", "-c",
        type=str,
        help="Load strategy and parameters from YAML file",
    )
    source.add_argument(
        "--strategy", "-s",
        choices=sorted(STRATEGIES),
        help="Built-in strategy to run with default parameters",
    )
    parser.add_argument(
        "--lookback",
        type=int,
        default=None,
        help="Maximum number of bars passed to each evaluation (default: all history)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging (shows every Hold)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    args = parser.parse_args(argv)

    setup_logging(Path(args.log_file) if args.log_file else None, args.verbose)

    if args.config:
        config = load_strategy_config(args.config)
        strategy = get_strategy(config.strategy_key)
        parameters = config.parameters
        print(f"Strategy: {config.name} ({strategy.name})")
    else:
        strategy = get_strategy(args.strategy)
        parameters = strategy.default_parameters()
        print(f"Strategy: {strategy.name} (default parameters)")

    bars = load_bars(args.bars)
    print(f"Bars: {len(bars)} ({bars.index[0].date()} to {bars.index[-1].date()})" if len(bars) else "Bars: 0")

    signals = replay_signals(bars, strategy, parameters, lookback=args.lookback)

    print(f"\n{len(signals)} signals")
    for signal in signals:
        line = f"  {signal.timestamp}  {signal.signal_type.value.upper():4s}  {signal.entry_price:.4f}"
        if signal.is_buy:
            line += f"  stop {signal.stop_loss:.4f}  target {signal.take_profit:.4f}"
        print(f"{line}  {signal.reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
