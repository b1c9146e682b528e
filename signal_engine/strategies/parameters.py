"""
Strategy parameter records and their declarative metadata.

Each strategy owns one frozen parameter dataclass. Bounds, display names and
descriptions live on the dataclass fields themselves, so the definitions
handed to configuration surfaces and the checks run by ``validate()`` are
derived from the same place and cannot drift apart.

Validation runs explicitly (fail fast, once before a strategy is put into
service) and never mutates the record. Reconfiguration means building a new
record with ``replace()``.
"""
import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from ..shared.defaults import (
    STOP_LOSS_PERCENT, TAKE_PROFIT_PERCENT, POSITION_SIZE_PERCENT,
    USE_ATR_FOR_STOPS, ATR_MULTIPLIER,
    REQUIRE_VOLUME_CONFIRMATION, VOLUME_MULTIPLIER,
    MA_FAST_PERIOD, MA_SLOW_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    RSI_PERIOD, RSI_OVERSOLD, RSI_OVERBOUGHT,
    BOLLINGER_PERIOD, BOLLINGER_STD_DEV, REQUIRE_MOMENTUM_CONFIRMATION,
    VWAP_PERIOD, VWAP_DEVIATION_THRESHOLD_PERCENT,
)


class ParameterType(Enum):
    """Value type of a strategy parameter."""
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"


class MovingAverageType(Enum):
    """Moving average flavour used by the crossover strategy."""
    SMA = "sma"
    EMA = "ema"


class ParameterValidationError(ValueError):
    """Raised when a parameter record violates a bound or cross-field rule."""

    def __init__(self, field_name: str, constraint: str):
        self.field = field_name
        self.constraint = constraint
        super().__init__(f"Invalid {field_name}: {constraint}")


@dataclass(frozen=True)
class ParameterDefinition:
    """Metadata for one parameter, as shown in configuration surfaces."""
    name: str
    display_name: str
    type: ParameterType
    default: Any
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    description: str = ""
    display_order: int = 0
    choices: Tuple[str, ...] = ()


def _param(
    default: Any,
    display_name: str,
    description: str = "",
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
):
    """Dataclass field carrying its own parameter metadata."""
    return field(
        default=default,
        metadata={
            "display_name": display_name,
            "description": description,
            "min_value": min_value,
            "max_value": max_value,
        },
    )


def _parameter_type(value: Any) -> ParameterType:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ParameterType.BOOLEAN
    if isinstance(value, Enum):
        return ParameterType.ENUM
    if isinstance(value, int):
        return ParameterType.INTEGER
    if isinstance(value, float):
        return ParameterType.DECIMAL
    return ParameterType.STRING


def _matches_type(value: Any, param_type: ParameterType, default: Any) -> bool:
    if param_type == ParameterType.BOOLEAN:
        return isinstance(value, bool)
    if param_type == ParameterType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if param_type == ParameterType.DECIMAL:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if param_type == ParameterType.ENUM:
        return isinstance(value, type(default))
    return isinstance(value, str)


def _format_bound(value: float) -> str:
    return f"{value:g}"


P = TypeVar("P", bound="BaseParameters")


@dataclass(frozen=True)
class BaseParameters:
    """Risk and confirmation settings shared by every strategy."""

    stop_loss_percent: float = _param(
        STOP_LOSS_PERCENT, "Stop Loss %",
        "Stop-loss distance below entry as a percentage of entry price",
        min_value=0.1, max_value=100.0,
    )
    take_profit_percent: float = _param(
        TAKE_PROFIT_PERCENT, "Take Profit %",
        "Take-profit distance above entry as a percentage of entry price",
        min_value=0.1, max_value=1000.0,
    )
    position_size_percent: float = _param(
        POSITION_SIZE_PERCENT, "Position Size %",
        "Share of available capital to commit per trade",
        min_value=0.1, max_value=100.0,
    )
    use_atr_for_stops: bool = _param(
        USE_ATR_FOR_STOPS, "Use ATR For Stops",
        "Place the stop at entry minus ATR(14) x multiplier instead of a fixed percentage",
    )
    atr_multiplier: float = _param(
        ATR_MULTIPLIER, "ATR Multiplier",
        "Multiple of ATR used for the stop distance",
        min_value=0.1, max_value=10.0,
    )
    require_volume_confirmation: bool = _param(
        REQUIRE_VOLUME_CONFIRMATION, "Require Volume Confirmation",
        "Only act when the current volume is above the 20-bar average times the multiplier",
    )
    volume_multiplier: float = _param(
        VOLUME_MULTIPLIER, "Volume Multiplier",
        "Required multiple of the 20-bar average volume",
        min_value=1.0, max_value=5.0,
    )

    @classmethod
    def parameter_definitions(cls) -> List[ParameterDefinition]:
        """
        Definitions for every field, strategy-specific fields first.

        Defaults are read from the dataclass fields, so they always match
        what ``cls()`` produces.
        """
        base_names = {f.name for f in dataclasses.fields(BaseParameters)}
        all_fields = dataclasses.fields(cls)
        ordered = [f for f in all_fields if f.name not in base_names]
        ordered += [f for f in all_fields if f.name in base_names]

        definitions = []
        for order, f in enumerate(ordered, start=1):
            default = f.default
            param_type = _parameter_type(default)
            choices: Tuple[str, ...] = ()
            if param_type == ParameterType.ENUM:
                choices = tuple(member.value for member in type(default))
            definitions.append(ParameterDefinition(
                name=f.name,
                display_name=f.metadata.get("display_name", f.name),
                type=param_type,
                default=default,
                min_value=f.metadata.get("min_value"),
                max_value=f.metadata.get("max_value"),
                description=f.metadata.get("description", ""),
                display_order=order,
                choices=choices,
            ))
        return definitions

    def validate(self) -> None:
        """
        Check every field against its definition, then cross-field rules.

        Raises:
            ParameterValidationError: On the first violated constraint
        """
        for definition in self.parameter_definitions():
            value = getattr(self, definition.name)
            if not _matches_type(value, definition.type, definition.default):
                raise ParameterValidationError(
                    definition.name,
                    f"must be of type {definition.type.value}, got {type(value).__name__}",
                )
            # NaN compares False against both bounds
            if definition.type in (ParameterType.INTEGER, ParameterType.DECIMAL) and not math.isfinite(value):
                raise ParameterValidationError(definition.name, f"must be a finite number, got {value}")
            if definition.min_value is not None and value < definition.min_value:
                raise ParameterValidationError(
                    definition.name,
                    f"must be >= {_format_bound(definition.min_value)}, got {value}",
                )
            if definition.max_value is not None and value > definition.max_value:
                raise ParameterValidationError(
                    definition.name,
                    f"must be <= {_format_bound(definition.max_value)}, got {value}",
                )
        self._validate_constraints()

    def _validate_constraints(self) -> None:
        """Cross-field rules. Subclasses extend this."""

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of field values (enums as their string value)."""
        result = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result

    @classmethod
    def from_dict(cls: Type[P], values: Mapping[str, Any]) -> P:
        """
        Build a record from a mapping, filling missing keys with defaults.

        Does not validate; call ``validate()`` before use.

        Raises:
            ParameterValidationError: For unknown keys or unknown enum choices
        """
        field_defaults = {f.name: f.default for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - set(field_defaults))
        if unknown:
            raise ParameterValidationError(
                unknown[0],
                f"unknown parameter for {cls.__name__} (known: {sorted(field_defaults)})",
            )

        kwargs = {}
        for name, value in values.items():
            default = field_defaults[name]
            if isinstance(default, Enum) and not isinstance(value, Enum):
                kwargs[name] = _coerce_enum(type(default), name, value)
            else:
                kwargs[name] = value
        return cls(**kwargs)

    def replace(self: P, **changes: Any) -> P:
        """Return a new record with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


def _coerce_enum(enum_type: Type[Enum], name: str, value: Any) -> Enum:
    text = str(value)
    for member in enum_type:
        if text.lower() == str(member.value).lower() or text.upper() == member.name:
            return member
    raise ParameterValidationError(
        name,
        f"must be one of {[m.value for m in enum_type]}, got {value!r}",
    )


@dataclass(frozen=True)
class MovingAverageCrossoverParameters(BaseParameters):
    """Fast/slow moving average crossover settings."""

    fast_period: int = _param(
        MA_FAST_PERIOD, "Fast Period", "Bars in the fast moving average",
        min_value=1, max_value=200,
    )
    slow_period: int = _param(
        MA_SLOW_PERIOD, "Slow Period", "Bars in the slow moving average",
        min_value=2, max_value=500,
    )
    ma_type: MovingAverageType = _param(
        MovingAverageType.SMA, "Moving Average Type", "SMA or EMA",
    )

    def _validate_constraints(self) -> None:
        super()._validate_constraints()
        if self.fast_period >= self.slow_period:
            raise ParameterValidationError(
                "fast_period",
                f"must be less than slow_period ({self.fast_period} >= {self.slow_period})",
            )


@dataclass(frozen=True)
class MacdCrossoverParameters(BaseParameters):
    """MACD line / signal line crossover settings."""

    fast_period: int = _param(
        MACD_FAST, "Fast EMA Period", "Bars in the fast EMA",
        min_value=2, max_value=50,
    )
    slow_period: int = _param(
        MACD_SLOW, "Slow EMA Period", "Bars in the slow EMA",
        min_value=3, max_value=100,
    )
    signal_period: int = _param(
        MACD_SIGNAL, "Signal Period", "Bars in the EMA of the MACD line",
        min_value=2, max_value=50,
    )

    def _validate_constraints(self) -> None:
        super()._validate_constraints()
        if self.fast_period >= self.slow_period:
            raise ParameterValidationError(
                "fast_period",
                f"must be less than slow_period ({self.fast_period} >= {self.slow_period})",
            )


@dataclass(frozen=True)
class RsiMeanReversionParameters(BaseParameters):
    """RSI oversold/overbought settings."""

    rsi_period: int = _param(
        RSI_PERIOD, "RSI Period", "Bars used for Wilder smoothing",
        min_value=2, max_value=100,
    )
    oversold_threshold: float = _param(
        RSI_OVERSOLD, "Oversold Threshold", "Buy when RSI falls below this level",
        min_value=1.0, max_value=50.0,
    )
    overbought_threshold: float = _param(
        RSI_OVERBOUGHT, "Overbought Threshold", "Sell when RSI rises above this level",
        min_value=50.0, max_value=99.0,
    )

    def _validate_constraints(self) -> None:
        super()._validate_constraints()
        if self.oversold_threshold >= self.overbought_threshold:
            raise ParameterValidationError(
                "oversold_threshold",
                f"must be less than overbought_threshold "
                f"({self.oversold_threshold} >= {self.overbought_threshold})",
            )


@dataclass(frozen=True)
class BollingerBandsBreakoutParameters(BaseParameters):
    """Bollinger Bands touch/breakout settings."""

    period: int = _param(
        BOLLINGER_PERIOD, "Period", "Bars in the middle band SMA",
        min_value=2, max_value=200,
    )
    standard_deviations: float = _param(
        BOLLINGER_STD_DEV, "Standard Deviations", "Band width in standard deviations",
        min_value=0.1, max_value=5.0,
    )
    require_momentum_confirmation: bool = _param(
        REQUIRE_MOMENTUM_CONFIRMATION, "Require Momentum Confirmation",
        "Only buy when the close is above the previous close",
    )


@dataclass(frozen=True)
class VwapParameters(BaseParameters):
    """VWAP deviation settings."""

    period: int = _param(
        VWAP_PERIOD, "Period", "Trailing bars in the VWAP window",
        min_value=1, max_value=500,
    )
    deviation_threshold_percent: float = _param(
        VWAP_DEVIATION_THRESHOLD_PERCENT, "Deviation Threshold %",
        "Distance from VWAP, in percent, that triggers a signal",
        min_value=0.1, max_value=50.0,
    )


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
]
