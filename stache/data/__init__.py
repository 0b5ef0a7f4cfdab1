"""
Модель данных для рендеринга: значения, контекст и построители.
"""

from .builder import HashBuilder, VecBuilder
from .context import DataContext
from .values import (
    Value, ValueType, StrValue, BoolValue, IntValue, FloatValue,
    ListValue, MapValue, LambdaValue, to_value, to_value_map,
)

__all__ = [
    "HashBuilder",
    "VecBuilder",
    "DataContext",
    "Value",
    "ValueType",
    "StrValue",
    "BoolValue",
    "IntValue",
    "FloatValue",
    "ListValue",
    "MapValue",
    "LambdaValue",
    "to_value",
    "to_value_map",
]
