"""
Модели значений контекста данных.

Содержит классы для представления значений, с которыми работает
рендерер: скаляры, списки, словари и лямбды.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..errors import DataFormatError, RenderTypeError


class ValueType(Enum):
    """Типы значений в контексте данных."""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    LIST = "list"
    MAP = "map"
    LAMBDA = "lambda"


SCALAR_TYPES = frozenset({ValueType.STRING, ValueType.BOOLEAN, ValueType.INTEGER, ValueType.FLOAT})


@dataclass
class Value(ABC):
    """Базовый абстрактный класс для всех значений."""

    @abstractmethod
    def get_type(self) -> ValueType:
        """Возвращает тип значения."""
        pass

    @property
    def is_scalar(self) -> bool:
        return self.get_type() in SCALAR_TYPES

    def as_text(self) -> str:
        """
        Текстовое представление скалярного значения.

        Raises:
            RenderTypeError: Для списков, словарей и лямбд
        """
        raise RenderTypeError(f"expecting text, found {self.get_type().value} data")


@dataclass
class StrValue(Value):
    value: str

    def get_type(self) -> ValueType:
        return ValueType.STRING

    def as_text(self) -> str:
        return self.value


@dataclass
class BoolValue(Value):
    value: bool

    def get_type(self) -> ValueType:
        return ValueType.BOOLEAN

    def as_text(self) -> str:
        return "true" if self.value else "false"


@dataclass
class IntValue(Value):
    value: int

    def get_type(self) -> ValueType:
        return ValueType.INTEGER

    def as_text(self) -> str:
        return str(self.value)


@dataclass
class FloatValue(Value):
    value: float

    def get_type(self) -> ValueType:
        return ValueType.FLOAT

    def as_text(self) -> str:
        # 3.0 -> "3", 2.5 -> "2.5", 1e-07 -> "0.0000001"
        if self.value.is_integer():
            return str(int(self.value))
        return format(Decimal(repr(self.value)), "f")


# Списки и словари сравниваются поэлементно через == без сокращения по
# идентичности: лямбда внутри контейнера всегда дает RenderTypeError.
@dataclass(eq=False)
class ListValue(Value):
    items: List[Value] = field(default_factory=list)

    def get_type(self) -> ValueType:
        return ValueType.LIST

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListValue):
            return NotImplemented
        if len(self.items) != len(other.items):
            return False
        return all(a == b for a, b in zip(self.items, other.items))

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class MapValue(Value):
    entries: Dict[str, Value] = field(default_factory=dict)

    def get_type(self) -> ValueType:
        return ValueType.MAP

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapValue):
            return NotImplemented
        if len(self.entries) != len(other.entries):
            return False
        for key, value in self.entries.items():
            if key not in other.entries or not value == other.entries[key]:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class LambdaValue(Value):
    """
    Лямбда: callback str -> str, вызываемый для секции.

    Экземпляр принадлежит одному рендеру: одну и ту же лямбду нельзя
    вызывать из нескольких рендеров одновременно. Для параллельных
    рендеров нужны отдельные экземпляры.
    """
    func: Callable[[str], str]

    def get_type(self) -> ValueType:
        return ValueType.LAMBDA

    def call(self, text: str) -> str:
        result = self.func(text)
        if not isinstance(result, str):
            raise RenderTypeError(f"lambda must return a string, got {type(result).__name__}")
        return result

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LambdaValue):
            raise RenderTypeError("Can't compare lambdas")
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


def to_value(obj: Any) -> Optional[Value]:
    """
    Преобразует нативные данные Python в Value.

    Args:
        obj: Строка, число, bool, дата, словарь, список/кортеж, callable или Value

    Returns:
        Значение или None для None (такие элементы опускаются)

    Raises:
        DataFormatError: Для неподдерживаемых типов
    """
    if obj is None:
        return None
    if isinstance(obj, Value):
        return obj
    # bool проверяется раньше int: bool является подклассом int
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, str):
        return StrValue(obj)
    if isinstance(obj, int):
        return IntValue(obj)
    if isinstance(obj, float):
        return FloatValue(obj)
    # YAML-даты и метки времени (datetime - подкласс date) -> ISO 8601
    if isinstance(obj, date):
        return StrValue(obj.isoformat())
    if isinstance(obj, Mapping):
        return MapValue(to_value_map(obj))
    if isinstance(obj, (list, tuple)):
        return ListValue([v for v in (to_value(item) for item in obj) if v is not None])
    if callable(obj):
        return LambdaValue(obj)
    raise DataFormatError(f"Unsupported data type: {type(obj).__name__}")


def to_value_map(obj: Mapping) -> Dict[str, Value]:
    """Преобразует словарь нативных данных в словарь значений."""
    result: Dict[str, Value] = {}
    for key, item in obj.items():
        if not isinstance(key, str):
            raise DataFormatError(f"Map keys must be strings, got {type(key).__name__}: {key!r}")
        value = to_value(item)
        if value is not None:
            result[key] = value
    return result


__all__ = [
    "ValueType",
    "Value",
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
