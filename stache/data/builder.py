"""
Построители данных для контекста.

HashBuilder собирает корневой словарь значений для рендерера,
VecBuilder - списки. Оба принимают и нативные данные Python;
HashBuilder также загружается из JSON и YAML.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import DataFormatError, ResourceAccessError
from .values import (
    Value, StrValue, BoolValue, IntValue, FloatValue,
    ListValue, MapValue, LambdaValue, to_value, to_value_map,
)

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


class VecBuilder:
    """Построитель списка значений."""

    def __init__(self) -> None:
        self._items: List[Value] = []

    def push(self, obj: Any) -> VecBuilder:
        """Добавляет нативные данные Python (None пропускается)."""
        value = to_value(obj)
        if value is not None:
            self._items.append(value)
        return self

    def push_string(self, value: str) -> VecBuilder:
        self._items.append(StrValue(value))
        return self

    def push_bool(self, value: bool) -> VecBuilder:
        self._items.append(BoolValue(value))
        return self

    def push_int(self, value: int) -> VecBuilder:
        self._items.append(IntValue(value))
        return self

    def push_float(self, value: float) -> VecBuilder:
        self._items.append(FloatValue(value))
        return self

    def push_vector(self, fn: Callable[[VecBuilder], VecBuilder]) -> VecBuilder:
        self._items.append(ListValue(fn(VecBuilder()).build()))
        return self

    def push_hash(self, fn: Callable[[HashBuilder], HashBuilder]) -> VecBuilder:
        self._items.append(MapValue(fn(HashBuilder()).build()))
        return self

    def push_lambda(self, fn: Callable[[str], str]) -> VecBuilder:
        self._items.append(LambdaValue(fn))
        return self

    def build(self) -> List[Value]:
        return list(self._items)


class HashBuilder:
    """Построитель корневого словаря контекста данных."""

    def __init__(self) -> None:
        self._data: Dict[str, Value] = {}

    def insert(self, key: str, obj: Any) -> HashBuilder:
        """Вставляет нативные данные Python (None пропускается)."""
        value = to_value(obj)
        if value is not None:
            self._data[key] = value
        return self

    def insert_string(self, key: str, value: str) -> HashBuilder:
        self._data[key] = StrValue(value)
        return self

    def insert_bool(self, key: str, value: bool) -> HashBuilder:
        self._data[key] = BoolValue(value)
        return self

    def insert_int(self, key: str, value: int) -> HashBuilder:
        self._data[key] = IntValue(value)
        return self

    def insert_float(self, key: str, value: float) -> HashBuilder:
        self._data[key] = FloatValue(value)
        return self

    def insert_vector(self, key: str, fn: Callable[[VecBuilder], VecBuilder]) -> HashBuilder:
        self._data[key] = ListValue(fn(VecBuilder()).build())
        return self

    def insert_hash(self, key: str, fn: Callable[[HashBuilder], HashBuilder]) -> HashBuilder:
        self._data[key] = MapValue(fn(HashBuilder()).build())
        return self

    def insert_lambda(self, key: str, fn: Callable[[str], str]) -> HashBuilder:
        self._data[key] = LambdaValue(fn)
        return self

    def build(self) -> Dict[str, Value]:
        return dict(self._data)

    # ------------------------------------------------------------------ #
    # Загрузка из документов
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HashBuilder:
        builder = cls()
        builder._data.update(to_value_map(data))
        return builder

    @classmethod
    def from_json(cls, text: str) -> HashBuilder:
        """
        Загружает JSON-объект.

        Raises:
            DataFormatError: Некорректный JSON или документ - не объект
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataFormatError(f"Invalid JSON data: {e}") from e
        return cls._from_document(raw, "JSON")

    @classmethod
    def from_yaml(cls, text: str) -> HashBuilder:
        """
        Загружает YAML-словарь. Пустой документ дает пустой построитель.

        Raises:
            DataFormatError: Некорректный YAML или документ - не словарь
        """
        try:
            raw = _yaml.load(text)
        except YAMLError as e:
            raise DataFormatError(f"Invalid YAML data: {e}") from e
        return cls._from_document(raw if raw is not None else {}, "YAML")

    @classmethod
    def from_file(cls, path: Path) -> HashBuilder:
        """
        Загружает файл данных; формат выбирается по суффиксу (.json, .yaml, .yml).

        Raises:
            ResourceAccessError: Файл отсутствует или не читается
            DataFormatError: Неизвестный суффикс или некорректное содержимое
        """
        suffix = path.suffix.lower()
        if suffix not in JSON_SUFFIXES and suffix not in YAML_SUFFIXES:
            raise DataFormatError(f"Unsupported data file format: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceAccessError(f"Failed to read data file {path}: {e}", path) from e

        logger.debug(f"Loading data from {path}")
        if suffix in JSON_SUFFIXES:
            return cls.from_json(text)
        return cls.from_yaml(text)

    @classmethod
    def _from_document(cls, raw: Any, fmt: str) -> HashBuilder:
        if not isinstance(raw, dict):
            raise DataFormatError(f"{fmt} data must be an object at the top level, got {type(raw).__name__}")
        return cls.from_dict(raw)


__all__ = ["HashBuilder", "VecBuilder"]
