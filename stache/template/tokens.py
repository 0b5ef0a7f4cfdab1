"""
Лексические типы.

Определяет токены, которые лексер выдаёт парсеру. Каждый тег
сохраняет свой исходный текст для последующей реконструкции
(аргумент лямбд, отладочный вывод).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""
    TEXT = "TEXT"                    # Обычный текст
    VARIABLE = "VARIABLE"            # {{ name }}
    RAW = "RAW"                      # {{{ name }}} или {{& name }}
    SECTION_OPEN = "SECTION_OPEN"    # {{# name }} или {{^ name }}
    SECTION_CLOSE = "SECTION_CLOSE"  # {{/ name }}
    PARTIAL = "PARTIAL"              # {{> name }}


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией.

    Для TEXT поле value содержит сам текст, для тегов - имя
    без окружающих пробелов. Поле raw всегда хранит исходный текст.
    """
    type: TokenType
    value: str
    raw: str
    inverted: bool = False  # Только для SECTION_OPEN
    position: int = 0       # Позиция в исходном тексте
    line: int = 1           # Номер строки (начиная с 1)
    column: int = 1         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    # Фабрики для ручного построения потока токенов

    @classmethod
    def text(cls, text: str) -> Token:
        return cls(TokenType.TEXT, text, text)

    @classmethod
    def variable(cls, name: str, raw: str) -> Token:
        return cls(TokenType.VARIABLE, name, raw)

    @classmethod
    def unescaped(cls, name: str, raw: str) -> Token:
        return cls(TokenType.RAW, name, raw)

    @classmethod
    def open(cls, name: str, raw: str, inverted: bool = False) -> Token:
        return cls(TokenType.SECTION_OPEN, name, raw, inverted=inverted)

    @classmethod
    def close(cls, name: str, raw: str) -> Token:
        return cls(TokenType.SECTION_CLOSE, name, raw)

    @classmethod
    def partial(cls, name: str, raw: str) -> Token:
        return cls(TokenType.PARTIAL, name, raw)


__all__ = ["TokenType", "Token"]
