"""
Контекст данных для рендеринга.

Стек областей видимости (словарей значений). Поиск ключа идёт
от самой внутренней области к корневой; отсутствие ключа во всех
областях - штатный результат, а не ошибка.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Mapping, Optional

from .values import Value


class DataContext:
    """
    Контекст данных со стеком областей видимости.

    Создаётся на один вызов рендеринга и после него выбрасывается.
    """

    def __init__(self, root: Optional[Mapping[str, Value]] = None):
        """
        Инициализирует контекст корневой областью.

        Args:
            root: Корневой словарь значений
        """
        self._scopes: List[Mapping[str, Value]] = [dict(root) if root else {}]

    @property
    def depth(self) -> int:
        """Количество областей в стеке (корневая включительно)."""
        return len(self._scopes)

    @property
    def root(self) -> Mapping[str, Value]:
        return self._scopes[0]

    def lookup(self, key: str) -> Optional[Value]:
        """
        Ищет значение по ключу во всех областях, начиная с внутренней.

        Returns:
            Найденное значение или None
        """
        for scope in reversed(self._scopes):
            if key in scope:
                return scope[key]
        return None

    def push(self, scope: Mapping[str, Value]) -> None:
        """Добавляет новую внутреннюю область."""
        self._scopes.append(scope)

    def pop(self) -> Mapping[str, Value]:
        """
        Удаляет внутреннюю область.

        Raises:
            RuntimeError: При попытке удалить корневую область
        """
        if len(self._scopes) == 1:
            raise RuntimeError("Cannot pop the root scope of a data context")
        return self._scopes.pop()

    @contextmanager
    def scope(self, mapping: Optional[Mapping[str, Value]] = None) -> Iterator[DataContext]:
        """
        Контекстный менеджер: push при входе, pop при выходе.

        Args:
            mapping: Словарь новой области (по умолчанию пустой)
        """
        empty: Dict[str, Value] = {}
        self.push(mapping if mapping is not None else empty)
        try:
            yield self
        finally:
            self.pop()


__all__ = ["DataContext"]
