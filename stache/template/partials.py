"""
Источники partial-шаблонов.

Источник сопоставляет имени partial разобранное дерево узлов или None,
если такого partial нет. Отсутствующий partial - не ошибка: рендерер
просто ничего для него не выводит.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

import pathspec

from ..errors import ResourceAccessError
from .lexer import tokenize
from .nodes import TemplateAST
from .parser import parse_nodes

logger = logging.getLogger(__name__)

DEFAULT_PARTIAL_SUFFIX = ".mustache"


@runtime_checkable
class PartialResolver(Protocol):
    """Поиск partial-шаблонов для рендерера."""

    def lookup(self, name: str) -> Optional[TemplateAST]:
        """
        Возвращает разобранное дерево узлов partial.

        Args:
            name: Имя partial из тега {{> name }}

        Returns:
            Дерево узлов или None, если partial не найден
        """
        ...


class NullPartialResolver:
    """Источник без partial-шаблонов."""

    def lookup(self, name: str) -> Optional[TemplateAST]:
        return None


class DictPartialResolver:
    """
    Partial-шаблоны в памяти: имя -> текст шаблона.

    Каждый partial парсится один раз, при первом обращении.
    """

    def __init__(self, templates: Mapping[str, str]):
        self._templates = dict(templates)
        self._parsed: Dict[str, TemplateAST] = {}

    def lookup(self, name: str) -> Optional[TemplateAST]:
        if name not in self._templates:
            return None
        if name not in self._parsed:
            self._parsed[name] = parse_nodes(tokenize(self._templates[name]))
        return self._parsed[name]


def build_exclude_spec(patterns: Iterable[str]) -> Optional[pathspec.PathSpec]:
    """
    Строит PathSpec из gitignore-шаблонов. None, если шаблонов нет.
    """
    lines = [p.strip() for p in patterns if p and p.strip() and not p.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


class FileSystemPartialResolver:
    """
    Partial-шаблоны в файлах: <root>/<name><suffix>.

    Имя может содержать "/" для подкаталогов. Имена, выходящие за
    пределы корня, и файлы, попавшие под exclude-шаблоны, дают None.
    """

    def __init__(
        self,
        root: Path,
        *,
        suffix: str = DEFAULT_PARTIAL_SUFFIX,
        exclude: Iterable[str] = (),
    ):
        self.root = Path(root).resolve()
        self.suffix = suffix
        self._exclude_spec = build_exclude_spec(exclude)
        self._parsed: Dict[str, TemplateAST] = {}

    def lookup(self, name: str) -> Optional[TemplateAST]:
        """
        Raises:
            ResourceAccessError: Файл partial существует, но не читается
        """
        if name in self._parsed:
            return self._parsed[name]

        path = self._path_for(name)
        if path is None or not path.is_file():
            logger.debug(f"Partial '{name}' not found under {self.root}")
            return None

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceAccessError(f"Failed to read partial '{name}' from {path}: {e}", path) from e

        ast = parse_nodes(tokenize(text))
        logger.debug(f"Loaded partial '{name}' from {path} -> {len(ast)} nodes")
        self._parsed[name] = ast
        return ast

    def list_names(self) -> List[str]:
        """Возвращает отсортированные имена всех доступных partial."""
        if not self.root.is_dir():
            return []

        names: List[str] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            for fn in filenames:
                if not fn.endswith(self.suffix):
                    continue
                rel_posix = Path(dirpath, fn).relative_to(self.root).as_posix()
                if self._is_excluded(rel_posix):
                    continue
                names.append(rel_posix[: -len(self.suffix)] if self.suffix else rel_posix)
        return sorted(names)

    def _path_for(self, name: str) -> Optional[Path]:
        if not name:
            return None
        path = (self.root / f"{name}{self.suffix}").resolve()
        try:
            rel_posix = path.relative_to(self.root).as_posix()
        except ValueError:
            logger.debug(f"Partial name '{name}' escapes {self.root}")
            return None
        if self._is_excluded(rel_posix):
            logger.debug(f"Partial '{name}' is excluded")
            return None
        return path

    def _is_excluded(self, rel_posix: str) -> bool:
        return self._exclude_spec is not None and self._exclude_spec.match_file(rel_posix)


__all__ = [
    "PartialResolver",
    "NullPartialResolver",
    "DictPartialResolver",
    "FileSystemPartialResolver",
    "build_exclude_spec",
    "DEFAULT_PARTIAL_SUFFIX",
]
