"""
Движок: компиляция шаблона и рендеринг.

Публичный API, объединяющий лексер, парсер и рендерер:
- Template.compile(text): один проход парсинга, дерево переиспользуется;
- render_text / render_file: рендеринг строки или файла в строку.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .data.builder import HashBuilder
from .data.context import DataContext
from .data.values import to_value_map
from .errors import ResourceAccessError
from .template.lexer import tokenize
from .template.nodes import TemplateAST
from .template.parser import parse_nodes
from .template.partials import FileSystemPartialResolver, PartialResolver
from .template.renderer import Sink, TemplateRenderer

logger = logging.getLogger(__name__)

DataSource = Union[HashBuilder, DataContext, Mapping[str, Any], None]


def make_context(data: DataSource) -> DataContext:
    """
    Приводит данные к контексту.

    Args:
        data: HashBuilder, готовый DataContext, словарь (Value или нативные данные) или None

    Raises:
        DataFormatError: Для неподдерживаемых типов значений
    """
    if data is None:
        return DataContext()
    if isinstance(data, DataContext):
        return data
    if isinstance(data, HashBuilder):
        return DataContext(data.build())
    return DataContext(to_value_map(data))


@dataclass(frozen=True)
class Template:
    """
    Скомпилированный шаблон.

    Дерево узлов неизменяемо и может рендериться многократно,
    в том числе параллельно с независимыми контекстами (если в
    контекстах нет общих лямбд).
    """
    nodes: TemplateAST
    name: str = ""

    @classmethod
    def compile(cls, text: str, name: str = "") -> Template:
        tokens = tokenize(text)
        nodes = parse_nodes(tokens)
        logger.debug(f"Parsed template '{name}': {len(tokens)} tokens -> {len(nodes)} nodes")
        return cls(nodes=nodes, name=name)

    @classmethod
    def from_file(cls, path: Path) -> Template:
        """
        Raises:
            ResourceAccessError: Файл отсутствует или не читается
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceAccessError(f"Failed to read template {path}: {e}", path) from e
        return cls.compile(text, name=str(path))

    def render_to(self, sink: Sink, data: DataSource = None, partials: Optional[PartialResolver] = None) -> None:
        """Рендерит шаблон в sink."""
        TemplateRenderer(partials).render(self.nodes, make_context(data), sink)

    def render(self, data: DataSource = None, partials: Optional[PartialResolver] = None) -> str:
        """
        Рендерит шаблон в строку.

        Raises:
            RenderTypeError: Частичный результат отбрасывается
        """
        buffer = io.StringIO()
        self.render_to(buffer, data, partials)
        return buffer.getvalue()


def render_text(text: str, data: DataSource = None, partials: Optional[PartialResolver] = None) -> str:
    """
    Рендерит текст шаблона.

    Args:
        text: Текст шаблона
        data: Данные для подстановки
        partials: Источник partial-шаблонов (по умолчанию - без partial)

    Returns:
        Отрендеренный текст
    """
    return Template.compile(text).render(data, partials)


def render_file(path: Path, data: DataSource = None, partials: Optional[PartialResolver] = None) -> str:
    """
    Рендерит файл шаблона.

    По умолчанию partial-шаблоны ищутся рядом с файлом шаблона
    (<dir>/<name>.mustache).

    Raises:
        ResourceAccessError: Файл шаблона не читается
    """
    path = Path(path)
    template = Template.from_file(path)
    if partials is None:
        partials = FileSystemPartialResolver(path.parent)
    return template.render(data, partials)


__all__ = ["Template", "DataSource", "make_context", "render_text", "render_file"]
