"""
Рендерер шаблонов.

Обходит дерево узлов в глубину слева направо на фоне контекста данных
и пишет результат в sink (любой объект с методом write(str)).

Единственная ошибка рендеринга - RenderTypeError, когда тег скалярного
вывода получил список, словарь или лямбду. Она прерывает рендеринг
целиком; частичный вывод в sink при этом не гарантируется.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Protocol, Type

from ..data.context import DataContext
from ..data.values import BoolValue, LambdaValue, ListValue, MapValue, Value
from ..errors import RenderTypeError
from .nodes import (
    TemplateNode, TemplateAST, TextNode, ValueNode, UnescapedNode,
    SectionNode, PartialNode, ast_source,
)
from .partials import NullPartialResolver, PartialResolver

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Приемник вывода: только дописывание."""

    def write(self, text: str) -> object:
        ...


# Порядок важен: & заменяется первым, чтобы не экранировать повторно
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)


def escape_html(text: str) -> str:
    """
    Экранирует &, <, > и ". Остальные символы, включая ', не меняются.
    """
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


NodeHandler = Callable[..., None]


class TemplateRenderer:
    """
    Рендерер дерева узлов.

    Выбирает обработчик по типу узла из таблицы обработчиков.
    Дерево узлов не изменяется, поэтому один рендерер и одно дерево
    можно использовать для нескольких рендеров с разными контекстами.
    """

    def __init__(self, partials: Optional[PartialResolver] = None):
        """
        Args:
            partials: Источник partial-шаблонов (по умолчанию - пустой)
        """
        self.partials: PartialResolver = partials if partials is not None else NullPartialResolver()

        self._handlers: Dict[Type[TemplateNode], NodeHandler] = {
            TextNode: self._render_text,
            ValueNode: self._render_value,
            UnescapedNode: self._render_unescaped,
            SectionNode: self._render_section,
            PartialNode: self._render_partial,
        }

    def render(self, nodes: TemplateAST, context: DataContext, sink: Sink) -> None:
        """
        Рендерит последовательность узлов.

        Args:
            nodes: Дерево узлов
            context: Контекст данных
            sink: Приемник вывода

        Raises:
            RenderTypeError: При несоответствии типа данных узлу
        """
        for node in nodes:
            handler = self._handlers.get(type(node))
            if handler is None:
                raise TypeError(f"No renderer for node type: {type(node).__name__}")
            handler(node, context, sink)

    # ======= Обработчики узлов =======

    def _render_text(self, node: TextNode, context: DataContext, sink: Sink) -> None:
        sink.write(node.text)

    def _render_value(self, node: ValueNode, context: DataContext, sink: Sink) -> None:
        text = self._scalar_text(node.key, context)
        if text:
            sink.write(escape_html(text))

    def _render_unescaped(self, node: UnescapedNode, context: DataContext, sink: Sink) -> None:
        text = self._scalar_text(node.key, context)
        if text:
            sink.write(text)

    def _render_section(self, node: SectionNode, context: DataContext, sink: Sink) -> None:
        value = context.lookup(node.key)

        if value is None or (isinstance(value, BoolValue) and not value.value):
            if node.inverted:
                self.render(node.children, context, sink)
            return

        if isinstance(value, ListValue):
            if node.inverted:
                if not value.items:
                    self.render(node.children, context, sink)
                return
            for item in value.items:
                scope = item.entries if isinstance(item, MapValue) else {}
                with context.scope(scope):
                    self.render(node.children, context, sink)
            return

        if node.inverted:
            # true, непустые скаляры, словари и лямбды - инвертированная секция пуста
            return

        if isinstance(value, MapValue):
            with context.scope(value.entries):
                self.render(node.children, context, sink)
            return

        if isinstance(value, LambdaValue):
            # Результат лямбды выводится как есть и повторно не парсится
            sink.write(value.call(ast_source(node.children)))
            return

        # true и прочие скаляры
        self.render(node.children, context, sink)

    def _render_partial(self, node: PartialNode, context: DataContext, sink: Sink) -> None:
        partial_ast = self.partials.lookup(node.key)
        if partial_ast is None:
            logger.debug(f"Partial '{node.key}' not resolved, skipping")
            return
        # Partial использует области видимости вызывающего шаблона
        self.render(partial_ast, context, sink)

    # ======= Вспомогательные методы =======

    def _scalar_text(self, key: str, context: DataContext) -> str:
        value: Optional[Value] = context.lookup(key)
        if value is None:
            return ""
        if not value.is_scalar:
            raise RenderTypeError(
                f"expecting text for '{key}', found {value.get_type().value} data", key
            )
        return value.as_text()


def render(
    nodes: TemplateAST,
    context: DataContext,
    sink: Sink,
    partials: Optional[PartialResolver] = None,
) -> None:
    """
    Удобная функция для рендеринга дерева узлов в sink.
    """
    TemplateRenderer(partials).render(nodes, context, sink)


__all__ = ["TemplateRenderer", "Sink", "escape_html", "render"]
