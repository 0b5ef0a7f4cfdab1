"""
AST-узлы шаблона.

Определяет иерархию неизменяемых узлов, которые строит парсер
и обходит рендерер. Каждая секция владеет своим списком дочерних
узлов; общих узлов и циклов в дереве нет.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class ValueNode(TemplateNode):
    """Подстановка значения с HTML-экранированием: {{ key }}."""
    key: str
    raw: str  # Исходный текст тега


@dataclass(frozen=True)
class UnescapedNode(TemplateNode):
    """Подстановка значения без экранирования: {{{ key }}} или {{& key }}."""
    key: str
    raw: str


@dataclass(frozen=True)
class SectionNode(TemplateNode):
    """
    Секция {{# key }}...{{/ key }} или {{^ key }}...{{/ key }}.

    Хранит исходный текст открывающего и закрывающего тегов, чтобы
    лямбда могла получить сырой текст тела секции.
    """
    key: str
    children: Tuple[TemplateNode, ...]
    inverted: bool
    open_tag: str
    close_tag: str


@dataclass(frozen=True)
class PartialNode(TemplateNode):
    """Точка включения именованного подшаблона: {{> key }}."""
    key: str
    raw: str


# Неизменяемая последовательность узлов (AST)
TemplateAST = Tuple[TemplateNode, ...]


def node_source(node: TemplateNode) -> str:
    """
    Восстанавливает исходный текст узла.

    Для секций, полученных из точечной нотации, возвращается
    синтезированный текст ({{#a}}{{b}}{{/a}}), а не исходный тег.
    """
    if isinstance(node, TextNode):
        return node.text
    if isinstance(node, (ValueNode, UnescapedNode, PartialNode)):
        return node.raw
    if isinstance(node, SectionNode):
        return node.open_tag + ast_source(node.children) + node.close_tag
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def ast_source(ast: TemplateAST) -> str:
    """Восстанавливает исходный текст последовательности узлов."""
    return "".join(node_source(node) for node in ast)


def collect_partial_nodes(ast: TemplateAST) -> List[PartialNode]:
    """
    Собирает все ссылки на partial-шаблоны в порядке обхода в глубину.
    """
    result: List[PartialNode] = []

    def collect_from_node(node: TemplateNode) -> None:
        if isinstance(node, PartialNode):
            result.append(node)
        elif isinstance(node, SectionNode):
            for child in node.children:
                collect_from_node(child)

    for node in ast:
        collect_from_node(node)

    return result


def ast_to_dict(ast: TemplateAST) -> List[Dict[str, Any]]:
    """Сериализует AST в JSON-совместимую структуру (для CLI)."""
    items: List[Dict[str, Any]] = []
    for node in ast:
        if isinstance(node, TextNode):
            items.append({"type": "text", "text": node.text})
        elif isinstance(node, ValueNode):
            items.append({"type": "value", "key": node.key, "raw": node.raw})
        elif isinstance(node, UnescapedNode):
            items.append({"type": "unescaped", "key": node.key, "raw": node.raw})
        elif isinstance(node, PartialNode):
            items.append({"type": "partial", "key": node.key, "raw": node.raw})
        elif isinstance(node, SectionNode):
            items.append({
                "type": "section",
                "key": node.key,
                "inverted": node.inverted,
                "openTag": node.open_tag,
                "closeTag": node.close_tag,
                "children": ast_to_dict(node.children),
            })
    return items


def format_ast_tree(ast: TemplateAST, indent: int = 0) -> str:
    """Форматирует AST как дерево для отладки."""
    lines = []
    prefix = "  " * indent

    for node in ast:
        if isinstance(node, TextNode):
            # Показываем только начало текста для читабельности
            text_preview = repr(node.text[:50] + "..." if len(node.text) > 50 else node.text)
            lines.append(f"{prefix}TextNode({text_preview})")
        elif isinstance(node, SectionNode):
            marker = "^" if node.inverted else "#"
            lines.append(f"{prefix}SectionNode({marker}{node.key})")
            if node.children:
                lines.append(format_ast_tree(node.children, indent + 1))
        else:
            lines.append(f"{prefix}{type(node).__name__}({node.key!r})")

    return "\n".join(lines)


__all__ = [
    "TemplateNode",
    "TextNode",
    "ValueNode",
    "UnescapedNode",
    "SectionNode",
    "PartialNode",
    "TemplateAST",
    "node_source",
    "ast_source",
    "collect_partial_nodes",
    "ast_to_dict",
    "format_ast_tree",
]
