"""
Шаблонизатор: лексер, парсер, узлы AST, рендерер и partial-шаблоны.
"""

from __future__ import annotations

from .lexer import TemplateLexer, tokenize
from .nodes import (
    TemplateNode, TemplateAST, TextNode, ValueNode, UnescapedNode,
    SectionNode, PartialNode,
)
from .parser import TemplateParser, parse_nodes
from .partials import (
    PartialResolver, NullPartialResolver, DictPartialResolver, FileSystemPartialResolver,
)
from .renderer import TemplateRenderer, escape_html, render
from .tokens import Token, TokenType

__all__ = [
    "TemplateLexer",
    "tokenize",
    "Token",
    "TokenType",
    "TemplateNode",
    "TemplateAST",
    "TextNode",
    "ValueNode",
    "UnescapedNode",
    "SectionNode",
    "PartialNode",
    "TemplateParser",
    "parse_nodes",
    "PartialResolver",
    "NullPartialResolver",
    "DictPartialResolver",
    "FileSystemPartialResolver",
    "TemplateRenderer",
    "escape_html",
    "render",
]
