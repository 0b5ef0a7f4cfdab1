"""
stache: logic-less mustache templates.

Публичный API: компиляция и рендеринг шаблонов, построители данных
и исключения.
"""

from __future__ import annotations

from .data import DataContext, HashBuilder, VecBuilder
from .engine import Template, render_file, render_text
from .errors import DataFormatError, RenderTypeError, ResourceAccessError, StacheError
from .template import (
    DictPartialResolver,
    FileSystemPartialResolver,
    NullPartialResolver,
    PartialResolver,
    escape_html,
    parse_nodes,
    tokenize,
)

__all__ = [
    "Template",
    "render_text",
    "render_file",
    "HashBuilder",
    "VecBuilder",
    "DataContext",
    "PartialResolver",
    "NullPartialResolver",
    "DictPartialResolver",
    "FileSystemPartialResolver",
    "tokenize",
    "parse_nodes",
    "escape_html",
    "StacheError",
    "DataFormatError",
    "ResourceAccessError",
    "RenderTypeError",
]
