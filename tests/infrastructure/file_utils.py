"""
Файлы шаблонов, partial и данных для тестов.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


def write(p: Path, text: str, *, dedent: bool = False) -> Path:
    """
    Создает файл (и недостающие каталоги) с текстом в UTF-8.

    Args:
        p: Путь к файлу
        text: Содержимое
        dedent: Снять общий отступ (для многострочных литералов в тестах)

    Returns:
        Тот же путь p
    """
    if dedent:
        text = textwrap.dedent(text)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_tree(root: Path, files: Mapping[str, str]) -> Path:
    """Раскладывает файлы {относительный posix-путь: текст} под root."""
    for rel, text in files.items():
        write(root / rel, text)
    return root


__all__ = ["write", "write_tree"]
