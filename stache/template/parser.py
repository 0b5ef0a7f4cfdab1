"""
Парсер шаблонов.

Преобразует плоскую последовательность токенов в дерево узлов.
Парсер не выбрасывает ошибок на некорректной вложенности:
- закрывающий тег без открывающего отбрасывается;
- секция без закрывающего тега отбрасывается вместе со всем содержимым.

Ссылки с точечной нотацией (a.b) переписываются в синтетическую секцию
{{#a}}{{b}}{{/a}}. Используются только первый и последний сегменты пути.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .nodes import (
    TemplateNode, TemplateAST, TextNode, ValueNode, UnescapedNode,
    SectionNode, PartialNode,
)
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "."


class TemplateParser:
    """
    Парсер потока токенов.

    Проходит токены один раз по индексу; для секции ищет парный
    закрывающий тег со счетчиком вложенности одноименных секций
    и рекурсивно парсит токены между ними.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self.position = 0
        self.length = len(self.tokens)

    def parse(self) -> TemplateAST:
        """
        Парсит всю последовательность токенов в AST.

        Returns:
            Кортеж корневых узлов AST
        """
        ast: List[TemplateNode] = []

        while self.position < self.length:
            token = self.tokens[self.position]
            self.position += 1

            node = self._parse_token(token)
            if node is not None:
                ast.append(node)

        return tuple(ast)

    def _parse_token(self, token: Token) -> Optional[TemplateNode]:
        if token.type == TokenType.TEXT:
            return TextNode(text=token.value)

        if token.type == TokenType.VARIABLE:
            return self._parse_variable(token, escaped=True)

        if token.type == TokenType.RAW:
            return self._parse_variable(token, escaped=False)

        if token.type == TokenType.PARTIAL:
            return PartialNode(key=token.value, raw=token.raw)

        if token.type == TokenType.SECTION_OPEN:
            return self._parse_section(token)

        # Закрывающий тег вне своей секции
        logger.debug(f"Dropping dangling close tag {token.raw!r} at {token.line}:{token.column}")
        return None

    def _parse_variable(self, token: Token, escaped: bool) -> TemplateNode:
        """
        Парсит подстановку значения.

        Для точечной нотации строит секцию по первому сегменту
        с единственным дочерним узлом по последнему сегменту.
        """
        if PATH_SEPARATOR not in token.value:
            if escaped:
                return ValueNode(key=token.value, raw=token.raw)
            return UnescapedNode(key=token.value, raw=token.raw)

        parts = token.value.split(PATH_SEPARATOR)
        section, variable = parts[0], parts[-1]

        child: TemplateNode
        if escaped:
            child = ValueNode(key=variable, raw=f"{{{{{variable}}}}}")
        elif "&" in token.raw:
            child = UnescapedNode(key=variable, raw=f"{{{{&{variable}}}}}")
        else:
            child = UnescapedNode(key=variable, raw=f"{{{{{{{variable}}}}}}}")

        return SectionNode(
            key=section,
            children=(child,),
            inverted=False,
            open_tag=f"{{{{#{section}}}}}",
            close_tag=f"{{{{/{section}}}}}",
        )

    def _parse_section(self, open_token: Token) -> Optional[SectionNode]:
        """
        Парсит секцию, начинающуюся с open_token.

        Returns:
            Узел секции или None, если парный закрывающий тег не найден
        """
        close_index = self._find_matching_close(open_token.value, self.position)
        if close_index == -1:
            logger.debug(
                f"Dropping unterminated section {open_token.raw!r} "
                f"at {open_token.line}:{open_token.column}"
            )
            self.position = self.length
            return None

        children = parse_nodes(self.tokens[self.position:close_index])
        close_token = self.tokens[close_index]
        self.position = close_index + 1

        return SectionNode(
            key=open_token.value,
            children=children,
            inverted=open_token.inverted,
            open_tag=open_token.raw,
            close_tag=close_token.raw,
        )

    def _find_matching_close(self, name: str, start: int) -> int:
        """
        Находит парный закрывающий тег для секции name.

        Args:
            name: Имя секции
            start: Индекс первого токена после открывающего тега

        Returns:
            Индекс закрывающего тега или -1 если не найден
        """
        open_count = 1  # Начинаем с 1 для текущей секции

        for i in range(start, self.length):
            token = self.tokens[i]
            if token.value != name:
                continue
            if token.type == TokenType.SECTION_OPEN:
                open_count += 1
            elif token.type == TokenType.SECTION_CLOSE:
                open_count -= 1
                if open_count == 0:
                    return i

        return -1


def parse_nodes(tokens: Sequence[Token]) -> TemplateAST:
    """
    Удобная функция для парсинга потока токенов.

    Args:
        tokens: Последовательность токенов

    Returns:
        Дерево узлов шаблона
    """
    return TemplateParser(tokens).parse()


__all__ = ["TemplateParser", "parse_nodes", "PATH_SEPARATOR"]
