"""
Лексический анализатор mustache-шаблонов.

Разбивает исходный текст на последовательность токенов: обычный текст
и теги {{...}}. Лексер не бывает строгим: незакрытый тег считается
обычным текстом, комментарии {{! ... }} не порождают токенов.
"""

from __future__ import annotations

from typing import List, Optional

from .tokens import Token, TokenType

OPEN_DELIMITER = "{{"
CLOSE_DELIMITER = "}}"
TRIPLE_OPEN = "{{{"
TRIPLE_CLOSE = "}}}"

# Сигил сразу после {{ -> тип токена
_SIGILS = {
    "#": TokenType.SECTION_OPEN,
    "^": TokenType.SECTION_OPEN,
    "/": TokenType.SECTION_CLOSE,
    ">": TokenType.PARTIAL,
    "&": TokenType.RAW,
}

COMMENT_SIGIL = "!"


class TemplateLexer:
    """
    Лексер шаблонов.

    Распознает следующие конструкции:
    - {{ name }}            экранируемое значение
    - {{{ name }}}, {{& name }}  значение без экранирования
    - {{# name }}, {{^ name }}   открытие секции (обычной/инвертированной)
    - {{/ name }}           закрытие секции
    - {{> name }}           включение partial
    - {{! comment }}        комментарий (отбрасывается)
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.
        """
        tokens: List[Token] = []

        while self.position < self.length:
            tag_start = self.text.find(OPEN_DELIMITER, self.position)
            if tag_start < 0:
                tokens.append(self._text_token(self.length))
                break

            tag_end = self._find_tag_end(tag_start)
            if tag_end < 0:
                # Незакрытый тег - остаток шаблона считаем текстом
                tokens.append(self._text_token(self.length))
                break

            if tag_start > self.position:
                tokens.append(self._text_token(tag_start))

            token = self._tag_token(tag_start, tag_end)
            if token is not None:
                tokens.append(token)

        return tokens

    def _find_tag_end(self, tag_start: int) -> int:
        """Возвращает позицию сразу за закрывающим разделителем или -1."""
        if self.text.startswith(TRIPLE_OPEN, tag_start):
            close = self.text.find(TRIPLE_CLOSE, tag_start + len(TRIPLE_OPEN))
            return close + len(TRIPLE_CLOSE) if close >= 0 else -1

        close = self.text.find(CLOSE_DELIMITER, tag_start + len(OPEN_DELIMITER))
        return close + len(CLOSE_DELIMITER) if close >= 0 else -1

    def _text_token(self, end: int) -> Token:
        start_pos, start_line, start_column = self.position, self.line, self.column
        value = self.text[self.position:end]
        self._advance_to(end)
        return Token(TokenType.TEXT, value, value, False, start_pos, start_line, start_column)

    def _tag_token(self, tag_start: int, tag_end: int) -> Optional[Token]:
        """
        Строит токен для тега text[tag_start:tag_end].

        Returns:
            Токен или None для комментария
        """
        self._advance_to(tag_start)
        start_pos, start_line, start_column = self.position, self.line, self.column
        raw = self.text[tag_start:tag_end]
        self._advance_to(tag_end)

        if raw.startswith(TRIPLE_OPEN):
            name = raw[len(TRIPLE_OPEN):-len(TRIPLE_CLOSE)].strip()
            return Token(TokenType.RAW, name, raw, False, start_pos, start_line, start_column)

        content = raw[len(OPEN_DELIMITER):-len(CLOSE_DELIMITER)].lstrip()
        sigil = content[:1]

        if sigil == COMMENT_SIGIL:
            return None

        token_type = _SIGILS.get(sigil)
        if token_type is None:
            return Token(TokenType.VARIABLE, content.strip(), raw, False, start_pos, start_line, start_column)

        name = content[1:].strip()
        return Token(token_type, name, raw, sigil == "^", start_pos, start_line, start_column)

    def _advance_to(self, new_position: int) -> None:
        """
        Перемещает позицию, обновляя номера строк и колонок.
        """
        segment = self.text[self.position:new_position]
        newlines = segment.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(segment) - segment.rfind("\n")
        else:
            self.column += len(segment)
        self.position = new_position


def tokenize(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize"]
