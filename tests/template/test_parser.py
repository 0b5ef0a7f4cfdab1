"""
Тесты для парсера шаблонов.

Проверяет построение дерева узлов, переписывание точечной нотации
и восстановление после некорректной вложенности тегов.
"""

from stache.template.lexer import tokenize
from stache.template.nodes import (
    TextNode, ValueNode, UnescapedNode, SectionNode, PartialNode,
)
from stache.template.parser import TemplateParser, parse_nodes
from stache.template.tokens import Token


def parse(text: str):
    return parse_nodes(tokenize(text))


class TestBasicParsing:
    """Плоские шаблоны и секции."""

    def test_empty(self):
        assert parse("") == ()

    def test_static_text(self):
        assert parse("just text") == (TextNode(text="just text"),)

    def test_value(self):
        assert parse("Hi {{name}}") == (
            TextNode(text="Hi "),
            ValueNode(key="name", raw="{{name}}"),
        )

    def test_unescaped(self):
        assert parse("{{{html}}}{{& other }}") == (
            UnescapedNode(key="html", raw="{{{html}}}"),
            UnescapedNode(key="other", raw="{{& other }}"),
        )

    def test_partial(self):
        assert parse("{{> footer }}") == (PartialNode(key="footer", raw="{{> footer }}"),)

    def test_section(self):
        assert parse("{{#a}}x{{/a}}") == (
            SectionNode(
                key="a",
                children=(TextNode(text="x"),),
                inverted=False,
                open_tag="{{#a}}",
                close_tag="{{/a}}",
            ),
        )

    def test_inverted_section(self):
        [node] = parse("{{^ a }}x{{/ a }}")

        assert isinstance(node, SectionNode)
        assert node.inverted is True
        assert node.open_tag == "{{^ a }}"
        assert node.close_tag == "{{/ a }}"

    def test_empty_section(self):
        [node] = parse("{{#a}}{{/a}}")

        assert isinstance(node, SectionNode)
        assert node.children == ()

    def test_no_sections_without_section_tags(self):
        nodes = parse("a {{b}} {{{c}}} {{> d}} e")

        assert not any(isinstance(n, SectionNode) for n in nodes)
        assert len(nodes) == 7

    def test_parse_from_token_factories(self):
        tokens = [
            Token.text("x"),
            Token.open("s", "{{#s}}"),
            Token.variable("v", "{{v}}"),
            Token.close("s", "{{/s}}"),
        ]

        assert TemplateParser(tokens).parse() == (
            TextNode(text="x"),
            SectionNode(
                key="s",
                children=(ValueNode(key="v", raw="{{v}}"),),
                inverted=False,
                open_tag="{{#s}}",
                close_tag="{{/s}}",
            ),
        )


class TestNesting:
    """Вложенные секции и поиск парного тега."""

    def test_nested_different_names(self):
        [outer] = parse("{{#a}}{{#b}}x{{/b}}{{/a}}")

        assert outer.key == "a"
        [inner] = outer.children
        assert isinstance(inner, SectionNode)
        assert inner.key == "b"
        assert inner.children == (TextNode(text="x"),)

    def test_nested_same_name(self):
        [outer] = parse("{{#a}}1{{#a}}2{{/a}}3{{/a}}")

        assert outer.key == "a"
        assert len(outer.children) == 3
        assert outer.children[0] == TextNode(text="1")
        assert isinstance(outer.children[1], SectionNode)
        assert outer.children[1].children == (TextNode(text="2"),)
        assert outer.children[2] == TextNode(text="3")

    def test_inverted_open_counts_for_same_name(self):
        [outer] = parse("{{#a}}{{^a}}x{{/a}}y{{/a}}")

        assert outer.inverted is False
        assert isinstance(outer.children[0], SectionNode)
        assert outer.children[0].inverted is True
        assert outer.children[1] == TextNode(text="y")


class TestMalformedNesting:
    """Некорректная вложенность не вызывает ошибок."""

    def test_dangling_close_is_dropped(self):
        assert parse("x{{/a}}y") == (TextNode(text="x"), TextNode(text="y"))

    def test_unterminated_section_drops_rest(self):
        assert parse("x{{#a}}y{{b}}") == (TextNode(text="x"),)

    def test_mismatched_close_name(self):
        assert parse("{{#a}}x{{/b}}") == ()

    def test_unterminated_inner_section(self):
        nodes = parse("{{#a}}{{#b}}x{{/a}}tail")

        assert len(nodes) == 2
        assert isinstance(nodes[0], SectionNode)
        assert nodes[0].key == "a"
        assert nodes[0].children == ()
        assert nodes[1] == TextNode(text="tail")


class TestDottedNames:
    """Точечная нотация переписывается в синтетическую секцию."""

    def test_escaped_dotted(self):
        assert parse("{{person.name}}") == (
            SectionNode(
                key="person",
                children=(ValueNode(key="name", raw="{{name}}"),),
                inverted=False,
                open_tag="{{#person}}",
                close_tag="{{/person}}",
            ),
        )

    def test_ampersand_dotted(self):
        [node] = parse("{{&person.bio}}")

        assert node.children == (UnescapedNode(key="bio", raw="{{&bio}}"),)

    def test_triple_dotted(self):
        [node] = parse("{{{person.bio}}}")

        assert node.children == (UnescapedNode(key="bio", raw="{{{bio}}}"),)

    def test_middle_segments_are_ignored(self):
        [node] = parse("{{a.b.c}}")

        assert node.key == "a"
        assert node.children == (ValueNode(key="c", raw="{{c}}"),)

    def test_dotted_partial_is_not_rewritten(self):
        assert parse("{{> dir.name}}") == (PartialNode(key="dir.name", raw="{{> dir.name}}"),)


class TestImmutability:
    """Дерево узлов неизменяемо и хешируемо."""

    def test_tree_is_tuple(self):
        nodes = parse("a{{#s}}b{{/s}}")

        assert isinstance(nodes, tuple)
        assert isinstance(nodes[1].children, tuple)

    def test_section_is_hashable(self):
        [node] = parse("{{#a}}x{{/a}}")

        assert hash(node) == hash(parse("{{#a}}x{{/a}}")[0])
        assert {node} == {parse("{{#a}}x{{/a}}")[0]}

    def test_dotted_section_is_hashable(self):
        hash(parse("{{a.b}}")[0])
