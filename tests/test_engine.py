"""
Тесты публичного API: Template, render_text, render_file.
"""

from pathlib import Path

import pytest

from stache import (
    DataContext, DataFormatError, DictPartialResolver, HashBuilder, ResourceAccessError,
    Template, render_file, render_text,
)
from stache.data.values import IntValue, StrValue
from stache.engine import make_context
from tests.infrastructure.file_utils import write

EXPECTED_PAGE = "<h1>Tom &amp; Jerry</h1>\n<li>a</li><li>b</li>\n\n"


class TestMakeContext:

    def test_none(self):
        ctx = make_context(None)
        assert ctx.depth == 1
        assert ctx.lookup("x") is None

    def test_existing_context_is_reused(self):
        ctx = DataContext()
        assert make_context(ctx) is ctx

    def test_builder(self):
        ctx = make_context(HashBuilder().insert_int("n", 1))
        assert ctx.lookup("n") == IntValue(1)

    def test_mapping(self):
        ctx = make_context({"s": "x"})
        assert ctx.lookup("s") == StrValue("x")

    def test_unsupported_values(self):
        with pytest.raises(DataFormatError):
            make_context({"bad": object()})


class TestTemplate:

    def test_compile_once_render_many(self):
        template = Template.compile("Hello {{name}}!", name="greeting")

        assert template.name == "greeting"
        assert isinstance(template.nodes, tuple)
        assert template.render({"name": "a"}) == "Hello a!"
        assert template.render({"name": "b"}) == "Hello b!"

    def test_render_to_sink(self):
        parts = []

        class Sink:
            def write(self, text):
                parts.append(text)

        Template.compile("a{{x}}b").render_to(Sink(), {"x": 1})
        assert parts == ["a", "1", "b"]

    def test_render_with_partials(self):
        template = Template.compile("{{> p}}")
        assert template.render({"v": 2}, DictPartialResolver({"p": "v={{v}}"})) == "v=2"

    def test_from_file(self, tmp_path: Path):
        path = write(tmp_path / "t.mustache", "{{x}}")
        template = Template.from_file(path)

        assert template.name == str(path)
        assert template.render({"x": "y"}) == "y"

    def test_from_missing_file(self, tmp_path: Path):
        with pytest.raises(ResourceAccessError) as exc:
            Template.from_file(tmp_path / "missing.mustache")
        assert exc.value.path == tmp_path / "missing.mustache"


class TestRenderFunctions:

    def test_render_text_without_data(self):
        assert render_text("{{a}}{{^a}}empty{{/a}}") == "empty"

    def test_render_text_with_builder(self):
        data = (
            HashBuilder()
            .insert_string("title", "List")
            .insert_vector("items", lambda v: v.push_string("x").push_string("y"))
        )
        assert render_text("{{title}}:{{#items}}-{{/items}}", data) == "List:--"

    def test_render_file_uses_template_dir_for_partials(self, tmpproj: Path):
        data = HashBuilder.from_file(tmpproj / "data.json")
        assert render_file(tmpproj / "page.mustache", data) == EXPECTED_PAGE

    def test_render_file_with_yaml_data(self, tmpproj: Path):
        data = HashBuilder.from_file(tmpproj / "data.yaml")
        assert render_file(tmpproj / "page.mustache", data) == EXPECTED_PAGE

    def test_render_file_with_explicit_partials(self, tmpproj: Path):
        partials = DictPartialResolver({"item": "*"})
        out = render_file(tmpproj / "page.mustache", {"items": [1, 2]}, partials)
        assert out == "<h1></h1>\n**\n\n"

    def test_render_file_missing(self, tmp_path: Path):
        with pytest.raises(ResourceAccessError):
            render_file(tmp_path / "missing.mustache")
