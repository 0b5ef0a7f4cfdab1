"""
Тесты для стека областей видимости.
"""

import pytest

from stache.data.context import DataContext
from stache.data.values import IntValue, StrValue


class TestDataContext:

    def setup_method(self):
        self.ctx = DataContext({"name": StrValue("root"), "n": IntValue(1)})

    def test_empty_context(self):
        ctx = DataContext()
        assert ctx.depth == 1
        assert ctx.lookup("anything") is None

    def test_lookup_root(self):
        assert self.ctx.lookup("name") == StrValue("root")

    def test_lookup_missing(self):
        assert self.ctx.lookup("missing") is None

    def test_innermost_wins(self):
        self.ctx.push({"name": StrValue("inner")})

        assert self.ctx.lookup("name") == StrValue("inner")
        assert self.ctx.lookup("n") == IntValue(1)
        assert self.ctx.depth == 2

    def test_pop_restores_outer(self):
        self.ctx.push({"name": StrValue("inner")})
        popped = self.ctx.pop()

        assert popped == {"name": StrValue("inner")}
        assert self.ctx.lookup("name") == StrValue("root")

    def test_pop_root_is_forbidden(self):
        with pytest.raises(RuntimeError):
            self.ctx.pop()

    def test_scope_manager(self):
        with self.ctx.scope({"x": IntValue(2)}) as ctx:
            assert ctx is self.ctx
            assert ctx.lookup("x") == IntValue(2)
        assert self.ctx.lookup("x") is None
        assert self.ctx.depth == 1

    def test_scope_manager_pops_on_error(self):
        with pytest.raises(ValueError):
            with self.ctx.scope():
                assert self.ctx.depth == 2
                raise ValueError("boom")
        assert self.ctx.depth == 1

    def test_root_is_copied(self):
        root = {"a": IntValue(1)}
        ctx = DataContext(root)
        root["b"] = IntValue(2)

        assert ctx.lookup("b") is None
        assert dict(ctx.root) == {"a": IntValue(1)}
