from pathlib import Path

import pytest

from stache import DictPartialResolver, HashBuilder
from tests.infrastructure.file_utils import write, write_tree


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Минимальный проект: шаблон, partial-шаблоны и данные в корне."""
    root = tmp_path
    write(
        root / "page.mustache",
        """\
        <h1>{{title}}</h1>
        {{#items}}{{> item}}{{/items}}
        {{^items}}no items{{/items}}
        """,
        dedent=True,
    )
    return write_tree(root, {
        "item.mustache": "<li>{{name}}</li>",
        "data.json": '{"title": "Tom & Jerry", "items": [{"name": "a"}, {"name": "b"}]}',
        "data.yaml": "title: 'Tom & Jerry'\nitems:\n  - name: a\n  - name: b\n",
    })


@pytest.fixture
def partials():
    """In-memory partial-шаблоны."""
    return DictPartialResolver({
        "item": "<li>{{name}}</li>",
        "greeting": "Hello, {{name}}!",
        "nested": "[{{> greeting}}]",
    })


@pytest.fixture
def hb():
    return HashBuilder()
