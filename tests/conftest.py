"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path
from qxtags.config import Config
from qxtags.scanner.registry import SourceRegistry


FOO_SOURCE = '''qx.Class.define("app.Foo", {
  extend: qx.core.Object,
  members: {
    bar: function() {},
    baz: null
  }
});
'''


@pytest.fixture
def config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def foo_source() -> str:
    """Class app.Foo: extends on line 2, method bar on 4, property baz on 5."""
    return FOO_SOURCE


@pytest.fixture
def registry(config: Config) -> SourceRegistry:
    return SourceRegistry(config)


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small qooxdoo source tree.

    Layout::

        class/app/Foo.js       -> app.Foo
        class/app/sub/Qux.js   -> app.sub.Qux
        class/app/other/Bar.js -> app.other.Bar
        class/app/notes.txt    (ignored, wrong extension)
    """
    root = tmp_path / "class"
    (root / "app" / "sub").mkdir(parents=True)
    (root / "app" / "other").mkdir(parents=True)

    (root / "app" / "Foo.js").write_text(FOO_SOURCE)
    (root / "app" / "sub" / "Qux.js").write_text(
        'qx.Class.define("app.sub.Qux", { members: { run: function(a) {} } });\n'
    )
    (root / "app" / "other" / "Bar.js").write_text(
        'qx.Class.define("app.other.Bar", { extend: app.Foo });\n'
    )
    (root / "app" / "notes.txt").write_text('qx.Class.define("not.Indexed", {});\n')

    return root
