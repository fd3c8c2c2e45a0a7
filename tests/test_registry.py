"""Tests for the source registry."""

import os

import pytest
from qxtags.backends.parsers import SourceParseError
from qxtags.generator.tag_generator import TagGenerator
from qxtags.scanner.registry import DuplicateClassError, SourceRegistry


TWO_CLASSES = 'qx.Class.define("app.A", {});\nqx.Class.define("app.B", {});\n'
ONLY_B = 'qx.Class.define("app.B", {});\n'


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_check_file_indexes_classes(registry, tmp_path):
    path = _write(tmp_path / "ab.js", TWO_CLASSES)

    assert registry.check_file(path) is True
    assert "app.A" in registry
    assert "app.B" in registry
    assert registry.owned_classes(path) == ["app.A", "app.B"]
    assert registry.get("app.A").path == path


def test_check_file_is_idempotent(registry, tmp_path):
    path = _write(tmp_path / "ab.js", TWO_CLASSES)
    generator = TagGenerator()

    registry.check_file(path)
    first = generator.generate(registry)
    registry.check_file(path)

    assert generator.generate(registry) == first
    assert registry.owned_classes(path) == ["app.A", "app.B"]
    assert len(registry) == 2


def test_recheck_prunes_removed_classes(registry, tmp_path):
    source = tmp_path / "ab.js"
    path = _write(source, TWO_CLASSES)
    registry.check_file(path)

    source.write_text(ONLY_B)
    registry.check_file(path)

    assert "app.A" not in registry
    assert "app.B" in registry
    assert registry.owned_classes(path) == ["app.B"]


def test_deleted_file_is_retracted(registry, tmp_path):
    source = tmp_path / "ab.js"
    path = _write(source, TWO_CLASSES)
    registry.check_file(path)

    source.unlink()

    assert registry.check_file(path) is False
    assert len(registry) == 0
    assert path not in registry.paths


def test_missing_file_never_indexed(registry, tmp_path):
    assert registry.check_file(str(tmp_path / "missing.js")) is False
    assert registry.paths == []


def test_duplicate_class_across_files(registry, tmp_path):
    first = _write(tmp_path / "one.js", 'qx.Class.define("X", {});\n')
    second = _write(tmp_path / "two.js", 'qx.Class.define("X", {});\n')

    registry.check_file(first)
    registry.check_file(first)

    with pytest.raises(DuplicateClassError) as exc_info:
        registry.check_file(second)

    assert exc_info.value.name == "X"
    assert exc_info.value.existing_path == first
    assert registry.get("X").path == first


def test_class_can_move_after_original_file_retracted(registry, tmp_path):
    first = tmp_path / "one.js"
    first_path = _write(first, 'qx.Class.define("X", {});\n')
    second_path = _write(tmp_path / "two.js", 'qx.Class.define("X", {});\n')
    registry.check_file(first_path)

    first.unlink()
    registry.check_file(first_path)
    registry.check_file(second_path)

    assert registry.get("X").path == second_path


def test_same_name_twice_in_one_file(registry, tmp_path):
    path = _write(tmp_path / "dup.js", 'qx.Class.define("X", {});\nqx.Class.define("X", { extend: Y });\n')

    registry.check_file(path)

    assert registry.owned_classes(path) == ["X"]
    assert registry.get("X").extend.name == "Y"


def test_parse_error_leaves_file_retracted(registry, tmp_path):
    source = tmp_path / "a.js"
    path = _write(source, TWO_CLASSES)
    registry.check_file(path)

    source.write_text('qx.Class.define("app.A", {\n')

    with pytest.raises(SourceParseError):
        registry.check_file(path)
    assert len(registry) == 0
    assert path not in registry.paths


def test_relative_path_rejected(registry):
    with pytest.raises(ValueError):
        registry.check_file("relative/a.js")


def test_other_read_errors_propagate(registry, tmp_path):
    with pytest.raises(IsADirectoryError):
        registry.check_file(str(tmp_path))


def test_ownership_matches_class_table(registry, tmp_path):
    paths = [
        _write(tmp_path / "ab.js", TWO_CLASSES),
        _write(tmp_path / "c.js", 'qx.Class.define("app.C", {});\n'),
    ]
    for path in paths:
        registry.check_file(path)

    for path in registry.paths:
        owned = {name for name, record in registry.classes.items() if record.path == path}
        assert owned == set(registry.owned_classes(path))
    assert os.path.basename(registry.get("app.C").path) == "c.js"


def test_invalid_utf8_bytes_are_replaced(registry, tmp_path):
    source = tmp_path / "bad.js"
    source.write_bytes(b'qx.Class.define("X", { members: { s: "\xff" } });\n')

    assert registry.check_file(str(source)) is True
    assert registry.get("X").properties[0].signature == '(="\ufffd")'
