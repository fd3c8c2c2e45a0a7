"""Tests for tag-file generation."""

import pytest
from qxtags.config import Config
from qxtags.generator.tag_generator import TagGenerator, access_level


HEADER = (
    "!_TAG_FILE_FORMAT\t2\n"
    "!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted/\n"
    "!_TAG_PROGRAM_NAME\tqxtags\n"
    "!_TAG_PROGRAM_VERSION\t0.1\n"
)

MIXED_ORDER = '''qx.Class.define("app.Mixed", {
  members: {
    first: function() {},
    _second: 1
  },
  events: {
    early: "qx.event.type.Event"
  },
  properties: {
    __late: {}
  },
  statics: {
    CONST: 1
  },
  construct: function(x) {}
});
'''


@pytest.mark.parametrize(
    "name, expected",
    [("__x", "protected"), ("_x", "private"), ("x", "public"), ("[constructor]", "public")],
)
def test_access_level(name, expected):
    assert access_level(name) == expected


def test_empty_registry_is_header_only(registry):
    assert TagGenerator().generate(registry) == HEADER


def test_header_uses_config(registry):
    text = TagGenerator(Config(program_name="tags", program_version="9")).generate(registry)
    assert "!_TAG_PROGRAM_NAME\ttags\n" in text
    assert "!_TAG_PROGRAM_VERSION\t9\n" in text


def test_end_to_end_foo(registry, tmp_path, foo_source):
    source = tmp_path / "Foo.js"
    source.write_text(foo_source)
    path = str(source)
    registry.check_file(path)

    text = TagGenerator().generate(registry)

    assert text == HEADER + (
        f'app.Foo\t{path}\t1;"\tc\tline:1\n'
        f'qx.core.Object\t{path}\t2;"\tx\tline:2\tctype:app.Foo\n'
        f'bar\t{path}\t4;"\tm\tline:4\tctype:app.Foo\taccess:public\tsignature:()\n'
        f'baz\t{path}\t5;"\tp\tline:5\tctype:app.Foo\taccess:public\tsignature:(=null)\n'
    )


def test_members_sorted_by_line_across_kinds(registry, tmp_path):
    source = tmp_path / "Mixed.js"
    source.write_text(MIXED_ORDER)
    registry.check_file(str(source))

    lines = TagGenerator().generate(registry).splitlines()[4:]
    rows = [line.split("\t") for line in lines]

    assert [row[0] for row in rows] == [
        "app.Mixed",
        "first",
        "_second",
        "early",
        "__late",
        "CONST",
        "[constructor]",
    ]
    member_lines = [int(row[4].removeprefix("line:")) for row in rows[1:]]
    assert member_lines == sorted(member_lines)
    assert [row[3] for row in rows[1:]] == ["m", "p", "e", "p", "s", "m"]


def test_member_fields(registry, tmp_path):
    source = tmp_path / "Mixed.js"
    source.write_text(MIXED_ORDER)
    registry.check_file(str(source))

    rows = {line.split("\t")[0]: line.split("\t") for line in TagGenerator().generate(registry).splitlines()[4:]}

    assert rows["app.Mixed"][5:] == []
    assert rows["_second"][5:] == ["ctype:app.Mixed", "access:private", "signature:(=1)"]
    assert rows["__late"][5:] == ["ctype:app.Mixed", "access:protected"]
    assert rows["[constructor]"][5:] == ["ctype:app.Mixed", "access:public", "signature:(x)"]


def test_include_and_implement_records(registry, tmp_path):
    source = tmp_path / "W.js"
    source.write_text(
        'qx.Class.define("app.W", {\n'
        "  implement: [app.IOne],\n"
        "  include: app.MOne\n"
        "});\n"
    )
    registry.check_file(str(source))

    rows = [line.split("\t") for line in TagGenerator().generate(registry).splitlines()[4:]]

    assert [(row[0], row[3], row[2]) for row in rows] == [
        ("app.W", "c", '1;"'),
        ("app.IOne", "i", '2;"'),
        ("app.MOne", "n", '3;"'),
    ]


def test_classes_in_registry_order(registry, tmp_path):
    for name in ("b", "a"):
        source = tmp_path / f"{name}.js"
        source.write_text(f'qx.Class.define("{name}", {{}});\n')
        registry.check_file(str(source))

    class_names = [line.split("\t")[0] for line in TagGenerator().generate(registry).splitlines()[4:]]
    assert class_names == ["b", "a"]
