"""Tag-file generation from a SourceRegistry snapshot.

Output is an Exuberant-ctags style file that Vim's Tagbar can load with a
``javascript`` type definition along these lines::

    let g:tagbar_type_javascript = {
        \\ 'ctagstype' : 'javascript',
        \\ 'kinds'     : [
            \\ 'c:class', 'x:extends', 'n:include', 'i:implements',
            \\ 'm:methods', 'p:properties', 'e:events', 's:statics',
        \\ ],
        \\ 'sro' : '.',
        \\ 'kind2scope' : { 'c' : 'ctype' },
        \\ 'scope2kind' : { 'ctype' : 'c' },
        \\ 'ctagsbin'  : 'qxtags',
        \\ 'ctagsargs' : ''
    \\ }
"""

from __future__ import annotations

from typing import Iterable

from ..config import Config
from ..models import ClassRecord, MemberKind
from ..scanner.registry import SourceRegistry


def access_level(name: str) -> str:
    """Visibility inferred from leading underscores."""
    if name.startswith("__"):
        return "protected"
    if name.startswith("_"):
        return "private"
    return "public"


class TagGenerator:
    """Render registry contents as tag-file text."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config()

    def header(self) -> list[str]:
        return [
            "!_TAG_FILE_FORMAT\t2",
            "!_TAG_FILE_SORTED\t1\t/0=unsorted, 1=sorted/",
            f"!_TAG_PROGRAM_NAME\t{self.config.program_name}",
            f"!_TAG_PROGRAM_VERSION\t{self.config.program_version}",
        ]

    def generate(self, registry: SourceRegistry) -> str:
        """Produce the full tag file for every class in the registry."""
        lines = self.header()
        for record in registry:
            lines.extend(self.class_tags(record))
        return "".join(line + "\n" for line in lines)

    def class_tags(self, record: ClassRecord) -> list[str]:
        """Tag lines for one class: class, extends, then members by line."""
        lines = [_tag(record.name, record.path, record.line, MemberKind.CLASS)]

        if record.extend is not None:
            lines.append(
                _tag(
                    record.extend.name,
                    record.path,
                    record.extend.line,
                    MemberKind.EXTENDS,
                    [f"ctype:{record.name}"],
                )
            )

        # sorted() is stable, so members on one line keep kind order
        members = sorted(record.members(), key=lambda item: item[1].line)
        for kind, entry in members:
            fields = [f"ctype:{record.name}", f"access:{access_level(entry.name)}"]
            if entry.signature is not None:
                fields.append(f"signature:{entry.signature}")
            lines.append(_tag(entry.name, record.path, entry.line, kind, fields))

        return lines


def _tag(name: str, path: str, line: int, kind: MemberKind, fields: Iterable[str] = ()) -> str:
    return "\t".join([name, path, f'{line};"', kind.value, f"line:{line}", *fields])
