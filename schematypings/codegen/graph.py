"""Import/export dependency graph for generated declarations.

This module tracks, per generated declaration, which other declarations it
depends on and whether they need their own module (and an import) or only
need to be generated. It also builds the per-module import statements.
"""

import enum
from collections.abc import Iterable, Iterator, Mapping

from schematypings.codegen.constants import NEW_LINE
from schematypings.codegen.utils import (
    get_interface_name,
    get_section_from_object_name,
)

__all__ = [
    'DependencyGraph',
    'OutputKind',
    'ReferenceMark',
    'build_import_statements',
    'partition',
]


class ReferenceMark(enum.Enum):
    # the target must be generated, nothing is imported
    GENERATE_ONLY = 'generate'
    # the target lives in its own module and must be imported
    GENERATE_AND_IMPORT = 'generate_and_import'


class OutputKind(enum.Enum):
    OBJECT = 'object'
    METHODS = 'methods'


class DependencyGraph:
    """Collects referenced object names together with their reference marks.

    Once a name is marked ``GENERATE_AND_IMPORT`` it keeps that mark for the
    rest of the run, a later ``GENERATE_ONLY`` mark never downgrades it.

    Example:
        >>> graph = DependencyGraph()
        >>> graph.mark('users_user', ReferenceMark.GENERATE_AND_IMPORT)
        >>> graph.mark('users_user', ReferenceMark.GENERATE_ONLY)
        >>> graph['users_user']
        <ReferenceMark.GENERATE_AND_IMPORT: 'generate_and_import'>
    """

    def __init__(self, marks: Mapping[str, ReferenceMark] | None = None):
        self._marks: dict[str, ReferenceMark] = {}
        for name, mark in (marks or {}).items():
            self.mark(name, mark)

    def mark(self, name: str, mark: ReferenceMark) -> None:
        if self._marks.get(name) is ReferenceMark.GENERATE_AND_IMPORT:
            return
        self._marks[name] = mark

    def merge(self, other: 'DependencyGraph') -> None:
        for name, mark in other.items():
            self.mark(name, mark)

    def discard(self, name: str) -> None:
        self._marks.pop(name, None)

    def copy(self) -> 'DependencyGraph':
        return DependencyGraph(self._marks)

    def imported_names(self) -> list[str]:
        return [
            name
            for name, mark in self._marks.items()
            if mark is ReferenceMark.GENERATE_AND_IMPORT
        ]

    def items(self) -> Iterator[tuple[str, ReferenceMark]]:
        return iter(list(self._marks.items()))

    def __getitem__(self, name: str) -> ReferenceMark:
        return self._marks[name]

    def __contains__(self, name: str) -> bool:
        return name in self._marks

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._marks))

    def __len__(self) -> int:
        return len(self._marks)

    def __eq__(self, other):
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return self._marks == other._marks

    def __repr__(self) -> str:
        return f'DependencyGraph({self._marks!r})'


def partition(names: Iterable[str]) -> dict[str, list[str]]:
    """Group object names by section, keeping first-seen order."""
    sections: dict[str, list[str]] = {}
    for name in names:
        section = get_section_from_object_name(name)
        bucket = sections.setdefault(section, [])
        if name not in bucket:
            bucket.append(name)
    return sections


def _import_path(name: str, current_section: str | None, output_kind: OutputKind) -> str:
    import_section = get_section_from_object_name(name)
    interface_name = get_interface_name(name)

    if output_kind is OutputKind.OBJECT:
        if import_section == current_section:
            return f'./{interface_name}'
        return f'../{import_section}/{interface_name}'

    return f'../objects/{import_section}/{interface_name}'


def build_import_statements(
    graph: DependencyGraph,
    current_section: str | None,
    output_kind: OutputKind,
) -> str:
    """Build the import block for one output module.

    Args:
        graph: Dependencies of the module being rendered.
        current_section: Section of the module, used for object-to-object imports.
        output_kind: Whether the module is an object module or a methods module.

    Returns:
        One ``import { ... } from '...';`` line per distinct path, paths and
        names sorted. Empty string when nothing has to be imported.
    """
    paths: dict[str, set[str]] = {}
    for name in graph.imported_names():
        path = _import_path(name, current_section, output_kind)
        paths.setdefault(path, set()).add(get_interface_name(name))

    lines = []
    for path in sorted(paths):
        names = ', '.join(sorted(paths[path]))
        lines.append(f"import {{ {names} }} from '{path}';")
    return NEW_LINE.join(lines)
