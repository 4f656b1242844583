"""Declaration blocks and their TypeScript rendering.

A code block is a fully decided declaration: its kind, its name, a type
expression and/or a list of named fields. Rendering is a pure formatting
step; every decision about the shape happens before a block is built.
"""

import dataclasses
import enum

from schematypings.codegen.constants import NEW_LINE, TAB
from schematypings.codegen.utils import (
    are_quotes_needed_for_property,
    quote_value,
    trim_double_spaces,
)
from schematypings.exceptions import EmptyResultError

__all__ = [
    'CodeBlock',
    'CommentCodeBlock',
    'DeclarationType',
    'Property',
    'TypeCodeBlock',
    'render_blocks',
]


class DeclarationType(enum.Enum):
    INTERFACE = 'interface'
    ENUM = 'enum'
    TYPE = 'type'
    CONST = 'const'
    CONSTANT_OBJECT = 'constant_object'


def _trim_lines(lines: list[str]) -> list[str]:
    """Trim every line and drop empty lines from both ends."""
    trimmed = [line.strip() for line in lines]
    while trimmed and not trimmed[0]:
        trimmed.pop(0)
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return trimmed


def _doc_comment(text: str, indent: str = '') -> list[str]:
    lines = _trim_lines(text.split(NEW_LINE))
    if not lines:
        return []
    body = [f'{indent} * {line}'.rstrip() for line in lines]
    return [f'{indent}/**', *body, f'{indent} */']


@dataclasses.dataclass
class Property:
    name: str
    value: str | int | float | bool
    description: str = ''
    is_required: bool = False
    wrap_value: bool = False


@dataclasses.dataclass
class TypeCodeBlock:
    type: DeclarationType
    interface_name: str
    ref_name: str | None = None
    properties: list[Property] = dataclasses.field(default_factory=list)
    value: str | None = None
    description: str = ''
    need_export: bool = True
    allow_empty_interface: bool = False

    def add_property(self, property_: Property) -> None:
        self.properties.append(property_)

    def _properties_code(self) -> list[str]:
        quote_char = (
            "'"
            if any(are_quotes_needed_for_property(p.name) for p in self.properties)
            else ''
        )

        if self.type is DeclarationType.INTERFACE:
            line_end = ';'
        else:
            line_end = ','

        lines = []
        for property_ in self.properties:
            if self.type is DeclarationType.INTERFACE:
                divider = ':' if property_.is_required else '?:'
            elif self.type is DeclarationType.ENUM:
                divider = ' ='
            else:
                divider = ':'

            value = (
                quote_value(property_.value)
                if property_.wrap_value
                else str(property_.value)
            )
            # index signatures like [key: string] are never quoted
            name = (
                property_.name
                if property_.name.startswith('[')
                else f'{quote_char}{property_.name}{quote_char}'
            )

            lines.extend(_doc_comment(property_.description, TAB))
            lines.append(f'{TAB}{name}{divider} {value}{line_end}')
        return lines

    def to_string(self) -> str:
        """Render the block as TypeScript source.

        Raises:
            EmptyResultError: If a type alias has no expression, or an enum or
                constant object has no members.
        """
        export = 'export' if self.need_export else ''
        properties_code = self._properties_code()

        before = _doc_comment(self.description)
        if self.ref_name:
            before.append(f'// {self.ref_name}')

        if self.type is DeclarationType.INTERFACE:
            if not properties_code and not self.allow_empty_interface:
                properties_code = [f'{TAB}// empty interface', f'{TAB}[key: string]: any;']

            header = trim_double_spaces(
                f'{export} interface {self.interface_name} {{'
            )
            if properties_code:
                code = NEW_LINE.join([header, *properties_code, '}'])
            else:
                code = header + '}'

        elif self.type is DeclarationType.ENUM:
            if not properties_code:
                raise EmptyResultError(self.interface_name, 'enum has no members')
            header = trim_double_spaces(f'{export} enum {self.interface_name} {{')
            code = NEW_LINE.join([header, *properties_code, '}'])

        elif self.type is DeclarationType.CONSTANT_OBJECT:
            if not properties_code:
                raise EmptyResultError(self.interface_name, 'constant has no entries')
            header = trim_double_spaces(f'{export} const {self.interface_name} = {{')
            code = NEW_LINE.join([header, *properties_code, '} as const;'])

        elif self.type is DeclarationType.CONST:
            if self.value in (None, ''):
                raise EmptyResultError(self.interface_name, 'constant has empty value')
            code = trim_double_spaces(
                f'{export} const {self.interface_name} = {self.value};'
            )

        else:
            if not self.value:
                raise EmptyResultError(self.interface_name, 'type has empty value')
            code = (
                trim_double_spaces(f'{export} type {self.interface_name} =')
                + f' {self.value};'
            )

        return NEW_LINE.join([*before, code]).strip()


@dataclasses.dataclass
class CommentCodeBlock:
    lines: list[str] = dataclasses.field(default_factory=list)

    def append_lines(self, lines: list[str]) -> None:
        self.lines = [*self.lines, *lines]

    def to_string(self) -> str:
        inner = [f' * {line}'.rstrip() for line in self.lines]
        return NEW_LINE.join(['/**', *inner, ' */'])


CodeBlock = TypeCodeBlock | CommentCodeBlock


def render_blocks(blocks: list[CodeBlock], header: str = '') -> str:
    """Render blocks separated by blank lines, with an optional header block."""
    parts = [header] if header else []
    parts.extend(block.to_string() for block in blocks)
    return (NEW_LINE * 2).join(parts)
