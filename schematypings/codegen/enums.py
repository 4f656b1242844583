"""Enum classification and emission.

An enum is always typed as the literal union of its values so the values stay
usable as discriminants. Depending on the available display names it may also
get a companion lookup constant, or, for standalone declarations, a real
``enum``.
"""

import math
import re

from schematypings.codegen.blocks import DeclarationType, Property, TypeCodeBlock
from schematypings.codegen.constants import NEW_LINE
from schematypings.codegen.nodes import SchemaNode
from schematypings.codegen.result import TypeResult
from schematypings.codegen.utils import (
    get_enum_property_name,
    get_interface_name,
    join_one_of_values,
    quote_value,
)

__all__ = [
    'generate_enum_as_union_type',
    'generate_inline_enum',
    'generate_standalone_enum',
    'get_enum_names',
    'is_numeric_like',
]


_DECIMAL = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)
_INFINITY = re.compile(r'[+-]?Infinity')
_RADIX_PREFIXES = {'0x': 16, '0o': 8, '0b': 2}
_RADIX_DIGITS = {16: r'[0-9a-fA-F]+', 8: r'[0-7]+', 2: r'[01]+'}


def _coerce_number(value: object) -> float:
    """Convert a value to a number following JavaScript's ``Number()`` rules.

    Strings accept decimal literals, ``Infinity`` and unsigned ``0x``/``0o``/``0b``
    literals. Anything else, including ``'inf'`` and ``'1_000'``, is NaN.
    """
    if isinstance(value, (bool, int, float)):
        return float(value)
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text):
        return float(text)
    if _INFINITY.fullmatch(text):
        return -math.inf if text.startswith('-') else math.inf

    base = _RADIX_PREFIXES.get(text[:2].lower())
    if base and re.fullmatch(_RADIX_DIGITS[base], text[2:]):
        return float(int(text[2:], base))
    return math.nan


def is_numeric_like(values) -> bool:
    """True when any value coerces to a non-zero number (``0`` and ``'0'`` don't count)."""
    for value in values:
        number = _coerce_number(value)
        if number and not math.isnan(number):
            return True
    return False


def get_enum_names(node: SchemaNode) -> tuple[tuple | None, bool]:
    """Resolve the display names of an enum node.

    Returns:
        ``(names, explicit)``. Without ``enumNames`` the values double as
        names, unless they look numeric. ``names`` is None when there are none.
    """
    if node.enum_names:
        return node.enum_names, True

    if node.enum and not is_numeric_like(node.enum):
        return node.enum, False

    return None, False


def _enum_properties(node: SchemaNode, names: tuple) -> list[Property]:
    return [
        Property(
            name=get_enum_property_name('null' if name is None else str(name)),
            value=value,
            wrap_value=True,
        )
        for name, value in zip(names, node.enum)
    ]


def _literal_union(node: SchemaNode) -> str:
    return join_one_of_values([quote_value(value) for value in node.enum], primitive=True)


def generate_inline_enum(
    node: SchemaNode,
    parent_name: str | None = None,
    need_enum_names_constant: bool = True,
    constant_name: str | None = None,
) -> TypeResult:
    """Type an enum node as a literal union, optionally with a lookup constant.

    The lookup constant is emitted for explicit ``enumNames``, and for names
    derived from the values only when ``need_enum_names_constant`` is set.
    """
    names, explicit = get_enum_names(node)
    result = TypeResult(expression=_literal_union(node))

    if not names:
        return result

    if explicit:
        result.description = NEW_LINE.join(
            ['', *(f'`{value}` — {name}' for value, name in zip(node.enum, names))]
        )

    if explicit or need_enum_names_constant:
        ref_name = constant_name or ' '.join(
            part for part in (parent_name, node.name, 'enumNames') if part
        )
        result.declarations.append(
            TypeCodeBlock(
                type=DeclarationType.CONSTANT_OBJECT,
                interface_name=get_interface_name(ref_name),
                ref_name=ref_name,
                properties=_enum_properties(node, names),
            )
        )

    return result


def generate_standalone_enum(
    node: SchemaNode, parent_name: str | None = None
) -> TypeResult:
    """Declare an enum node as a TypeScript ``enum`` when it has display names.

    Without names the literal union is returned and nothing is declared.
    """
    names, _ = get_enum_names(node)
    if not names:
        return TypeResult(expression=_literal_union(node))

    ref_name = f'{parent_name} {node.name} enum' if parent_name else node.name
    interface_name = get_interface_name(ref_name)

    block = TypeCodeBlock(
        type=DeclarationType.ENUM,
        interface_name=interface_name,
        ref_name=ref_name,
        description=node.description,
        properties=_enum_properties(node, names),
    )
    return TypeResult(expression=interface_name, declarations=[block])


def generate_enum_as_union_type(node: SchemaNode) -> TypeResult:
    """Declare a top-level enum object as a literal-union type alias.

    The lookup constant, when there is one, is named ``<Name>EnumNames``.
    """
    inline = generate_inline_enum(node, constant_name=f'{node.name} enumNames')

    alias = TypeCodeBlock(
        type=DeclarationType.TYPE,
        interface_name=get_interface_name(node.name),
        ref_name=node.name,
        description=NEW_LINE.join(
            part for part in (node.description, inline.description) if part
        ),
        value=inline.expression,
    )
    return TypeResult(
        expression=alias.interface_name,
        declarations=[*inline.declarations, alias],
    )
