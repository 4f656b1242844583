import re
import unicodedata
from collections.abc import Iterable

from schematypings.codegen.constants import MAX_INLINE_UNION_LENGTH, NEW_LINE, TAB

__all__ = (
    'are_quotes_needed_for_property',
    'format_array_depth',
    'get_enum_property_name',
    'get_interface_name',
    'get_method_section',
    'get_object_name_by_ref',
    'get_section_from_object_name',
    'is_method_needed',
    'is_pattern_property',
    'join_one_of_values',
    'prepare_methods_pattern',
    'quote_value',
    'transform_pattern_property_name',
)

_PROPERTY_NAME_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')
_PATTERN_PROPERTY_PREFIX = '[key: '


def capitalize(input_string):
    if not input_string:
        return ''
    return input_string[0].upper() + input_string[1:]


def remove_accents(input_str):
    nfkd_form = unicodedata.normalize('NFKD', input_str)
    return ''.join(c for c in nfkd_form if not unicodedata.combining(c))


def get_interface_name(name: str) -> str:
    """Convert an object, method or slot name into a PascalCase declaration name.

    ``users_user_full`` -> ``UsersUserFull``, ``messages.send params`` ->
    ``MessagesSendParams``.
    """
    parts = re.split(r'[._\s]+', remove_accents(name))
    return ''.join(capitalize(part) for part in parts if part)


def get_object_name_by_ref(ref: str) -> str:
    """Return the object name a ``$ref`` points to (the last path segment)."""
    return ref.rsplit('/', 1)[-1]


def get_section_from_object_name(name: str) -> str:
    return name.split('_', 1)[0]


def get_method_section(method_name: str) -> str:
    return method_name.split('.', 1)[0]


def transform_pattern_property_name(pattern: str) -> str:
    """Synthesize an index-signature property name from a pattern property key."""
    if pattern == '^[0-9]+$':
        return '[key: number]'
    return '[key: string]'


def is_pattern_property(name: str) -> bool:
    return name.startswith(_PATTERN_PROPERTY_PREFIX)


def are_quotes_needed_for_property(name: str) -> bool:
    if is_pattern_property(name):
        return False
    return not _PROPERTY_NAME_RE.match(name)


def get_enum_property_name(name: str) -> str:
    """Sanitize an enum display name into an upper-case member key."""
    sanitized = re.sub(r'\W+', '_', name.strip().upper()).strip('_')
    return sanitized or '_'


def quote_value(value: object) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        escaped = value.replace('\\', '\\\\').replace("'", "\\'")
        return f"'{escaped}'"
    return str(value)


def join_one_of_values(values: Iterable[str], primitive: bool = False) -> str:
    """Join alternatives into a union expression.

    Repeated alternatives are dropped. Unions that would not fit on one line
    are split, one alternative per line.
    """
    unique: list[str] = []
    for value in values:
        if value not in unique:
            unique.append(value)

    joined = ' | '.join(unique)
    if len(joined) <= MAX_INLINE_UNION_LENGTH:
        return joined

    indent = TAB * 2 if primitive else TAB
    return f' |{NEW_LINE}{indent}'.join(unique)


def format_array_depth(value: str, depth: int) -> str:
    """Wrap an expression in ``depth`` array levels.

    Unions and string literals need the generic ``Array<>`` form for the
    innermost level, ``'a' | 'b'[]`` would bind the suffix to ``'b'`` only.
    """
    if value.endswith("'") or '|' in value:
        return f'Array<{value}>' + '[]' * (depth - 1)
    return value + '[]' * depth


def prepare_methods_pattern(pattern: str | Iterable[str]) -> set[str]:
    """Split a methods pattern like ``'messages.*, users.get'`` into entries."""
    if isinstance(pattern, str):
        pattern = [pattern]

    entries = set()
    for item in pattern:
        for entry in item.split(','):
            entry = entry.strip()
            if entry:
                entries.add(entry)
    return entries


def is_method_needed(patterns: set[str], method_name: str) -> bool:
    if '*' in patterns or method_name in patterns:
        return True
    return f'{get_method_section(method_name)}.*' in patterns


def trim_double_spaces(text: str) -> str:
    return re.sub(r'\s\s+', ' ', text.strip())
