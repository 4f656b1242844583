"""Schema node model.

Raw schema dictionaries are parsed once per generation run into a tree of
:class:`SchemaNode` objects. Nodes are frozen; the few transformations the
generator needs (aliasing a response to its slot name, merging ``allOf``
bases) return new nodes so that a node shared by several call sites is never
changed behind their back.
"""

import dataclasses
import enum
from collections.abc import Mapping
from typing import Any

from schematypings.codegen.utils import transform_pattern_property_name
from schematypings.exceptions import MalformedNodeError

__all__ = ['NodeKind', 'SchemaNode', 'parse_dictionary']


class NodeKind(enum.Enum):
    """Shape of a schema fragment, used to pick a generation rule."""

    PRIMITIVE = 'primitive'
    ARRAY = 'array'
    REF = 'ref'
    ONE_OF = 'oneOf'
    ALL_OF = 'allOf'
    OBJECT = 'object'
    UNTYPED = 'untyped'


@dataclasses.dataclass(frozen=True)
class SchemaNode:
    name: str
    parent_name: str | None = None
    type: str | tuple[str, ...] | None = None
    ref: str | None = None
    items: 'SchemaNode | None' = None
    one_of: tuple['SchemaNode', ...] = ()
    all_of: tuple['SchemaNode', ...] = ()
    properties: tuple['SchemaNode', ...] = ()
    parameters: tuple['SchemaNode', ...] = ()
    required: tuple[str, ...] = ()
    is_required: bool = False
    enum: tuple[Any, ...] | None = None
    enum_names: tuple[Any, ...] | None = None
    description: str = ''

    @classmethod
    def parse(
        cls, raw: Any, name: str, parent_name: str | None = None
    ) -> 'SchemaNode':
        """Parse a raw schema fragment into a node tree.

        Args:
            raw: The schema fragment, must be a mapping.
            name: Name of the node within its declaring dictionary.
            parent_name: Naming scope used for synthetic nested declarations.

        Returns:
            The parsed node.

        Raises:
            MalformedNodeError: If ``raw`` (or any nested fragment) is not a mapping.
        """
        if not isinstance(raw, Mapping):
            raise MalformedNodeError(name, parent_name)

        type_ = raw.get('type')
        if isinstance(type_, list):
            type_ = tuple(type_)
        elif not isinstance(type_, str):
            type_ = None

        properties = [
            cls.parse(property_schema, property_name, name)
            for property_name, property_schema in (raw.get('properties') or {}).items()
        ]
        properties.extend(
            cls.parse(property_schema, transform_pattern_property_name(pattern), name)
            for pattern, property_schema in (
                raw.get('patternProperties') or {}
            ).items()
        )

        parameters = []
        for parameter in raw.get('parameters') or []:
            if not isinstance(parameter, Mapping) or not parameter.get('name'):
                raise MalformedNodeError(f'{name} parameter', parent_name)
            parameters.append(cls.parse(parameter, parameter['name'], name))

        items = raw.get('items')
        one_of = raw.get('oneOf')
        all_of = raw.get('allOf')
        required = raw.get('required')
        enum_values = raw.get('enum')
        enum_names = raw.get('enumNames')
        description = raw.get('description')
        ref = raw.get('$ref')

        return cls(
            name=name,
            parent_name=parent_name,
            type=type_,
            ref=ref if isinstance(ref, str) else None,
            items=cls.parse(items, f'{name}_items', name)
            if isinstance(items, Mapping)
            else None,
            one_of=tuple(cls.parse(item, name) for item in one_of)
            if isinstance(one_of, list)
            else (),
            all_of=tuple(cls.parse(item, name) for item in all_of)
            if isinstance(all_of, list)
            else (),
            properties=tuple(properties),
            parameters=tuple(parameters),
            required=tuple(required) if isinstance(required, list) else (),
            is_required=required is True,
            enum=tuple(enum_values) if isinstance(enum_values, list) else None,
            enum_names=tuple(enum_names) if isinstance(enum_names, list) else None,
            description=description if isinstance(description, str) else '',
        )

    @property
    def kind(self) -> NodeKind:
        if self.one_of:
            return NodeKind.ONE_OF
        if self.type == 'array' and self.items is not None:
            return NodeKind.ARRAY
        if self.ref:
            return NodeKind.REF
        if self.type == 'object' or (self.type is None and self.properties):
            return NodeKind.OBJECT
        if self.all_of:
            return NodeKind.ALL_OF
        if self.type is not None or self.enum is not None:
            return NodeKind.PRIMITIVE
        return NodeKind.UNTYPED

    def innermost_item(self) -> tuple['SchemaNode', int]:
        """Follow the ``items`` chain and return the innermost item and the depth."""
        depth = 0
        node = self
        while node.type == 'array' and node.items is not None:
            node = node.items
            depth += 1
        return node, depth

    def array_depth(self) -> int:
        return self.innermost_item()[1]

    def renamed(self, name: str) -> 'SchemaNode':
        """Return an alias of this node under a new name.

        Direct properties get the new name as their naming scope.
        """
        properties = tuple(
            dataclasses.replace(property_, parent_name=name)
            for property_ in self.properties
        )
        return dataclasses.replace(self, name=name, properties=properties)

    def is_property_required(self, property_name: str) -> bool:
        return property_name in self.required


def parse_dictionary(raw: Mapping[str, Any]) -> dict[str, SchemaNode]:
    """Parse a dictionary of named schemas (``definitions``) into nodes."""
    return {name: SchemaNode.parse(schema, name) for name, schema in raw.items()}
