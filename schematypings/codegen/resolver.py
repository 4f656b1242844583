"""Reference resolution for schema nodes.

This module provides the SchemaResolver class for resolving ``$ref``
references against the objects and responses dictionaries and for flattening
``allOf`` inheritance chains into merged property sets.
"""

import dataclasses
import logging
from collections.abc import Mapping

from schematypings.codegen.nodes import SchemaNode
from schematypings.codegen.utils import get_object_name_by_ref
from schematypings.exceptions import UnresolvedReferenceError

logger = logging.getLogger(__name__)

__all__ = ['SchemaResolver']


class SchemaResolver:
    """Resolves ``$ref`` references and ``allOf`` chains for one generation run.

    The resolver never mutates the nodes held in its dictionaries: merging
    ``allOf`` bases produces new nodes, so two call sites that reference the
    same base cannot interfere with each other.

    Example:
        >>> resolver = SchemaResolver(objects, responses)
        >>> node = resolver.resolve_ref('objects.json#/definitions/users_user_full')
        >>> merged = resolver.merge_properties(node)
    """

    def __init__(
        self,
        objects: Mapping[str, SchemaNode],
        responses: Mapping[str, SchemaNode] | None = None,
    ):
        """Initialize the resolver.

        Args:
            objects: Shared object schemas keyed by name.
            responses: Response schemas keyed by name.
        """
        self.objects = objects
        self.responses = responses or {}

    def find_object(self, ref: str) -> SchemaNode | None:
        """Look up a ``$ref`` (or bare object name) in the objects dictionary."""
        return self.objects.get(get_object_name_by_ref(ref))

    def resolve_ref(self, ref: str) -> SchemaNode:
        """Resolve a ``$ref`` against the objects, then the responses dictionary.

        Args:
            ref: The ``$ref`` string or bare object name.

        Returns:
            The referenced node.

        Raises:
            UnresolvedReferenceError: If the name is in neither dictionary.
        """
        name = get_object_name_by_ref(ref)
        if name in self.objects:
            return self.objects[name]
        if name in self.responses:
            return self.responses[name]
        raise UnresolvedReferenceError(
            ref, f"'{name}' is not declared in objects or responses"
        )

    def resolve_response_ref(self, ref: str) -> SchemaNode:
        """Resolve a response slot ``$ref``, preferring the responses dictionary."""
        name = get_object_name_by_ref(ref)
        if name in self.responses:
            return self.responses[name]
        return self.resolve_ref(ref)

    def flatten_all_of(
        self, node: SchemaNode, _visited: set[str] | None = None
    ) -> list[SchemaNode]:
        """Return the concrete bases reachable from ``node.all_of``, in order.

        Nested ``allOf`` chains are expanded recursively. A ``$ref`` already
        expanded during this walk is skipped, which stops self-referential
        chains and also drops the second path of a diamond-shaped hierarchy
        (its properties would be discarded by the first-wins merge anyway).
        A nested base that declares own properties next to its ``allOf``
        contributes itself, stripped of the ``allOf``, before its own bases.

        Raises:
            UnresolvedReferenceError: If a base reference cannot be resolved.
        """
        if not node.all_of:
            return []

        visited = set() if _visited is None else _visited
        bases: list[SchemaNode] = []

        for base in node.all_of:
            base = self._follow_refs(base, visited)
            if base is None:
                continue

            if base.all_of:
                if base.properties:
                    bases.append(dataclasses.replace(base, all_of=()))
                bases.extend(self.flatten_all_of(base, visited))
            else:
                bases.append(base)

        return bases

    def _follow_refs(self, node: SchemaNode, visited: set[str]) -> SchemaNode | None:
        while node.ref:
            if node.ref in visited:
                logger.debug(
                    f'"{node.ref}" is already expanded in this allOf chain, skipping'
                )
                return None
            visited.add(node.ref)
            node = self.resolve_ref(node.ref)
        return node

    def merge_properties(self, node: SchemaNode) -> SchemaNode:
        """Merge a node's own properties with the properties of its ``allOf`` bases.

        Own properties come first, then each base in declaration order. When a
        property name repeats, the first declaration wins and later ones are
        dropped whole. ``required`` becomes the union of all required names.

        Returns:
            A new node without ``allOf``; ``node`` itself is left untouched.
        """
        properties = list(node.properties)
        required = list(node.required)

        for base in self.flatten_all_of(node):
            properties.extend(base.properties)
            required.extend(base.required)

        seen: set[str] = set()
        merged: list[SchemaNode] = []
        for property_ in properties:
            if property_.name in seen:
                continue
            seen.add(property_.name)
            merged.append(property_)

        return dataclasses.replace(
            node,
            properties=tuple(merged),
            required=tuple(dict.fromkeys(required)),
            all_of=(),
        )
