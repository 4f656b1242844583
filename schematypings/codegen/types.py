"""Type expression generation.

This module provides the TypeGenerator, which turns a schema node into a
TypeScript type expression together with the names it depends on and any
auxiliary declarations (enum lookup constants) the expression requires.
"""

import dataclasses

from schematypings.codegen.constants import (
    PRIMITIVE_TYPES,
    SCALAR_TYPES,
    SENTINEL_EXPRESSIONS,
)
from schematypings.codegen.enums import generate_inline_enum
from schematypings.codegen.graph import ReferenceMark
from schematypings.codegen.nodes import NodeKind, SchemaNode
from schematypings.codegen.resolver import SchemaResolver
from schematypings.codegen.result import TypeContext, TypeResult
from schematypings.codegen.utils import (
    format_array_depth,
    get_interface_name,
    get_object_name_by_ref,
    join_one_of_values,
)
from schematypings.exceptions import UnknownTypeError, UnresolvedReferenceError

__all__ = ['TypeGenerator']


@dataclasses.dataclass
class TypeGenerator:
    """Generates type expressions for schema nodes.

    Example:
        >>> typegen = TypeGenerator(SchemaResolver(objects, responses))
        >>> result = typegen.type_of(node, TypeContext(parent_name='users_user'))
        >>> result.expression
        'UsersUserFull[]'
    """

    resolver: SchemaResolver

    def type_of(self, node: SchemaNode, context: TypeContext | None = None) -> TypeResult:
        """Turn a node into a type expression.

        Args:
            node: The node to type.
            context: Naming scope and enum options, defaults to ``TypeContext()``.

        Returns:
            The expression, its dependencies, auxiliary declarations and any
            description the expression contributes.

        Raises:
            UnknownTypeError: If the node matches no generation rule.
            UnresolvedReferenceError: If a referenced object does not exist.
        """
        context = context or TypeContext()
        kind = node.kind

        if kind is NodeKind.ONE_OF:
            return self._one_of_type(node.one_of)
        if kind is NodeKind.ARRAY:
            return self._array_type(node, context)
        if kind is NodeKind.REF:
            return self._ref_type(node)
        if kind in (NodeKind.PRIMITIVE, NodeKind.OBJECT):
            return self._base_type(node, context)

        raise UnknownTypeError(node.name, node.type)

    def _one_of_type(self, alternatives: tuple[SchemaNode, ...]) -> TypeResult:
        result = TypeResult()
        expressions = []
        for alternative in alternatives:
            alternative_result = self.type_of(alternative)
            result.dependencies.merge(alternative_result.dependencies)
            expressions.append(alternative_result.expression)

        result.expression = join_one_of_values(expressions)
        return result

    def _array_type(self, node: SchemaNode, context: TypeContext) -> TypeResult:
        item, depth = node.innermost_item()

        if item.ref:
            ref_name = get_object_name_by_ref(item.ref)
            if self.resolver.find_object(item.ref) is None:
                raise UnresolvedReferenceError(
                    item.ref, f"object for '{ref_name}' ref is not found"
                )

            result = TypeResult(
                expression=format_array_depth(get_interface_name(ref_name), depth)
            )
            result.dependencies.mark(ref_name, ReferenceMark.GENERATE_AND_IMPORT)
            return result

        item_result = self.type_of(
            item,
            dataclasses.replace(context, parent_name=node.parent_name),
        )
        item_result.expression = format_array_depth(item_result.expression, depth)
        return item_result

    def _ref_type(self, node: SchemaNode) -> TypeResult:
        ref_name = get_object_name_by_ref(node.ref)

        if ref_name in SENTINEL_EXPRESSIONS:
            return TypeResult(expression=SENTINEL_EXPRESSIONS[ref_name])

        target = self.resolver.find_object(node.ref)
        if target is None:
            raise UnresolvedReferenceError(
                node.ref, f"object for '{ref_name}' ref is not found"
            )

        if target.enum is None:
            if target.one_of:
                return self._one_of_type(target.one_of)

            if (
                isinstance(target.type, str)
                and target.type in SCALAR_TYPES
                and not target.ref
            ):
                return TypeResult(expression=SCALAR_TYPES[target.type])

        result = TypeResult(expression=get_interface_name(ref_name))
        result.dependencies.mark(ref_name, ReferenceMark.GENERATE_AND_IMPORT)
        return result

    def _base_type(self, node: SchemaNode, context: TypeContext) -> TypeResult:
        if node.enum is not None:
            return generate_inline_enum(
                node,
                parent_name=context.parent_name or node.parent_name,
                need_enum_names_constant=context.need_enum_names_constant,
            )

        if isinstance(node.type, tuple):
            return TypeResult(expression=self._primitive_types_union(node))

        primitive = PRIMITIVE_TYPES.get(node.type or 'object')
        if primitive is None:
            raise UnknownTypeError(node.name, node.type)
        return TypeResult(expression=primitive)

    def _primitive_types_union(self, node: SchemaNode) -> str:
        expressions = []
        for type_ in node.type:
            if type_ not in PRIMITIVE_TYPES:
                raise UnknownTypeError(node.name, type_)
            expressions.append(PRIMITIVE_TYPES[type_])
        return join_one_of_values(expressions)
