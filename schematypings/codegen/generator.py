"""Declaration generation for a whole API schema.

This module provides the APITypingsGenerator, which walks the requested
methods, types their parameters and responses, discovers every object those
declarations depend on and partitions the result into output modules:

* ``objects/<section>/<Name>.ts`` - one module per object,
* ``methods/<section>.ts`` - params and responses of every method in a section,
* ``common/errors.ts`` and ``common/common.ts``,
* ``index.ts`` - re-exports of every generated name.

All state of a run lives in a :class:`GenerationContext`, so a generator can
be run any number of times and every run starts from scratch.
"""

import collections
import dataclasses
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from schematypings.codegen.blocks import (
    CodeBlock,
    CommentCodeBlock,
    DeclarationType,
    Property,
    TypeCodeBlock,
    render_blocks,
)
from schematypings.codegen.constants import (
    BASE_API_PARAMS_INTERFACE_NAME,
    DEFAULT_API_VERSION,
    DEFAULT_IGNORED_RESPONSES,
    NEW_LINE,
    SENTINEL_EXPRESSIONS,
)
from schematypings.codegen.enums import (
    generate_enum_as_union_type,
    generate_standalone_enum,
)
from schematypings.codegen.graph import (
    DependencyGraph,
    OutputKind,
    build_import_statements,
    partition,
)
from schematypings.codegen.methods import normalize_method_info
from schematypings.codegen.nodes import NodeKind, SchemaNode, parse_dictionary
from schematypings.codegen.resolver import SchemaResolver
from schematypings.codegen.result import TypeContext, TypeResult
from schematypings.codegen.types import TypeGenerator
from schematypings.codegen.utils import (
    get_interface_name,
    get_method_section,
    get_object_name_by_ref,
    get_section_from_object_name,
    is_method_needed,
    is_pattern_property,
    prepare_methods_pattern,
)
from schematypings.exceptions import (
    EmptyResultError,
    MalformedNodeError,
    SchemaTypingsError,
    UnknownTypeError,
)

logger = logging.getLogger(__name__)

__all__ = [
    'APITypingsGenerator',
    'GenerationContext',
    'GenerationOutcome',
    'run_generation',
]


def _join_description(*parts: str) -> str:
    return NEW_LINE.join(part for part in parts if part)


@dataclasses.dataclass
class SectionFile:
    dependencies: DependencyGraph = dataclasses.field(default_factory=DependencyGraph)
    blocks: list[CodeBlock] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class GenerationContext:
    """Mutable state of a single generation run.

    Attributes:
        generated_objects: Object names already generated, only ever grows.
        method_files: Accumulated methods modules, keyed by section.
        exports: Exported declaration names, keyed by module path.
        result_files: Rendered sources, keyed by output path.
    """

    generated_objects: set[str] = dataclasses.field(default_factory=set)
    method_files: dict[str, SectionFile] = dataclasses.field(default_factory=dict)
    exports: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    result_files: dict[str, str] = dataclasses.field(default_factory=dict)

    def register_export(self, path: str, name: str) -> None:
        names = self.exports.setdefault(path, [])
        if name not in names:
            names.append(name)

    def register_result_file(self, path: str, content: str) -> None:
        self.result_files[path] = content

    def append_to_file_map(
        self, section: str, dependencies: DependencyGraph, blocks: Iterable[CodeBlock]
    ) -> None:
        method_file = self.method_files.setdefault(section, SectionFile())
        method_file.dependencies.merge(dependencies)
        method_file.blocks.extend(blocks)


@dataclasses.dataclass
class GenerationOutcome:
    """Result of a generation run: the rendered files, or the fatal error.

    Attributes:
        files: Output path -> generated source text.
        exports: Output module path -> exported declaration names.
        sections: Section -> generated object names.
        error: The error that aborted the run, None on success.
    """

    files: dict[str, str] = dataclasses.field(default_factory=dict)
    exports: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    sections: dict[str, list[str]] = dataclasses.field(default_factory=dict)
    error: SchemaTypingsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: SchemaTypingsError) -> 'GenerationOutcome':
        return cls(error=error)


class APITypingsGenerator:
    """Generates TypeScript declarations for the requested API methods.

    Example:
        >>> generator = APITypingsGenerator(
        ...     objects=objects_json['definitions'],
        ...     responses=responses_json['definitions'],
        ...     methods_definitions=methods_json,
        ...     errors=errors_json['errors'],
        ...     methods_pattern='messages.*, users.get',
        ... )
        >>> outcome = generator.generate()
        >>> outcome.files['methods/users.ts']
    """

    def __init__(
        self,
        objects: Mapping[str, Any],
        responses: Mapping[str, Any],
        methods_definitions: Mapping[str, Any] | list[Mapping[str, Any]],
        errors: Mapping[str, Any] | list[Mapping[str, Any]] | None = None,
        methods_pattern: str | Iterable[str] = '*',
        ignored_responses: Mapping[str, Iterable[str]] | None = None,
        standalone_enums: bool = False,
        api_version: str | None = None,
    ):
        """Parse the input dictionaries into schema nodes.

        Args:
            objects: Shared object schemas keyed by name.
            responses: Response schemas keyed by name.
            methods_definitions: The methods document (``methods`` list and an
                optional ``version``) or the bare list of methods.
            errors: Error definitions keyed by name, or a list of definitions
                with a ``name`` field.
            methods_pattern: Methods to generate, e.g. ``'messages.*, users.get'``.
            ignored_responses: Method name -> response slots to skip.
            standalone_enums: Declare top-level enum objects as ``enum``
                instead of literal-union type aliases.
            api_version: Overrides the version from the methods document.

        Raises:
            MalformedNodeError: If a schema fragment is not a mapping.
        """
        if isinstance(methods_definitions, Mapping):
            self.methods_list = list(methods_definitions.get('methods') or [])
            document_version = methods_definitions.get('version')
        else:
            self.methods_list = list(methods_definitions)
            document_version = None

        self.api_version = api_version or document_version or DEFAULT_API_VERSION
        self.methods_pattern = prepare_methods_pattern(methods_pattern)
        self.errors = self._normalize_errors(errors or {})
        self.ignored_responses = {
            method: set(slots)
            for method, slots in (
                DEFAULT_IGNORED_RESPONSES
                if ignored_responses is None
                else ignored_responses
            ).items()
        }
        self.standalone_enums = standalone_enums

        self.objects = parse_dictionary(objects)
        self.responses = parse_dictionary(responses)
        self.resolver = SchemaResolver(self.objects, self.responses)
        self.typegen = TypeGenerator(self.resolver)

    @staticmethod
    def _normalize_errors(
        errors: Mapping[str, Any] | list[Mapping[str, Any]],
    ) -> dict[str, Mapping[str, Any]]:
        if isinstance(errors, Mapping):
            items = list(errors.items())
        else:
            items = [
                (error.get('name'), error) if isinstance(error, Mapping) else (None, error)
                for error in errors
            ]

        normalized = {}
        for name, error in items:
            if (
                not name
                or not isinstance(error, Mapping)
                or not isinstance(error.get('code'), int)
            ):
                raise MalformedNodeError(str(name or 'error'), 'errors')
            normalized[name] = error
        return normalized

    def generate(self) -> GenerationOutcome:
        """Run the generation.

        Returns:
            The generated files and exports.

        Raises:
            UnresolvedReferenceError: If a ``$ref`` target does not exist.
            UnknownTypeError: If a node cannot be typed.
            EmptyResultError: If a declaration has no content.
            MalformedNodeError: If a method fragment is not a mapping.
        """
        logger.info('generate')
        context = GenerationContext()

        self._generate_methods(context)
        self._generate_errors(context)
        self._create_common_types(context)
        self._create_index_exports(context)

        return GenerationOutcome(
            files=dict(context.result_files),
            exports={path: list(names) for path, names in context.exports.items()},
            sections=partition(sorted(context.generated_objects)),
        )

    # Objects

    def _discover_transitively(
        self, context: GenerationContext, dependencies: DependencyGraph
    ) -> None:
        """Generate every dependency not generated yet, and their dependencies."""
        pending = collections.deque(
            name for name in dependencies if name not in context.generated_objects
        )

        while pending:
            name = pending.popleft()
            if name in context.generated_objects:
                continue

            node = self.resolver.find_object(name)
            if node is None:
                logger.info(f'"{name}" ref is not found')
                continue

            new_dependencies = self._generate_object(context, node)
            pending.extend(
                dependency
                for dependency in new_dependencies
                if dependency not in context.generated_objects
            )

    def _generate_object(
        self, context: GenerationContext, node: SchemaNode
    ) -> DependencyGraph:
        context.generated_objects.add(node.name)

        kind = node.kind
        if kind in (NodeKind.OBJECT, NodeKind.ALL_OF):
            result = self._object_interface(node)
        elif kind in (
            NodeKind.REF,
            NodeKind.PRIMITIVE,
            NodeKind.ARRAY,
            NodeKind.ONE_OF,
        ):
            result = self._object_as_type(node)
        else:
            raise UnknownTypeError(node.name, node.type)

        if not result.declarations:
            raise EmptyResultError(node.name, 'object produced no declarations')

        dependencies = result.dependencies.copy()
        dependencies.discard(node.name)

        section = get_section_from_object_name(node.name)
        interface_name = get_interface_name(node.name)
        imports = build_import_statements(dependencies, section, OutputKind.OBJECT)

        context.register_result_file(
            f'objects/{section}/{interface_name}.ts',
            render_blocks(result.declarations, imports),
        )

        for block in result.declarations:
            if isinstance(block, TypeCodeBlock) and block.need_export:
                context.register_export(
                    f'./objects/{section}/{interface_name}', block.interface_name
                )

        return dependencies

    def _object_interface(self, node: SchemaNode) -> TypeResult:
        if node.one_of:
            return self._object_as_type(node)

        merged = self.resolver.merge_properties(node)
        result = TypeResult()

        block = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name=get_interface_name(node.name),
            ref_name=node.name,
            description=node.description,
        )

        for property_ in merged.properties:
            property_result = self.typegen.type_of(
                property_, TypeContext(parent_name=node.name)
            )
            result.absorb(property_result)

            block.add_property(
                Property(
                    name=property_.name,
                    value=property_result.expression,
                    description=_join_description(
                        property_.description, property_result.description
                    ),
                    is_required=is_pattern_property(property_.name)
                    or property_.is_required
                    or merged.is_property_required(property_.name),
                )
            )

        result.declarations.append(block)
        return result

    def _object_as_type(self, node: SchemaNode) -> TypeResult:
        if node.enum is not None:
            if self.standalone_enums:
                standalone = generate_standalone_enum(node)
                if standalone.declarations:
                    return standalone
            return generate_enum_as_union_type(node)

        type_result = self.typegen.type_of(node)
        alias = TypeCodeBlock(
            type=DeclarationType.TYPE,
            interface_name=get_interface_name(node.name),
            ref_name=node.name,
            description=_join_description(node.description, type_result.description),
            value=type_result.expression,
        )
        return TypeResult(
            dependencies=type_result.dependencies,
            declarations=[*type_result.declarations, alias],
        )

    # Methods

    def _generate_methods(self, context: GenerationContext) -> None:
        logger.info('creating method params and responses...')

        for method in self.methods_list:
            if not isinstance(method, Mapping) or not isinstance(
                method.get('name'), str
            ):
                raise MalformedNodeError('method', 'methods')

            if is_method_needed(self.methods_pattern, method['name']):
                self._generate_method_params_and_responses(context, method)

        for section, method_file in context.method_files.items():
            for block in method_file.blocks:
                if isinstance(block, TypeCodeBlock) and block.need_export:
                    context.register_export(f'./methods/{section}', block.interface_name)

            imports = build_import_statements(
                method_file.dependencies, None, OutputKind.METHODS
            )
            context.register_result_file(
                f'methods/{section}.ts', render_blocks(method_file.blocks, imports)
            )

    def _generate_method_params_and_responses(
        self, context: GenerationContext, method: Mapping[str, Any]
    ) -> None:
        method_name = method['name']
        section = get_method_section(method_name)

        responses = method.get('responses')
        if not isinstance(responses, Mapping):
            raise MalformedNodeError(f'{method_name} responses', method_name)
        if not responses:
            raise EmptyResultError(method_name, '"responses" field is empty')

        # visual section of the method in the methods module
        comment = CommentCodeBlock([method_name])
        if method.get('description'):
            comment.append_lines(['', method['description']])
        context.append_to_file_map(section, DependencyGraph(), [comment])

        normalized, parameter_refs = normalize_method_info(method)
        self._discover_transitively(context, parameter_refs)

        self._generate_method_params(context, SchemaNode.parse(normalized, method_name))

        ignored = self.ignored_responses.get(method_name, set())
        for response_name, response in normalized['responses'].items():
            if response_name in ignored:
                logger.info(f'"{method_name}" response "{response_name}" is ignored')
                continue

            self._generate_response(
                context,
                section,
                SchemaNode.parse(response, f'{method_name}_{response_name}'),
            )

    def _generate_method_params(
        self, context: GenerationContext, method_node: SchemaNode
    ) -> None:
        section = get_method_section(method_node.name)
        dependencies = DependencyGraph()
        declarations: list[CodeBlock] = []

        block = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name=get_interface_name(f'{method_node.name} params'),
            allow_empty_interface=True,
        )

        for parameter in method_node.parameters:
            parameter_result = self.typegen.type_of(
                parameter, TypeContext(need_enum_names_constant=False)
            )
            dependencies.merge(parameter_result.dependencies)
            declarations.extend(parameter_result.declarations)

            block.add_property(
                Property(
                    name=parameter.name,
                    value=parameter_result.expression,
                    description=_join_description(
                        parameter.description, parameter_result.description
                    ),
                    is_required=parameter.is_required,
                )
            )

        context.append_to_file_map(section, dependencies, [*declarations, block])
        self._discover_transitively(context, dependencies)

    def _generate_response(
        self, context: GenerationContext, section: str, response: SchemaNode
    ) -> None:
        result = self._response_code_blocks(response)
        if result is None:
            return

        context.append_to_file_map(section, result.dependencies, result.declarations)
        self._discover_transitively(context, result.dependencies)

    def _response_code_blocks(self, node: SchemaNode) -> TypeResult | None:
        if not node.ref:
            logger.info(f'response schema object "{node.name}" has no ref')
            return None

        if get_object_name_by_ref(node.ref) in SENTINEL_EXPRESSIONS:
            return self._object_as_type(node)

        response = self.resolver.resolve_response_ref(node.ref)

        # a single "response" property wraps the actual payload
        if len(response.properties) == 1 and response.properties[0].name == 'response':
            response = response.properties[0]

        if response.ref:
            return self._response_as_type(node, response)

        response = response.renamed(node.name)

        kind = response.kind
        if kind in (NodeKind.OBJECT, NodeKind.ALL_OF):
            return self._object_interface(response)
        if kind in (NodeKind.PRIMITIVE, NodeKind.ARRAY, NodeKind.ONE_OF):
            return self._object_as_type(response)

        raise UnknownTypeError(response.name, response.type)

    def _response_as_type(self, node: SchemaNode, response: SchemaNode) -> TypeResult:
        type_result = self.typegen.type_of(response, TypeContext(parent_name=node.name))

        alias = TypeCodeBlock(
            type=DeclarationType.TYPE,
            interface_name=get_interface_name(node.name),
            ref_name=node.name,
            description=_join_description(node.description, type_result.description),
            value=type_result.expression,
        )
        return TypeResult(
            dependencies=type_result.dependencies,
            declarations=[*type_result.declarations, alias],
            description=type_result.description,
        )

    # Common modules

    def _generate_errors(self, context: GenerationContext) -> None:
        logger.info('creating errors...')

        blocks: list[CodeBlock] = []
        for name, error in sorted(self.errors.items(), key=lambda item: item[1]['code']):
            constant_name = name.upper()
            blocks.append(
                TypeCodeBlock(
                    type=DeclarationType.CONST,
                    interface_name=constant_name,
                    value=str(error['code']),
                    description=(NEW_LINE * 2).join(
                        part
                        for part in (error.get('description'), error.get('$comment'))
                        if part
                    ),
                )
            )
            context.register_export('./common/errors', constant_name)

        if blocks:
            context.register_result_file('common/errors.ts', render_blocks(blocks))

    def _create_common_types(self, context: GenerationContext) -> None:
        logger.info('creating common types...')

        params_interface_name = get_interface_name(BASE_API_PARAMS_INTERFACE_NAME)
        base_params = TypeCodeBlock(
            type=DeclarationType.INTERFACE,
            interface_name=params_interface_name,
            properties=[
                Property(name='v', value='string', is_required=True),
                Property(name='access_token', value='string', is_required=True),
                Property(name='lang', value='number'),
                Property(name='device_id', value='string'),
            ],
        )

        code = [
            f"export const API_VERSION = '{self.api_version}';",
            'export type ValueOf<T> = T[keyof T];',
            base_params.to_string(),
        ]

        context.register_export('./common/common', 'API_VERSION')
        context.register_export('./common/common', params_interface_name)
        context.register_result_file('common/common.ts', (NEW_LINE * 2).join(code))

    def _create_index_exports(self, context: GenerationContext) -> None:
        """Create ``index.ts`` re-exporting every generated name exactly once."""
        logger.info('creating index.ts exports...')

        blocks = []
        exported: set[str] = set()

        for path in sorted(context.exports):
            names = [name for name in sorted(context.exports[path]) if name not in exported]
            if not names:
                continue
            exported.update(names)

            lines = ['export {', *(f'  {name},' for name in names), f"}} from '{path}';"]
            blocks.append(NEW_LINE.join(lines))

        context.register_result_file('index.ts', (NEW_LINE * 2).join(blocks))
        logger.info(f'{len(exported)} objects successfully generated')


def run_generation(**kwargs: Any) -> GenerationOutcome:
    """Build a generator and run it, returning fatal errors as a failed outcome.

    Accepts the keyword arguments of :class:`APITypingsGenerator`.
    """
    try:
        return APITypingsGenerator(**kwargs).generate()
    except SchemaTypingsError as e:
        logger.error(f'generation failed: {e}')
        return GenerationOutcome.failure(e)
