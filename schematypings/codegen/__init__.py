"""Declaration generation for API schemas.

This package turns the object, response and method schemas of an API into
TypeScript declarations:

* ``nodes`` - the parsed schema node model,
* ``resolver`` - ``$ref`` lookup and ``allOf`` flattening,
* ``types`` and ``enums`` - type expressions and enum declarations,
* ``graph`` - dependency marks and import statements,
* ``blocks`` - rendering of declarations,
* ``generator`` - the whole-schema driver.
"""

from schematypings.codegen.blocks import (
    CommentCodeBlock,
    DeclarationType,
    Property,
    TypeCodeBlock,
)
from schematypings.codegen.generator import (
    APITypingsGenerator,
    GenerationContext,
    GenerationOutcome,
    run_generation,
)
from schematypings.codegen.graph import (
    DependencyGraph,
    OutputKind,
    ReferenceMark,
    build_import_statements,
)
from schematypings.codegen.nodes import NodeKind, SchemaNode
from schematypings.codegen.resolver import SchemaResolver
from schematypings.codegen.result import TypeContext, TypeResult
from schematypings.codegen.types import TypeGenerator

__all__ = [
    'APITypingsGenerator',
    'CommentCodeBlock',
    'DeclarationType',
    'DependencyGraph',
    'GenerationContext',
    'GenerationOutcome',
    'NodeKind',
    'OutputKind',
    'Property',
    'ReferenceMark',
    'SchemaNode',
    'SchemaResolver',
    'TypeCodeBlock',
    'TypeContext',
    'TypeGenerator',
    'TypeResult',
    'build_import_statements',
    'run_generation',
]
