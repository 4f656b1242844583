"""schematypings - Generate TypeScript typings from a JSON-schema API description.

schematypings reads the methods, objects, responses and errors documents of
an API schema and writes one TypeScript module per shared object, one per
method section, the common modules and an ``index.ts`` re-exporting
everything.

Quick Start:
    >>> from schematypings import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(source='./vk-api-schema', output='./typings')
    >>> Codegen(config).generate()

CLI Usage:
    $ schematypings generate --schema-dir ./vk-api-schema --out-dir ./typings
    $ schematypings generate --config schematypings.yaml
"""

from importlib.metadata import PackageNotFoundError, version

from schematypings.codegen.codegen import Codegen
from schematypings.codegen.generator import (
    APITypingsGenerator,
    GenerationOutcome,
    run_generation,
)
from schematypings.codegen.schema_loader import APISchema, SchemaLoader
from schematypings.config import CodegenConfig, DocumentConfig, get_config
from schematypings.exceptions import (
    CodeGenerationError,
    ConfigurationError,
    EmptyResultError,
    MalformedNodeError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaTypingsError,
    SchemaValidationError,
    UnknownTypeError,
    UnresolvedReferenceError,
)

__all__ = [
    # Main classes
    'Codegen',
    'APITypingsGenerator',
    'GenerationOutcome',
    'run_generation',
    'SchemaLoader',
    'APISchema',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'SchemaTypingsError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'MalformedNodeError',
    'UnresolvedReferenceError',
    'CodeGenerationError',
    'UnknownTypeError',
    'EmptyResultError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = version('schematypings')
except PackageNotFoundError:
    __version__ = 'unknown'
