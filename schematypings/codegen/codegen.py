"""Code generation module for schematypings.

This module provides the main Codegen class that loads an API schema, runs
the declaration generator over it and writes the resulting TypeScript modules.
"""

import logging

from schematypings.codegen.file_writer import TypeScriptFileWriter
from schematypings.codegen.generator import APITypingsGenerator, GenerationOutcome
from schematypings.codegen.schema_loader import APISchema, SchemaLoader
from schematypings.config import DocumentConfig

logger = logging.getLogger(__name__)

__all__ = ['Codegen']


class Codegen:
    """Generates TypeScript typings for one configured API schema.

    Attributes:
        config: The DocumentConfig containing source and output settings.
        schema: The loaded API schema (populated after _load_schema).

    Example:
        >>> from schematypings.config import DocumentConfig
        >>> from schematypings.codegen.codegen import Codegen
        >>>
        >>> config = DocumentConfig(source='./vk-api-schema', output='./typings')
        >>> codegen = Codegen(config)
        >>> codegen.generate()
        # Creates objects/, methods/, common/ and index.ts in ./typings/
    """

    def __init__(
        self, config: DocumentConfig, schema_loader: SchemaLoader | None = None
    ):
        """Initialize the code generator.

        Args:
            config: Configuration specifying source schema and output location.
            schema_loader: Optional custom schema loader. If not provided,
                          a default SchemaLoader will be created.
        """
        self.config = config
        self.schema: APISchema | None = None
        self._schema_loader = schema_loader or SchemaLoader()

    def _load_schema(self) -> None:
        """Load the schema documents from the configured source.

        Raises:
            SchemaLoadError: If a document cannot be loaded.
            SchemaValidationError: If a document has an unexpected shape.
        """
        self.schema = self._schema_loader.load(self.config.source)

    def build(self) -> GenerationOutcome:
        """Generate the typings in memory without writing anything.

        Raises:
            SchemaTypingsError: If loading or generation fails.
        """
        self._load_schema()
        assert self.schema is not None

        generator = APITypingsGenerator(
            objects=self.schema.objects,
            responses=self.schema.responses,
            methods_definitions=self.schema.methods,
            errors=self.schema.errors,
            methods_pattern=self.config.methods,
            ignored_responses=self.config.ignored_responses,
            standalone_enums=self.config.standalone_enums,
            api_version=self.config.api_version,
        )
        return generator.generate()

    def generate(self) -> list[str]:
        """Generate the typings and write them to the output directory.

        Returns:
            The written paths, relative to the output directory.

        Raises:
            SchemaTypingsError: If loading, generation or writing fails.
        """
        outcome = self.build()

        writer = TypeScriptFileWriter(self.config.output)
        writer.prepare(clean=self.config.clean_output)
        writer.write_all(outcome.files)

        logger.info(
            f'{sum(len(names) for names in outcome.sections.values())} objects '
            f'in {len(outcome.sections)} sections written to {self.config.output}'
        )
        return sorted(outcome.files)
