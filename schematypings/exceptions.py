"""Custom exceptions for schematypings.

This module defines a hierarchy of exceptions used throughout the library to
provide clear, actionable error messages for different failure scenarios.

The four generation errors (``MalformedNodeError``, ``UnresolvedReferenceError``,
``UnknownTypeError`` and ``EmptyResultError``) are fatal for a generation run:
once one of them is raised no output is produced for that run.
"""


class SchemaTypingsError(Exception):
    """Base exception for all schematypings errors.

    All exceptions raised by the library inherit from this class, making it
    easy to catch every schematypings-related error with a single except clause.

    Example:
        try:
            codegen.generate()
        except SchemaTypingsError as e:
            print(f"schematypings error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class SchemaError(SchemaTypingsError):
    """Base exception for schema-related errors."""

    pass


class SchemaLoadError(SchemaError):
    """Failed to load a schema document from a source.

    Attributes:
        source: The source path or URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to load schema from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class SchemaValidationError(SchemaError):
    """A loaded schema document does not have the expected shape.

    Attributes:
        source: The source path or URL of the invalid document.
        errors: List of validation error messages.
    """

    def __init__(self, source: str, errors: list[str] | None = None):
        self.source = source
        self.errors = errors or []
        message = f"Schema validation failed for '{source}'"
        if errors:
            message += f': {"; ".join(errors)}'
        super().__init__(message)


class MalformedNodeError(SchemaError):
    """A schema fragment is not a key-value mapping.

    Attributes:
        name: The name of the node being parsed.
        parent_name: The naming scope of the node, if any.
    """

    def __init__(self, name: str, parent_name: str | None = None):
        self.name = name
        self.parent_name = parent_name
        message = f"Schema fragment '{name}' is not an object"
        if parent_name:
            message += f" (in '{parent_name}')"
        super().__init__(message)


class UnresolvedReferenceError(SchemaError):
    """A ``$ref`` target is missing from both the objects and responses dictionaries.

    This is usually a typo in the schema or a genuinely undocumented field.

    Attributes:
        reference: The ``$ref`` string that could not be resolved.
        reason: Explanation of why the reference couldn't be resolved.
    """

    def __init__(self, reference: str, reason: str | None = None):
        self.reference = reference
        self.reason = reason
        message = f"Failed to resolve reference '{reference}'"
        if reason:
            message += f': {reason}'
        super().__init__(message)


class CodeGenerationError(SchemaTypingsError):
    """Error during code generation.

    Attributes:
        context: Additional context about what was being generated.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self, message: str, context: str | None = None, cause: Exception | None = None
    ):
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f'{message} (while generating {context})'
        if cause:
            full_message += f': {cause}'
        super().__init__(full_message)


class UnknownTypeError(CodeGenerationError):
    """A node cannot be classified into any generation rule.

    Attributes:
        node_name: The name of the offending node.
        node_type: The declared ``type`` of the node, if any.
    """

    def __init__(self, node_name: str, node_type: object = None):
        self.node_name = node_name
        self.node_type = node_type
        message = f"Unknown type of '{node_name}'"
        if node_type is not None:
            message += f': "{node_type}" is not a declared type'
        super().__init__(message, context=node_name)


class EmptyResultError(CodeGenerationError):
    """A declaration ended up with no content.

    Attributes:
        declaration: The name of the empty declaration.
    """

    def __init__(self, declaration: str, reason: str | None = None):
        self.declaration = declaration
        self.reason = reason
        message = f"'{declaration}' has an empty result"
        if reason:
            message += f' ({reason})'
        super().__init__(message)


class ConfigurationError(SchemaTypingsError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class OutputError(SchemaTypingsError):
    """Error writing generated output.

    Attributes:
        output_path: The path where output was being written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)
