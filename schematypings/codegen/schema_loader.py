"""Schema loading utilities for API schema documents.

This module loads the four documents of an API schema (``methods.json``,
``objects.json``, ``responses.json`` and the optional ``errors.json``) from a
local directory or a base URL, in JSON or YAML.
"""

import dataclasses
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
import yaml

from schematypings.exceptions import SchemaLoadError, SchemaValidationError

logger = logging.getLogger(__name__)

__all__ = ['APISchema', 'SchemaLoader']

DOCUMENT_SUFFIXES = ('.json', '.yaml', '.yml')


@dataclasses.dataclass
class APISchema:
    """The loaded documents of an API schema.

    Attributes:
        methods: The methods document (``methods`` list and ``version``).
        objects: Shared object definitions keyed by name.
        responses: Response definitions keyed by name.
        errors: Error definitions keyed by name.
    """

    methods: dict[str, Any]
    objects: dict[str, Any]
    responses: dict[str, Any]
    errors: dict[str, Any] = dataclasses.field(default_factory=dict)


class SchemaLoader:
    """Loads API schema documents from a directory or a base URL.

    Example:
        >>> loader = SchemaLoader()
        >>> schema = loader.load('https://example.com/vk-api-schema/')
        >>> # or
        >>> schema = loader.load('./vk-api-schema')
        >>> schema.objects['users_user_full']
    """

    def __init__(self, http_client: httpx.Client | None = None):
        """Initialize the schema loader.

        Args:
            http_client: Optional HTTP client to use for URL requests.
                        If not provided, a default client will be created.
        """
        self._http_client = http_client

    def load(self, source: str) -> APISchema:
        """Load every document of the schema found at ``source``.

        The errors document is optional. A missing or empty one loads as no
        errors.

        Args:
            source: Directory path or base URL holding the documents.

        Returns:
            The loaded schema.

        Raises:
            SchemaLoadError: If a required document cannot be loaded.
            SchemaValidationError: If a document does not have the expected shape.
        """
        methods = self.load_document(source, 'methods')
        objects = self.load_document(source, 'objects')
        responses = self.load_document(source, 'responses')

        try:
            errors = self.load_document(source, 'errors', allow_empty=True)
        except SchemaLoadError as e:
            logger.info(f'errors document is not loaded: {e}')
            errors = {}

        if not isinstance(methods.get('methods'), list):
            raise SchemaValidationError(
                self._location(source, 'methods'), ['"methods" must be a list']
            )

        return APISchema(
            methods=methods,
            objects=self._definitions(source, 'objects', objects, 'definitions'),
            responses=self._definitions(source, 'responses', responses, 'definitions'),
            errors=self._definitions(source, 'errors', errors, 'errors') if errors else {},
        )

    def load_document(
        self, source: str, name: str, allow_empty: bool = False
    ) -> dict[str, Any]:
        """Load a single document, trying each known suffix in turn.

        An empty document yields an empty dict when ``allow_empty`` is set.

        Raises:
            SchemaLoadError: If the document cannot be read or parsed.
            SchemaValidationError: If the document is empty or not an object.
        """
        if self._is_url(source):
            location = self._location(source, name)
            content = self._load_from_url(location)
        else:
            location = self._find_file(source, name)
            content = self._load_from_file(location)

        if not content and allow_empty:
            return {}
        if not content:
            raise SchemaValidationError(location, ['document is empty'])
        if not isinstance(content, Mapping):
            raise SchemaValidationError(location, ['document is not an object'])

        logger.debug(f'loaded {location}')
        return dict(content)

    def _definitions(
        self, source: str, name: str, document: Mapping[str, Any], key: str
    ) -> dict[str, Any]:
        definitions = document.get(key, document)
        if not isinstance(definitions, Mapping):
            raise SchemaValidationError(
                self._location(source, name), [f'"{key}" must be an object']
            )
        return dict(definitions)

    def _is_url(self, text: str) -> bool:
        """Check if a string is a URL."""
        try:
            result = urlparse(text)
            return result.scheme in ('http', 'https')
        except ValueError:
            return False

    def _location(self, source: str, name: str) -> str:
        if self._is_url(source):
            return f'{source.rstrip("/")}/{name}.json'
        return str(Path(source) / f'{name}.json')

    def _find_file(self, source: str, name: str) -> str:
        directory = Path(source)
        for suffix in DOCUMENT_SUFFIXES:
            path = directory / f'{name}{suffix}'
            if path.exists():
                return str(path)

        raise SchemaLoadError(
            self._location(source, name),
            cause=FileNotFoundError(f'File not found: {directory / name}.json'),
        )

    def _load_from_url(self, url: str) -> Any:
        """Load document content from a URL."""
        try:
            if self._http_client:
                response = self._http_client.get(url)
            else:
                response = httpx.get(url, follow_redirects=True, timeout=30.0)

            response.raise_for_status()
            content_type = response.headers.get('content-type', '')
            content = response.text

            if 'yaml' in content_type or url.endswith(('.yaml', '.yml')):
                return yaml.safe_load(content)
            return json.loads(content)

        except httpx.HTTPError as e:
            raise SchemaLoadError(url, cause=e)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(url, cause=e)

    def _load_from_file(self, file_path: str) -> Any:
        """Load document content from a file."""
        path = Path(file_path)
        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                return yaml.safe_load(content)
            return json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(file_path, cause=e)
        except OSError as e:
            raise SchemaLoadError(file_path, cause=e)
