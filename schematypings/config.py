import json
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schematypings.codegen.constants import DEFAULT_IGNORED_RESPONSES
from schematypings.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['schematypings.yaml', 'schematypings.yml', 'schematypings.json']


class DocumentConfig(BaseModel):
    """Represents a single API schema to be processed."""

    source: str = Field(
        ...,
        description='Directory or base URL holding methods.json, objects.json, '
        'responses.json and optionally errors.json.',
    )

    output: str = Field(..., description='Output directory for the generated typings.')

    methods: list[str] = Field(
        default_factory=lambda: ['*'],
        description='Methods to generate: "*", "section.*" or exact method names.',
    )

    ignored_responses: dict[str, list[str]] = Field(
        default_factory=lambda: {
            method: list(slots) for method, slots in DEFAULT_IGNORED_RESPONSES.items()
        },
        description='Response slots to skip, keyed by method name.',
    )

    api_version: str | None = Field(
        None, description='Overrides the API version declared by the methods document.'
    )

    standalone_enums: bool = Field(
        False, description='Declare top-level enum objects as TypeScript enums.'
    )

    clean_output: bool = Field(
        True, description='Remove previous output before writing.'
    )

    @field_validator('methods', mode='before')
    @classmethod
    def _split_methods(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in value.split(',') if part.strip()]
        return value


class CodegenConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='SCHEMATYPINGS_')

    documents: list[DocumentConfig] = Field(
        ..., description='List of API schemas to process.'
    )


def load_yaml(path: str | Path) -> dict:
    return yaml.safe_load(Path(path).read_text())


def load_file(path: str | Path) -> dict:
    path = Path(path)
    if path.suffix.lower() == '.json':
        return json.loads(path.read_text())
    return load_yaml(path)


def _validate(data: dict, source: str) -> CodegenConfig:
    try:
        return CodegenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f'Invalid configuration: {e}', config_path=source)


def _parse(path: str | Path) -> dict:
    try:
        return load_file(path)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f'Cannot parse configuration: {e}', config_path=str(path)
        )


def get_config(path: str | None = None) -> CodegenConfig:
    """Load configuration from a file, the working directory or pyproject.toml.

    Raises:
        ConfigurationError: If no configuration is found or it is invalid.
    """
    if path:
        if not Path(path).exists():
            raise ConfigurationError('Configuration file not found', config_path=path)
        return _validate(_parse(path), path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        path = Path(cwd) / filename
        if path.exists():
            return _validate(_parse(path), str(path))

    path = Path(cwd) / 'pyproject.toml'

    if path.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(path.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f'Cannot parse configuration: {e}', config_path=str(path)
            )
        tools = pyproject.get('tool', {})

        if 'schematypings' in tools:
            return _validate(tools['schematypings'], str(path))

    raise ConfigurationError('Configuration not found', config_path=cwd)
