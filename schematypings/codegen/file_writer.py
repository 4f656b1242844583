"""File writing utilities for generated TypeScript code."""

import logging
from collections.abc import Mapping
from pathlib import Path

from upath import UPath

from schematypings.exceptions import OutputError

logger = logging.getLogger(__name__)

__all__ = ['TypeScriptFileWriter']


class TypeScriptFileWriter:
    """Writes generated modules below an output directory.

    Example:
        >>> writer = TypeScriptFileWriter('./typings')
        >>> writer.prepare(clean=True)
        >>> writer.write_all({'index.ts': "export { API_VERSION } from './common/common';"})
    """

    def __init__(self, output: UPath | Path | str):
        self.output = UPath(output)

    def prepare(self, clean: bool = True) -> None:
        """Create the output directory, removing previous output when ``clean``.

        Raises:
            OutputError: If the directory cannot be cleared or created.
        """
        try:
            if clean and self.output.exists():
                logger.info(f'clearing {self.output}')
                self._remove_tree(self.output)
            self.output.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(str(self.output), cause=e)

    def write(self, relative_path: str, content: str) -> UPath:
        """Write a single module, creating its parent directories.

        Raises:
            OutputError: If the file cannot be written.
        """
        path = self.output / relative_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content if content.endswith('\n') else content + '\n', encoding='utf-8')
        except OSError as e:
            raise OutputError(str(path), cause=e)
        return path

    def write_all(self, files: Mapping[str, str]) -> list[UPath]:
        """Write every module in ``files`` (relative path -> source text)."""
        written = [self.write(relative_path, content) for relative_path, content in files.items()]
        logger.info(f'{len(written)} files written to {self.output}')
        return written

    def _remove_tree(self, directory: UPath) -> None:
        for child in directory.iterdir():
            if child.is_dir():
                self._remove_tree(child)
                child.rmdir()
            else:
                child.unlink()
