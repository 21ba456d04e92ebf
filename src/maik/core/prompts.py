"""Step prompt templates loaded from a directory."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from maik.errors import PromptDirectoryNotFoundError, PromptFileNotFoundError


class PromptLibrary:
    """Read system prompt templates by file name from one directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, filename: str) -> Path:
        return self.directory / filename

    def validate(self, filenames: Iterable[str]) -> None:
        """Fail fast when the directory or any of the given templates is missing."""
        if not self.directory.is_dir():
            raise PromptDirectoryNotFoundError(self.directory)
        for filename in filenames:
            path = self.path_for(filename)
            if not path.is_file():
                raise PromptFileNotFoundError(path)

    def load(self, filename: str) -> str:
        path = self.path_for(filename)
        if not path.is_file():
            raise PromptFileNotFoundError(path)
        content = path.read_text(encoding="utf-8").strip()
        logger.debug("prompt.load path={} chars={}", path, len(content))
        return content
