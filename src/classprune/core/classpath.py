"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/classpath.py
Turns configured classpath strings into filesystem paths.

Archives and missing entries stay on the classpath for byte resolution but are
not roots: only local directories are scanned for reference classes.
"""

import os
import logging
from pathlib import Path
from typing import List, Sequence, Union

from classprune.core.errors import ConfigurationError
from classprune.core.interfaces import ClasspathResolver
from classprune.core.models import ClasspathRoot

logger = logging.getLogger(__name__)


class ClasspathResolverImpl(ClasspathResolver):
    """Resolves classpath entries and filters them down to local class directories."""

    @staticmethod
    def to_path(entry: Union[str, os.PathLike]) -> Path:
        """
        Convert one configured entry to an absolute path.
        Raises ConfigurationError if the entry cannot be used as a filesystem path.
        """
        if not isinstance(entry, (str, os.PathLike)):
            raise ConfigurationError(f"Classpath entry is not a path: {entry!r}")

        raw = os.fspath(entry)
        if isinstance(raw, bytes) or not raw.strip():
            raise ConfigurationError(f"Classpath entry is not a usable path: {entry!r}")
        if "\x00" in raw:
            raise ConfigurationError(f"Classpath entry contains a NUL byte: {raw!r}")

        try:
            return Path(os.path.abspath(os.path.expanduser(raw)))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot convert classpath entry {raw!r}: {e}") from e

    def resolve_entries(self, paths: Sequence[Union[str, os.PathLike]]) -> List[Path]:
        return [self.to_path(entry) for entry in paths]

    def resolve_roots(self, paths: Sequence[Union[str, os.PathLike]]) -> List[ClasspathRoot]:
        roots = []
        for index, path in enumerate(self.resolve_entries(paths)):
            if path.is_dir():
                roots.append(ClasspathRoot(path=path, index=index))
            else:
                logger.debug(f"Not a local class directory, skipping for reference scan: {path}")

        logger.debug(f"Local classes: {[str(r) for r in roots]}")
        return roots
