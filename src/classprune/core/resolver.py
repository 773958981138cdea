"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Combined class byte lookup across the ordered classpath.

A binary name is looked up in every classpath entry in order and the first
entry that has it wins, the way a class loader built over the same classpath
would resolve it. Only bytes are read; nothing is loaded.
"""

import logging
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from classprune.core.interfaces import ClassBytesResolver
from classprune.core.models import CLASS_SUFFIX

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIXES = (".jar", ".zip")


def resource_name(binary_name: str) -> str:
    """org.apache.cassandra.Klass -> org/apache/cassandra/Klass.class"""
    return binary_name.replace(".", "/") + CLASS_SUFFIX


class ClasspathBytesResolver(ClassBytesResolver):
    """
    Reads class bytes from directories and archives on the classpath.

    Archives are opened on first use and stay open until ``close()``.
    Use as a context manager so handles are released on every exit path:

        with ClasspathBytesResolver(entries) as resolver:
            data = resolver.read("org.apache.cassandra.Klass")
    """

    def __init__(self, entries: Sequence[Path]):
        self.entries: List[Path] = [Path(e) for e in entries]
        self._archives: Dict[Path, Optional[zipfile.ZipFile]] = {}
        self.closed = False

    def __enter__(self) -> "ClasspathBytesResolver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def read(self, binary_name: str) -> Optional[bytes]:
        """
        Returns the bytes of the first matching class, or None if no entry has it.
        OSError from a matching entry propagates to the caller.
        """
        return self.read_resource(resource_name(binary_name))

    def read_resource(self, name: str) -> Optional[bytes]:
        """
        Same lookup by '/'-separated resource path, e.g. ``a.b/C.class``.
        Directory names containing dots cannot be expressed as a binary name.
        """
        if self.closed:
            raise RuntimeError("Resolver is closed")

        for entry in self.entries:
            if entry.is_dir():
                candidate = entry.joinpath(*name.split("/"))
                if candidate.is_file():
                    return candidate.read_bytes()
            elif entry.suffix.lower() in ARCHIVE_SUFFIXES:
                archive = self._open_archive(entry)
                if archive is None:
                    continue
                try:
                    return archive.read(name)
                except KeyError:
                    continue
        return None

    def _open_archive(self, path: Path) -> Optional[zipfile.ZipFile]:
        if path in self._archives:
            return self._archives[path]

        archive = None
        if path.is_file():
            try:
                archive = zipfile.ZipFile(path)
            except (zipfile.BadZipFile, OSError) as e:
                logger.debug(f"Ignoring unreadable archive on classpath {path}: {e}")
        self._archives[path] = archive
        return archive

    def close(self) -> None:
        for path, archive in self._archives.items():
            if archive is not None:
                try:
                    archive.close()
                except OSError as e:
                    logger.debug(f"Failed to close archive {path}: {e}")
        self._archives.clear()
        self.closed = True
