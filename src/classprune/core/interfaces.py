"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the pruning pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so
that the build-step adapter, the CLI and the tests can swap implementations.

Key Components:
---------------
- ClassIdAlgorithm: class bytes -> 64-bit class id.
- ClassBytesResolver: binary class name -> class bytes across the ordered classpath.
- ClasspathResolver: configured path strings -> local class directories.
- ReferenceSetBuilder: local class directories -> set of class keys to keep.
- ClassdumpReconciler: moves every unreferenced dump file into the exclusion tree.
"""

from pathlib import Path
from typing import Protocol, List, Optional, Callable, Sequence, Union
from classprune.core.models import ClasspathRoot, ReferenceSet, PruningStats


PathLike = Union[str, Path]
ProgressCallback = Callable[[str, int, Optional[int]], None]


class ClassIdAlgorithm(Protocol):
    """Interface for class identity functions."""

    @staticmethod
    def class_id(data: bytes) -> int:
        """Computes the unsigned 64-bit id of the provided class bytes."""
        ...


class ClassBytesResolver(Protocol):
    """
    Reads class content by binary name, consulting classpath entries in order.
    Never loads or executes the class.
    """
    def read(self, binary_name: str) -> Optional[bytes]: ...
    def read_resource(self, name: str) -> Optional[bytes]: ...
    def close(self) -> None: ...


class ClasspathResolver(Protocol):
    def resolve_entries(self, paths: Sequence[PathLike]) -> List[Path]:
        """Convert configured path strings to absolute paths, preserving order."""
        ...

    def resolve_roots(self, paths: Sequence[PathLike]) -> List[ClasspathRoot]:
        """Keep only the entries that are local directories."""
        ...


class ReferenceSetBuilder(Protocol):
    def build(
        self,
        roots: Sequence[ClasspathRoot],
        resolver: ClassBytesResolver,
        progress_callback: Optional[ProgressCallback] = None
    ) -> ReferenceSet:
        """
        Fingerprint every class under the given roots.

        Raises:
            ConsistencyError: an enumerated class cannot be read through the resolver.
            EmptyReferenceSetError: no classes were found at all.
        """
        ...


class ClassdumpReconciler(Protocol):
    def reconcile(
        self,
        classdump_dir: PathLike,
        reference_set: ReferenceSet,
        exclusion_dir: PathLike,
        progress_callback: Optional[ProgressCallback] = None
    ) -> PruningStats:
        """
        Keep referenced dump files in place and move the rest into exclusion_dir.

        Raises:
            ConfigurationError: exclusion_dir cannot be created.
        """
        ...
