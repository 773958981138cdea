"""
classprune — prunes a JaCoCo classdump down to the classes of the local build.

Core features:
- JaCoCo-compatible CRC-64 class ids computed from raw class bytes
- Reference set built from local build output directories
- Unreferenced classdump files moved to a sibling exclusion tree, never deleted
- One shared pipeline behind a build-step adapter and a CLI
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("classprune")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from classprune.commands import PruningCommand
from classprune.core import (
    ClassKey, ReferenceSet, ClasspathRoot, PruningParams, PruningStats,
    PruningError, ConfigurationError, ConsistencyError, EmptyReferenceSetError, BuildStepError,
    class_id,
)
from classprune.services.file_service import FileService

__all__ = [
    "PruningCommand",
    "ClassKey",
    "ReferenceSet",
    "ClasspathRoot",
    "PruningParams",
    "PruningStats",
    "PruningError",
    "ConfigurationError",
    "ConsistencyError",
    "EmptyReferenceSetError",
    "BuildStepError",
    "class_id",
    "FileService",
    "__version__",
]
