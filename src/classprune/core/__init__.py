"""
Core pruning engine — classpath resolution, class ids, reference set and classdump reconciliation.

This package contains the whole pipeline logic:
- ClasspathResolverImpl: configured entries -> local class directories
- CRC64ClassIdAlgorithm: JaCoCo-compatible 64-bit class ids
- ClasspathBytesResolver: first-entry-wins class byte lookup over the classpath
- ReferenceSetBuilderImpl: class keys of every locally built class
- ClassdumpReconcilerImpl: keeps referenced dump files, moves the rest aside
- Models: ClassKey, ReferenceSet, ClasspathRoot, PruningParams, PruningStats

Nothing here depends on the CLI or on any build tool.
"""

from .errors import (
    PruningError, ConfigurationError, ConsistencyError, EmptyReferenceSetError, BuildStepError)
from .models import (
    ClassKey, ReferenceSet, ClasspathRoot, PruningParams, PruningStats, PruningStage, VisitAction)
from .walker import DirectoryWalker
from .classpath import ClasspathResolverImpl
from .fingerprint import CRC64ClassIdAlgorithm, class_id, hex16
from .resolver import ClasspathBytesResolver
from .reference import ReferenceSetBuilderImpl, binary_name
from .reconciler import ClassdumpReconcilerImpl

__all__ = [
    "PruningError",
    "ConfigurationError",
    "ConsistencyError",
    "EmptyReferenceSetError",
    "BuildStepError",
    "ClassKey",
    "ReferenceSet",
    "ClasspathRoot",
    "PruningParams",
    "PruningStats",
    "PruningStage",
    "VisitAction",
    "DirectoryWalker",
    "ClasspathResolverImpl",
    "CRC64ClassIdAlgorithm",
    "class_id",
    "hex16",
    "ClasspathBytesResolver",
    "ReferenceSetBuilderImpl",
    "binary_name",
    "ClassdumpReconcilerImpl",
]
