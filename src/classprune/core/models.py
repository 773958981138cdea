"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for classdump pruning: class keys, the reference set,
classpath roots, run parameters and run statistics.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional


CLASS_SUFFIX = ".class"
DEFAULT_EXCLUSION_DIR_NAME = "exclclassdump"


# =============================
# Enums
# =============================

class VisitAction(Enum):
    """What the directory walker should do after visiting a file."""
    CONTINUE = "continue"
    TERMINATE = "terminate"


class PruningStage(str, Enum):
    RESOLVE_CLASSPATH = "Resolve classpath"
    BUILD_REFERENCE_SET = "Build reference set"
    RECONCILE_CLASSDUMP = "Reconcile classdump"
    REPORT = "Report"

    @classmethod
    def get_all(cls):
        return [cls.RESOLVE_CLASSPATH, cls.BUILD_REFERENCE_SET, cls.RECONCILE_CLASSDUMP, cls.REPORT]


# ======================
#  Core Data Models
# ======================

class ClassKey(str):
    """
    Canonical name of a fingerprinted class, exactly as the coverage agent
    names its dump files: ``org/apache/cassandra/Klass.0123456789abcdef.class``.
    """

    @classmethod
    def of(cls, binary_name: str, class_id: int) -> "ClassKey":
        if not binary_name:
            raise ValueError("Binary class name cannot be empty")
        if not 0 <= class_id < 1 << 64:
            raise ValueError(f"Class id out of 64-bit range: {class_id}")
        return cls(f"{binary_name.replace('.', '/')}.{class_id:016x}{CLASS_SUFFIX}")

    def __repr__(self):
        return f"<ClassKey {str.__str__(self)}>"


class ReferenceSet:
    """Immutable set of class keys that must survive pruning."""

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[str] = ()):
        self._keys: FrozenSet[str] = frozenset(str(k) for k in keys)

    def __contains__(self, item: object) -> bool:
        return item in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._keys))

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReferenceSet):
            return self._keys == other._keys
        if isinstance(other, (set, frozenset)):
            return self._keys == other
        return NotImplemented

    def __hash__(self):
        return hash(self._keys)

    @property
    def is_empty(self) -> bool:
        return not self._keys

    def __repr__(self):
        return f"<ReferenceSet size={len(self._keys)}>"


@dataclass(frozen=True)
class ClasspathRoot:
    """A local directory of compiled classes, with its position on the classpath."""
    path: Path
    index: int = 0

    def __str__(self):
        return str(self.path)


@dataclass
class PruningParams:
    """Parameters for one pruning run, validated on creation."""
    classdump_dir: str
    classpath: List[str] = field(default_factory=list)
    exclusion_dir: Optional[str] = None
    dry_run: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.classdump_dir or not str(self.classdump_dir).strip():
            raise ValueError("Classdump directory cannot be empty")

        if not self.classpath:
            raise ValueError("Classpath cannot be empty")

        if self.exclusion_dir is None:
            parent = Path(os.path.abspath(self.classdump_dir)).parent
            self.exclusion_dir = str(parent / DEFAULT_EXCLUSION_DIR_NAME)

    @staticmethod
    def split_classpath(classpath_str: str, separator: str = ",") -> List[str]:
        """Split a delimited classpath string, dropping blank items."""
        if not classpath_str:
            return []
        return [item.strip() for item in classpath_str.split(separator) if item.strip()]

    @staticmethod
    def from_delimited(
            classdump_dir: str,
            classpath_str: str,
            exclusion_dir: Optional[str] = None,
            dry_run: bool = False,
            separator: str = ",",
    ) -> 'PruningParams':
        """
        Factory method for the build-tool property format, where the classpath
        arrives as a single comma-delimited string.
        """
        return PruningParams(
            classdump_dir=classdump_dir,
            classpath=PruningParams.split_classpath(classpath_str, separator),
            exclusion_dir=exclusion_dir,
            dry_run=dry_run,
        )


@dataclass
class PruningStats:
    """
    Outcome of a pruning run. ``skipped`` counts classdump entries that could
    not be visited; they are neither kept nor pruned.
    """
    kept: int = 0
    pruned: int = 0
    skipped: int = 0
    reference_size: int = 0
    dry_run: bool = False
    total_time: float = 0.0
    stage_times: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.kept + self.pruned

    def record_stage(self, stage: PruningStage, duration: float) -> None:
        self.stage_times[stage.value] = self.stage_times.get(stage.value, 0.0) + duration

    def print_summary(self) -> str:
        lines = [
            "📊 Pruning Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"📚 Reference classes: {self.reference_size}",
            f"✅ Kept: {self.kept}",
            f"📦 {'Would prune' if self.dry_run else 'Pruned'}: {self.pruned}",
        ]
        if self.skipped:
            lines.append(f"⚠️ Skipped (unreadable): {self.skipped}")

        for stage in PruningStage.get_all():
            if stage.value in self.stage_times:
                lines.append(f"{stage.value}: {self.stage_times[stage.value]:.3f}s")

        return "\n".join(lines)
