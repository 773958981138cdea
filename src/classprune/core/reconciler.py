"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reconciler.py
Prunes a classdump against the reference set.

The classdump is stored in the ``package/Klass.<class id>.class`` layout.
Every class file whose relative path is a reference key stays where it is;
every other class file is moved to the same relative path under the exclusion
root. Non-class files are left alone and not counted.

Entries that cannot be visited are skipped and the walk continues.
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from classprune.core.errors import ConfigurationError
from classprune.core.interfaces import ClassdumpReconciler, ProgressCallback
from classprune.core.models import CLASS_SUFFIX, PruningStats, ReferenceSet, VisitAction
from classprune.core.walker import DirectoryWalker
from classprune.services.file_service import FileService

logger = logging.getLogger(__name__)


class ClassdumpReconcilerImpl(ClassdumpReconciler):
    """
    Splits the classdump into kept entries (left in place) and pruned entries
    (moved into the exclusion tree).

    Attributes:
        dry_run: classify only, create nothing and move nothing
    """

    # Update progress every N class files
    progress_interval = 5000

    def __init__(
            self,
            dry_run: bool = False,
            walker: Optional[DirectoryWalker] = None,
            file_service: Optional[FileService] = None
    ):
        self.dry_run = dry_run
        self.walker = walker or DirectoryWalker()
        self.file_service = file_service or FileService()

    def reconcile(
            self,
            classdump_dir: Union[str, Path],
            reference_set: ReferenceSet,
            exclusion_dir: Union[str, Path],
            progress_callback: Optional[ProgressCallback] = None
    ) -> PruningStats:
        classdump = Path(classdump_dir)
        exclusion = Path(exclusion_dir)
        stats = PruningStats(reference_size=len(reference_set), dry_run=self.dry_run)

        if exclusion.resolve() == classdump.resolve() or classdump.resolve() in exclusion.resolve().parents:
            raise ConfigurationError(f"Exclusion directory {exclusion} must be outside classdump {classdump}")

        if not self.dry_run:
            try:
                self.file_service.create_exclusion_root(exclusion)
            except OSError as e:
                raise ConfigurationError(f"Cannot create exclusion directory {exclusion}: {e}") from e
            logger.info(f"Putting pruned classdump contents into {exclusion}")

        start_time = time.time()

        def visit(path: Path) -> VisitAction:
            if not path.name.endswith(CLASS_SUFFIX):
                return VisitAction.CONTINUE

            # org/apache/cassandra/Klass.0123456789abcdef.class
            relative = path.relative_to(classdump).as_posix()

            if relative in reference_set:
                logger.debug(f"Keeping classdump for {relative}")
                stats.kept += 1
            else:
                logger.debug(f"Removing classdump for {relative}: {path}")
                if not self.dry_run:
                    self.file_service.move_to_exclusion(path, relative, exclusion)
                stats.pruned += 1

            if progress_callback and stats.total % self.progress_interval == 0:
                progress_callback("reconcile", stats.total, None)
            return VisitAction.CONTINUE

        def visit_failed(path: Path, error: OSError) -> None:
            logger.debug(f"Skipping classdump entry {path}: {error}")
            stats.skipped += 1

        self.walker.walk(classdump, visit, on_error=visit_failed)

        if progress_callback and stats.total % self.progress_interval:
            progress_callback("reconcile", stats.total, None)

        stats.total_time = time.time() - start_time
        logger.info(f"{'Would prune' if self.dry_run else 'Pruned'} {stats.pruned} files from classdump")
        logger.info(f"Kept {stats.kept} files from classdump")
        return stats
