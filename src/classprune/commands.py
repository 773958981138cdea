"""
Unified pruning pipeline.
This is the SINGLE source of truth for pruning logic — used by both the build step and the CLI.
"""
import logging
import time
from pathlib import Path
from typing import Optional

from classprune.core.classpath import ClasspathResolverImpl
from classprune.core.errors import ConfigurationError
from classprune.core.interfaces import ClasspathResolver, ProgressCallback, ReferenceSetBuilder
from classprune.core.models import PruningParams, PruningStage, PruningStats, ReferenceSet
from classprune.core.reconciler import ClassdumpReconcilerImpl
from classprune.core.reference import ReferenceSetBuilderImpl
from classprune.core.resolver import ClasspathBytesResolver

logger = logging.getLogger(__name__)


class PruningCommand:
    """
    Runs the pipeline stages strictly in order:
    1. RESOLVE_CLASSPATH   - configured entries -> local class directories
    2. BUILD_REFERENCE_SET - fingerprint every local class
    3. RECONCILE_CLASSDUMP - keep referenced dump files, move the rest aside
    4. REPORT              - log and return the counters

    Nothing under the classdump is touched before stage 3, so a failure in the
    first two stages leaves the filesystem as it was.

    Usage:
        params = PruningParams(classdump_dir="build/jacoco/classdump",
                               classpath=["build/classes/main"])
        stats = PruningCommand().execute(params)
    """

    def __init__(
            self,
            classpath_resolver: Optional[ClasspathResolver] = None,
            builder: Optional[ReferenceSetBuilder] = None
    ):
        self.classpath_resolver = classpath_resolver or ClasspathResolverImpl()
        self.builder = builder or ReferenceSetBuilderImpl()
        self.reference_set: Optional[ReferenceSet] = None

    def execute(
            self,
            params: PruningParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> PruningStats:
        """
        Execute pruning with given parameters.

        Returns:
            PruningStats with kept/pruned counters

        Raises:
            ConfigurationError: unusable classpath entry, missing classdump, exclusion root not creatable
            ConsistencyError: a local class cannot be read back through the classpath
            EmptyReferenceSetError: nothing to keep
        """
        total_start_time = time.time()
        classdump = Path(params.classdump_dir)
        logger.info(f"Pruning Jacoco classdump at: {classdump}")

        # RESOLVE_CLASSPATH
        start_time = time.time()
        if not classdump.is_dir():
            raise ConfigurationError(f"Classdump directory not found: {classdump}")
        entries = self.classpath_resolver.resolve_entries(params.classpath)
        roots = self.classpath_resolver.resolve_roots(entries)
        logger.info(f"Using reference classes from local build classpath: {[str(e) for e in entries]}")
        resolve_time = time.time() - start_time

        # BUILD_REFERENCE_SET
        start_time = time.time()
        with ClasspathBytesResolver(entries) as resolver:
            self.reference_set = self.builder.build(roots, resolver, progress_callback=progress_callback)
        logger.debug(f"Keeping classes: {list(self.reference_set)}")
        build_time = time.time() - start_time

        # RECONCILE_CLASSDUMP
        reconciler = ClassdumpReconcilerImpl(dry_run=params.dry_run)
        stats = reconciler.reconcile(
            classdump, self.reference_set, params.exclusion_dir, progress_callback=progress_callback)

        # REPORT
        stats.record_stage(PruningStage.RESOLVE_CLASSPATH, resolve_time)
        stats.record_stage(PruningStage.BUILD_REFERENCE_SET, build_time)
        stats.record_stage(PruningStage.RECONCILE_CLASSDUMP, stats.total_time)
        stats.total_time = time.time() - total_start_time
        return stats
