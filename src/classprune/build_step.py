"""
Build-tool adapter.

A build tool hands over its project properties; the classdump is pruned with
the same pipeline the CLI uses. Any failure is reported once, as a
BuildStepError chained to its cause, so the build fails with a single message.

Properties:
    jacoco.classdump.dir   classdump written by the coverage agent
    build.classes.main     comma-delimited local build output directories
    jacoco.exclusion.dir   optional, defaults to <classdump parent>/exclclassdump
"""
import logging
from typing import Mapping, Optional

from classprune.commands import PruningCommand
from classprune.core.errors import BuildStepError, ConfigurationError
from classprune.core.interfaces import ProgressCallback
from classprune.core.models import PruningParams, PruningStats

logger = logging.getLogger(__name__)

CLASSDUMP_PROPERTY = "jacoco.classdump.dir"
CLASSPATH_PROPERTY = "build.classes.main"
EXCLUSION_PROPERTY = "jacoco.exclusion.dir"


def params_from_properties(properties: Mapping[str, str]) -> PruningParams:
    """Build validated PruningParams from a build property mapping."""
    classdump_dir = properties.get(CLASSDUMP_PROPERTY)
    if not classdump_dir:
        raise ConfigurationError(f"Missing build property: {CLASSDUMP_PROPERTY}")

    classpath = properties.get(CLASSPATH_PROPERTY)
    if not classpath:
        raise ConfigurationError(f"Missing build property: {CLASSPATH_PROPERTY}")

    try:
        return PruningParams.from_delimited(
            classdump_dir=classdump_dir,
            classpath_str=classpath,
            exclusion_dir=properties.get(EXCLUSION_PROPERTY) or None,
        )
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def run(
        properties: Mapping[str, str],
        command: Optional[PruningCommand] = None,
        progress_callback: Optional[ProgressCallback] = None
) -> PruningStats:
    """
    Execute the pruning step for a build.

    Raises:
        BuildStepError: wrapping whatever stopped the run
    """
    try:
        params = params_from_properties(properties)
        stats = (command or PruningCommand()).execute(params, progress_callback=progress_callback)
    except Exception as e:
        logger.error(f"Classdump pruning failed: {e}")
        raise BuildStepError(f"Classdump pruning failed: {e}") from e

    logger.info(f"Classdump pruning finished: kept {stats.kept}, pruned {stats.pruned}")
    return stats
