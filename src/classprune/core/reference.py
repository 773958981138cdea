"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reference.py
Builds the reference set: the class keys of every class in the local build.

For each local class directory:
  org/apache/cassandra/Klass.class
    -> binary name   org.apache.cassandra.Klass
    -> class bytes   (first classpath entry that has the name)
    -> class key     org/apache/cassandra/Klass.0123456789abcdef.class
"""

import logging
import time
from pathlib import Path
from typing import Optional, Sequence, Set

from classprune.core.errors import ConsistencyError, EmptyReferenceSetError
from classprune.core.fingerprint import CRC64ClassIdAlgorithm
from classprune.core.interfaces import ClassBytesResolver, ClassIdAlgorithm, ProgressCallback, ReferenceSetBuilder
from classprune.core.models import CLASS_SUFFIX, ClassKey, ClasspathRoot, ReferenceSet, VisitAction
from classprune.core.walker import DirectoryWalker

logger = logging.getLogger(__name__)


def binary_name(class_file: Path, root: Path) -> str:
    """Binary class name of ``class_file`` relative to the class directory ``root``."""
    relative = class_file.relative_to(root).as_posix()
    if relative.endswith(CLASS_SUFFIX):
        relative = relative[:-len(CLASS_SUFFIX)]
    return relative.replace("/", ".")


class ReferenceSetBuilderImpl(ReferenceSetBuilder):
    """
    Fingerprints every class found in the local class directories.

    Class bytes are read through the combined resolver rather than from the file
    being visited, so a class shadowed by an earlier classpath entry is keyed by
    the bytes that would actually be loaded.
    """

    # Update progress every N classes
    progress_interval = 1000

    def __init__(
            self,
            algorithm: Optional[ClassIdAlgorithm] = None,
            walker: Optional[DirectoryWalker] = None
    ):
        self.algorithm = algorithm or CRC64ClassIdAlgorithm()
        self.walker = walker or DirectoryWalker()

    def build(
            self,
            roots: Sequence[ClasspathRoot],
            resolver: ClassBytesResolver,
            progress_callback: Optional[ProgressCallback] = None
    ) -> ReferenceSet:
        keys: Set[str] = set()
        processed = 0
        start_time = time.time()

        for root in roots:
            logger.debug(f"Checking local classes: {root.path}")

            def visit(path: Path, root_path: Path = root.path) -> VisitAction:
                nonlocal processed
                if not path.name.endswith(CLASS_SUFFIX):
                    return VisitAction.CONTINUE

                keys.add(self.key_for(path, root_path, resolver))
                processed += 1
                if progress_callback and processed % self.progress_interval == 0:
                    progress_callback("reference", processed, None)
                return VisitAction.CONTINUE

            self.walker.walk(root.path, visit)

        if progress_callback and processed % self.progress_interval:
            progress_callback("reference", processed, None)

        logger.debug(f"Fingerprinted {processed} local classes in {time.time() - start_time:.2f} seconds")

        reference_set = ReferenceSet(keys)
        if reference_set.is_empty:
            raise EmptyReferenceSetError()
        return reference_set

    def key_for(self, class_file: Path, root: Path, resolver: ClassBytesResolver) -> ClassKey:
        name = binary_name(class_file, root)
        logger.debug(f"Got local class: {class_file} {name}")

        try:
            # By on-disk path: "a.b/C.class" is not reachable through "a.b.C"
            data = resolver.read_resource(class_file.relative_to(root).as_posix())
        except OSError as e:
            raise ConsistencyError(name, str(e)) from e
        if data is None:
            raise ConsistencyError(name, "no classpath entry provides it")

        key = ClassKey.of(name, self.algorithm.class_id(data))
        logger.debug(f"Got class id {key} for class {name}")
        return key
