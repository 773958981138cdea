"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Recursive directory traversal shared by the reference scan and the classdump scan.

Each regular file is handed to a ``visit(path) -> VisitAction`` callback.
Traversal order is deterministic (names sorted at every level) and symlinked
directories are not followed.
"""

import os
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from classprune.core.models import VisitAction

logger = logging.getLogger(__name__)

Visitor = Callable[[Path], Optional[VisitAction]]
ErrorHandler = Callable[[Path, OSError], None]


class DirectoryWalker:
    """
    Walks a directory tree and calls ``visit`` for every file.

    Error handling:
        - OSError raised by ``visit`` goes to ``on_error`` when one is given,
          otherwise it propagates and stops the walk.
        - Directories that cannot be listed go to ``on_error`` when one is given,
          otherwise they are logged and skipped.
        - Any other exception always propagates.
    """

    def __init__(self, follow_symlinks: bool = False):
        self.follow_symlinks = follow_symlinks

    def walk(
            self,
            root: Union[str, Path],
            visit: Visitor,
            on_error: Optional[ErrorHandler] = None
    ) -> int:
        """Walk ``root`` and return the number of files handed to ``visit``."""
        root_path = Path(root)
        visited = 0

        def listing_failed(error: OSError) -> None:
            failed = Path(error.filename) if error.filename else root_path
            if on_error is not None:
                on_error(failed, error)
            else:
                logger.debug(f"Skipping unreadable directory {failed}: {error}")

        for dirpath, dirnames, filenames in os.walk(
                str(root_path), onerror=listing_failed, followlinks=self.follow_symlinks):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                visited += 1
                try:
                    action = visit(path)
                except OSError as e:
                    if on_error is None:
                        raise
                    on_error(path, e)
                    continue

                if action is VisitAction.TERMINATE:
                    logger.debug(f"Walk of {root_path} terminated at {path}")
                    return visited

        return visited
