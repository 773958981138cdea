"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File relocation into the exclusion tree. Files are moved, never deleted.
"""
import errno
import os
import shutil
from pathlib import Path
from typing import Union


class FileService:
    """
    Moves pruned classdump entries aside while keeping their relative path.
    """

    @staticmethod
    def create_exclusion_root(exclusion_dir: Union[str, Path]) -> Path:
        """
        Creates the exclusion root. It must not exist yet and its parent must.
        Raises OSError (FileExistsError, FileNotFoundError, PermissionError) on failure.
        """
        path = Path(exclusion_dir)
        path.mkdir(parents=False, exist_ok=False)
        return path

    @staticmethod
    def move_to_exclusion(file_path: Union[str, Path], relative_path: str,
                          exclusion_dir: Union[str, Path]) -> Path:
        """
        Moves file_path to exclusion_dir/relative_path, creating missing parent
        directories. An existing target is never overwritten.

        Returns:
            Path: the new location of the file
        """
        source = Path(file_path)
        if not source.exists():
            raise FileNotFoundError(f"File not found: {source}")

        target = Path(exclusion_dir).joinpath(*relative_path.split("/"))
        if target.exists():
            raise FileExistsError(f"Target already exists in exclusion tree: {target}")

        target.parent.mkdir(parents=True, exist_ok=True)
        # Same filesystem: atomic rename
        try:
            os.replace(source, target)
        except OSError as e:
            if not FileService._is_cross_device(e):
                raise
            shutil.move(str(source), str(target))
        return target

    @staticmethod
    def _is_cross_device(error: OSError) -> bool:
        return error.errno == errno.EXDEV
