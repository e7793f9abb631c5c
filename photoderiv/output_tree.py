"""
OutputTreeManager - Empties or creates album output directories before a run.
"""

import logging
import os
from typing import Optional

from .exceptions import OutputTreeError


class OutputTreeManager:
    """
    Resets output directories so each run fully replaces the previous one.

    Only direct child files are removed; nested directories are left alone.
    There is no locking, so a reader listing the directory during a reset may
    see it empty or partially populated.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def reset(self, dir_path: str) -> int:
        """
        Empty dir_path, or create it (with parents) if it does not exist.

        Args:
            dir_path: Output directory

        Returns:
            Number of files removed

        Raises:
            OutputTreeError: If the directory cannot be listed, emptied or created
        """
        if not os.path.exists(dir_path):
            try:
                os.makedirs(dir_path, exist_ok=True)
            except OSError as e:
                raise OutputTreeError(dir_path, str(e)) from e
            self.logger.debug(f"Created output directory: {dir_path}")
            return 0

        if not os.path.isdir(dir_path):
            raise OutputTreeError(dir_path, "path exists and is not a directory")

        self.logger.info(f"Clearing existing output directory: {dir_path}")
        removed = 0
        try:
            with os.scandir(dir_path) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        self.logger.warning(f"Leaving nested directory in place: {entry.path}")
                        continue
                    os.unlink(entry.path)
                    removed += 1
        except OSError as e:
            raise OutputTreeError(dir_path, str(e)) from e

        self.logger.debug(f"Removed {removed} files from {dir_path}")
        return removed
