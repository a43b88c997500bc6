"""
Source directory listing.

Only regular files directly inside the source directory are candidates for
rules; subdirectories and symlinks are skipped.
"""

import logging
import os
from pathlib import Path

from .errors import SourceUnreadable
from .utils import TRACE

logger = logging.getLogger(__name__)


def list_source_files(source_dir: Path) -> list[str]:
    """
    List the regular files in a directory, non-recursively.

    Args:
        source_dir: The directory to list.

    Returns:
        File names (not paths), sorted lexicographically.

    Raises:
        SourceUnreadable: If the directory cannot be read.
    """
    names = []
    try:
        with os.scandir(source_dir) as entries:
            for entry in entries:
                if entry.is_file(follow_symlinks=False):
                    logger.log(TRACE, "Regular file: %s", entry.path)
                    names.append(entry.name)
                else:
                    logger.log(TRACE, "Not a file: %s", entry.path)
    except OSError as e:
        raise SourceUnreadable(Path(source_dir)) from e

    names.sort()
    return names
