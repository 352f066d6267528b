"""Turns command-line arguments into hash jobs.

Directory arguments can be expanded recursively. Symbolic links are
followed; unreadable directories are logged and skipped.
"""

import logging
import os
from typing import Iterator, List, Sequence, Set, Tuple

from .models import HashJob

logger = logging.getLogger(__name__)


def _log_walk_error(error: OSError) -> None:
    logger.warning(f"Skipping unreadable directory: {{'path': {error.filename!r}, 'error': {error.strerror!r}}}")


def walk_files(root: str) -> Iterator[str]:
    """Yield every regular file beneath root.

    Entries are visited in sorted order so repeated runs produce the same
    job order. Directories reached twice through symlinks are visited
    once, which also breaks symlink cycles.

    Args:
        root: Directory to walk

    Yields:
        File paths, prefixed with root as the caller spelled it
    """
    visited: Set[Tuple[int, int]] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True, onerror=_log_walk_error):
        try:
            info = os.stat(dirpath)
        except OSError as e:
            _log_walk_error(e)
            dirnames[:] = []
            continue

        key = (info.st_dev, info.st_ino)
        if key in visited:
            logger.debug(f"Already visited, not descending again: {dirpath}")
            dirnames[:] = []
            continue
        visited.add(key)

        # Sorting in place also fixes the order os.walk descends in
        dirnames.sort()
        for name in sorted(filenames):
            file_path = os.path.join(dirpath, name)
            # Broken links, sockets and fifos are not hashable files
            if os.path.isfile(file_path):
                yield file_path
            else:
                logger.debug(f"Skipping non-regular entry: {file_path}")


def build_jobs(paths: Sequence[str], recursive: bool = False) -> List[HashJob]:
    """Number the inputs into HashJobs, preserving argument order.

    No paths means a single job for standard input. With recursive set,
    each directory argument is replaced in place by the files beneath it.
    """
    if not paths:
        return [HashJob.for_stdin()]

    expanded: List[str] = []
    for path in paths:
        if recursive and os.path.isdir(path):
            found = list(walk_files(path))
            logger.debug(f"Expanded directory {path!r} into {len(found)} files")
            expanded.extend(found)
        else:
            expanded.append(path)

    return [HashJob(index=index, path=path) for index, path in enumerate(expanded)]
