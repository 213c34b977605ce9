from __future__ import annotations
import enum
import logging
import os
import time
from typing import Iterator, Tuple
from .models import SizeTree

logger = logging.getLogger(__name__)


class EntryType(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


def _entry_type(entry: os.DirEntry) -> EntryType:
    if entry.is_symlink():
        return EntryType.SYMLINK
    if entry.is_dir(follow_symlinks=False):
        return EntryType.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return EntryType.FILE
    return EntryType.OTHER


def iter_entries(root: str) -> Iterator[Tuple[str, EntryType]]:
    """Yield (path, type) for every entry under root, in no particular order.

    Directories that cannot be listed and entries whose type cannot be read
    are skipped. Symlinked directories are reported but never descended into.
    """
    pending = [root]
    while pending:
        dir_path = pending.pop()
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("skipping unlistable directory %s: %s", dir_path, e)
            continue

        for entry in entries:
            try:
                kind = _entry_type(entry)
            except OSError as e:
                logger.debug("skipping %s: %s", entry.path, e)
                continue
            yield entry.path, kind
            if kind is EntryType.DIRECTORY:
                pending.append(entry.path)


def file_size(path: str) -> int:
    return int(os.lstat(path).st_size)


def walk_tree(tree: SizeTree) -> int:
    """Feed every regular file under the tree's root into the tree.

    Returns the number of files recorded. Files whose metadata cannot be read
    are skipped and count for nothing.
    """
    t0 = time.time()
    root = tree.root.name
    recorded = 0
    logger.info("scanning %s", root)
    for path, kind in iter_entries(root):
        if kind is not EntryType.FILE:
            continue
        try:
            sz = file_size(path)
        except OSError as e:
            logger.debug("skipping %s: %s", path, e)
            continue
        tree.record(os.path.relpath(path, root), sz)
        recorded += 1
    logger.info("scan of %s finished: %d files, %d bytes in %.2fs",
                root, recorded, tree.root.size, time.time() - t0)
    return recorded
