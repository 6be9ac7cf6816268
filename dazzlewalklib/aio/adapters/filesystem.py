"""Async filesystem children for DazzleWalkLib.

Directory listings run in a worker thread via ``os.scandir`` so a walk
over a large tree does not block the event loop.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)


class AsyncFileSystemChildren:
    """Coroutine-callable returning the entries of a directory.

    Returns None for anything that is not a directory, otherwise the
    entries sorted by name.

    Example:
        children = AsyncFileSystemChildren(include_hidden=False)
        async for path in walk_children_async(Path("."), children):
            print(path)
    """

    def __init__(self,
                 follow_symlinks: bool = False,
                 include_hidden: bool = True):
        """Initialize async filesystem children.

        Args:
            follow_symlinks: Whether to descend into symbolic links
            include_hidden: Whether to include dot-files and dot-directories
        """
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden

    async def __call__(self, node: Union[str, Path]) -> Optional[List[Path]]:
        path = Path(node)
        return await asyncio.to_thread(self._scan, path)

    def _scan(self, path: Path) -> Optional[List[Path]]:
        if not path.is_dir():
            return None
        if path.is_symlink() and not self.follow_symlinks:
            return None

        names = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if not self.include_hidden and entry.name.startswith('.'):
                        continue
                    names.append(entry.name)
        except PermissionError:
            logger.debug("Permission denied listing %s", path)
            return []
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []

        return [path / name for name in sorted(names)]
