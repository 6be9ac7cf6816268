"""Filesystem children for DazzleWalkLib.

Turns directories into child enumerations so a walker can iterate over
a directory tree with ``IteratorBasedGraphIterator``.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)


class FileSystemChildren:
    """Callable returning the entries of a directory.

    Files (and anything that is not a directory) have no children and
    produce None. Entries are returned sorted by name so walks are
    reproducible.

    Example:
        children = FileSystemChildren(include_hidden=False)
        for path in walk_children(Path("."), children):
            print(path)
    """

    def __init__(self,
                 follow_symlinks: bool = False,
                 include_hidden: bool = True):
        """Initialize filesystem children.

        Args:
            follow_symlinks: Whether to descend into symbolic links
            include_hidden: Whether to include dot-files and dot-directories
        """
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden

    def __call__(self, node: Union[str, Path]) -> Optional[Iterator[Path]]:
        path = Path(node)
        if not path.is_dir():
            return None
        if path.is_symlink() and not self.follow_symlinks:
            return None
        return self._iter_entries(path)

    def list_entries(self, path: Path) -> list:
        """Return the sorted, filtered entries of ``path``."""
        try:
            entries = sorted(path.iterdir())
        except PermissionError:
            logger.debug("Permission denied listing %s", path)
            return []
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []

        if not self.include_hidden:
            entries = [entry for entry in entries if not entry.name.startswith('.')]
        return entries

    def _iter_entries(self, path: Path) -> Iterator[Path]:
        yield from self.list_entries(path)
