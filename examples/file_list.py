#!/usr/bin/env python3
"""
Print a directory tree as an indented XML-like trace.

This example demonstrates:
- IteratorBasedGraphIterator over FileSystemChildren
- A PrintListener subclass that prints base names
- Interleaving your own output with the walker's trace
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlewalklib.sync import (
    FileSystemChildren,
    IterationMode,
    IteratorBasedGraphIterator,
    PrintListener,
)


class NamePrinter(PrintListener):
    """Prints only the last path component of each node."""

    def get_name(self, node):
        return node.name if node is not None else None


def main():
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    printer = NamePrinter(indent=True, print_nodes=False)

    children = FileSystemChildren(include_hidden=False)
    with IteratorBasedGraphIterator(children, root, mode=IterationMode.DEFAULT,
                                    listener=printer) as iterator:
        for path in iterator:
            printer.println(f"[{path.name or path}]")


if __name__ == "__main__":
    main()
