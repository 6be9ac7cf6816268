#!/usr/bin/env python3
"""
Basic async walk example for DazzleWalkLib.

This example demonstrates:
- Walking a directory tree with AsyncFileSystemChildren
- Sharing directory listings between walks with AsyncCachingChildren
- Rebuilding the walked tree from its leaf paths
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlewalklib.aio import (
    AsyncCachingChildren,
    AsyncFileSystemChildren,
    build_tree_async,
    count_nodes_async,
    get_tree_paths_async,
)


def print_entry(entry, indent=0):
    print(f"{'  ' * indent}{entry.node}")
    for child in entry.children:
        print_entry(child, indent + 1)


async def main():
    """Count, then rebuild, a directory tree."""
    root_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()

    print(f"Walking: {root_path}")
    print("-" * 50)

    children = AsyncCachingChildren(AsyncFileSystemChildren(include_hidden=False))

    total = await count_nodes_async(root_path, children, max_depth=3)
    print(f"Nodes (depth <= 3): {total:,}")

    # Second walk reuses the cached listings
    paths = (
        tuple(p.name for p in path[1:])
        async for path in get_tree_paths_async(root_path, children, max_depth=2)
    )
    roots = await build_tree_async(paths)

    print(f"Cache hits: {children.cache_hits}, misses: {children.cache_misses}")
    print()
    for entry in roots:
        print_entry(entry)


if __name__ == "__main__":
    print("DazzleWalkLib - Basic Async Walk Example")
    print("=" * 50)
    asyncio.run(main())
