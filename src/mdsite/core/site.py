"""Source discovery for a markdown site.

Walks the source root once and records every markdown file as a
SourcePath. The resulting Site is read-only for the rest of the run and
is shared by path mapping and link resolution.
"""

import logging
import os
import posixpath
from collections.abc import Iterable, Iterator
from pathlib import Path

from mdsite.core.errors import BuildError
from mdsite.core.paths import destination_for
from mdsite.core.types import MARKDOWN_EXTENSION, DestinationPath, SourcePath

logger = logging.getLogger(__name__)


class Site:
    """Immutable set of discovered markdown sources.

    Provides O(1) membership checks for link resolution and a stable,
    sorted iteration order so repeated builds write pages in the same order.
    """

    __slots__ = ("_index", "_sources")

    def __init__(self, sources: Iterable[SourcePath]) -> None:
        """Initialize site.

        Args:
            sources: Normalized source paths; duplicates are dropped
        """
        self._index = frozenset(sources)
        self._sources = tuple(sorted(self._index))

    def __contains__(self, path: object) -> bool:
        return path in self._index

    def __iter__(self) -> Iterator[SourcePath]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def collisions(self) -> dict[DestinationPath, list[SourcePath]]:
        """Find destinations claimed by more than one source.

        A directory holding both README.md and index.md produces two pages
        at the same index.html. The later source in iteration order wins.

        Returns:
            Mapping of destination to the colliding sources, in build order
        """
        claimed: dict[DestinationPath, list[SourcePath]] = {}
        for source in self._sources:
            claimed.setdefault(destination_for(source), []).append(source)
        return {dest: sources for dest, sources in claimed.items() if len(sources) > 1}


def normalize_prefix(prefix: str) -> str:
    """Normalize an excluded prefix ("./build/" -> "build")."""
    return posixpath.normpath(prefix.replace("\\", "/"))


def is_excluded(path: str, prefixes: Iterable[str]) -> bool:
    """Check whether a relative path lies under any excluded prefix.

    Matching is per path component: "build" excludes "build/a.md" but
    not "builder/a.md".
    """
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


def discover_sources(root: Path, excluded: Iterable[str] = ()) -> Site:
    """Find every markdown source under a root directory.

    Excluded directories are pruned before descending, so their contents
    are never read.

    Args:
        root: Source root directory
        excluded: Directory prefixes relative to root (e.g., ".git", "build")

    Returns:
        Site containing the discovered sources

    Raises:
        BuildError: If any directory cannot be read
    """
    prefixes = [normalize_prefix(prefix) for prefix in excluded]
    sources: list[SourcePath] = []

    def _raise(error: OSError) -> None:
        raise BuildError(error.filename or root, f"Cannot read directory ({error.strerror})") from error

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        rel_dir = Path(dirpath).relative_to(root).as_posix()

        kept = []
        for name in sorted(dirnames):
            rel = posixpath.normpath(posixpath.join(rel_dir, name))
            if is_excluded(rel, prefixes):
                logger.debug(f"Skipping excluded directory {rel}")
            else:
                kept.append(name)
        dirnames[:] = kept

        for name in filenames:
            if not name.endswith(MARKDOWN_EXTENSION):
                continue
            rel = posixpath.normpath(posixpath.join(rel_dir, name))
            if not is_excluded(rel, prefixes):
                sources.append(SourcePath(rel))

    site = Site(sources)
    logger.debug(f"Discovered {len(site)} markdown sources under {root}")
    return site
