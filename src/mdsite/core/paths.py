"""Mapping from markdown sources to generated pages."""

import posixpath

from mdsite.core.types import (
    HTML_EXTENSION,
    INDEX_STEM,
    README_NAME,
    DestinationPath,
    SourcePath,
)


def html_path(path: str) -> str:
    """Replace a markdown file name with its HTML page name.

    README.md (any case) becomes index.html, anything else keeps its stem.
    The directory part is kept as written, so relative links stay relative
    to the directory they were authored in.

    Args:
        path: Markdown path, e.g. "./docs/README.md"

    Returns:
        HTML path, e.g. "./docs/index.html"
    """
    head, name = posixpath.split(path)
    if name.lower() == README_NAME:
        stem = INDEX_STEM
    else:
        stem = posixpath.splitext(name)[0]
    return posixpath.join(head, stem + HTML_EXTENSION)


def destination_for(source: SourcePath) -> DestinationPath:
    """Compute the output page path for a discovered source."""
    return DestinationPath(html_path(source))


def stem_of(destination: DestinationPath) -> str:
    """Return the file stem of a destination (e.g., "index")."""
    return posixpath.splitext(posixpath.basename(destination))[0]
