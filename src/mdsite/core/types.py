"""Core type definitions."""

from typing import NewType

# Markdown source, relative to the source root (e.g., "docs/readme.md")
SourcePath = NewType("SourcePath", str)

# Generated page, relative to the output root (e.g., "docs/index.html")
# Only produced by core.paths.destination_for
DestinationPath = NewType("DestinationPath", str)

MARKDOWN_EXTENSION = ".md"
HTML_EXTENSION = ".html"
README_NAME = "readme.md"
INDEX_STEM = "index"
