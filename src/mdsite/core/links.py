"""Link destination classification and rewriting."""

import posixpath
from dataclasses import dataclass
from enum import Enum
from urllib.parse import unquote

from mdsite.core.paths import html_path
from mdsite.core.site import Site
from mdsite.core.types import MARKDOWN_EXTENSION, SourcePath

EXTERNAL_PREFIXES = ("http://", "https://")


class LinkKind(Enum):
    """Classification of a link destination."""

    INTRA_SITE = "intra_site"
    UNRESOLVED = "unresolved"
    EXTERNAL = "external"
    OTHER = "other"


@dataclass(frozen=True)
class ResolvedLink:
    """Link destination after resolution.

    url is the rewritten destination for intra-site links and the
    original destination for every other kind.
    """

    kind: LinkKind
    url: str


class LinkResolver:
    """Rewrites links between markdown sources to links between pages."""

    def __init__(self, site: Site) -> None:
        self._site = site

    def resolve(self, current: SourcePath, link: str) -> ResolvedLink:
        """Resolve a link found in a source file.

        A link ending in .md is rewritten only if it points, relative to the
        directory of the current source, at a discovered source. The
        rewritten link stays relative to that same directory. Dangling .md
        links are left as written.

        Args:
            current: Source file containing the link
            link: Link destination as written (e.g., "../guide/README.md")

        Returns:
            ResolvedLink with the classification and the destination to use
        """
        if link.startswith(EXTERNAL_PREFIXES):
            return ResolvedLink(LinkKind.EXTERNAL, link)
        if not link.endswith(MARKDOWN_EXTENSION):
            return ResolvedLink(LinkKind.OTHER, link)

        try:
            target = posixpath.normpath(
                posixpath.join(posixpath.dirname(current), unquote(link, errors="strict"))
            )
        except (UnicodeDecodeError, ValueError):
            return ResolvedLink(LinkKind.OTHER, link)

        if target in self._site:
            return ResolvedLink(LinkKind.INTRA_SITE, html_path(link))
        return ResolvedLink(LinkKind.UNRESOLVED, link)
