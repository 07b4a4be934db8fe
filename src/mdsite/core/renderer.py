"""Markdown rendering.

Parses markdown with mistune, runs the event stream through the
EventTransformer and renders the result back to an HTML fragment.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import mistune
from mistune.core import BlockState

from mdsite.core.errors import BuildError
from mdsite.core.events import Event, build_tokens, iter_events
from mdsite.core.links import LinkResolver
from mdsite.core.paths import destination_for
from mdsite.core.site import Site
from mdsite.core.transform import EventTransformer, TextDecoration
from mdsite.core.types import DestinationPath, SourcePath

logger = logging.getLogger(__name__)

DEFAULT_PLUGINS = ("strikethrough", "table")


class MarkdownRenderer:
    """Thin wrapper over mistune exposing the event stream.

    Raw HTML in the source is passed through as written.
    """

    def __init__(self, plugins: Iterable[str] = DEFAULT_PLUGINS) -> None:
        plugins = list(plugins)
        self._parser = mistune.create_markdown(renderer="ast", plugins=plugins)
        # Plugins register their render methods on the HTML renderer
        self._html = mistune.create_markdown(escape=False, plugins=plugins).renderer

    def parse(self, markdown_text: str) -> tuple[Iterator[Event], BlockState]:
        """Parse markdown into an event stream and the parser state."""
        tokens, state = self._parser.parse(markdown_text)
        return iter_events(tokens), state

    def render(self, events: Iterable[Event], state: BlockState) -> str:
        """Render an event stream to an HTML fragment."""
        return self._html(build_tokens(events), state)


@dataclass
class RenderResult:
    """Result of rendering one markdown source."""

    source: SourcePath
    destination: DestinationPath
    html: str


class PageRenderer:
    """Renders markdown sources of a discovered site to HTML fragments."""

    def __init__(
        self,
        source_dir: Path,
        site: Site,
        *,
        plugins: Iterable[str] = DEFAULT_PLUGINS,
        decoration: TextDecoration | None = None,
        decoration_page: SourcePath | None = None,
        collapse_newlines: bool = False,
    ) -> None:
        """Initialize renderer.

        Args:
            source_dir: Root directory containing markdown sources
            site: Discovered sources, used to resolve intra-site links
            plugins: mistune plugins to enable
            decoration: Text decoration applied to decoration_page only
            decoration_page: The single source that gets decorated
            collapse_newlines: Replace newlines in the fragment with spaces
        """
        self._source_dir = source_dir
        self._resolver = LinkResolver(site)
        self._markdown = MarkdownRenderer(plugins)
        self._decoration = decoration
        self._decoration_page = decoration_page
        self._collapse_newlines = collapse_newlines

    def render(self, source: SourcePath) -> RenderResult:
        """Render a markdown source to an HTML fragment.

        Args:
            source: Source path relative to source_dir

        Returns:
            RenderResult with the fragment and its destination

        Raises:
            BuildError: If the source is not valid UTF-8
            OSError: If the source cannot be read
        """
        source_path = self._source_dir / source
        try:
            markdown_text = source_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise BuildError(source_path, "Source is not valid UTF-8") from e

        decoration = self._decoration if source == self._decoration_page else None
        transformer = EventTransformer(self._resolver, source, decoration=decoration)

        events, state = self._markdown.parse(markdown_text)
        html = self._markdown.render(transformer.transform(events), state)
        if self._collapse_newlines:
            html = html.replace("\n", " ")

        logger.debug(f"Rendered {source} ({len(html)} characters)")
        return RenderResult(source=source, destination=destination_for(source), html=html)
