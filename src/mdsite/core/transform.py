"""Event stream transformation for one source file."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from mdsite.core.events import End, Event, Html, Start, Text
from mdsite.core.links import LinkKind, LinkResolver
from mdsite.core.types import SourcePath

LINK = "link"
IMAGE = "image"

EXTERNAL_LINK_ICON = (
    '<svg style="width: 0.4em; vertical-align: middle; padding-bottom: 0.4em;" '
    'class="w-16 align-top" focusable="false" aria-hidden="true" viewBox="3 6 23 20">'
    '<path stroke="currentcolor" stroke-width="4" fill="none" d="M24 8L8 24M8 8H24v16"></path>'
    "</svg>"
)


@dataclass(frozen=True)
class TextDecoration:
    """Replaces every occurrence of a literal in text runs with markup."""

    text: str
    html: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("Decoration text must not be empty")

    def apply(self, event: Text) -> Iterator[Event]:
        """Split a text run around each occurrence of the literal.

        Runs without the literal are yielded unchanged.
        """
        if self.text not in event.text:
            yield event
            return

        for i, part in enumerate(event.text.split(self.text)):
            if i:
                yield Html(self.html)
            if part:
                yield Text(part)


class EventTransformer:
    """Rewrites the event stream of a single source file.

    Link destinations go through the LinkResolver, external links get an
    icon right before their closing tag, and text runs are decorated when
    a decoration is given. Everything else passes through.
    """

    def __init__(
        self,
        resolver: LinkResolver,
        source: SourcePath,
        *,
        decoration: TextDecoration | None = None,
        external_icon: str = EXTERNAL_LINK_ICON,
    ) -> None:
        """Initialize transformer.

        Args:
            resolver: Resolver bound to the discovered site
            source: Source file the events were parsed from
            decoration: Text decoration, only for the distinguished page
            external_icon: Markup appended inside external links
        """
        self._resolver = resolver
        self._source = source
        self._decoration = decoration
        self._external_icon = external_icon

    def transform(self, events: Iterable[Event]) -> Iterator[Event]:
        """Transform events in a single forward pass.

        Links do not nest, so remembering whether the open link is external
        is the only state needed besides the image depth: alt text is
        rendered as plain text, so it is never decorated.
        """
        open_link_external = False
        image_depth = 0
        for event in events:
            if isinstance(event, Start) and event.kind == LINK:
                resolved = self._resolver.resolve(self._source, event.url)
                open_link_external = resolved.kind is LinkKind.EXTERNAL
                if resolved.url != event.url:
                    event = event.with_url(resolved.url)
                yield event
            elif isinstance(event, End) and event.kind == LINK:
                if open_link_external:
                    yield Html(self._external_icon)
                    open_link_external = False
                yield event
            elif isinstance(event, Start) and event.kind == IMAGE:
                image_depth += 1
                yield event
            elif isinstance(event, End) and event.kind == IMAGE:
                image_depth -= 1
                yield event
            elif isinstance(event, Text) and self._decoration is not None and not image_depth:
                yield from self._decoration.apply(event)
            else:
                yield event
