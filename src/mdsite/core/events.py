"""Markdown event stream.

mistune parses markdown into a nested token tree. The transformer works on
a flat stream instead: container tokens become a Start/End pair around
their children, text runs become Text, raw markup becomes Html, and any
other childless token is carried as a Leaf. build_tokens folds a stream
back into a tree the HTML renderer can consume.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

Token = dict[str, Any]

INLINE_HTML = "inline_html"
BLOCK_HTML = "block_html"


@dataclass(frozen=True)
class Start:
    """Opening of a container token (paragraph, heading, link, ...)."""

    kind: str
    token: Token

    @property
    def url(self) -> str:
        """Link destination, empty for non-link tokens."""
        return self.token.get("attrs", {}).get("url", "")

    def with_url(self, url: str) -> "Start":
        """Return a copy with a new link destination, keeping the title."""
        attrs = {**self.token.get("attrs", {}), "url": url}
        return Start(self.kind, {**self.token, "attrs": attrs})


@dataclass(frozen=True)
class End:
    """Closing of a container token."""

    kind: str


@dataclass(frozen=True)
class Text:
    """Run of plain text."""

    text: str


@dataclass(frozen=True)
class Html:
    """Raw markup passed through to the output."""

    html: str
    block: bool = False


@dataclass(frozen=True)
class Leaf:
    """Any other childless token (code span, code block, line break, ...)."""

    kind: str
    token: Token


Event = Start | End | Text | Html | Leaf


def iter_events(tokens: Iterable[Token]) -> Iterator[Event]:
    """Flatten a mistune token tree into an event stream."""
    for token in tokens:
        kind = token["type"]
        children = token.get("children")
        if children is not None:
            yield Start(kind, {key: value for key, value in token.items() if key != "children"})
            yield from iter_events(children)
            yield End(kind)
        elif kind == "text":
            yield Text(token["raw"])
        elif kind in (INLINE_HTML, BLOCK_HTML):
            yield Html(token["raw"], block=kind == BLOCK_HTML)
        else:
            yield Leaf(kind, token)


def build_tokens(events: Iterable[Event]) -> list[Token]:
    """Fold an event stream back into a mistune token tree.

    Raises:
        ValueError: If Start and End events are not balanced
    """
    root: list[Token] = []
    stack: list[list[Token]] = [root]
    for event in events:
        if isinstance(event, Start):
            node = {**event.token, "children": []}
            stack[-1].append(node)
            stack.append(node["children"])
        elif isinstance(event, End):
            if len(stack) == 1:
                raise ValueError(f"Unbalanced event stream: unexpected end of {event.kind}")
            stack.pop()
        elif isinstance(event, Text):
            stack[-1].append({"type": "text", "raw": event.text})
        elif isinstance(event, Html):
            stack[-1].append({"type": BLOCK_HTML if event.block else INLINE_HTML, "raw": event.html})
        else:
            stack[-1].append(dict(event.token))
    if len(stack) != 1:
        raise ValueError("Unbalanced event stream: unclosed container")
    return root
