"""Page shell for generated HTML documents.

Every page shares the same head; only the title and body differ. Index
pages may show an illustration above the content.
"""

from dataclasses import dataclass
from html import escape

from mdsite.config import IndexImageConfig, SiteConfig
from mdsite.core.paths import stem_of
from mdsite.core.types import HTML_EXTENSION, INDEX_STEM, DestinationPath


@dataclass(frozen=True)
class IndexPage:
    """The site's index page."""

    image: IndexImageConfig | None


@dataclass(frozen=True)
class RegularPage:
    """Any page other than the index."""

    title: str


PageKind = IndexPage | RegularPage


def classify(destination: DestinationPath, site: SiteConfig) -> PageKind:
    """Classify a destination path by its file stem.

    Raises:
        ValueError: If destination is not an HTML path, which means it
            did not come from destination_for
    """
    if not destination.endswith(HTML_EXTENSION):
        raise ValueError(f"Not an HTML destination path: {destination}")

    stem = stem_of(destination)
    if stem == INDEX_STEM:
        return IndexPage(image=site.index_image)
    return RegularPage(title=stem)


def page_title(kind: PageKind, site: SiteConfig) -> str:
    if isinstance(kind, IndexPage):
        return site.title
    return f"{kind.title} — {site.title}"


def _image_block(image: IndexImageConfig) -> str:
    webp = ""
    if image.webp:
        webp = f'\n            <source type="image/webp" srcset="{escape(image.webp)}" />'
    return f"""
        <picture>{webp}
            <img src="{escape(image.src)}" alt="{escape(image.alt)}" width="100%" />
        </picture>"""


def _head_links(site: SiteConfig) -> str:
    links = [f'<link rel="stylesheet" href="{escape(site.stylesheet)}" />']
    links.extend(
        f'<link rel="preload" href="{escape(font)}" as="font" type="font/woff2" crossorigin />'
        for font in site.fonts
    )
    if site.apple_touch_icon:
        links.append(
            f'<link rel="apple-touch-icon" sizes="180x180" href="{escape(site.apple_touch_icon)}" />'
        )
    if site.favicon:
        links.append(f'<link rel="icon" type="image/png" sizes="32x32" href="{escape(site.favicon)}" />')
    return "\n        ".join(links)


def render_page(destination: DestinationPath, fragment: str, site: SiteConfig) -> str:
    """Wrap a rendered fragment in the page shell.

    Args:
        destination: Page path produced by destination_for
        fragment: Rendered markdown HTML
        site: Site-wide page settings

    Returns:
        Complete HTML document
    """
    kind = classify(destination, site)
    image = ""
    if isinstance(kind, IndexPage) and kind.image is not None:
        image = _image_block(kind.image)

    return f"""<!DOCTYPE html>
<html lang="{escape(site.lang)}">
    <head>
        <meta charset="utf-8" />
        <meta name="viewport" content="width=device-width,initial-scale=1,shrink-to-fit=no" />
        <title>{escape(page_title(kind, site))}</title>
        <meta name="description" content="{escape(site.description)}" />
        {_head_links(site)}
        <meta name="theme-color" content="{escape(site.theme_color)}" />
    </head>
    <body>{image}
        <main>{fragment}</main>
    </body>
</html>
"""
