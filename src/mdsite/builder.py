"""Site build pipeline.

A build always starts from scratch: the output directory is deleted and
recreated, static assets are mirrored, sources are discovered, and every
source is rendered and written before the next one is read.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from mdsite.assets import copy_static_tree
from mdsite.config import Config
from mdsite.core.renderer import PageRenderer
from mdsite.core.site import Site, discover_sources
from mdsite.core.types import DestinationPath, SourcePath
from mdsite.template import render_page

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Summary of a completed build."""

    pages: list[DestinationPath] = field(default_factory=list)
    static_files: int = 0
    collisions: dict[DestinationPath, list[SourcePath]] = field(default_factory=dict)


def _relative_to(path: Path, root: Path) -> str | None:
    """Return path relative to root as POSIX string, None if outside root."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return None


def excluded_prefixes(config: Config) -> list[str]:
    """Directory prefixes never searched for markdown sources.

    The configured excludes plus the static and output directories when
    they live inside the source root, so generated or copied files are
    never picked up as sources.
    """
    settings = config.build
    prefixes = list(settings.exclude)
    for directory in (settings.static_dir, settings.output_dir):
        if directory is None:
            continue
        relative = _relative_to(directory, settings.source_dir)
        if relative is not None and relative != ".":
            prefixes.append(relative)
    return prefixes


class SiteBuilder:
    """Builds a static site from a configuration."""

    def __init__(self, config: Config) -> None:
        self._config = config

    def build(self) -> BuildResult:
        """Run the full pipeline.

        Returns:
            BuildResult describing written pages and copied assets

        Raises:
            BuildError: If a directory or source cannot be read or decoded
            OSError: If the output cannot be written
            ValueError: If the output directory contains the source directory
        """
        settings = self._config.build
        result = BuildResult()

        if _relative_to(settings.source_dir, settings.output_dir) is not None:
            raise ValueError(
                f"Output directory {settings.output_dir} must not contain the source directory"
            )
        self._reset_output(settings.output_dir)

        if settings.static_dir is not None:
            result.static_files = copy_static_tree(
                settings.static_dir,
                settings.output_dir / self._static_target(settings.static_dir),
            )

        site = discover_sources(settings.source_dir, excluded_prefixes(self._config))
        result.collisions = site.collisions()
        for destination, sources in result.collisions.items():
            logger.warning(
                f"{destination} is produced by {', '.join(sources)}; {sources[-1]} wins"
            )

        renderer = self._create_renderer(site)
        for source in site:
            result.pages.append(self._build_page(renderer, source))

        logger.info(
            f"Built {len(result.pages)} pages and copied {result.static_files} static files "
            f"into {settings.output_dir}"
        )
        return result

    def _create_renderer(self, site: Site) -> PageRenderer:
        settings = self._config.build
        decoration = self._config.decoration
        return PageRenderer(
            settings.source_dir,
            site,
            plugins=settings.plugins,
            decoration=decoration.decoration() if decoration is not None else None,
            decoration_page=decoration.page if decoration is not None else None,
            collapse_newlines=settings.collapse_newlines,
        )

    def _build_page(self, renderer: PageRenderer, source: SourcePath) -> DestinationPath:
        """Render one source and write its page."""
        rendered = renderer.render(source)
        page = render_page(rendered.destination, rendered.html, self._config.site)

        target = self._config.build.output_dir / rendered.destination
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page, encoding="utf-8")

        logger.debug(f"{source} -> {target}")
        return rendered.destination

    def _static_target(self, static_dir: Path) -> str:
        """Location of the static mirror inside the output directory.

        Keeps the static directory's path relative to the source root
        ("static" -> "build/static"), falling back to its name.
        """
        relative = _relative_to(static_dir, self._config.build.source_dir)
        if relative is None or relative == ".":
            return static_dir.resolve().name
        return relative

    @staticmethod
    def _reset_output(output_dir: Path) -> None:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)


def build_site(config: Config) -> BuildResult:
    """Build the site described by config."""
    return SiteBuilder(config).build()
