"""Configuration management for mdsite.

Supports TOML configuration format with auto-discovery. Every setting has
a default, so a site builds without any configuration file.
"""

import posixpath
import tomllib
from dataclasses import dataclass, field, replace
from html import escape
from itertools import cycle
from pathlib import Path

from mdsite.core.transform import TextDecoration
from mdsite.core.types import SourcePath

CONFIG_FILENAME = "mdsite.toml"


@dataclass
class IndexImageConfig:
    """Illustration shown above the index page content."""

    src: str
    alt: str = ""
    webp: str | None = None


@dataclass
class SiteConfig:
    """Page shell configuration, identical for every page."""

    title: str = "Home"
    description: str = ""
    lang: str = "en"
    theme_color: str = "#11161d"
    stylesheet: str = "./static/main.css"
    fonts: list[str] = field(default_factory=list)
    apple_touch_icon: str | None = "./static/apple-touch-icon.png"
    favicon: str | None = "./static/favicon-32x32.png"
    index_image: IndexImageConfig | None = None


@dataclass
class BuildSettings:
    """Source, output and static directories."""

    source_dir: Path = field(default_factory=lambda: Path("."))
    output_dir: Path = field(default_factory=lambda: Path("build"))
    static_dir: Path | None = field(default_factory=lambda: Path("static"))
    exclude: list[str] = field(default_factory=lambda: [".git", "target"])
    plugins: list[str] = field(default_factory=lambda: ["strikethrough", "table"])
    collapse_newlines: bool = False


@dataclass
class DecorationConfig:
    """Inline decoration of a literal on a single page."""

    text: str
    page: SourcePath = SourcePath("README.md")
    html: str | None = None
    colors: list[str] = field(default_factory=list)

    def decoration(self) -> TextDecoration:
        """Build the text decoration.

        Explicit html wins; otherwise each character is colored in turn
        from colors, or the literal is wrapped in a plain span.
        """
        if self.html is not None:
            return TextDecoration(self.text, self.html)
        if self.colors:
            html = "".join(
                f'<span style="color: {escape(color)}">{escape(char)}</span>'
                for char, color in zip(self.text, cycle(self.colors))
            )
            return TextDecoration(self.text, html)
        return TextDecoration(self.text, f'<span class="decorated">{escape(self.text)}</span>')


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    build: BuildSettings
    decoration: DecorationConfig | None
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for mdsite.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        return cls(site=SiteConfig(), build=BuildSettings(), decoration=None)

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        config_dir = path.parent

        site = cls._parse_site(data.get("site"))
        site.index_image = cls._parse_index_image(data.get("index_image"))

        return cls(
            site=site,
            build=cls._parse_build(data.get("build"), config_dir),
            decoration=cls._parse_decoration(data.get("decoration")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        defaults = SiteConfig()
        values: dict[str, object] = {}
        for key in ("title", "description", "lang", "theme_color", "stylesheet"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str):
                raise ValueError(f"site.{key} must be a string")
            values[key] = value

        for key in ("apple_touch_icon", "favicon"):
            value = data.get(key, getattr(defaults, key))
            if value is not None and not isinstance(value, str):
                raise ValueError(f"site.{key} must be a string")
            values[key] = value or None

        values["fonts"] = _string_list(data.get("fonts", []), "site.fonts")

        return SiteConfig(**values)  # type: ignore[arg-type]

    @classmethod
    def _parse_index_image(cls, data: object) -> IndexImageConfig | None:
        """Parse index_image configuration section.

        Returns:
            IndexImageConfig instance or None if section not present
        """
        if data is None:
            return None

        if not isinstance(data, dict):
            raise ValueError("index_image section must be a dictionary")

        src = data.get("src")
        if not isinstance(src, str):
            raise ValueError("index_image.src must be a string")

        alt = data.get("alt", "")
        if not isinstance(alt, str):
            raise ValueError("index_image.alt must be a string")

        webp = data.get("webp")
        if webp is not None and not isinstance(webp, str):
            raise ValueError("index_image.webp must be a string")

        return IndexImageConfig(src=src, alt=alt, webp=webp)

    @classmethod
    def _parse_build(cls, data: object, config_dir: Path) -> BuildSettings:
        """Parse build configuration section.

        Args:
            data: Raw build section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            BuildSettings instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        source_dir = data.get("source_dir", ".")
        if not isinstance(source_dir, str):
            raise ValueError("build.source_dir must be a string")

        output_dir = data.get("output_dir", "build")
        if not isinstance(output_dir, str):
            raise ValueError("build.output_dir must be a string")

        # An empty string disables static asset copying
        static_dir = data.get("static_dir", "static")
        if not isinstance(static_dir, str):
            raise ValueError("build.static_dir must be a string")

        collapse_newlines = data.get("collapse_newlines", False)
        if not isinstance(collapse_newlines, bool):
            raise ValueError("build.collapse_newlines must be a boolean")

        return BuildSettings(
            source_dir=config_dir / source_dir,
            output_dir=config_dir / output_dir,
            static_dir=config_dir / static_dir if static_dir else None,
            exclude=_string_list(data.get("exclude", [".git", "target"]), "build.exclude"),
            plugins=_string_list(data.get("plugins", ["strikethrough", "table"]), "build.plugins"),
            collapse_newlines=collapse_newlines,
        )

    @classmethod
    def _parse_decoration(cls, data: object) -> DecorationConfig | None:
        """Parse decoration configuration section.

        Returns:
            DecorationConfig instance or None if section not present
        """
        if data is None:
            return None

        if not isinstance(data, dict):
            raise ValueError("decoration section must be a dictionary")

        text = data.get("text")
        if not isinstance(text, str) or not text:
            raise ValueError("decoration.text must be a non-empty string")

        page = data.get("page", "README.md")
        if not isinstance(page, str):
            raise ValueError("decoration.page must be a string")

        html = data.get("html")
        if html is not None and not isinstance(html, str):
            raise ValueError("decoration.html must be a string")

        return DecorationConfig(
            text=text,
            page=SourcePath(posixpath.normpath(page)),
            html=html,
            colors=_string_list(data.get("colors", []), "decoration.colors"),
        )

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source_dir: Override build.source_dir
            output_dir: Override build.output_dir

        Returns:
            New Config instance with overrides applied
        """
        build = self.build
        if source_dir is not None or output_dir is not None:
            build = replace(
                self.build,
                source_dir=source_dir if source_dir is not None else self.build.source_dir,
                output_dir=output_dir if output_dir is not None else self.build.output_dir,
            )

        return replace(self, build=build)


def _string_list(value: object, name: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{name} items must be strings")
    return list(value)
