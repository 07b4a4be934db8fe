"""Tests for page renderer."""

from pathlib import Path

import pytest
from mdsite.core.errors import BuildError
from mdsite.core.renderer import PageRenderer
from mdsite.core.site import discover_sources
from mdsite.core.transform import EXTERNAL_LINK_ICON, TextDecoration
from mdsite.core.types import SourcePath

from tests.conftest import WriteTree


def _renderer(root: Path, **kwargs: object) -> PageRenderer:
    return PageRenderer(root, discover_sources(root), **kwargs)  # type: ignore[arg-type]


class TestPageRendererRender:
    """Tests for PageRenderer.render()."""

    def test__link_to_sibling__points_to_html(self, write_tree: WriteTree) -> None:
        """[x](b.md) renders as a link to b.html."""
        root = write_tree({"a.md": "[x](b.md)", "b.md": "bee"})

        result = _renderer(root).render(SourcePath("a.md"))

        assert '<a href="b.html">x</a>' in result.html
        assert "b.md" not in result.html
        assert result.destination == "a.html"

    def test__link_to_missing__unchanged(self, write_tree: WriteTree) -> None:
        """[x](missing.md) keeps its destination."""
        root = write_tree({"a.md": "[x](missing.md)"})

        result = _renderer(root).render(SourcePath("a.md"))

        assert '<a href="missing.md">x</a>' in result.html

    def test__external_link__decorated_inside_anchor(self, write_tree: WriteTree) -> None:
        """The icon sits right before </a> and href is untouched."""
        root = write_tree({"a.md": "[site](https://example.com)"})

        result = _renderer(root).render(SourcePath("a.md"))

        assert f'<a href="https://example.com">site{EXTERNAL_LINK_ICON}</a>' in result.html

    def test__link_title__preserved(self, write_tree: WriteTree) -> None:
        root = write_tree({"a.md": '[x](b.md "The B page")', "b.md": ""})

        result = _renderer(root).render(SourcePath("a.md"))

        assert '<a href="b.html" title="The B page">x</a>' in result.html

    def test__nested_source__links_resolved_from_its_directory(
        self,
        write_tree: WriteTree,
    ) -> None:
        root = write_tree({
            "README.md": "home",
            "docs/guide.md": "[home](../README.md) [setup](setup.md)",
            "docs/setup.md": "setup",
        })

        result = _renderer(root).render(SourcePath("docs/guide.md"))

        assert 'href="../index.html"' in result.html
        assert 'href="setup.html"' in result.html
        assert result.destination == "docs/guide.html"

    def test__raw_html__passed_through(self, write_tree: WriteTree) -> None:
        root = write_tree({"a.md": '<div class="note">hi</div>\n\ntext <kbd>K</kbd>'})

        result = _renderer(root).render(SourcePath("a.md"))

        assert '<div class="note">hi</div>' in result.html
        assert "<kbd>K</kbd>" in result.html

    def test__decoration__only_on_decoration_page(self, write_tree: WriteTree) -> None:
        """Only the distinguished page gets its text decorated."""
        root = write_tree({"README.md": "I work at Google.", "other.md": "Google too."})
        renderer = _renderer(
            root,
            decoration=TextDecoration("Google", "<span>G</span>"),
            decoration_page=SourcePath("README.md"),
        )

        readme = renderer.render(SourcePath("README.md"))
        other = renderer.render(SourcePath("other.md"))

        assert "<p>I work at <span>G</span>.</p>" in readme.html
        assert "<p>Google too.</p>" in other.html

    def test__decoration__image_alt_text_kept(self, write_tree: WriteTree) -> None:
        root = write_tree({"README.md": "![Google logo](x.png) at Google"})
        renderer = _renderer(
            root,
            decoration=TextDecoration("Google", "<span>G</span>"),
            decoration_page=SourcePath("README.md"),
        )

        result = renderer.render(SourcePath("README.md"))

        assert 'alt="Google logo"' in result.html
        assert "at <span>G</span>" in result.html

    def test__collapse_newlines__replaces_newlines(self, write_tree: WriteTree) -> None:
        root = write_tree({"a.md": "# T\n\npara\n"})

        result = _renderer(root, collapse_newlines=True).render(SourcePath("a.md"))

        assert "\n" not in result.html
        assert "<h1>T</h1> <p>para</p>" in result.html

    def test__invalid_utf8__raises_build_error(self, source_dir: Path) -> None:
        """Undecodable sources abort with the offending path."""
        (source_dir / "bad.md").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(BuildError, match="not valid UTF-8") as exc_info:
            _renderer(source_dir).render(SourcePath("bad.md"))

        assert exc_info.value.path == source_dir / "bad.md"

    def test__missing_source__raises_os_error(self, write_tree: WriteTree) -> None:
        root = write_tree({"a.md": ""})
        renderer = _renderer(root)
        (root / "a.md").unlink()

        with pytest.raises(FileNotFoundError):
            renderer.render(SourcePath("a.md"))
