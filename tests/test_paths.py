"""Tests for source to destination path mapping."""

import pytest
from mdsite.core.paths import destination_for, html_path, stem_of
from mdsite.core.types import DestinationPath, SourcePath


class TestDestinationFor:
    """Tests for destination_for()."""

    @pytest.mark.parametrize("name", ["README.md", "readme.md", "ReadMe.md", "README.MD"])
    def test__readme_any_case__maps_to_index(self, name: str) -> None:
        """README.md in any letter case becomes index.html."""
        assert destination_for(SourcePath(f"docs/{name}")) == "docs/index.html"

    def test__regular_file__keeps_stem(self) -> None:
        """Non-readme files keep their stem."""
        assert destination_for(SourcePath("docs/foo.md")) == "docs/foo.html"

    def test__root_readme__maps_to_root_index(self) -> None:
        """Top-level README.md becomes index.html."""
        assert destination_for(SourcePath("README.md")) == "index.html"

    def test__literal_index__maps_to_index(self) -> None:
        """A literal index.md also lands on index.html."""
        assert destination_for(SourcePath("index.md")) == "index.html"

    def test__stem_with_dots__keeps_inner_dots(self) -> None:
        """Only the final extension is replaced."""
        assert destination_for(SourcePath("notes/v1.2.md")) == "notes/v1.2.html"

    def test__repeated_calls__are_deterministic(self) -> None:
        """Mapping the same source twice gives the same destination."""
        source = SourcePath("a/b/README.md")
        assert destination_for(source) == destination_for(source)


class TestHtmlPath:
    """Tests for html_path() on link destinations."""

    def test__dot_prefix__is_preserved(self) -> None:
        """The directory part is kept exactly as written."""
        assert html_path("./docs/readme.md") == "./docs/index.html"

    def test__parent_reference__is_preserved(self) -> None:
        """Parent references are not collapsed."""
        assert html_path("../guide/setup.md") == "../guide/setup.html"


class TestStemOf:
    """Tests for stem_of()."""

    def test__nested_destination__returns_file_stem(self) -> None:
        assert stem_of(DestinationPath("docs/guide.html")) == "guide"
