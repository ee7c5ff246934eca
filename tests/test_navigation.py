"""Tests for sidebar navigation."""

from pathlib import Path

from folio.core.content import ContentNode, Frontmatter
from folio.core.navigation import build_navigation
from folio.core.site import SiteBuilder
from folio.core.types import URLPath


def make_node(slug: str, title: str, layout: str, draft: bool = False) -> ContentNode:
    return ContentNode(
        source_path=Path(f"/content{slug}index.md"),
        slug=URLPath(slug),
        frontmatter=Frontmatter(title=title, layout=layout, draft=draft),
    )


def make_site():
    builder = SiteBuilder()
    builder.add_node(make_node("/hello/", "Hello", "post"))
    builder.add_node(make_node("/notes/lti/", "LTI", "note"))
    builder.add_node(make_node("/me/", "me", "page"))
    builder.add_node(make_node("/uses/", "uses", "page", draft=True))
    return builder.build()


class TestBuildNavigation:
    """Tests for build_navigation()."""

    def test__lists_blog_notes_and_pages(self) -> None:
        """Blog and notes come first, then published standalone pages."""
        items = build_navigation(make_site())

        assert [(i.title, i.path) for i in items] == [
            ("blog", "/"),
            ("notes", "/notes/"),
            ("me", "/me/"),
        ]

    def test__index__activates_blog(self) -> None:
        """The index activates the blog link."""
        items = build_navigation(make_site(), "/")

        assert [i.active for i in items] == [True, False, False]

    def test__post__activates_blog(self) -> None:
        """Posts and tag pages fall under the blog link."""
        items = build_navigation(make_site(), "/tags/python/")

        assert items[0].active

    def test__note__activates_notes(self) -> None:
        """Anything under /notes/ activates the notes link."""
        items = build_navigation(make_site(), "notes/lti")

        assert [i.active for i in items] == [False, True, False]

    def test__standalone_page__activates_itself(self) -> None:
        """Standalone pages activate their own link."""
        items = build_navigation(make_site(), "/me/")

        assert [i.active for i in items] == [False, False, True]

    def test__to_dict__serializes_item(self) -> None:
        """Serialize items for JSON."""
        items = build_navigation(make_site(), "/notes/")

        assert items[1].to_dict() == {"title": "notes", "path": "/notes/", "active": True}
