"""Tests for page creation."""

from pathlib import Path

import pytest
from folio.core.content import ContentNode, Frontmatter
from folio.core.pages import PageSpec, create_pages
from folio.core.slugs import tag_slug
from folio.core.types import URLPath


def make_node(
    slug: str,
    layout: str | None = "post",
    tags: tuple[str, ...] = (),
    draft: bool = False,
) -> ContentNode:
    return ContentNode(
        source_path=Path(f"/content{slug}index.md"),
        slug=URLPath(slug),
        frontmatter=Frontmatter(title=slug.strip("/"), layout=layout, tags=tags, draft=draft),
        tag_slugs=tuple(URLPath(tag_slug(t)) for t in tags),
    )


class TestCreatePages:
    """Tests for create_pages()."""

    def test__no_nodes__creates_listing_pages(self) -> None:
        """Always create the blog index and notes index."""
        pages = create_pages([])

        assert pages == [
            PageSpec(path=URLPath("/"), template="index"),
            PageSpec(path=URLPath("/notes/"), template="notes"),
        ]

    def test__post_and_note__get_their_templates(self) -> None:
        """Posts use the post template, notes the note template."""
        pages = create_pages([make_node("/hello/"), make_node("/notes/lti/", layout="note")])

        by_path = {p.path: p for p in pages}
        assert by_path["/hello/"].template == "post"
        assert by_path["/hello/"].context == {"slug": "/hello/"}
        assert by_path["/notes/lti/"].template == "note"

    def test__standalone_page__gets_page_template(self) -> None:
        """Layout "page" renders as a standalone page."""
        pages = create_pages([make_node("/me/", layout="page")])

        assert PageSpec(path=URLPath("/me/"), template="page") in pages

    def test__unknown_layout__gets_no_page(self) -> None:
        """Nodes without a known layout get no page of their own."""
        pages = create_pages([make_node("/fragment/", layout=None)])

        assert [p.path for p in pages] == ["/", "/notes/"]

    def test__drafts__still_get_pages(self) -> None:
        """Drafts are rendered, only hidden from listings."""
        pages = create_pages([make_node("/wip/", draft=True)])

        assert "/wip/" in [p.path for p in pages]

    def test__tags__create_deduplicated_tag_pages(self) -> None:
        """One tag page per distinct tag slug."""
        pages = create_pages(
            [
                make_node("/a/", tags=("python", "web")),
                make_node("/b/", tags=("Python", "cli")),
            ],
        )

        tag_pages = [p for p in pages if p.template == "tag"]
        assert [p.path for p in tag_pages] == ["/tags/python/", "/tags/web/", "/tags/cli/"]
        assert tag_pages[0].context == {"tag": "python", "tag_slug": "/tags/python/"}

    def test__duplicate_slugs__raise_value_error(self) -> None:
        """Two nodes can't publish at the same slug."""
        with pytest.raises(ValueError, match="Duplicate slug /hello/"):
            create_pages([make_node("/hello/"), make_node("/hello/")])
