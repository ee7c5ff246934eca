"""Slug derivation for content nodes and tags.

Content lives in directories named ``<anything>---<slug-segment>``; the
segment after the last ``---`` becomes the page slug. Content under a
``notes`` directory is published below ``/notes/``.
"""

import re
import unicodedata
from pathlib import PurePath

SLUG_DELIMITER = "---"
NOTES_SEGMENT = "/notes/"

_APOSTROPHES_RE = re.compile(r"['’]")
_WORD_RE = re.compile(
    r"[A-Z]?[a-z]+"
    r"|[A-Z]+(?![a-z])"
    # ordinals stay whole: 2nd, 21ST, 4th
    r"|\d*(?:1ST|2ND|3RD|(?![123])\dTH)(?=\b|[a-z_])"
    r"|\d*(?:1st|2nd|3rd|(?![123])\dth)(?=\b|[A-Z_])"
    r"|[0-9]+"
    r"|[^\W\d_A-Za-z]+"
)



class SlugError(ValueError):
    """Raised when a path or tag cannot be turned into a well-formed slug."""


def kebab_case(text: str) -> str:
    """Convert text to kebab-case.

    Splits on non-alphanumeric characters, lower-to-upper transitions,
    acronym boundaries and letter/digit boundaries. Ordinals such as
    "2nd" stay one word.

    Examples:
        >>> kebab_case("fooBar")
        'foo-bar'
        >>> kebab_case("XMLHttpRequest")
        'xml-http-request'
        >>> kebab_case("Don't stop")
        'dont-stop'
        >>> kebab_case("my 2nd post")
        'my-2nd-post'
    """
    normalized = unicodedata.normalize("NFKD", _APOSTROPHES_RE.sub("", text))
    stripped = "".join(c for c in normalized if not unicodedata.combining(c))
    return "-".join(word.lower() for word in _WORD_RE.findall(stripped))


def derive_slug(full_path: str | PurePath) -> str:
    """Compute the canonical slug for a content file.

    Args:
        full_path: Absolute path of the content file
            (e.g., "/site/notes/2018---lti-notes/index.md")

    Returns:
        Slug with leading and trailing slash (e.g., "/notes/lti-notes/")

    Raises:
        SlugError: If the parent directory name has no "---" delimiter,
            nothing sluggable after it, or a non-note would take /notes/
    """
    posix = PurePath(full_path).as_posix()
    dir_name = PurePath(posix).parent.name

    if SLUG_DELIMITER not in dir_name:
        raise SlugError(
            f"Directory name {dir_name!r} has no {SLUG_DELIMITER!r} delimiter: {posix}"
        )

    segment = kebab_case(dir_name.rsplit(SLUG_DELIMITER, 1)[1])
    if not segment:
        raise SlugError(f"Directory name {dir_name!r} has an empty slug segment: {posix}")

    if NOTES_SEGMENT in posix:
        return f"/notes/{segment}/"
    if segment == "notes":
        raise SlugError(f"Slug /notes/ is reserved for the notes index: {posix}")
    return f"/{segment}/"


def tag_slug(tag: str) -> str:
    """Compute the listing page slug for a tag (e.g., "/tags/type-script/")."""
    segment = kebab_case(tag)
    if not segment:
        raise SlugError(f"Tag {tag!r} has no sluggable characters")
    return f"/tags/{segment}/"
