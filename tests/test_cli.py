"""Tests for CLI commands."""

from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner
from folio.cli import cli
from folio.core.colors import color_for

WriteContent = Callable[..., Path]


def _write_config(tmp_path: Path) -> Path:
    config_file = tmp_path / "folio.toml"
    config_file.write_text(
        '[site]\ntitle = "CLI Blog"\n\n'
        '[content]\nsource_dir = "content"\ncache_dir = ".cache"\noutput_dir = "public"\n'
    )
    return config_file


class TestSlugCommand:
    """Tests for the slug command."""

    def test__post_path__prints_root_slug(self) -> None:
        """Print the slug of a post."""
        result = CliRunner().invoke(cli, ["slug", "/site/content/2018---Hello World/index.md"])

        assert result.exit_code == 0
        assert result.output == "/hello-world/\n"

    def test__note_path__prints_notes_slug(self) -> None:
        """Print the slug of a note."""
        result = CliRunner().invoke(cli, ["slug", "/site/notes/2018---lti-notes/index.md"])

        assert result.exit_code == 0
        assert result.output == "/notes/lti-notes/\n"

    def test__missing_delimiter__fails(self) -> None:
        """Exit with an error for a directory without a delimiter."""
        result = CliRunner().invoke(
            cli,
            ["slug", "/site/2018---ok/index.md", "/site/plain/index.md"],
        )

        assert result.exit_code == 1
        assert "/ok/" in result.output
        assert "Error:" in result.output
        assert "no '---' delimiter" in result.output


class TestColorCommand:
    """Tests for the color command."""

    def test__prints_color_per_tag(self) -> None:
        """Print one tab-separated line per tag."""
        result = CliRunner().invoke(cli, ["color", "hello", ""])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["hello\t#60d878", "\t#093145"]

    def test__show_hash__appends_hash(self) -> None:
        """Append the 32-bit hash when asked."""
        result = CliRunner().invoke(cli, ["color", "--show-hash", "hello"])

        assert result.exit_code == 0
        assert result.output == "hello\t#60d878\t99162322\n"


class TestPagesCommand:
    """Tests for the pages command."""

    def test__lists_pages_and_marks_drafts(
        self, tmp_path: Path, write_content: WriteContent
    ) -> None:
        """List every page with its template."""
        write_content("2018---hello", title="Hello", tags=["python"])
        write_content("2019---wip", title="WIP", draft=True)
        config_file = _write_config(tmp_path)

        result = CliRunner().invoke(cli, ["pages", "-c", str(config_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "/\tindex",
            "/notes/\tnotes",
            "/hello/\tpost",
            "/wip/\tpost (draft)",
            "/tags/python/\ttag",
        ]

    def test__invalid_frontmatter__fails(
        self, tmp_path: Path, write_content: WriteContent
    ) -> None:
        """Report invalid content and exit with 1."""
        path = write_content("2018---hello", title="Hello")
        path.write_text("---\ndraft: maybe\n---\nBody.\n")
        config_file = _write_config(tmp_path)

        result = CliRunner().invoke(cli, ["pages", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestBuildCommand:
    """Tests for the build command."""

    def test__builds_site(self, tmp_path: Path, write_content: WriteContent) -> None:
        """Write HTML files for every page."""
        write_content("2018---hello", title="Hello", date="2018-01-05", tags=["python"])
        config_file = _write_config(tmp_path)

        result = CliRunner().invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Built 4 pages." in result.output
        post = (tmp_path / "public" / "hello" / "index.html").read_text()
        assert "CLI Blog" in post
        assert color_for("python") in post

    def test__output_dir_option__overrides_config(
        self, tmp_path: Path, write_content: WriteContent
    ) -> None:
        """Write into the directory given on the command line."""
        write_content("2018---hello", title="Hello")
        config_file = _write_config(tmp_path)

        result = CliRunner().invoke(
            cli, ["build", "-c", str(config_file), "-o", str(tmp_path / "dist")]
        )

        assert result.exit_code == 0
        assert (tmp_path / "dist" / "hello" / "index.html").is_file()
        assert not (tmp_path / "public").exists()

    def test__duplicate_slugs__fail(self, tmp_path: Path, write_content: WriteContent) -> None:
        """Exit with 1 when two directories produce the same slug."""
        write_content("2018---hello", title="First")
        write_content("2019---hello", title="Second")
        config_file = _write_config(tmp_path)

        result = CliRunner().invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Duplicate slug /hello/" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        """Report configuration errors and exit with 1."""
        config_file = tmp_path / "folio.toml"
        config_file.write_text("[server]\nport = \"eighty\"\n")

        result = CliRunner().invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "server.port must be an integer" in result.output
