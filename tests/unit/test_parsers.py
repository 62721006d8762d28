"""
Tests for reposync.platform.parsers module.
"""

import pytest

from reposync.core.errors import IgnoreFilterError, RemoteScanError
from reposync.core.models import Directory, File
from reposync.platform.parsers import (
    is_inside_metadata_dir,
    parse_check_ignore_line,
    parse_find_line,
    parse_find_output,
)


class TestFindParsers:
    """Tests for remote find listing parsing."""

    def test_parse_file_line(self) -> None:
        assert parse_find_line("src/main.py f 1234") == File("src/main.py", 1234)

    def test_parse_directory_line(self) -> None:
        assert parse_find_line("src d 4096") == Directory("src")

    def test_path_with_spaces(self) -> None:
        assert parse_find_line("my docs/read me.txt f 7") == File("my docs/read me.txt", 7)

    def test_root_directory_skipped(self) -> None:
        assert parse_find_line(" d 4096") is None

    def test_unknown_type(self) -> None:
        with pytest.raises(RemoteScanError, match="incorrect file type"):
            parse_find_line("link l 10")

    def test_bad_size(self) -> None:
        with pytest.raises(RemoteScanError, match="file size"):
            parse_find_line("a.txt f many")

    def test_missing_fields(self) -> None:
        with pytest.raises(RemoteScanError, match="malformed"):
            parse_find_line("justonefield")

    def test_two_fields(self) -> None:
        with pytest.raises(RemoteScanError, match="malformed"):
            parse_find_line("a.txt 10")

    def test_parse_output(self) -> None:
        output = "src d 4096\nsrc/a.py f 10\nREADME f 3\n"
        snapshot = parse_find_output(output)
        assert snapshot.directories == (Directory("src"),)
        assert snapshot.files == (File("src/a.py", 10), File("README", 3))

    def test_parse_empty_output(self) -> None:
        assert parse_find_output("").is_empty

    def test_parse_output_splits_on_newline_only(self) -> None:
        snapshot = parse_find_output("form\x0cfeed f 3\nline\u2028sep f 4\nrec\x1esep d 4096\n")
        assert snapshot.files == (File("form\x0cfeed", 3), File("line\u2028sep", 4))
        assert snapshot.directories == (Directory("rec\x1esep"),)

    def test_parse_output_fails_on_any_bad_line(self) -> None:
        with pytest.raises(RemoteScanError):
            parse_find_output("a f 1\ngarbage\n")


class TestCheckIgnoreParser:
    """Tests for git check-ignore --verbose --non-matching parsing."""

    def test_non_matching_is_kept(self) -> None:
        assert parse_check_ignore_line("::\tsrc/main.py\n") is True

    def test_ignored_is_dropped(self) -> None:
        assert parse_check_ignore_line(".gitignore:3:*.log\tbuild.log") is False

    def test_negated_pattern_is_kept(self) -> None:
        assert parse_check_ignore_line(".gitignore:4:!keep.log\tkeep.log") is True

    def test_pattern_with_colon(self) -> None:
        assert parse_check_ignore_line(".gitignore:1:a:b\ta:b") is False

    def test_source_path_with_colon(self) -> None:
        assert parse_check_ignore_line("C:/work/.gitignore:4:!keep.log\tkeep.log") is True
        assert parse_check_ignore_line("a:b/.gitignore:2:*.log\tdebug.log") is False

    def test_metadata_dir_always_dropped(self) -> None:
        assert parse_check_ignore_line("::\t.git") is False
        assert parse_check_ignore_line("::\t.git/config") is False

    def test_similar_name_not_treated_as_metadata(self) -> None:
        assert parse_check_ignore_line("::\t.github/workflows") is True

    def test_custom_metadata_dir(self) -> None:
        assert parse_check_ignore_line("::\t.hg/store", metadata_dir=".hg") is False
        assert parse_check_ignore_line("::\t.git/x", metadata_dir=".hg") is True

    def test_missing_tab(self) -> None:
        with pytest.raises(IgnoreFilterError, match="missing path"):
            parse_check_ignore_line("no tab here")

    def test_missing_header_fields(self) -> None:
        with pytest.raises(IgnoreFilterError, match="missing pattern"):
            parse_check_ignore_line("source-only\tpath")

    def test_is_inside_metadata_dir(self) -> None:
        assert is_inside_metadata_dir(".git", ".git")
        assert is_inside_metadata_dir(".git/objects/ab", ".git")
        assert not is_inside_metadata_dir(".gitignore", ".git")
