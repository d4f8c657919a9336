"""Tests for the command line."""

import pytest

from app.cli import EXIT_PARSE_ERROR, build_parser, main


@pytest.fixture
def dump_files(tmp_path, header_block_dump, tabular_dump):
    """Fixture dumps written to disk."""
    old = tmp_path / "old.MF"
    new = tmp_path / "new.txt"
    old.write_text(header_block_dump, encoding="utf-8")
    new.write_text(tabular_dump, encoding="utf-8")
    return str(old), str(new)


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["old", "new"])
        assert args.old_format == "header_block"
        assert args.new_format == "header_block"
        assert args.cyjdeps is None

    def test_cyjdeps(self):
        args = build_parser().parse_args(["old", "new", "--cyjdeps", "apps dir", "out.txt"])
        assert args.cyjdeps == ["apps dir", "out.txt"]


class TestMain:
    """Tests for running the command line."""

    def test_report_printed(self, dump_files, capsys):
        old, new = dump_files
        exit_code = main([old, new, "--new-format", "tabular"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "Missing packages in new version:\n--------------------------------\ncom.example.legacy" in out
        assert "org.apache.commons.io.input" in out

    def test_auto_format(self, dump_files, capsys):
        old, new = dump_files
        assert main([old, new, "--old-format", "auto", "--new-format", "auto"]) == 0

    def test_cyjdeps_report(self, dump_files, capsys):
        old, new = dump_files
        main([old, new, "--new-format", "tabular", "--cyjdeps", "my apps", "out.txt"])

        out = capsys.readouterr().out
        assert "python find_package.py 'my apps' com.example.legacy >> out.txt" in out

    def test_parse_error_exit_code(self, tmp_path, dump_files, capsys):
        _, new = dump_files
        broken = tmp_path / "broken.MF"
        broken.write_text("Bundle A\n--------\nno separator here\n", encoding="utf-8")

        exit_code = main([str(broken), new, "--new-format", "tabular"])
        assert exit_code == EXIT_PARSE_ERROR
        assert "Bundle A" in capsys.readouterr().err

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            main([str(tmp_path / "absent"), str(tmp_path / "absent2")])
