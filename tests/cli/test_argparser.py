"""Unit tests for the argument parser module in the codetree CLI."""

import argparse
from pathlib import Path

import pytest

from codetree.cli.argparser import create_parser, extensions_type, ignored_dirs_type, validate_args


@pytest.fixture
def parser():
    return create_parser(prog="codetree")


def test_parser_minimal(parser):
    args = parser.parse_args(["/path/to/project"])
    assert args.directory == "/path/to/project"
    assert args.output is None
    assert args.ignored_dirs is None
    assert args.extensions is None
    assert args.verbose is False


def test_parser_all_options(parser):
    args = parser.parse_args(["proj", "-o", "out.txt", "-i", ".git,dist", "-e", "py,toml", "-v"])
    assert args.directory == "proj"
    assert args.output == Path("out.txt")
    assert args.ignored_dirs == {".git", "dist"}
    assert args.extensions == {"py", "toml"}
    assert args.verbose is True


def test_directory_keeps_its_spelling(parser):
    assert parser.parse_args(["foo//bar/"]).directory == "foo//bar/"
    assert parser.parse_args(["./"]).directory == "./"


def test_parser_long_options(parser):
    args = parser.parse_args(
        ["--output", "o.txt", "--ignored-dirs", "build", "--extensions", "rs", "--verbose", "proj"]
    )
    assert args.output == Path("o.txt")
    assert args.ignored_dirs == {"build"}
    assert args.extensions == {"rs"}
    assert args.verbose is True


def test_missing_directory_prints_usage_and_example(parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args([])
    assert excinfo.value.code == 2

    stderr = capsys.readouterr().err
    assert stderr.startswith("usage: codetree")
    assert "codetree: error: the following arguments are required: directory" in stderr
    assert "Example: codetree ." in stderr


def test_dotted_extension_is_usage_error(parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["-e", ".py", "proj"])
    assert excinfo.value.code == 2
    assert "without a leading dot" in capsys.readouterr().err


def test_ignored_dirs_with_separator_is_usage_error(parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["-i", "src/build", "proj"])
    assert excinfo.value.code == 2
    assert "path separators" in capsys.readouterr().err


def test_version(parser, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("codetree ")


def test_help_lists_defaults(parser):
    help_text = parser.format_help()
    assert "code_output.txt" in help_text
    assert "node_modules" in help_text
    assert "csproj" in help_text


def test_type_functions():
    assert ignored_dirs_type("a, b") == {"a", "b"}
    assert extensions_type("py") == {"py"}
    with pytest.raises(argparse.ArgumentTypeError):
        extensions_type("py,.rs")
    with pytest.raises(argparse.ArgumentTypeError):
        ignored_dirs_type("a\\b")


def test_validate_args_output_directory(tmp_path):
    args = argparse.Namespace(directory=Path("."), output=tmp_path)
    with pytest.raises(ValueError, match="directory"):
        validate_args(args)


def test_validate_args_ok(tmp_path):
    validate_args(argparse.Namespace(directory=Path("."), output=None))
    validate_args(argparse.Namespace(directory=Path("."), output=tmp_path / "out.txt"))
