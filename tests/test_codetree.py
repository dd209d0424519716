"""Tests for document generation with StreamingCodeTree and CodeTree."""

import os

import pytest

from codetree.codetree import CONTENTS_HEADER, TITLE, CodeTree, StreamingCodeTree
from codetree.config import Config


@pytest.fixture
def config(sample_project, tmp_path):
    return Config(root_path=sample_project, output_path=tmp_path / "out.txt")


def test_scenario_document(sample_project, config):
    root = str(sample_project)
    document = CodeTree(config).document
    assert document == (
        "Directory Tree and Code Contents\n\n"
        f"Root Directory: {root}\n\n"
        "├── project\n"
        "    ├── a.rs\n"
        "    ├── b.txt\n"
        "    ├── src\n"
        "        ├── lib.py\n"
        "        ├── nested\n"
        "            ├── deep.go\n"
        "\nCode Contents:\n\n"
        f"\n=== File: {os.path.join(root, 'a.rs')} ===\n\n"
        "fn main(){}\n"
        f"\n=== File: {os.path.join(root, 'src', 'lib.py')} ===\n\n"
        "def hello():\n    return 'hi'\n\n"
        f"\n=== File: {os.path.join(root, 'src', 'nested', 'deep.go')} ===\n\n"
        "package nested\n\n"
    )


def test_tree_section_precedes_contents(config):
    document = CodeTree(config).document
    tree_part, _, contents_part = document.partition(CONTENTS_HEADER)
    assert document.startswith(TITLE)
    assert "├── deep.go" in tree_part
    assert "=== File:" not in tree_part
    assert "├──" not in contents_part


def test_custom_ignore_and_extensions(sample_project, tmp_path):
    config = Config(
        root_path=sample_project,
        output_path=tmp_path / "out.txt",
        ignored_dirs={"src"},
        allowed_extensions={"txt", "js"},
    )
    document = CodeTree(config).document
    assert "├── node_modules" in document
    assert "├── c.js" in document
    assert "module.exports = {}" in document
    assert "plain notes" in document
    assert "├── src" not in document
    assert "lib.py" not in document
    assert "fn main(){}" not in document


def test_counts_after_streaming(config):
    analyzer = CodeTree(config)
    assert analyzer.streaming_complete
    assert analyzer.entry_count == 7
    assert analyzer.file_count == 4
    assert analyzer.directory_count == 2
    assert analyzer.included_file_count == 3
    assert analyzer.read_error_count == 0


def test_read_errors_are_counted_and_do_not_abort(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "bad.json").write_bytes(b"\xc3\x28")
    (root / "good.json").write_text("{}")
    analyzer = CodeTree(Config(root_path=root, output_path=tmp_path / "out.txt"))
    assert analyzer.read_error_count == 1
    assert analyzer.included_file_count == 2
    assert "Error reading file: " in analyzer.document
    assert analyzer.document.endswith("{}\n")


def test_sections_stream_only_once(config):
    analyzer = StreamingCodeTree(config)
    list(analyzer.stream_header())
    list(analyzer.stream_tree())
    list(analyzer.stream_contents_header())
    list(analyzer.stream_contents())
    assert analyzer.streaming_complete

    with pytest.raises(RuntimeError):
        list(analyzer.stream_header())
    with pytest.raises(RuntimeError):
        list(analyzer.stream_tree())
    with pytest.raises(RuntimeError):
        list(analyzer.stream_contents_header())
    with pytest.raises(RuntimeError):
        list(analyzer.stream_contents())


def test_walk_is_lazy(config):
    analyzer = StreamingCodeTree(config)
    assert analyzer._fs_tree._tree is None
    assert "".join(analyzer.stream_header()).startswith(TITLE)
    assert analyzer._fs_tree._tree is None


def test_progress_messages(config, sample_project):
    messages = []
    CodeTree(config, progress=messages.append)
    assert messages[0] == "Generating directory tree..."
    assert "Writing file contents..." in messages
    assert f"Processing code file: {os.path.join(str(sample_project), 'a.rs')}" in messages
    assert messages[-1] == "File content writing complete!"


def test_progress_reports_read_errors(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (root / "bad.py").write_bytes(b"\xff")
    messages = []
    CodeTree(Config(root_path=root, output_path=tmp_path / "out.txt"), progress=messages.append)
    assert any(message.startswith(f"Error reading file {os.path.join(str(root), 'bad.py')}: ") for message in messages)


def test_deterministic_output(config):
    assert CodeTree(config).document == CodeTree(config).document


def test_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        StreamingCodeTree(Config.from_root(tmp_path / "missing"))


def test_root_is_file(tmp_path):
    file_path = tmp_path / "file.py"
    file_path.write_text("")
    with pytest.raises(NotADirectoryError):
        StreamingCodeTree(Config.from_root(file_path))


@pytest.mark.parametrize("typed", ["./", "."])
def test_current_directory_keeps_typed_root(sample_project, monkeypatch, typed):
    monkeypatch.chdir(sample_project)
    document = CodeTree(Config.from_root(typed)).document
    assert f"Root Directory: {typed}\n\n├── \n" in document
    assert f"\n=== File: {os.path.join(typed, 'a.rs')} ===\n\n" in document


def test_doubled_separators_are_kept_in_root_and_headers(sample_project, monkeypatch):
    monkeypatch.chdir(sample_project.parent)
    document = CodeTree(Config.from_root("project//src/")).document
    assert "Root Directory: project//src/\n\n├── src\n" in document
    assert "\n=== File: project//src/lib.py ===\n\n" in document


def test_undecodable_names_do_not_break_the_document(undecodable_project):
    messages = []
    analyzer = CodeTree(Config.from_root(undecodable_project), progress=messages.append)
    document = analyzer.document
    document.encode("utf-8")

    tree_lines = document.split("\n\n")[2].splitlines()
    assert tree_lines == ["├── named", "    ├── bad�.rs", "    ├── good.rs"]
    assert len(tree_lines) == analyzer.entry_count
    assert f"\n=== File: {os.path.join(str(undecodable_project), 'bad�.rs')} ===\n\nfn bad() {{}}\n\n" in document
    assert f"Processing code file: {os.path.join(str(undecodable_project), 'bad�.rs')}" in messages
