"""Test configuration and fixtures for codetree."""

import os

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def sample_project(tmp_path):
    """Create a small project tree covering ignored directories and mixed extensions.

    Layout:
        project/
            a.rs
            b.txt
            node_modules/
                c.js
            src/
                lib.py
                nested/
                    deep.go
                    target/
                        build.rs
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "a.rs").write_text("fn main(){}")
    (root / "b.txt").write_text("plain notes\n")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "c.js").write_text("module.exports = {}\n")
    (root / "src").mkdir()
    (root / "src" / "lib.py").write_text("def hello():\n    return 'hi'\n")
    (root / "src" / "nested").mkdir()
    (root / "src" / "nested" / "deep.go").write_text("package nested\n")
    (root / "src" / "nested" / "target").mkdir()
    (root / "src" / "nested" / "target" / "build.rs").write_text("// generated\n")
    return root


@pytest.fixture
def undecodable_project(tmp_path):
    """Create a project holding a file whose name is not valid UTF-8.

    Layout:
        named/
            bad<0xff>.rs
            good.rs
    """
    root = tmp_path / "named"
    root.mkdir()
    (root / "good.rs").write_text("fn good() {}\n")
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xff.rs"), "wb") as f:
            f.write(b"fn bad() {}\n")
    except OSError:
        pytest.skip("Filesystem rejects file names that are not valid UTF-8")
    return root
