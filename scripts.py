"""Development tasks for codetree.

Run a task by name from the repository root, e.g. ``python scripts.py run_tests``.
Each task runs one tool over the source tree and stops with that tool's exit status
if it fails.
"""

import subprocess
import sys
from typing import Dict, List, Sequence

TASKS: Dict[str, List[str]] = {
    "run_tests": ["pytest"],
    "run_lint": ["flake8", "--max-line-length", "120", "src", "tests"],
    "run_typecheck": ["mypy", "src"],
    "run_format": ["black", "src", "tests"],
    "run_coverage": ["pytest", "--cov=codetree", "tests/", "--cov-report=xml"],
}


def run(task: str) -> None:
    """Run a single task's command, raising CalledProcessError if it fails."""
    subprocess.run(TASKS[task], check=True)


def run_tests() -> None:
    """Run the test suite."""
    run("run_tests")


def run_lint() -> None:
    """Check style with flake8 at the project's line length."""
    run("run_lint")


def run_typecheck() -> None:
    """Type-check the package with mypy."""
    run("run_typecheck")


def run_format() -> None:
    """Reformat sources and tests with black."""
    run("run_format")


def run_coverage() -> None:
    """Run the test suite with coverage and write coverage.xml."""
    run("run_coverage")


def usage() -> str:
    return "usage: python scripts.py {" + ",".join(TASKS) + "}"


def main(argv: Sequence[str]) -> int:
    if len(argv) != 1 or argv[0] not in TASKS:
        print(usage(), file=sys.stderr)
        return 2
    try:
        run(argv[0])
    except subprocess.CalledProcessError as e:
        return e.returncode
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
