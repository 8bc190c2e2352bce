"""
Entry point used by the assignment's test harness.

    python -m grader.autograder [path/to/Assignment.java]

Exit codes: 0 passed, 1 checklist failed, 2 file missing, unreadable or unparsable.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from adapters.java_adapter import JavaAdapter, JavaParseError
from cir.query import CIRQuery
from grader import config
from grader.checklist import StructureValidator


class SourceFileNotFoundError(FileNotFoundError):
    """The participant's source file isn't where the harness expects it."""


class SourceFileReadError(OSError):
    """The source file exists but can't be read as UTF-8 text."""


java_adapter = JavaAdapter()
validator = StructureValidator()


def grade_code(code: str, filename: str | None = None) -> Tuple[bool, List[str]]:
    """
    Parse Java source text and run the checklist on it.
    Raises JavaParseError if the code doesn't parse.
    """
    graph = java_adapter.build_cir_graph_for_code(code, filename)
    return validator.validate(CIRQuery(graph))


def check_encapsulation_and_abstract_class_methods(file_path: str | os.PathLike) -> bool:
    """
    Check that the file demonstrates encapsulation and abstract classes/methods.
    Diagnostics go to stdout; the return value is the verdict.
    """
    print(f"Starting testEncapsulationAndAbstractClassMethods with file: {file_path}")

    path = Path(file_path)
    if not path.exists():
        print(f"File does not exist at path: {file_path}")
        raise SourceFileNotFoundError(f"File does not exist at path: {file_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            code = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading the file: {e}")
        raise SourceFileReadError(f"Cannot read {file_path}: {e}") from e

    try:
        passed, diagnostics = grade_code(code, path.name)
    except JavaParseError as e:
        print(f"Error parsing the file: {e}")
        raise

    print("Parsed the Java file successfully.")
    for line in diagnostics:
        print(line)
    return passed


# name the assignment harness calls
test_encapsulation_and_abstract_class_methods = check_encapsulation_and_abstract_class_methods


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    file_path = args[0] if args else str(config.DEFAULT_SOURCE_PATH)
    try:
        passed = check_encapsulation_and_abstract_class_methods(file_path)
    except (SourceFileNotFoundError, SourceFileReadError, JavaParseError):
        return 2
    return 0 if passed else 1


if __name__ == "__main__":
    sys.exit(main())
