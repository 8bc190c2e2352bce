import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from adapters.java_adapter import JavaParseError
from grader import autograder
from java_sources import ANIMAL, VALID, assignment

FIXTURE = os.path.join(CURRENT_DIR, "fixtures", "EncapsulationAbstractClassAssignment.java")


def write_source(tmp_path, code, name="EncapsulationAbstractClassAssignment.java"):
    path = tmp_path / name
    path.write_text(code, encoding="utf-8")
    return path


def test_fixture_passes_and_prints_progress(capsys):
    assert autograder.check_encapsulation_and_abstract_class_methods(FIXTURE) is True

    out = capsys.readouterr().out
    assert f"Starting testEncapsulationAndAbstractClassMethods with file: {FIXTURE}" in out
    assert "Parsed the Java file successfully." in out
    assert "------ Method Execution Check in Main ------" in out
    assert "Test passed: Encapsulation and Abstract classes/methods are correctly implemented." in out


def test_public_field_returns_false(tmp_path, capsys):
    animal = ANIMAL.replace("private String name;", "public String name;")
    path = write_source(tmp_path, assignment(animal=animal))

    assert autograder.check_encapsulation_and_abstract_class_methods(path) is False
    assert "Error: Private field 'name' not found in 'Animal' class." in capsys.readouterr().out


def test_missing_file_raises(tmp_path, capsys):
    missing = tmp_path / "Nope.java"
    with pytest.raises(autograder.SourceFileNotFoundError):
        autograder.check_encapsulation_and_abstract_class_methods(missing)
    out = capsys.readouterr().out
    assert f"File does not exist at path: {missing}" in out
    assert "Parsed the Java file successfully." not in out


def test_missing_file_is_a_file_not_found_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        autograder.check_encapsulation_and_abstract_class_methods(tmp_path / "Nope.java")


def test_unparsable_file_raises(tmp_path, capsys):
    path = write_source(tmp_path, "abstract class Animal { private String name; ")
    with pytest.raises(JavaParseError):
        autograder.check_encapsulation_and_abstract_class_methods(path)
    out = capsys.readouterr().out
    assert "Error parsing the file: Java syntax error" in out
    assert "------ Class and Method Check ------" not in out


def test_grade_code_returns_verdict_and_diagnostics():
    passed, diagnostics = autograder.grade_code(VALID, "Main.java")
    assert passed
    assert diagnostics[-1].startswith("Test passed")


def test_main_exit_codes(tmp_path):
    good = write_source(tmp_path, VALID, "Good.java")
    bad = write_source(tmp_path, assignment(cat=""), "Bad.java")
    broken = write_source(tmp_path, "class {", "Broken.java")

    assert autograder.main([str(good)]) == 0
    assert autograder.main([str(bad)]) == 1
    assert autograder.main([str(broken)]) == 2
    assert autograder.main([str(tmp_path / "Missing.java")]) == 2


def test_main_defaults_to_assignment_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "src" / "main" / "java" / "com" / "yaksha" / "assignment"
    target.mkdir(parents=True)
    write_source(target, VALID)
    assert autograder.main([]) == 0


def test_harness_name_is_kept():
    assert (
        autograder.test_encapsulation_and_abstract_class_methods
        is autograder.check_encapsulation_and_abstract_class_methods
    )


def test_non_utf8_file_is_an_upstream_error(tmp_path, capsys):
    path = tmp_path / "Latin.java"
    path.write_bytes(b"class Animal { // caf\xe9 \xff }")

    with pytest.raises(autograder.SourceFileReadError):
        autograder.check_encapsulation_and_abstract_class_methods(path)
    out = capsys.readouterr().out
    assert "Error reading the file:" in out
    assert "Parsed the Java file successfully." not in out
    assert autograder.main([str(path)]) == 2


def test_directory_path_is_an_upstream_error(tmp_path, capsys):
    with pytest.raises(autograder.SourceFileReadError):
        autograder.check_encapsulation_and_abstract_class_methods(tmp_path)
    assert "Error reading the file:" in capsys.readouterr().out
    assert autograder.main([str(tmp_path)]) == 2
