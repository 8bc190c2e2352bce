import os
import sys

from fastapi.testclient import TestClient # type: ignore

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from main import app
from java_sources import DOG, VALID, assignment

client = TestClient(app)


def test_grade_valid_source():
    resp = client.post("/grade", json={"code": VALID, "filename": "Main.java"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["passed"] is True
    assert data["diagnostics"][-1].startswith("Test passed")


def test_grade_failure_is_not_an_http_error():
    code = assignment(dog=DOG.replace(" extends Animal", ""))
    resp = client.post("/grade", json={"code": code})
    assert resp.status_code == 200
    data = resp.json()
    assert data["passed"] is False
    assert data["diagnostics"][-1] == "Error: 'Dog' class must extend 'Animal'."


def test_grade_syntax_error_is_400():
    resp = client.post("/grade", json={"code": "class {", "filename": "Main.java"})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Java syntax error")


def test_non_java_filename_is_rejected():
    resp = client.post("/grade", json={"code": VALID, "filename": "main.py"})
    assert resp.status_code == 400
    assert "Unsupported file type" in resp.json()["detail"]


def test_parse_returns_cir():
    resp = client.post("/parse", json={"code": VALID, "filename": "Main.java"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["language"] == "java"

    type_nodes = {n["attrs"]["name"]: n for n in data["cir"]["nodes"] if n["kind"] == "TypeDecl"}
    assert set(type_nodes) == {"Animal", "Dog", "Cat", "Main"}
    assert type_nodes["Dog"]["attrs"]["extends"] == ["Animal"]

    edges = {(e["src"], e["dst"], e["type"]) for e in data["cir"]["edges"]}
    assert ("type:Dog", "type:Animal", "INHERITS") in edges
