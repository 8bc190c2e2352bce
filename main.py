from fastapi import FastAPI, HTTPException # type: ignore
from pydantic import BaseModel # type: ignore
from typing import Any, Dict, List

from adapters.java_adapter import JavaAdapter, JavaParseError
from grader.autograder import grade_code

app = FastAPI(title="Encapsulation Autograder (Java -> CIR -> checklist)")
java_adapter = JavaAdapter()


class SourceReq(BaseModel):
    code: str
    filename: str | None = None


class ParseResponse(BaseModel):
    language: str
    cir: Dict[str, Any]


class GradeResponse(BaseModel):
    passed: bool
    diagnostics: List[str]


def _require_java(filename: str | None) -> None:
    if filename and not filename.endswith(".java"):
        raise HTTPException(status_code=400, detail=f"Unsupported file type: {filename}")


@app.post("/parse", response_model=ParseResponse)
def parse(req: SourceReq):
    _require_java(req.filename)
    try:
        graph = java_adapter.build_cir_graph_for_code(req.code, req.filename)
    except JavaParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ParseResponse(language="java", cir=graph.to_debug_json())


@app.post("/grade", response_model=GradeResponse)
def grade(req: SourceReq):
    _require_java(req.filename)
    try:
        passed, diagnostics = grade_code(req.code, req.filename)
    except JavaParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return GradeResponse(passed=passed, diagnostics=diagnostics)
