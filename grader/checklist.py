"""
Fixed structural checklist for the encapsulation / abstract class assignment.

Each stage is a pure function over a CIRQuery returning (passed, diagnostics).
StructureValidator runs them in order and stops at the first failing stage,
so later stages only ever see a CIR that passed the earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from cir.model import TypeDecl
from cir.query import CIRQuery
from grader import config

StageResult = Tuple[bool, List[str]]


@dataclass(frozen=True)
class Stage:
    header: Optional[str]  # printed before the stage, None = same section as previous
    check: Callable[[CIRQuery], StageResult]


# enum declarations never fill a role
CLASS_KINDS = ("class", "interface")


def _class_types(query: CIRQuery, name: str) -> Tuple[TypeDecl, ...]:
    return query.types_named(name, *CLASS_KINDS)


def _single_type(query: CIRQuery, name: str) -> TypeDecl:
    # only called once the presence stage has passed
    return _class_types(query, name)[0]


# ---------------- Stages ----------------

def check_required_classes(query: CIRQuery) -> StageResult:
    diagnostics: List[str] = []
    passed = True
    for name in (config.BASE_CLASS, config.FIRST_DERIVED_CLASS, config.SECOND_DERIVED_CLASS):
        matches = _class_types(query, name)
        if len(matches) == 1:
            diagnostics.append(f"Class '{name}' found.")
        elif not matches:
            diagnostics.append(f"Error: Class '{name}' not found.")
            passed = False
        else:
            diagnostics.append(f"Error: Class '{name}' is declared {len(matches)} times, expected exactly one.")
            passed = False
    return passed, diagnostics


def check_abstract_method(query: CIRQuery) -> StageResult:
    base = _single_type(query, config.BASE_CLASS)
    candidates = [m for m in query.methods_of(base) if m.name == config.ABSTRACT_METHOD]

    if any(m.is_abstract and not m.has_body for m in candidates):
        return True, [f"Abstract method '{config.ABSTRACT_METHOD}' found in '{base.name}' class."]

    msg = f"Error: Abstract method '{config.ABSTRACT_METHOD}' not found in '{base.name}' class."
    if candidates:
        msg += f" Found '{config.ABSTRACT_METHOD}' but it is not declared abstract."
    return False, [msg]


def check_inheritance(query: CIRQuery) -> StageResult:
    # The second derived class only has to exist, its parent is not checked.
    derived = _single_type(query, config.FIRST_DERIVED_CLASS)
    parents = query.parents_of(derived)

    if parents == (config.BASE_CLASS,):
        return True, [f"Class '{derived.name}' extends '{config.BASE_CLASS}'."]

    found = ", ".join(f"'{p}'" for p in parents) if parents else "none"
    return False, [
        f"Error: '{derived.name}' does not extend '{config.BASE_CLASS}' (declared parents: {found}).",
        f"Error: '{derived.name}' class must extend '{config.BASE_CLASS}'.",
    ]


def check_encapsulation(query: CIRQuery) -> StageResult:
    base = _single_type(query, config.BASE_CLASS)
    diagnostics: List[str] = []

    fields = [f for f in query.fields_of(base) if f.name == config.PRIVATE_FIELD]
    if not any(f.visibility == "private" for f in fields):
        msg = f"Error: Private field '{config.PRIVATE_FIELD}' not found in '{base.name}' class."
        if fields:
            msg += f" Found '{config.PRIVATE_FIELD}' with {fields[0].visibility} visibility."
        diagnostics.append(msg)
        return False, diagnostics
    diagnostics.append(f"Private field '{config.PRIVATE_FIELD}' found in '{base.name}' class.")

    methods = query.methods_of(base)
    for role, wanted in (("getter", config.GETTER_METHOD), ("setter", config.SETTER_METHOD)):
        if not any(m.name == wanted and m.visibility == "public" for m in methods):
            diagnostics.append(f"Error: Public {role} '{wanted}' for '{config.PRIVATE_FIELD}' not found in '{base.name}' class.")
            return False, diagnostics
        diagnostics.append(f"Public {role} '{wanted}' found in '{base.name}' class.")

    diagnostics.append(f"Getter and setter methods for '{config.PRIVATE_FIELD}' found.")
    return True, diagnostics


def check_method_execution(query: CIRQuery) -> StageResult:
    entry_points = query.methods_named(config.ENTRY_POINT_METHOD)
    if not entry_points:
        return False, [
            f"Error: No '{config.ENTRY_POINT_METHOD}' method found.",
            f"Error: '{config.BEHAVIOR_METHOD}' method not executed in the {config.ENTRY_POINT_METHOD} method.",
        ]

    diagnostics: List[str] = []
    for method in entry_points:
        for call in query.call_sites_in(method):
            if call.member != config.BEHAVIOR_METHOD:
                continue
            target = f"{call.qualifier}.{call.member}()" if call.qualifier else f"{call.member}()"
            diagnostics.append(
                f"Method '{config.BEHAVIOR_METHOD}' is executed in the {config.ENTRY_POINT_METHOD} method ({target})."
            )

    if not diagnostics:
        return False, [f"Error: '{config.BEHAVIOR_METHOD}' method not executed in the {config.ENTRY_POINT_METHOD} method."]
    return True, diagnostics


CHECKLIST: Tuple[Stage, ...] = (
    Stage("Class and Method Check", check_required_classes),
    Stage(None, check_abstract_method),
    Stage(None, check_inheritance),
    Stage("Encapsulation Check", check_encapsulation),
    Stage("Method Execution Check in Main", check_method_execution),
)


class StructureValidator:
    """
    Runs the checklist over one CIR. Holds no per-run state, so a single
    instance can validate any number of independently built CIRs.
    """

    def __init__(self, stages: Tuple[Stage, ...] = CHECKLIST) -> None:
        self.stages = stages

    def validate(self, query: CIRQuery) -> Tuple[bool, List[str]]:
        diagnostics: List[str] = []
        for stage in self.stages:
            if stage.header:
                diagnostics.append(f"------ {stage.header} ------")
            passed, lines = stage.check(query)
            diagnostics.extend(lines)
            if not passed:
                return False, diagnostics

        diagnostics.append(config.PASS_MESSAGE)
        return True, diagnostics
