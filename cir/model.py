from dataclasses import dataclass
from typing import Literal, Optional, Tuple

Visibility = Literal["public", "protected", "private", "package"]
QualifierKind = Literal["none", "var", "static", "super"]

@dataclass(frozen=True)
class TypeDecl:
    id: str
    name: str
    kind: Literal["class", "interface", "enum"]
    visibility: Visibility = "package"
    package: Optional[str] = None
    modifiers: Tuple[str, ...] = ()
    is_abstract: bool = False
    is_final: bool = False
    extends: Tuple[str, ...] = ()     # parent names as written, unresolved
    implements: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Field:
    id: str
    name: str
    type_name: str            # logical element type (e.g. String)
    raw_type: str             # raw type text (e.g. List<String>)
    visibility: Visibility = "package"
    modifiers: Tuple[str, ...] = ()

@dataclass(frozen=True)
class Method:
    id: str
    name: str
    return_type: str
    visibility: Visibility = "package"
    modifiers: Tuple[str, ...] = ()
    is_constructor: bool = False
    is_static: bool = False
    is_abstract: bool = False
    has_body: bool = True

@dataclass(frozen=True)
class CallSite:
    id: str
    member: str               # invoked method name
    qualifier_kind: QualifierKind = "none"
    qualifier: str = ""
    order: int = 0
