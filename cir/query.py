from typing import Tuple

from cir.graph import CIRGraph
from cir.model import CallSite, Field, Method, TypeDecl

class CIRQuery:
    """
    Read-only typed accessors over a CIRGraph.

    Every accessor returns tuples of frozen payloads, in the order the
    adapter added them (source order), so callers can't mutate the CIR.
    """

    def __init__(self, graph: CIRGraph) -> None:
        self._graph = graph

    def _nodes_of_kind(self, kind: str) -> Tuple:
        return tuple(
            data["payload"]
            for _, data in self._graph.g.nodes(data=True)
            if data.get("kind") == kind
        )

    def _targets(self, src: str, etype: str) -> Tuple:
        if src not in self._graph.g:
            return ()
        out = []
        for _, dst, data in self._graph.g.out_edges(src, data=True):
            if data.get("etype") == etype:
                out.append(self._graph.payload(dst))
        return tuple(out)

    def declarations_of_kind(self, *kinds: str) -> Tuple[TypeDecl, ...]:
        """All TypeDecls, optionally filtered by kind ("class", "interface", "enum")."""
        decls = self._nodes_of_kind("TypeDecl")
        if not kinds:
            return decls
        return tuple(d for d in decls if d.kind in kinds)

    def types_named(self, name: str, *kinds: str) -> Tuple[TypeDecl, ...]:
        return tuple(d for d in self.declarations_of_kind(*kinds) if d.name == name)

    def fields_of(self, type_decl: TypeDecl) -> Tuple[Field, ...]:
        return self._targets(type_decl.id, "HAS_FIELD")

    def methods_of(self, type_decl: TypeDecl) -> Tuple[Method, ...]:
        """Declared methods, constructors excluded."""
        return tuple(
            m for m in self._targets(type_decl.id, "HAS_METHOD")
            if not m.is_constructor
        )

    def parents_of(self, type_decl: TypeDecl) -> Tuple[str, ...]:
        """Declared parent names (extends clause), as written in source."""
        return type_decl.extends

    def methods_named(self, name: str) -> Tuple[Method, ...]:
        return tuple(
            m for m in self._nodes_of_kind("Method")
            if m.name == name and not m.is_constructor
        )

    def call_sites_in(self, method: Method) -> Tuple[CallSite, ...]:
        calls = self._targets(method.id, "HAS_CALL")
        return tuple(sorted(calls, key=lambda c: c.order))
