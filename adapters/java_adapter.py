import javalang  # type: ignore
from typing import Dict, List, Tuple
from cir.model import TypeDecl, Field, Method, CallSite
from cir.graph import CIRGraph


class JavaParseError(ValueError):
    """Source text could not be turned into a Java syntax tree."""


class JavaAdapter:
    """
    Java → CIRGraph builder for a single compilation unit.

    Creates nodes for types (top-level, member and local), fields, methods,
    constructors and call sites, and edges for:
      - HAS_FIELD, HAS_METHOD
      - HAS_CALL (method -> call site, in source order)
      - INHERITS, IMPLEMENTS (only when the parent is declared in the same file)

    Declared parent names are also kept on the TypeDecl as written, so a
    parent that lives in another file is still visible to callers.
    """

    language = "java"

    # ---------------- Helpers ----------------

    def _visibility_from_mods(self, mods: set[str] | None, implicit_public: bool = False) -> str:
        mods = mods or set()
        if "public" in mods:
            return "public"
        if "private" in mods:
            return "private"
        if "protected" in mods:
            return "protected"
        return "public" if implicit_public else "package"

    def _flags_from_mods(self, mods: set[str] | None) -> Tuple[bool, bool, bool]:
        """
        Returns (is_static, is_abstract, is_final)
        """
        mods = mods or set()
        return ("static" in mods, "abstract" in mods, "final" in mods)

    def _simple_name(self, t) -> str:
        # java.util.List is ReferenceType(java) -> sub_type(util) -> sub_type(List)
        while getattr(t, "sub_type", None) is not None:
            t = t.sub_type
        return getattr(t, "name", "Object")

    def _type_names(self, t) -> Tuple[str, str]:
        """
        From a javalang Type node, derive (logical_type, raw_type),
        e.g. List<Item> -> ("Item", "List<Item>").
        """
        if t is None:
            return "void", "void"

        dims = getattr(t, "dimensions", None)
        while getattr(t, "sub_type", None) is not None:
            t = t.sub_type
        base_name = getattr(t, "name", "Object")
        logical_type = base_name
        raw_type = base_name

        args = getattr(t, "arguments", None)
        if args:
            inner_type = getattr(args[0], "type", None)
            inner_name = self._simple_name(inner_type) if inner_type is not None else None
            if inner_name:
                logical_type = inner_name
                raw_type = f"{base_name}<{inner_name}>"

        if dims:
            raw_type = f"{raw_type}[]"

        return logical_type, raw_type

    def _member_decls(self, t) -> list:
        body = getattr(t, "body", None)
        if body is None:
            return []
        # enums keep their members next to the constants
        if hasattr(body, "declarations"):
            return list(body.declarations or [])
        return list(body)

    def _parent_names(self, t) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        extends = getattr(t, "extends", None)
        if extends is None:
            ext: Tuple[str, ...] = ()
        elif isinstance(extends, list):
            ext = tuple(self._simple_name(e) for e in extends)   # interfaces
        else:
            ext = (self._simple_name(extends),)
        impl = tuple(self._simple_name(i) for i in (getattr(t, "implements", None) or []))
        return ext, impl

    # ---------------- Call extraction ----------------

    def _walk_ast_in_order(self, node):
        """
        Pre-order traversal that yields nodes in a stable source-like order.
        """
        if node is None:
            return
        if isinstance(node, (list, tuple)):
            for item in node:
                yield from self._walk_ast_in_order(item)
            return
        if not isinstance(node, javalang.ast.Node):
            return
        yield node
        for c in node.children:
            yield from self._walk_ast_in_order(c)

    def _extract_ordered_calls(self, method_or_ctor) -> List[Dict[str, object]]:
        """
        Extract ordered call sites from a method/constructor body,
        including calls nested in lambdas, anonymous and local classes.
        """
        calls: List[Dict[str, object]] = []
        body = getattr(method_or_ctor, "body", None)
        if not body:
            return calls

        order = 0
        for n in self._walk_ast_in_order(body):
            # obj.method() OR Type.method() OR method()
            if isinstance(n, javalang.tree.MethodInvocation):
                q = n.qualifier or ""
                kind = "none"
                if q:
                    kind = "static" if q[:1].isupper() else "var"
                calls.append({"qualifier_kind": kind, "qualifier": q, "member": n.member or "", "order": order})
                order += 1

            # super.method()
            elif isinstance(n, javalang.tree.SuperMethodInvocation):
                calls.append({"qualifier_kind": "super", "qualifier": "super", "member": n.member or "", "order": order})
                order += 1

        return calls

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str):
        try:
            return javalang.parse.parse(code)
        except javalang.parser.JavaSyntaxError as e:
            detail = getattr(e, "description", None) or str(e)
            at = getattr(e, "at", None)
            if at is not None:
                detail = f"{detail} at {at}"
            raise JavaParseError(f"Java syntax error: {detail}") from e
        except Exception as e:
            raise JavaParseError(f"Failed to parse Java code: {e}") from e

    def build_cir_graph_for_code(self, code: str, filename: str | None = None) -> CIRGraph:
        """
        Parse one compilation unit and lift it into a CIRGraph.
        Raises JavaParseError if the code doesn't parse.
        """
        tree = self.parse_to_ast(code)
        graph = CIRGraph()
        graph.g.graph["source_file"] = filename

        package_name = getattr(getattr(tree, "package", None), "name", None)
        type_ids: List[Tuple[str, TypeDecl]] = []

        for path, t in tree.filter(javalang.tree.TypeDeclaration):
            outer = [p.name for p in path if isinstance(p, javalang.tree.TypeDeclaration)]
            dotted = ".".join(outer + [t.name])
            full_name = f"{package_name}.{dotted}" if package_name else dotted

            type_id = f"type:{full_name}"
            suffix = 1
            while type_id in graph.g:
                # two local classes with the same name
                suffix += 1
                type_id = f"type:{full_name}#{suffix}"

            type_decl = self._process_type(graph, t, type_id, package_name)
            type_ids.append((type_id, type_decl))

        self._add_relationship_edges(graph, type_ids)
        return graph

    # ---------------- Core processing ----------------

    def _process_type(self, graph: CIRGraph, t, type_id: str, package_name: str | None) -> TypeDecl:
        # member ids hang off the type id, which is unique even for same-named local classes
        owner = type_id[len("type:"):]
        kind = type(t).__name__.replace("Declaration", "").lower()
        if kind not in ("class", "interface", "enum"):
            kind = "interface"  # @interface annotation types
        mods = t.modifiers or set()
        _, is_abstract, is_final = self._flags_from_mods(mods)
        extends, implements = self._parent_names(t)

        type_decl = TypeDecl(
            id=type_id,
            name=t.name,
            kind=kind,
            visibility=self._visibility_from_mods(mods),
            package=package_name,
            modifiers=tuple(sorted(mods)),
            is_abstract=is_abstract,
            is_final=is_final,
            extends=extends,
            implements=implements,
        )
        graph.add_node(type_id, "TypeDecl", type_decl)

        members = self._member_decls(t)
        in_interface = kind == "interface"

        # ---------- fields ----------
        for field in (m for m in members if isinstance(m, javalang.tree.FieldDeclaration)):
            logical_type, raw_type = self._type_names(field.type)
            mods_f = field.modifiers or set()
            for decl in field.declarators:
                field_id = f"field:{owner}:{decl.name}"
                graph.add_node(field_id, "Field", Field(
                    id=field_id,
                    name=decl.name,
                    type_name=logical_type,
                    raw_type=raw_type,
                    visibility=self._visibility_from_mods(mods_f, implicit_public=in_interface),
                    modifiers=tuple(sorted(mods_f)),
                ))
                graph.add_edge(type_id, field_id, "HAS_FIELD")

        # ---------- methods & constructors ----------
        for idx, member in enumerate(members):
            is_ctor = isinstance(member, javalang.tree.ConstructorDeclaration)
            if not is_ctor and not isinstance(member, javalang.tree.MethodDeclaration):
                continue

            prefix = "ctor" if is_ctor else "method"
            method_id = f"{prefix}:{owner}:{member.name}#{idx}"
            mods_m = member.modifiers or set()
            is_static, is_abs, _ = self._flags_from_mods(mods_m)
            return_type = "void" if is_ctor else self._type_names(member.return_type)[0]

            graph.add_node(method_id, "Method", Method(
                id=method_id,
                name=member.name,
                return_type=return_type,
                visibility=self._visibility_from_mods(mods_m, implicit_public=in_interface),
                modifiers=tuple(sorted(mods_m)),
                is_constructor=is_ctor,
                is_static=is_static,
                is_abstract=is_abs,
                has_body=member.body is not None,
            ))
            graph.add_edge(type_id, method_id, "HAS_METHOD")

            for c in self._extract_ordered_calls(member):
                call_id = f"call:{method_id}:{c['order']}"
                graph.add_node(call_id, "CallSite", CallSite(id=call_id, **c))
                graph.add_edge(method_id, call_id, "HAS_CALL")

        return type_decl

    def _add_relationship_edges(self, graph: CIRGraph, type_ids: List[Tuple[str, TypeDecl]]) -> None:
        # short name -> candidate ids; ambiguous names stay unresolved
        short_to_ids: Dict[str, List[str]] = {}
        for tid, decl in type_ids:
            short_to_ids.setdefault(decl.name, []).append(tid)

        def resolve(name: str) -> str | None:
            candidates = short_to_ids.get(name, [])
            return candidates[0] if len(candidates) == 1 else None

        for src_id, decl in type_ids:
            # interfaces "extend" other interfaces, which is still inheritance
            for base in decl.extends:
                target = resolve(base)
                if target and target != src_id:
                    graph.add_edge(src_id, target, "INHERITS")

            for iface in decl.implements:
                target = resolve(iface)
                if target and target != src_id:
                    graph.add_edge(src_id, target, "IMPLEMENTS")
