"""
Declaration document parser that builds a declaration tree.

The declaration document is the already-resolved API surface serialized as
JSON (one statement per declaration). The parser only validates its shape
and builds typed nodes; it never parses source syntax.
"""

from __future__ import annotations

from typing import Any

from ..errors import ParseError
from .nodes import (
    ArrayType,
    ClassDeclaration,
    DeclarationNode,
    DeclarationTree,
    Documentation,
    EnumDeclaration,
    EnumMember,
    FunctionDeclaration,
    FunctionType,
    HeritageEdge,
    HeritageKind,
    ImportDeclaration,
    InterfaceDeclaration,
    LiteralType,
    Member,
    MemberKind,
    NamespaceDeclaration,
    Parameter,
    Signature,
    TypeAliasDeclaration,
    TypeNode,
    TypeParameter,
    TypeReference,
    UnionType,
    VariableStatement,
    Visibility,
)


class DeclarationParser:
    """Parses a declaration document into a DeclarationTree."""

    def __init__(self):
        self.source_path = ""

        # Namespace path of the statement being parsed
        self._scope: tuple[str, ...] = ()

        # Type parameter names visible at the current position
        self._type_parameters: list[set[str]] = []

    def parse(self, document: dict[str, Any], source_path: str = "") -> DeclarationTree:
        """
        Parse a declaration document.

        Args:
            document: The declaration document dictionary
            source_path: Where the document came from (for error messages)

        Returns:
            DeclarationTree with parsed statements and imports

        Raises:
            ParseError: If the document is not a well-formed declaration tree
        """
        self.source_path = source_path
        self._scope = ()
        self._type_parameters = []

        if not isinstance(document, dict):
            raise self._error("document must be an object", "#")

        tree = DeclarationTree(source_path=source_path)

        for i, imp in enumerate(self._list(document, "imports", "#")):
            path = f"#/imports/{i}"
            if not isinstance(imp, dict) or not isinstance(imp.get("module"), str):
                raise self._error("import must have a 'module' string", path)
            tree.imports.append(ImportDeclaration(module=imp["module"], names=[str(n) for n in self._list(imp, "names", path)]))

        for i, statement in enumerate(self._list(document, "statements", "#")):
            tree.statements.append(self._parse_declaration(statement, f"#/statements/{i}"))

        return tree

    def _error(self, message: str, path: str) -> ParseError:
        return ParseError(f"{message} (at {path})", self.source_path)

    def _list(self, data: dict[str, Any], key: str, path: str) -> list[Any]:
        """Get an optional list value, rejecting anything that is not a list."""
        value = data.get(key, [])
        if not isinstance(value, list):
            raise self._error(f"'{key}' must be a list", path)
        return value

    def _name(self, data: dict[str, Any], path: str, required: bool = True) -> str | None:
        name = data.get("name")
        if name is None and not required:
            return None
        if not isinstance(name, str) or not name:
            raise self._error("declaration requires a non-empty 'name'", path)
        return name

    def _parse_declaration(self, data: Any, path: str) -> DeclarationNode:
        """Parse one declaration, dispatching on its kind."""
        if not isinstance(data, dict):
            raise self._error("statement must be an object", path)

        kind = data.get("kind")
        parsers = {
            "class": self._parse_class,
            "interface": self._parse_interface,
            "function": self._parse_function,
            "typeAlias": self._parse_type_alias,
            "namespace": self._parse_namespace,
            "enum": self._parse_enum,
            "variable": self._parse_variable,
        }
        if kind not in parsers:
            raise self._error(f"unknown declaration kind {kind!r}", path)
        return parsers[kind](data, path)

    def _common(self, data: dict[str, Any], path: str, name_required: bool = True) -> dict[str, Any]:
        """Extract the attributes shared by every declaration."""
        name = self._name(data, path, required=name_required)
        return {
            "name": name,
            "exported": bool(data.get("exported", False)),
            "is_default": bool(data.get("default", False)) or name is None,
            "documentation": self._parse_documentation(data.get("documentation"), path),
            "source_path": path,
        }

    def _parse_class(self, data: dict[str, Any], path: str) -> ClassDeclaration:
        # Anonymous classes only appear as `export default class`
        common = self._common(data, path, name_required=False)
        type_parameters = self._enter_type_parameters(data, path)
        try:
            return ClassDeclaration(
                **common,
                is_abstract=bool(data.get("abstract", False)),
                type_parameters=type_parameters,
                heritage=self._parse_heritage(data, path),
                members=[self._parse_member(m, f"{path}/members/{i}") for i, m in enumerate(self._list(data, "members", path))],
            )
        finally:
            self._type_parameters.pop()

    def _parse_interface(self, data: dict[str, Any], path: str) -> InterfaceDeclaration:
        common = self._common(data, path)
        type_parameters = self._enter_type_parameters(data, path)
        try:
            return InterfaceDeclaration(
                **common,
                type_parameters=type_parameters,
                heritage=self._parse_heritage(data, path),
                members=[self._parse_member(m, f"{path}/members/{i}") for i, m in enumerate(self._list(data, "members", path))],
            )
        finally:
            self._type_parameters.pop()

    def _parse_function(self, data: dict[str, Any], path: str) -> FunctionDeclaration:
        common = self._common(data, path)
        return FunctionDeclaration(**common, signature=self._parse_signature(data, path))

    def _parse_type_alias(self, data: dict[str, Any], path: str) -> TypeAliasDeclaration:
        common = self._common(data, path)
        if "type" not in data:
            raise self._error("type alias requires a 'type'", path)
        type_parameters = self._enter_type_parameters(data, path)
        try:
            return TypeAliasDeclaration(
                **common,
                type_parameters=type_parameters,
                type_annotation=self._parse_type(data["type"], f"{path}/type"),
            )
        finally:
            self._type_parameters.pop()

    def _parse_namespace(self, data: dict[str, Any], path: str) -> NamespaceDeclaration:
        common = self._common(data, path)
        outer_scope = self._scope
        self._scope = (*outer_scope, common["name"])
        try:
            body = [self._parse_declaration(d, f"{path}/body/{i}") for i, d in enumerate(self._list(data, "body", path))]
        finally:
            self._scope = outer_scope
        return NamespaceDeclaration(**common, body=body)

    def _parse_enum(self, data: dict[str, Any], path: str) -> EnumDeclaration:
        common = self._common(data, path)
        members = []
        for i, m in enumerate(self._list(data, "members", path)):
            if not isinstance(m, dict):
                raise self._error("enum member must be an object", f"{path}/members/{i}")
            value = m.get("value")
            members.append(EnumMember(name=self._name(m, f"{path}/members/{i}"), value=None if value is None else str(value)))
        return EnumDeclaration(**common, is_const=bool(data.get("const", False)), enum_members=members)

    def _parse_variable(self, data: dict[str, Any], path: str) -> VariableStatement:
        common = self._common(data, path)
        keyword = data.get("keyword", "const")
        if keyword not in ("const", "let", "var"):
            raise self._error(f"unknown variable keyword {keyword!r}", path)
        type_annotation = self._parse_type(data["type"], f"{path}/type") if "type" in data else None
        return VariableStatement(**common, keyword=keyword, type_annotation=type_annotation)

    def _parse_documentation(self, data: Any, path: str) -> Documentation | None:
        """Parse a documentation comment; a plain string is text without tags."""
        if data is None:
            return None
        if isinstance(data, str):
            return Documentation(text=data)
        if not isinstance(data, dict):
            raise self._error("documentation must be a string or an object", path)
        tags = data.get("tags", {})
        if not isinstance(tags, dict):
            raise self._error("documentation tags must be an object", path)
        return Documentation(
            text=str(data.get("text", "")),
            tags={str(k): "" if v is None else str(v) for k, v in tags.items()},
        )

    def _parse_heritage(self, data: dict[str, Any], path: str) -> list[HeritageEdge]:
        edges = []
        for i, edge in enumerate(self._list(data, "heritage", path)):
            edge_path = f"{path}/heritage/{i}"
            if not isinstance(edge, dict):
                raise self._error("heritage edge must be an object", edge_path)
            try:
                kind = HeritageKind(edge.get("kind", "extends"))
            except ValueError:
                raise self._error(f"unknown heritage kind {edge.get('kind')!r}", edge_path) from None
            target = self._parse_type(edge.get("target"), f"{edge_path}/target")
            if not isinstance(target, TypeReference):
                raise self._error("heritage target must be a named type", edge_path)
            edges.append(HeritageEdge(kind=kind, target=target))
        return edges

    def _parse_member(self, data: Any, path: str) -> Member:
        """Parse a class or interface member."""
        if not isinstance(data, dict):
            raise self._error("member must be an object", path)

        try:
            kind = MemberKind(data.get("kind"))
        except ValueError:
            raise self._error(f"unknown member kind {data.get('kind')!r}", path) from None

        visibility = data.get("visibility")
        try:
            visibility = Visibility(visibility) if visibility is not None else None
        except ValueError:
            raise self._error(f"unknown visibility {visibility!r}", path) from None

        member = Member(
            kind=kind,
            name="" if kind == MemberKind.CONSTRUCTOR else self._name(data, path),
            documentation=self._parse_documentation(data.get("documentation"), path),
            visibility=visibility,
            is_static=bool(data.get("static", False)),
            is_readonly=bool(data.get("readonly", False)),
            is_optional=bool(data.get("optional", False)),
        )

        if kind in (MemberKind.METHOD, MemberKind.CONSTRUCTOR):
            member.signature = self._parse_signature(data, path)
        else:
            if kind == MemberKind.ACCESSOR:
                member.accessor = data.get("accessor", "get")
                if member.accessor not in ("get", "set"):
                    raise self._error(f"unknown accessor {member.accessor!r}", path)
            if "type" in data:
                member.type_annotation = self._parse_type(data["type"], f"{path}/type")

        return member

    def _parse_signature(self, data: dict[str, Any], path: str) -> Signature:
        type_parameters = self._enter_type_parameters(data, path)
        try:
            return Signature(
                type_parameters=type_parameters,
                parameters=self._parse_parameters(self._list(data, "parameters", path), path),
                return_type=self._parse_type(data["returnType"], f"{path}/returnType") if "returnType" in data else None,
            )
        finally:
            self._type_parameters.pop()

    def _parse_parameters(self, items: list[Any], path: str) -> list[Parameter]:
        parameters = []
        for i, p in enumerate(items):
            param_path = f"{path}/parameters/{i}"
            if not isinstance(p, dict):
                raise self._error("parameter must be an object", param_path)
            parameters.append(
                Parameter(
                    name=self._name(p, param_path),
                    type_annotation=self._parse_type(p["type"], f"{param_path}/type") if "type" in p else None,
                    is_optional=bool(p.get("optional", False)),
                    is_rest=bool(p.get("rest", False)),
                )
            )
        return parameters

    def _enter_type_parameters(self, data: dict[str, Any], path: str) -> list[TypeParameter]:
        """Parse type parameters and make their names visible; caller pops the frame."""
        items = self._list(data, "typeParameters", path)
        names = set()
        for i, tp in enumerate(items):
            if isinstance(tp, str):
                names.add(tp)
            elif isinstance(tp, dict):
                names.add(self._name(tp, f"{path}/typeParameters/{i}"))
            else:
                raise self._error("type parameter must be a string or an object", f"{path}/typeParameters/{i}")
        self._type_parameters.append(names)

        type_parameters = []
        for i, tp in enumerate(items):
            if isinstance(tp, str):
                type_parameters.append(TypeParameter(name=tp))
                continue
            tp_path = f"{path}/typeParameters/{i}"
            type_parameters.append(
                TypeParameter(
                    name=tp["name"],
                    constraint=self._parse_type(tp["constraint"], f"{tp_path}/constraint") if "constraint" in tp else None,
                    default=self._parse_type(tp["default"], f"{tp_path}/default") if "default" in tp else None,
                )
            )
        return type_parameters

    def _is_type_parameter(self, name: str) -> bool:
        return any(name in frame for frame in self._type_parameters)

    def _parse_type(self, data: Any, path: str) -> TypeNode:
        """
        Parse a type expression.

        Args:
            data: A type name string or a structured type object
            path: Current path in the document (for error messages)

        Returns:
            Appropriate TypeNode subclass
        """
        if isinstance(data, str):
            return self._reference(data, [], path)

        if not isinstance(data, dict):
            raise self._error("type must be a string or an object", path)

        if "ref" in data:
            args = [self._parse_type(a, f"{path}/args/{i}") for i, a in enumerate(self._list(data, "args", path))]
            return self._reference(data["ref"], args, path)

        if "array" in data:
            return ArrayType(element_type=self._parse_type(data["array"], f"{path}/array"))

        if "union" in data:
            return UnionType(types=[self._parse_type(t, f"{path}/union/{i}") for i, t in enumerate(self._list(data, "union", path))])

        if "literal" in data:
            return LiteralType(text=str(data["literal"]))

        if "function" in data:
            fn = data["function"]
            if not isinstance(fn, dict):
                raise self._error("function type must be an object", path)
            return FunctionType(
                parameters=self._parse_parameters(self._list(fn, "parameters", path), f"{path}/function"),
                return_type=self._parse_type(fn["returnType"], f"{path}/function/returnType") if "returnType" in fn else None,
            )

        raise self._error(f"unknown type expression with keys {sorted(data)}", path)

    def _reference(self, name: Any, args: list[TypeNode], path: str) -> TypeReference:
        if not isinstance(name, str) or not name:
            raise self._error("type reference requires a non-empty name", path)
        return TypeReference(
            name=name,
            type_arguments=args,
            scope=self._scope,
            is_type_parameter=self._is_type_parameter(name),
        )
