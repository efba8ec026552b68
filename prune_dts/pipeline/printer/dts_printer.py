"""
TypeScript declaration (.d.ts) printer.

Converts declaration tree nodes to declaration source text. Follows the
layout of API Extractor rollups:
- 4-space indentation
- Documentation as JSDoc blocks above declarations
- Blank line between top-level declarations
- Placeholders left by the export filter print nothing
"""

from __future__ import annotations

from ..declaration_ast.nodes import (
    ArrayType,
    ClassDeclaration,
    DeclarationNode,
    DeclarationTree,
    Documentation,
    EnumDeclaration,
    FunctionDeclaration,
    FunctionType,
    HeritageKind,
    InterfaceDeclaration,
    LiteralType,
    Member,
    MemberKind,
    NamespaceDeclaration,
    NotEmittedStatement,
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
from .base import Printer


class DtsPrinter(Printer):
    """Prints declaration trees as .d.ts source."""

    TEMPLATE_LANG = "dts"
    FILE_EXTENSION = "d.ts"

    INDENT = "    "  # 4 spaces

    def print(self, tree: DeclarationTree, generation_comment: str = "") -> str:
        declarations = []
        for node in tree.statements:
            lines = self._print_declaration(node, nested=False)
            if lines:
                declarations.append("\n".join(lines))

        text = self.file_template.render(
            generation_comment=generation_comment,
            imports=tree.imports,
            declarations=declarations,
        )
        return text.rstrip("\n") + "\n"

    def _indent_lines(self, lines: list[str], level: int = 1) -> list[str]:
        """Add indentation to a list of lines."""
        prefix = self.INDENT * level
        return [prefix + line if line.strip() else line for line in lines]

    def _modifiers(self, node: DeclarationNode, nested: bool) -> str:
        """`export declare ` at top level, `export ` inside namespaces."""
        default_exportable = isinstance(node, (ClassDeclaration, InterfaceDeclaration, FunctionDeclaration))
        if node.exported and node.is_default and default_exportable and not nested:
            return "export default "
        parts = []
        if node.exported:
            parts.append("export")
        if not nested and not isinstance(node, InterfaceDeclaration):
            parts.append("declare")
        return " ".join(parts) + " " if parts else ""

    def _print_declaration(self, node: DeclarationNode, nested: bool) -> list[str]:
        if isinstance(node, NotEmittedStatement):
            return []

        lines = self._print_documentation(node.documentation)
        modifiers = self._modifiers(node, nested)

        if isinstance(node, ClassDeclaration):
            abstract = "abstract " if node.is_abstract else ""
            header = f"{modifiers}{abstract}class {node.name or ''}".rstrip()
            lines.extend(self._print_type_body(header, node))
        elif isinstance(node, InterfaceDeclaration):
            lines.extend(self._print_type_body(f"{modifiers}interface {node.name}", node))
        elif isinstance(node, FunctionDeclaration):
            lines.append(f"{modifiers}function {node.name}{self._print_signature(node.signature)};")
        elif isinstance(node, TypeAliasDeclaration):
            type_parameters = self._print_type_parameters(node.type_parameters)
            lines.append(f"{modifiers}type {node.name}{type_parameters} = {self.print_type(node.type_annotation)};")
        elif isinstance(node, EnumDeclaration):
            const = "const " if node.is_const else ""
            lines.append(f"{modifiers}{const}enum {node.name} {{")
            for i, member in enumerate(node.enum_members):
                comma = "," if i < len(node.enum_members) - 1 else ""
                value = f" = {member.value}" if member.value is not None else ""
                lines.append(f"{self.INDENT}{member.name}{value}{comma}")
            lines.append("}")
        elif isinstance(node, VariableStatement):
            type_annotation = f": {self.print_type(node.type_annotation)}" if node.type_annotation else ""
            lines.append(f"{modifiers}{node.keyword} {node.name}{type_annotation};")
        elif isinstance(node, NamespaceDeclaration):
            lines.append(f"{modifiers}namespace {node.name} {{")
            for child in node.body:
                lines.extend(self._indent_lines(self._print_declaration(child, nested=True)))
            lines.append("}")

        return lines

    def _print_type_body(self, header: str, node: ClassDeclaration | InterfaceDeclaration) -> list[str]:
        """Print a class or interface header, heritage clauses and members."""
        header += self._print_type_parameters(node.type_parameters)

        extends = [e.target for e in node.heritage if e.kind == HeritageKind.EXTENDS]
        implements = [e.target for e in node.heritage if e.kind == HeritageKind.IMPLEMENTS]

        # Interfaces only have extends clauses
        if isinstance(node, InterfaceDeclaration):
            extends, implements = extends + implements, []

        if extends:
            header += " extends " + ", ".join(self.print_type(t) for t in extends)
        if implements:
            header += " implements " + ", ".join(self.print_type(t) for t in implements)

        lines = [header + " {"]
        for member in node.members:
            lines.extend(self._indent_lines(self._print_member(member)))
        lines.append("}")
        return lines

    def _print_member(self, member: Member) -> list[str]:
        lines = self._print_documentation(member.documentation)

        prefix = ""
        if member.visibility is not None and member.visibility != Visibility.PUBLIC:
            prefix += f"{member.visibility.value} "
        if member.is_static:
            prefix += "static "

        optional = "?" if member.is_optional else ""

        if member.kind == MemberKind.CONSTRUCTOR:
            lines.append(f"{prefix}constructor({self._print_parameters(member.signature.parameters if member.signature else [])});")
        elif member.kind == MemberKind.METHOD:
            lines.append(f"{prefix}{member.name}{optional}{self._print_signature(member.signature or Signature())};")
        elif member.kind == MemberKind.ACCESSOR:
            if member.accessor == "set":
                lines.append(f"{prefix}set {member.name}(value: {self.print_type(member.type_annotation)});")
            else:
                lines.append(f"{prefix}get {member.name}(): {self.print_type(member.type_annotation)};")
        else:
            readonly = "readonly " if member.is_readonly else ""
            type_annotation = f": {self.print_type(member.type_annotation)}" if member.type_annotation else ""
            lines.append(f"{prefix}{readonly}{member.name}{optional}{type_annotation};")

        return lines

    def _print_documentation(self, documentation: Documentation | None) -> list[str]:
        """Print a JSDoc block; tags follow the text, one per line."""
        if documentation is None or documentation.is_empty():
            return []

        body = documentation.text.strip().splitlines() if documentation.text.strip() else []
        for tag, payload in documentation.tags.items():
            body.append(f"@{tag} {payload}".rstrip())

        lines = ["/**"]
        lines.extend(f" * {line}".rstrip() for line in body)
        lines.append(" */")
        return lines

    def _print_signature(self, signature: Signature) -> str:
        text = f"{self._print_type_parameters(signature.type_parameters)}({self._print_parameters(signature.parameters)})"
        if signature.return_type is not None:
            text += f": {self.print_type(signature.return_type)}"
        return text

    def _print_parameters(self, parameters: list[Parameter]) -> str:
        parts = []
        for p in parameters:
            rest = "..." if p.is_rest else ""
            optional = "?" if p.is_optional else ""
            type_annotation = f": {self.print_type(p.type_annotation)}" if p.type_annotation else ""
            parts.append(f"{rest}{p.name}{optional}{type_annotation}")
        return ", ".join(parts)

    def _print_type_parameters(self, type_parameters: list[TypeParameter]) -> str:
        if not type_parameters:
            return ""
        parts = []
        for tp in type_parameters:
            text = tp.name
            if tp.constraint is not None:
                text += f" extends {self.print_type(tp.constraint)}"
            if tp.default is not None:
                text += f" = {self.print_type(tp.default)}"
            parts.append(text)
        return f"<{', '.join(parts)}>"

    def print_type(self, node: TypeNode | None) -> str:
        """Print a type expression; a missing type prints as `any`."""
        if node is None:
            return "any"
        if isinstance(node, TypeReference):
            if node.type_arguments:
                return f"{node.name}<{', '.join(self.print_type(a) for a in node.type_arguments)}>"
            return node.name
        if isinstance(node, ArrayType):
            element = self.print_type(node.element_type)
            if isinstance(node.element_type, (UnionType, FunctionType)):
                element = f"({element})"
            return f"{element}[]"
        if isinstance(node, UnionType):
            return " | ".join(self.print_type(t) for t in node.types)
        if isinstance(node, LiteralType):
            return node.text
        if isinstance(node, FunctionType):
            return f"({self._print_parameters(node.parameters)}) => {self.print_type(node.return_type) if node.return_type else 'void'}"
        raise TypeError(f"Cannot print type expression {type(node).__name__}")
