"""
Reference rewriter: the fourth pruning stage.

Replaces type references to non-exported types inside public signatures by a
public type that can be used instead.

Example:
    Input:
        class PrivateFoo {}
        export class PublicFoo extends PrivateFoo {}
        export function doFoo(foo: PrivateFoo): void;

    Output:
        export class PublicFoo {}
        export function doFoo(foo: PublicFoo): void;
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..analyzer.symbol_resolver import Symbol
from ..declaration_ast.nodes import (
    ArrayType,
    ClassDeclaration,
    DeclarationNode,
    FunctionDeclaration,
    FunctionType,
    HeritageEdge,
    InterfaceDeclaration,
    LiteralType,
    Member,
    MemberKind,
    Parameter,
    Signature,
    TypeAliasDeclaration,
    TypeNode,
    TypeParameter,
    TypeReference,
    UnionType,
    VariableStatement,
)
from ..diagnostics import unresolved_reference
from ..errors import UnsupportedNodeKind
from .visitor import DeclarationTransformer, PruneContext

logger = logging.getLogger(__name__)


class ReferenceRewriter(DeclarationTransformer):
    """Rewrites references to hidden types in signatures."""

    name = "reference rewriter"

    def __init__(self, context: PruneContext):
        super().__init__(context)
        self._substitutes: dict[Symbol, str | None] = {}

    def visit_class(self, node: ClassDeclaration) -> DeclarationNode:
        return self._rewrite_type_declaration(node)

    def visit_interface(self, node: InterfaceDeclaration) -> DeclarationNode:
        return self._rewrite_type_declaration(node)

    def visit_function(self, node: FunctionDeclaration) -> DeclarationNode:
        return replace(node, signature=self._rewrite_signature(node.signature, self.location(node)))

    def visit_type_alias(self, node: TypeAliasDeclaration) -> DeclarationNode:
        site = self.location(node)
        return replace(
            node,
            type_parameters=self._rewrite_type_parameters(node.type_parameters, site),
            type_annotation=self._rewrite_type(node.type_annotation, site),
        )

    def visit_variable(self, node: VariableStatement) -> DeclarationNode:
        return replace(node, type_annotation=self._rewrite_type(node.type_annotation, self.location(node)))

    def _rewrite_type_declaration(self, node: ClassDeclaration | InterfaceDeclaration) -> DeclarationNode:
        site = self.location(node)
        type_parameters = self._rewrite_type_parameters(node.type_parameters, site)
        heritage = [
            HeritageEdge(
                kind=edge.kind,
                target=replace(
                    edge.target,
                    type_arguments=[self._rewrite_type(a, f"{site}:{edge.kind.value} {edge.target.name}") for a in edge.target.type_arguments],
                ),
            )
            for edge in node.heritage
        ]
        return replace(
            node,
            type_parameters=type_parameters,
            heritage=heritage,
            members=[self._rewrite_member(m, site) for m in node.members],
        )

    def _rewrite_member(self, member: Member, owner: str) -> Member:
        if member.kind == MemberKind.CONSTRUCTOR:
            site = f"{owner}.constructor"
        else:
            site = f"{owner}.{member.name}"
        return replace(
            member,
            type_annotation=self._rewrite_type(member.type_annotation, site),
            signature=self._rewrite_signature(member.signature, site) if member.signature else None,
        )

    def _rewrite_signature(self, signature: Signature, site: str) -> Signature:
        return Signature(
            type_parameters=self._rewrite_type_parameters(signature.type_parameters, site),
            parameters=self._rewrite_parameters(signature.parameters, site),
            return_type=self._rewrite_type(signature.return_type, f"{site}():return"),
        )

    def _rewrite_parameters(self, parameters: list[Parameter], site: str) -> list[Parameter]:
        return [replace(p, type_annotation=self._rewrite_type(p.type_annotation, f"{site}({p.name})")) for p in parameters]

    def _rewrite_type_parameters(self, type_parameters: list[TypeParameter], site: str) -> list[TypeParameter]:
        return [
            replace(
                tp,
                constraint=self._rewrite_type(tp.constraint, f"{site}<{tp.name}>"),
                default=self._rewrite_type(tp.default, f"{site}<{tp.name}>"),
            )
            for tp in type_parameters
        ]

    def _rewrite_type(self, node: TypeNode | None, site: str) -> TypeNode | None:
        """Rewrite every reference inside a type expression."""
        if node is None or isinstance(node, LiteralType):
            return node
        if isinstance(node, TypeReference):
            args = [self._rewrite_type(a, site) for a in node.type_arguments]
            return self._rewrite_reference(replace(node, type_arguments=args), site)
        if isinstance(node, ArrayType):
            return replace(node, element_type=self._rewrite_type(node.element_type, site))
        if isinstance(node, UnionType):
            return replace(node, types=[self._rewrite_type(t, site) for t in node.types])
        if isinstance(node, FunctionType):
            return replace(
                node,
                parameters=self._rewrite_parameters(node.parameters, site),
                return_type=self._rewrite_type(node.return_type, site),
            )
        raise UnsupportedNodeKind(f"Unsupported type expression {type(node).__name__} at {site}")

    def _rewrite_reference(self, ref: TypeReference, site: str) -> TypeReference:
        symbol = self.resolver.resolve(ref)

        # Out-of-tree symbols are assumed public
        if symbol is None or self.context.is_public(symbol):
            return ref

        substitute = self._substitute_for(symbol)
        if substitute is None:
            self.context.report(unresolved_reference(ref.name, site))
            return ref

        logger.debug("Replacing %s with %s at %s", ref.name, substitute, site)
        return TypeReference(name=substitute, type_arguments=ref.type_arguments)

    def _substitute_for(self, symbol: Symbol) -> str | None:
        if symbol not in self._substitutes:
            self._substitutes[symbol] = self._find_substitute(symbol)
        return self._substitutes[symbol]

    def _find_substitute(self, hidden: Symbol) -> str | None:
        """
        Search a public type to use in lieu of a hidden one.

        Priority:
            1. An exported symbol with the same name
            2. The first exported type that extends or implements the hidden type
            3. The first public type the hidden type extends or implements;
               this may be less restrictive than the hidden type

        Args:
            hidden: The non-exported symbol

        Returns:
            The qualified name of the substitute, or None
        """
        exports = self.resolver.exports_of(self.context.original)

        for symbol in exports:
            if symbol.name == hidden.name:
                return symbol.qualified_name

        # TODO: return a union when several exported types derive from the hidden one
        for symbol in exports:
            for declaration in self.resolver.declarations_of(symbol):
                if not isinstance(declaration, (ClassDeclaration, InterfaceDeclaration)):
                    continue
                if any(self.resolver.resolve(edge.target) == hidden for edge in declaration.heritage):
                    return symbol.qualified_name

        for declaration in self.resolver.declarations_of(hidden):
            if not isinstance(declaration, (ClassDeclaration, InterfaceDeclaration)):
                continue
            for edge in declaration.heritage:
                ancestor = self.resolver.resolve(edge.target)
                if ancestor is None:
                    return edge.target.name
                if self.context.is_public(ancestor):
                    return ancestor.qualified_name

        return None
