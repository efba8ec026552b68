"""
Heritage resolver: the third pruning stage.

Examines extends/implements edges and removes those that refer to a
non-exported type. The members of the removed supertype are merged into the
subtype instead.

Example:
    Input:
        class Foo { foo: string; }
        export class Bar extends Foo {}

    Output:
        export class Bar { foo: string; }
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ...utils import has_hidden_prefix
from ..analyzer.symbol_resolver import Symbol
from ..declaration_ast.nodes import (
    ArrayType,
    ClassDeclaration,
    DeclarationNode,
    Documentation,
    FunctionType,
    HeritageEdge,
    InterfaceDeclaration,
    Member,
    MemberKind,
    NamespaceDeclaration,
    Signature,
    TypeNode,
    TypeReference,
    UnionType,
    Visibility,
)
from ..diagnostics import ambiguous_overload_doc
from ..errors import UnsupportedNodeKind
from .visitor import DeclarationTransformer

logger = logging.getLogger(__name__)


class HeritageResolver(DeclarationTransformer):
    """Replaces heritage edges to hidden types by the members they contribute."""

    name = "heritage resolver"

    def visit_class(self, node: ClassDeclaration) -> DeclarationNode:
        return self._resolve_heritage(node)

    def visit_interface(self, node: InterfaceDeclaration) -> DeclarationNode:
        return self._resolve_heritage(node)

    def _resolve_heritage(self, node: ClassDeclaration | InterfaceDeclaration) -> DeclarationNode:
        kept: list[HeritageEdge] = []
        copied: list[Member] = []
        present = {m.name for m in node.members}

        for edge in node.heritage:
            symbol = self.resolver.resolve(edge.target)

            # Out-of-tree types are assumed to be resolvable by consumers
            if symbol is None or self.context.is_public(symbol):
                kept.append(edge)
                continue

            self._check_inheritable(node, symbol)
            new_members = self._copy_members(node, symbol, present, copied)
            arguments = self._type_arguments(symbol, edge)
            new_members = [_instantiate_member(m, arguments) for m in new_members]
            logger.debug(
                "Dropping '%s %s' from %s, merged %d member(s)",
                edge.kind.value,
                edge.target.name,
                self.location(node),
                len(new_members),
            )
            copied.extend(new_members)
            present.update(m.name for m in new_members)

        if not copied and len(kept) == len(node.heritage):
            return node
        return replace(node, heritage=kept, members=[*node.members, *copied])

    def _check_inheritable(self, node: ClassDeclaration | InterfaceDeclaration, symbol: Symbol) -> None:
        """Only symbols with a class or interface declaration can be inlined.

        Other declarations merged into the symbol (a `declare const Foo` next to
        `interface Foo`, a namespace) contribute no instance members.
        """
        declarations = self.resolver.declarations_of(symbol)
        if not any(isinstance(d, (ClassDeclaration, InterfaceDeclaration)) for d in declarations):
            others = [d for d in declarations if not isinstance(d, NamespaceDeclaration)]
            kind = others[0].kind.value if others else "namespace"
            raise UnsupportedNodeKind(f"{self.location(node)} inherits from non-exported {kind} '{symbol.qualified_name}', which is neither a class nor an interface")

    def _type_arguments(self, symbol: Symbol, edge: HeritageEdge) -> dict[str, TypeNode]:
        """Map the hidden type's type parameters to the arguments given on the edge."""
        for declaration in self.resolver.declarations_of(symbol):
            if isinstance(declaration, (ClassDeclaration, InterfaceDeclaration)) and declaration.type_parameters:
                type_parameters = declaration.type_parameters
                break
        else:
            return {}

        arguments = {}
        for i, tp in enumerate(type_parameters):
            if i < len(edge.target.type_arguments):
                arguments[tp.name] = edge.target.type_arguments[i]
            elif tp.default is not None:
                arguments[tp.name] = tp.default
        return arguments

    def _copy_members(
        self,
        node: ClassDeclaration | InterfaceDeclaration,
        symbol: Symbol,
        present: set[str],
        copied: list[Member],
    ) -> list[Member]:
        """
        Copy the members of a hidden supertype that are missing from the subtype.

        Args:
            node: The subtype
            symbol: The hidden supertype
            present: Member names already on the subtype (including earlier merges)
            copied: Members already merged from earlier edges

        Returns:
            The new members, with per-overload documentation
        """
        to_interface = isinstance(node, InterfaceDeclaration)
        members = self.resolver.members_of(symbol)
        new_members: list[Member] = []
        reported: set[tuple] = set()

        for member in members:
            if member.name in present or not self._is_copyable(member, to_interface):
                continue

            key = member.overload_key
            overload_count = sum(1 for m in members if m.overload_key == key)
            overload_index = sum(1 for m in (*copied, *new_members) if m.overload_key == key)
            documentation = self._overload_documentation(node, symbol, member, overload_count, overload_index, reported)

            new_members.append(
                replace(
                    member,
                    documentation=documentation,
                    visibility=None if to_interface else member.visibility,
                )
            )

        return new_members

    def _is_copyable(self, member: Member, to_interface: bool) -> bool:
        if member.kind == MemberKind.CONSTRUCTOR or member.is_static:
            return False
        if member.visibility == Visibility.PRIVATE:
            return False
        if to_interface and member.visibility == Visibility.PROTECTED:
            return False
        return not has_hidden_prefix(member.name, self.config.hidden_prefix)

    def _overload_documentation(
        self,
        node: ClassDeclaration | InterfaceDeclaration,
        symbol: Symbol,
        member: Member,
        overload_count: int,
        overload_index: int,
        reported: set[tuple],
    ) -> Documentation | None:
        """Pick the documentation comment of one overload by position.

        Comments map onto overloads only when every overload is documented;
        otherwise the position is ambiguous and no documentation is copied.
        """
        key = member.overload_key
        comments = self.resolver.member_documentation(symbol, member.name, key[2])
        if not comments:
            return None

        if len(comments) != overload_count:
            if key not in reported:
                reported.add(key)
                self.context.report(ambiguous_overload_doc(self.location(node), member.name, overload_count, len(comments)))
            return None

        return comments[overload_index]


def _instantiate(node: TypeNode | None, arguments: dict[str, TypeNode]) -> TypeNode | None:
    """Substitute type parameter references by their arguments."""
    if node is None or not arguments:
        return node
    if isinstance(node, TypeReference):
        if node.is_type_parameter and not node.type_arguments and node.name in arguments:
            return arguments[node.name]
        return replace(node, type_arguments=[_instantiate(a, arguments) for a in node.type_arguments])
    if isinstance(node, ArrayType):
        return replace(node, element_type=_instantiate(node.element_type, arguments))
    if isinstance(node, UnionType):
        return replace(node, types=[_instantiate(t, arguments) for t in node.types])
    if isinstance(node, FunctionType):
        return replace(
            node,
            parameters=[replace(p, type_annotation=_instantiate(p.type_annotation, arguments)) for p in node.parameters],
            return_type=_instantiate(node.return_type, arguments),
        )
    return node


def _instantiate_member(member: Member, arguments: dict[str, TypeNode]) -> Member:
    """Instantiate a member copied from a generic supertype (e.g. `T` -> `string`)."""
    if not arguments:
        return member

    signature = member.signature
    if signature is not None:
        # Type parameters of a generic method shadow those of its type
        own = {tp.name for tp in signature.type_parameters}
        scoped = {k: v for k, v in arguments.items() if k not in own}
        signature = Signature(
            type_parameters=[
                replace(tp, constraint=_instantiate(tp.constraint, scoped), default=_instantiate(tp.default, scoped))
                for tp in signature.type_parameters
            ],
            parameters=[replace(p, type_annotation=_instantiate(p.type_annotation, scoped)) for p in signature.parameters],
            return_type=_instantiate(signature.return_type, scoped),
        )

    return replace(member, type_annotation=_instantiate(member.type_annotation, arguments), signature=signature)
