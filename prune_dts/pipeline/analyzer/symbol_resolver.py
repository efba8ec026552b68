"""
Symbol resolver for type references.

Resolves type references to symbols declared in the original (unpruned)
declaration tree. Later pruning stages re-query this resolver, so it must
stay bound to the original tree for the whole prune call.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ...utils import qualify
from ..declaration_ast.nodes import (
    ClassDeclaration,
    DeclarationNode,
    DeclarationTree,
    Documentation,
    InterfaceDeclaration,
    Member,
    MemberKind,
    NamespaceDeclaration,
    NotEmittedStatement,
    TypeReference,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Symbol:
    """A resolver-owned identity, distinct from the syntax that declares it."""

    name: str = ""
    qualified_name: str = ""

    # Documentation comments of the declarations that have one, in declaration order
    documentation: tuple[Documentation, ...] = field(default=(), compare=False)


class SymbolResolver(ABC):
    """Abstract type-aware symbol resolver."""

    @abstractmethod
    def resolve(self, ref: TypeReference) -> Symbol | None:
        """
        Resolve a type reference.

        Args:
            ref: The reference to resolve

        Returns:
            The referenced symbol, or None when it is declared outside the tree
            (built-in, imported or a type parameter)
        """

    @abstractmethod
    def declarations_of(self, symbol: Symbol) -> list[DeclarationNode]:
        """Return the declarations of a symbol, in tree order."""

    @abstractmethod
    def exports_of(self, tree: DeclarationTree) -> list[Symbol]:
        """Return the exported symbols of a tree, in declaration order, without duplicates."""

    @abstractmethod
    def members_of(self, symbol: Symbol) -> list[Member]:
        """Return the members of a type symbol, including inherited ones."""

    @abstractmethod
    def member_documentation(self, symbol: Symbol, name: str, accessor: str | None = None) -> tuple[Documentation, ...]:
        """Return the per-overload documentation comments of member `name` on a type symbol.

        For accessors, `accessor` ("get" or "set") selects one half of the pair.
        """

    def is_exported(self, symbol: Symbol, tree: DeclarationTree) -> bool:
        """Check whether a symbol is exported from a tree."""
        return symbol in self.exports_of(tree)


class TreeSymbolResolver(SymbolResolver):
    """Resolves symbols against a declaration tree.

    Memoizes member and export lookups, so an instance must not be shared
    between concurrent prune calls.
    """

    def __init__(self, tree: DeclarationTree):
        """
        Initialize the resolver.

        Args:
            tree: The original, unpruned declaration tree
        """
        self.tree = tree
        self._declarations: dict[str, list[DeclarationNode]] = {}
        self._symbols: dict[str, Symbol] = {}
        self._members_cache: dict[str, list[Member]] = {}
        self._exports_cache: list[Symbol] | None = None
        self._build_cache(tree.statements, ())

    def _build_cache(self, statements: list[DeclarationNode], scope: tuple[str, ...]) -> None:
        """Index declarations by qualified name."""
        for node in statements:
            if isinstance(node, NotEmittedStatement) or not node.name:
                continue
            qualified_name = qualify(scope, node.name)
            self._declarations.setdefault(qualified_name, []).append(node)
            if isinstance(node, NamespaceDeclaration):
                self._build_cache(node.body, (*scope, node.name))

    def _symbol(self, qualified_name: str) -> Symbol:
        symbol = self._symbols.get(qualified_name)
        if symbol is None:
            declarations = self._declarations[qualified_name]
            symbol = Symbol(
                name=qualified_name.rsplit(".", 1)[-1],
                qualified_name=qualified_name,
                documentation=tuple(d.documentation for d in declarations if d.documentation and not d.documentation.is_empty()),
            )
            self._symbols[qualified_name] = symbol
        return symbol

    def resolve(self, ref: TypeReference) -> Symbol | None:
        if ref.is_type_parameter:
            return None

        # Innermost namespace first, then outwards to the top level
        for depth in range(len(ref.scope), -1, -1):
            qualified_name = qualify(ref.scope[:depth], ref.name)
            if qualified_name in self._declarations:
                return self._symbol(qualified_name)
        return None

    def lookup(self, qualified_name: str) -> Symbol | None:
        """Get a symbol by qualified name."""
        if qualified_name not in self._declarations:
            return None
        return self._symbol(qualified_name)

    def declarations_of(self, symbol: Symbol) -> list[DeclarationNode]:
        return list(self._declarations.get(symbol.qualified_name, []))

    def exports_of(self, tree: DeclarationTree) -> list[Symbol]:
        if tree is self.tree and self._exports_cache is not None:
            return self._exports_cache

        exports: dict[str, Symbol] = {}
        self._collect_exports(tree.statements, (), exports)
        result = list(exports.values())
        if tree is self.tree:
            self._exports_cache = result
        return result

    def _collect_exports(self, statements: list[DeclarationNode], scope: tuple[str, ...], exports: dict[str, Symbol]) -> None:
        for node in statements:
            if isinstance(node, NotEmittedStatement) or not node.name or (not node.exported and not scope):
                continue
            qualified_name = qualify(scope, node.name)
            if qualified_name in self._declarations:
                exports.setdefault(qualified_name, self._symbol(qualified_name))
            # Everything inside an exported namespace is visible through it
            if isinstance(node, NamespaceDeclaration):
                self._collect_exports(node.body, (*scope, node.name), exports)

    def members_of(self, symbol: Symbol) -> list[Member]:
        cached = self._members_cache.get(symbol.qualified_name)
        if cached is None:
            cached = self._collect_members(symbol, set())
            self._members_cache[symbol.qualified_name] = cached
        return list(cached)

    def _collect_members(self, symbol: Symbol, visiting: set[str]) -> list[Member]:
        """Own members first, then inherited members whose names are not already present."""
        visiting = visiting | {symbol.qualified_name}
        declarations = [d for d in self.declarations_of(symbol) if isinstance(d, (ClassDeclaration, InterfaceDeclaration))]

        members = [m for d in declarations for m in d.members]
        present = {m.name for m in members}

        for declaration in declarations:
            for edge in declaration.heritage:
                base = self.resolve(edge.target)
                if base is None or base.qualified_name in visiting:
                    continue
                inherited = [m for m in self._collect_members(base, visiting) if m.kind != MemberKind.CONSTRUCTOR and m.name not in present]
                members.extend(inherited)
                present.update(m.name for m in inherited)

        logger.debug("Resolved %d member(s) for %s", len(members), symbol.qualified_name)
        return members

    def member_documentation(self, symbol: Symbol, name: str, accessor: str | None = None) -> tuple[Documentation, ...]:
        return tuple(
            m.documentation
            for m in self.members_of(symbol)
            if m.name == name and m.overload_key[2] == accessor and m.documentation and not m.documentation.is_empty()
        )
