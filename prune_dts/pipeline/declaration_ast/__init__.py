"""
Declaration AST module.

Contains the declaration tree node definitions and the document parser.
"""

from __future__ import annotations

from .nodes import (
    ArrayType,
    ClassDeclaration,
    DeclarationKind,
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
from .parser import DeclarationParser

__all__ = [
    "DeclarationKind",
    "DeclarationNode",
    "DeclarationTree",
    "ClassDeclaration",
    "InterfaceDeclaration",
    "FunctionDeclaration",
    "TypeAliasDeclaration",
    "NamespaceDeclaration",
    "EnumDeclaration",
    "EnumMember",
    "VariableStatement",
    "NotEmittedStatement",
    "ImportDeclaration",
    "Documentation",
    "Member",
    "MemberKind",
    "Visibility",
    "HeritageEdge",
    "HeritageKind",
    "Signature",
    "Parameter",
    "TypeParameter",
    "TypeNode",
    "TypeReference",
    "ArrayType",
    "UnionType",
    "LiteralType",
    "FunctionType",
    "DeclarationParser",
]
