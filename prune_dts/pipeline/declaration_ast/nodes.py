"""
Declaration tree node definitions.

These nodes represent the fully-resolved declaration surface of a module
(types, members and their relationships), without executable bodies.
Pruning stages never mutate these nodes; they build new trees instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class DeclarationKind(str, Enum):
    """Kind of top-level (or namespace-level) declaration."""

    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    TYPE_ALIAS = "typeAlias"
    NAMESPACE = "namespace"
    ENUM = "enum"
    VARIABLE = "variable"
    NOT_EMITTED = "notEmitted"  # Placeholder left by the export filter


class MemberKind(str, Enum):
    """Kind of class or interface member."""

    PROPERTY = "property"
    METHOD = "method"
    ACCESSOR = "accessor"
    CONSTRUCTOR = "constructor"


class HeritageKind(str, Enum):
    """Kind of heritage relationship."""

    EXTENDS = "extends"
    IMPLEMENTS = "implements"


class Visibility(str, Enum):
    """Member visibility modifiers."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


@dataclass
class Documentation:
    """A documentation comment: free text plus tags (tag name -> payload)."""

    text: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.text and not self.tags


# Type expressions


@dataclass
class TypeNode:
    """Base class for type expressions."""


@dataclass
class TypeReference(TypeNode):
    """A named pointer into the symbol space (e.g. `Map<string, Foo>`)."""

    name: str = ""
    type_arguments: list[TypeNode] = field(default_factory=list)

    # Enclosing namespace path, innermost last; used for lexical resolution
    scope: tuple[str, ...] = ()

    # Refers to a type parameter of an enclosing declaration
    is_type_parameter: bool = False


@dataclass
class ArrayType(TypeNode):
    """An array type (`T[]`)."""

    element_type: TypeNode | None = None


@dataclass
class UnionType(TypeNode):
    """A union type (`A | B`)."""

    types: list[TypeNode] = field(default_factory=list)


@dataclass
class LiteralType(TypeNode):
    """A literal type, kept verbatim (e.g. `'asc'`, `42`)."""

    text: str = ""


@dataclass
class FunctionType(TypeNode):
    """A function type (`(x: A) => B`)."""

    parameters: list[Parameter] = field(default_factory=list)
    return_type: TypeNode | None = None


# Signatures


@dataclass
class TypeParameter:
    """A generic type parameter with optional constraint and default."""

    name: str = ""
    constraint: TypeNode | None = None
    default: TypeNode | None = None


@dataclass
class Parameter:
    """A function, method or constructor parameter."""

    name: str = ""
    type_annotation: TypeNode | None = None
    is_optional: bool = False
    is_rest: bool = False


@dataclass
class Signature:
    """A callable signature."""

    type_parameters: list[TypeParameter] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    return_type: TypeNode | None = None


# Members


@dataclass
class Member:
    """A class or interface member."""

    kind: MemberKind = MemberKind.PROPERTY
    name: str = ""  # Empty for constructors
    documentation: Documentation | None = None
    visibility: Visibility | None = None
    is_static: bool = False
    is_readonly: bool = False
    is_optional: bool = False

    # "get" or "set", for accessors only
    accessor: str = "get"

    # Property and accessor type
    type_annotation: TypeNode | None = None

    # Method and constructor signature
    signature: Signature | None = None

    @property
    def overload_key(self) -> tuple[str, MemberKind, str | None]:
        """Members sharing this key form one overload set; a getter and its setter do not."""
        return (self.name, self.kind, self.accessor if self.kind == MemberKind.ACCESSOR else None)


@dataclass
class HeritageEdge:
    """An extends/implements edge; the subtype is the declaration that owns it."""

    kind: HeritageKind = HeritageKind.EXTENDS
    target: TypeReference = field(default_factory=TypeReference)


@dataclass
class EnumMember:
    """An enum member with its optional initializer text."""

    name: str = ""
    value: str | None = None


# Declarations


@dataclass
class DeclarationNode:
    """Base class for all declarations."""

    KIND: ClassVar[DeclarationKind]

    name: str | None = None
    exported: bool = False
    # `export default`; anonymous classes are always default exports
    is_default: bool = False
    documentation: Documentation | None = None

    # Location in the declaration document (for diagnostics)
    source_path: str = ""

    @property
    def kind(self) -> DeclarationKind:
        return self.KIND


@dataclass
class ClassDeclaration(DeclarationNode):
    """A class declaration."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.CLASS

    is_abstract: bool = False
    type_parameters: list[TypeParameter] = field(default_factory=list)
    heritage: list[HeritageEdge] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)


@dataclass
class InterfaceDeclaration(DeclarationNode):
    """An interface declaration."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.INTERFACE

    type_parameters: list[TypeParameter] = field(default_factory=list)
    heritage: list[HeritageEdge] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)


@dataclass
class FunctionDeclaration(DeclarationNode):
    """A function declaration (one per overload)."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.FUNCTION

    signature: Signature = field(default_factory=Signature)


@dataclass
class TypeAliasDeclaration(DeclarationNode):
    """A type alias declaration."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.TYPE_ALIAS

    type_parameters: list[TypeParameter] = field(default_factory=list)
    type_annotation: TypeNode | None = None


@dataclass
class NamespaceDeclaration(DeclarationNode):
    """A namespace declaration with nested declarations."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.NAMESPACE

    body: list[DeclarationNode] = field(default_factory=list)


@dataclass
class EnumDeclaration(DeclarationNode):
    """An enum declaration."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.ENUM

    is_const: bool = False
    enum_members: list[EnumMember] = field(default_factory=list)


@dataclass
class VariableStatement(DeclarationNode):
    """A variable statement (`const x: T`)."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.VARIABLE

    keyword: str = "const"
    type_annotation: TypeNode | None = None


@dataclass
class NotEmittedStatement(DeclarationNode):
    """Empty placeholder for a removed declaration; keeps statement positions stable."""

    KIND: ClassVar[DeclarationKind] = DeclarationKind.NOT_EMITTED

    original: DeclarationNode | None = None


@dataclass
class ImportDeclaration:
    """An import of out-of-tree symbols."""

    module: str = ""
    names: list[str] = field(default_factory=list)


@dataclass
class DeclarationTree:
    """Root of the declaration tree."""

    statements: list[DeclarationNode] = field(default_factory=list)
    imports: list[ImportDeclaration] = field(default_factory=list)

    # Path of the document the tree was built from
    source_path: str = ""
