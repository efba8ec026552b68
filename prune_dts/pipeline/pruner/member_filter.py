"""
Member filter: the second pruning stage.

Drops members hidden by the naming convention and narrows constructors
marked with the hide-constructor documentation tag.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ...utils import has_hidden_prefix
from ..declaration_ast.nodes import (
    ClassDeclaration,
    DeclarationNode,
    InterfaceDeclaration,
    Member,
    MemberKind,
    Signature,
)
from .visitor import DeclarationTransformer

logger = logging.getLogger(__name__)


class MemberFilter(DeclarationTransformer):
    """Removes hidden members and hides tagged constructors."""

    name = "member filter"

    def visit_class(self, node: ClassDeclaration) -> DeclarationNode:
        return replace(node, members=self._filter_members(node))

    def visit_interface(self, node: InterfaceDeclaration) -> DeclarationNode:
        return replace(node, members=self._filter_members(node))

    def _filter_members(self, node: ClassDeclaration | InterfaceDeclaration) -> list[Member]:
        # A declaration left without members stays in the tree as an empty type
        members = []
        for member in node.members:
            if member.kind == MemberKind.CONSTRUCTOR:
                members.append(self._maybe_hide_constructor(node, member))
            elif has_hidden_prefix(member.name, self.config.hidden_prefix):
                logger.debug("Dropping hidden member %s.%s", self.location(node), member.name)
            else:
                members.append(member)
        return members

    def _maybe_hide_constructor(self, node: ClassDeclaration | InterfaceDeclaration, member: Member) -> Member:
        """
        Replace a constructor tagged with the hide tag by a narrowed one.

        The replacement has no parameters and no documentation. Its visibility
        is the alternate one when the tag payload equals the alternate marker,
        the default one otherwise.

        Args:
            node: The declaration owning the constructor
            member: The constructor

        Returns:
            The narrowed constructor, or the original one if it is not tagged
        """
        tags = member.documentation.tags if member.documentation else {}
        if self.config.hide_constructor_tag not in tags:
            return member

        if tags[self.config.hide_constructor_tag].strip() == self.config.alternate_marker:
            visibility = self.config.alternate_visibility
        else:
            visibility = self.config.default_visibility

        logger.debug("Hiding constructor of %s as %s", self.location(node), visibility.value)
        return Member(kind=MemberKind.CONSTRUCTOR, visibility=visibility, signature=Signature())
