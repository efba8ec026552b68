"""
Utility functions for the declaration pruner.
"""

import re

# Identifier-like words, used to find names referenced in printed declarations
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def has_hidden_prefix(name: str | None, prefix: str) -> bool:
    """Check whether a member name is hidden by the naming convention.

    The test is a case-sensitive prefix match. An empty prefix hides nothing.
    """
    if not name or not prefix:
        return False
    return name.startswith(prefix)


def qualify(scope: tuple[str, ...], name: str) -> str:
    """Join a namespace path and a name into a qualified name.

    Examples:
        ((), "Foo") -> "Foo"
        (("Outer", "Inner"), "Foo") -> "Outer.Inner.Foo"
    """
    return ".".join((*scope, name))


def referenced_identifiers(text: str) -> set[str]:
    """Return every identifier-like word appearing in text."""
    return set(_IDENTIFIER_PATTERN.findall(text))
