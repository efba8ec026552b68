"""
Removal of imports left unused by pruning.

Pruning drops declarations and rewrites references, so names imported for
hidden declarations are often no longer referenced anywhere in the output.
"""

from __future__ import annotations

import logging
import re

from ...utils import referenced_identifiers
from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)

_NAMED_IMPORT = re.compile(r"^import\s*\{(?P<names>[^}]*)\}\s*from\s*(?P<module>'[^']*'|\"[^\"]*\");?\s*$")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"//[^\n]*")


class UnusedImportsFormatter(Formatter):
    """Drops named imports that nothing in the declarations refers to.

    Side-effect imports (`import 'module';`) are always kept.
    """

    def is_available(self) -> bool:
        return True

    def format(self, code: str, config: FormatterConfig) -> str:
        if not config.remove_unused_imports:
            return code

        lines = code.split("\n")
        body = "\n".join(line for line in lines if not _NAMED_IMPORT.match(line))
        body = _LINE_COMMENT.sub("", _BLOCK_COMMENT.sub("", body))
        used = referenced_identifiers(body)

        result = []
        for line in lines:
            match = _NAMED_IMPORT.match(line)
            if match is None:
                result.append(line)
                continue

            names = [n.strip() for n in match.group("names").split(",") if n.strip()]
            kept = [n for n in names if _local_name(n) in used]
            if len(kept) != len(names):
                logger.debug("Removing unused import(s) %s from %s", sorted(set(names) - set(kept)), match.group("module"))
            if kept:
                result.append(f"import {{ {', '.join(kept)} }} from {match.group('module')};")

        text = "\n".join(result)
        # Removing a whole import block leaves extra blank lines behind
        return re.sub(r"\n{3,}", "\n\n", text).lstrip("\n")


def _local_name(specifier: str) -> str:
    """`Foo as Bar` binds `Bar`; `type Foo` binds `Foo`."""
    return specifier.split()[-1]
