from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

# ![[file]], ![[file#heading]] or ![[file#^blockId]]
EMBED_RE = re.compile(r"!\[\[(.*?)(?:#([^\]]+))?\]\]")


class ScopeKind(str, Enum):
    FULL_FILE = "full_file"
    HEADING = "heading"
    BLOCK = "block"


class EmbedDirective(BaseModel):
    start: int
    end: int
    target: str
    kind: ScopeKind
    # heading text, or block id without the caret; None for whole-file embeds
    scope: Optional[str] = None
    # scope exactly as written after "#" (trimmed), used in diagnostics
    raw_scope: str = ""

    @property
    def label(self) -> str:
        return f"{self.target}#{self.raw_scope}" if self.raw_scope else self.target


def classify(raw_scope: str) -> tuple[ScopeKind, Optional[str]]:
    if not raw_scope:
        return ScopeKind.FULL_FILE, None
    if raw_scope.startswith("^"):
        return ScopeKind.BLOCK, raw_scope[1:]
    return ScopeKind.HEADING, raw_scope


def find_embeds(text: str) -> List[EmbedDirective]:
    """Collect every embed directive in one pass over the unmodified text.

    Matches are non-overlapping and returned in ascending offset order.
    """
    out: List[EmbedDirective] = []
    for m in EMBED_RE.finditer(text):
        target = m.group(1).strip()
        raw_scope = (m.group(2) or "").strip()
        kind, scope = classify(raw_scope)
        out.append(EmbedDirective(
            start=m.start(),
            end=m.end(),
            target=target,
            kind=kind,
            scope=scope,
            raw_scope=raw_scope,
        ))
    return out
