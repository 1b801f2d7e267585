from __future__ import annotations

import re
from typing import Dict, List

from pydantic import BaseModel, Field

from stripper import FRONT_MATTER_RE

ATX_RE = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)[ \t]*$")
# Optional closing sequence: "## Title ##"
ATX_CLOSE_RE = re.compile(r"[ \t]+#+$")
FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
ANCHOR_RE = re.compile(r"(?:^|\s)\^([A-Za-z0-9]+)\s*$")


class HeadingEntry(BaseModel):
    heading: str
    level: int = Field(ge=1, le=6)
    line: int


class BlockEntry(BaseModel):
    id: str
    line: int


class StructuralIndex(BaseModel):
    """Outline of one note: headings in document order plus block anchors."""
    headings: List[HeadingEntry] = Field(default_factory=list)
    blocks: Dict[str, BlockEntry] = Field(default_factory=dict)

    def find_heading(self, heading: str) -> HeadingEntry | None:
        want = heading.lower()
        for h in self.headings:
            if h.heading.lower() == want:
                return h
        return None


def _front_matter_lines(text: str) -> int:
    m = FRONT_MATTER_RE.match(text)
    return m.group(0).count("\n") if m else 0


def build_index(text: str) -> StructuralIndex:
    """Scan raw note text into a StructuralIndex.

    Line numbers are zero-based over the full text, front matter included.
    Headings inside fenced code or front matter are ignored. An anchor on a
    line of its own points at the nearest non-blank line above it.
    """
    lines = text.split("\n")
    skip = _front_matter_lines(text)
    index = StructuralIndex()

    fence: str | None = None
    last_content = None
    for i in range(skip, len(lines)):
        line = lines[i].rstrip("\r")
        fm = FENCE_RE.match(line)
        if fence:
            if fm and fm.group(1)[0] == fence[0] and len(fm.group(1)) >= len(fence):
                fence = None
                last_content = i
            continue
        if fm:
            fence = fm.group(1)
            last_content = i
            continue

        hm = ATX_RE.match(line)
        if hm:
            title = ATX_CLOSE_RE.sub("", hm.group(2)).strip()
            index.headings.append(HeadingEntry(heading=title, level=len(hm.group(1)), line=i))

        am = ANCHOR_RE.search(line)
        if am and am.group(1) not in index.blocks:
            own_line = not line[:am.start()].strip()
            target = i
            if own_line and last_content is not None:
                target = last_content
            index.blocks[am.group(1)] = BlockEntry(id=am.group(1), line=target)

        if line.strip():
            last_content = i
    return index
