from __future__ import annotations

import re
from typing import List, Optional

from structure import StructuralIndex

# Any heading marker; level comes from the length of group 1
HEADING_MARK_RE = re.compile(r"^(#{1,6})\s")
TRAILING_ANCHOR_RE = re.compile(r"\s*\^[A-Za-z0-9]+\s*$")


def section_lines(lines: List[str], start: int, level: int) -> List[str]:
    """Lines of the section opened at `start`, stopping before the next
    heading whose level is the same or higher (fewer or equal #'s)."""
    end = len(lines)
    for n in range(start + 1, len(lines)):
        m = HEADING_MARK_RE.match(lines[n])
        if m and len(m.group(1)) <= level:
            end = n
            break
    return lines[start:end]


def _heading_from_index(lines: List[str], heading: str, index: StructuralIndex) -> Optional[str]:
    entry = index.find_heading(heading)
    if entry is None or entry.line >= len(lines):
        return None
    return "\n".join(section_lines(lines, entry.line, entry.level)).strip()


def _heading_from_text(lines: List[str], heading: str) -> Optional[str]:
    pattern = re.compile(rf"^(#{{1,6}})\s+{re.escape(heading)}")
    for n, line in enumerate(lines):
        m = pattern.match(line)
        if m:
            return "\n".join(section_lines(lines, n, len(m.group(1)))).strip()
    return None


def extract_heading(raw: str, heading: str, index: StructuralIndex | None) -> Optional[str]:
    """Text of the named section, heading line included.

    The index is tried first (case-insensitive, first match wins); a raw scan
    for the heading line is the fallback when the index is missing or has no
    usable match.
    """
    lines = raw.split("\n")
    found = None
    if index is not None:
        found = _heading_from_index(lines, heading, index)
    if not found:
        found = _heading_from_text(lines, heading)
    return found or None


def _strip_anchor(line: str, block_id: str) -> str:
    line = line.replace(f"^{block_id}", "", 1)
    return TRAILING_ANCHOR_RE.sub("", line).rstrip()


def extract_block(raw: str, block_id: str, index: StructuralIndex | None) -> Optional[str]:
    if not block_id:
        return None
    lines = raw.split("\n")

    if index is not None:
        entry = index.blocks.get(block_id)
        if entry is not None and entry.line < len(lines):
            text = _strip_anchor(lines[entry.line], block_id)
            if text:
                return text

    # Anchor may sit after trailing spaces or on the line below its paragraph
    m = re.search(rf"(.*?)\s*\^{re.escape(block_id)}(?:\s|$)", raw, re.MULTILINE)
    if m and m.group(1).rstrip():
        return m.group(1).rstrip()

    token = f"^{block_id}"
    for line in lines:
        if token in line:
            text = _strip_anchor(line, block_id)
            if text:
                return text
            break
    return None
