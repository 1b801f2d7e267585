from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from structure import StructuralIndex, build_index


class FileVault:
    """Notes on disk, addressed by vault-relative POSIX paths."""

    def __init__(self, root: str | Path, use_index: bool = True):
        self.root = Path(root)
        self.use_index = use_index
        self._index_cache: Dict[str, Tuple[float, StructuralIndex]] = {}
        # Text from the last read of each note, kept until get_index uses it
        self._last_read: Dict[str, Tuple[float, str]] = {}

    def list_notes(self) -> List[str]:
        out: List[str] = []
        for p in self.root.rglob("*.md"):
            rel = p.relative_to(self.root)
            # Skip .obsidian, .trash and other hidden folders
            if any(part.startswith(".") for part in rel.parts[:-1]):
                continue
            if p.is_file():
                out.append(rel.as_posix())
        return sorted(out)

    def path_for(self, ref: str) -> Path:
        return self.root / ref

    async def resolve_link(self, path: str) -> Optional[str]:
        """Find the note a wikilink points at.

        An exact vault-relative path wins; otherwise the shortest path ending
        in the link (so "Note" finds "folder/Note.md"). Case-insensitive.
        """
        link = path.strip().replace("\\", "/").lstrip("/")
        if not link:
            return None
        if not link.lower().endswith(".md"):
            link += ".md"
        want = link.lower()

        notes = self.list_notes()
        for rel in notes:
            if rel.lower() == want:
                return rel
        tails = [rel for rel in notes if rel.lower().endswith("/" + want)]
        if not tails:
            return None
        return min(tails, key=lambda rel: (len(rel), rel))

    async def read_text(self, ref: str) -> str:
        p = self.path_for(ref)
        mtime = os.path.getmtime(p)
        text = await asyncio.to_thread(p.read_text, encoding="utf-8")
        if self.use_index:
            self._last_read[ref] = (mtime, text)
        return text

    async def get_index(self, ref: str) -> Optional[StructuralIndex]:
        if not self.use_index:
            return None
        p = self.path_for(ref)
        try:
            mtime = os.path.getmtime(p)
        except FileNotFoundError:
            return None
        last = self._last_read.pop(ref, None)
        cached = self._index_cache.get(ref)
        if cached and cached[0] >= mtime:
            return cached[1]
        if last and last[0] >= mtime:
            text = last[1]
        else:
            text = await self.read_text(ref)
            self._last_read.pop(ref, None)
        index = build_index(text)
        self._index_cache[ref] = (mtime, index)
        return index
