from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from pydantic import BaseModel

from embed_parser import EmbedDirective, ScopeKind, find_embeds
from extract import extract_block, extract_heading
from settings import settings
from structure import StructuralIndex

FILE_NOT_FOUND = "file_not_found"
CONTENT_NOT_FOUND = "content_not_found"


class Vault(Protocol):
    """What the resolver needs from the note store.

    Documents are addressed by whatever reference resolve_link hands back.
    get_index may return None; callers always have a raw-text fallback.
    """

    async def resolve_link(self, path: str) -> Optional[str]: ...

    async def read_text(self, ref: str) -> str: ...

    async def get_index(self, ref: str) -> Optional[StructuralIndex]: ...


class Resolution(BaseModel):
    text: str
    # None when the embed resolved; otherwise why it did not
    reason: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.reason is None


def _log(msg: str) -> None:
    if settings.log_embeds:
        print(f"[EMBED] {msg}")


async def resolve_embed(embed: EmbedDirective, vault: Vault) -> Resolution:
    ref = await vault.resolve_link(embed.target)
    if ref is None:
        _log(f"file not found: {embed.target!r}")
        return Resolution(text=f"[File not found: {embed.target}]", reason=FILE_NOT_FOUND)

    raw = await vault.read_text(ref)
    index = await vault.get_index(ref)

    if embed.kind is ScopeKind.FULL_FILE:
        content: Optional[str] = raw
    elif embed.kind is ScopeKind.BLOCK:
        content = extract_block(raw, embed.scope or "", index)
    elif embed.kind is ScopeKind.HEADING:
        content = extract_heading(raw, embed.scope or "", index)
    else:
        raise ValueError(f"unknown scope kind: {embed.kind}")

    if not content:
        _log(f"content not found: {embed.label!r} (index={'yes' if index else 'no'})")
        return Resolution(text=f"[Content not found: {embed.label}]", reason=CONTENT_NOT_FOUND)
    _log(f"resolved {embed.kind.value} {embed.label!r} -> {content[:50]!r}")
    return Resolution(text=content)


def _pad(resolution: Resolution, before: str, after: str) -> str:
    # Block-level embeds keep their surrounding line breaks; inline ones are not padded
    if not resolution.resolved:
        return resolution.text
    lead = "\n" if before == "\n" else ""
    trail = "\n" if after == "\n" else ""
    return lead + resolution.text + trail


def splice(text: str, embed: EmbedDirective, resolution: Resolution) -> str:
    """Replace one directive span in `text`.

    Offsets come from the original scan, so callers must splice in
    descending start order.
    """
    before = text[embed.start - 1] if embed.start > 0 else ""
    after = text[embed.end] if embed.end < len(text) else ""
    return text[:embed.start] + _pad(resolution, before, after) + text[embed.end:]


def rebuild(text: str, resolved: List[Tuple[EmbedDirective, Resolution]]) -> str:
    """Assemble the output from immutable segments, right to left.

    Produces the same result as calling splice() for each directive in
    descending order, without re-slicing the growing string.
    """
    segments: List[str] = []  # rightmost first
    cursor = len(text)
    for embed, resolution in sorted(resolved, key=lambda p: p[0].start, reverse=True):
        segments.append(text[embed.end:cursor])
        before = text[embed.start - 1] if embed.start > 0 else ""
        # The character after the span may already belong to a rewritten neighbour
        after = next((s[0] for s in reversed(segments) if s), "")
        segments.append(_pad(resolution, before, after))
        cursor = embed.start
    segments.append(text[:cursor])
    return "".join(reversed(segments))


async def resolve_embeds(text: str, vault: Vault) -> str:
    """Inline every ![[...]] embed in `text`.

    Embeds are resolved one at a time from the last to the first. Pulled-in
    content is not scanned again. Errors raised by the vault propagate.
    """
    embeds = find_embeds(text)
    if not embeds:
        return text
    resolved: List[Tuple[EmbedDirective, Resolution]] = []
    for embed in reversed(embeds):
        resolved.append((embed, await resolve_embed(embed, vault)))
    return rebuild(text, resolved)
