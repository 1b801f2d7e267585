from __future__ import annotations

import time
from pathlib import Path, PurePosixPath
from typing import Optional

from resolver import Vault, resolve_embeds
from settings import settings
from stripper import strip_note
from vault import FileVault

async def flatten_text(
    text: str,
    vault: Vault,
    remove_metadata: Optional[bool] = None,
    remove_block_ids: Optional[bool] = None,
) -> str:
    """Strip front matter / block ids, then inline embeds.

    Flags left as None follow settings.
    """
    if remove_metadata is None:
        remove_metadata = settings.remove_metadata
    if remove_block_ids is None:
        remove_block_ids = settings.remove_block_ids
    text = strip_note(text, remove_metadata, remove_block_ids)
    return await resolve_embeds(text, vault)

async def flatten_note(source: str, vault: FileVault, **flags) -> str:
    raw = await vault.read_text(source)
    return await flatten_text(raw, vault, **flags)

def export_name(source: str, target: Optional[str] = None) -> str:
    """Vault-relative path the export of `source` is written to.

    Explicit target, then DEFAULT_SAVE_LOCATION, then "<prefix><name>.md"
    at the vault root.
    """
    name = target or settings.default_save_location
    if not name:
        name = f"{settings.file_name_prefix}{PurePosixPath(source).stem}.md"
    if not name.endswith(".md"):
        name += ".md"
    return name.replace("\\", "/").lstrip("/")

class ExportPathError(ValueError):
    pass

def _resolve_inside(root: Path, rel: str) -> Path:
    resolved = (root / rel).resolve()
    try:
        resolved.relative_to(root.resolve())
    except ValueError:
        raise ExportPathError(f"export path escapes the vault: {rel}")
    return resolved

async def export_note(source: str, vault: FileVault, target: Optional[str] = None) -> str:
    """Flatten `source` and save it as a new note. Returns the target path.

    Never overwrites: an existing target raises FileExistsError.
    """
    start = time.time()
    rel = export_name(source, target)
    path = _resolve_inside(vault.root, rel)
    if path.exists():
        raise FileExistsError(rel)

    content = await flatten_note(source, vault)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "x", encoding="utf-8") as f:
        f.write(content)

    took = time.time() - start
    print(f"[EXPORT] source={source} target={rel} chars={len(content)} took={took:.2f}s")
    return rel
