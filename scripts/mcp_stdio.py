#!/usr/bin/env python3
"""
MCP server (stdio) for Cursor and Claude Desktop.
Flattens Obsidian notes for export: front matter and block ids are stripped
and ![[embeds]] are replaced by the text they point at.
Tools operate directly on the vault filesystem via HOST_VAULT_PATH.
"""

import os
import pathlib
from mcp.server.fastmcp import FastMCP

from exporter import ExportPathError, export_note as _export_note, flatten_note as _flatten_note
from vault import FileVault

mcp = FastMCP("markdown-flatten", json_response=True)

# Root folder of the vault that embeds are resolved against.
HOST_VAULT_PATH = pathlib.Path(os.getenv("HOST_VAULT_PATH", ""))


# ── path helpers ──────────────────────────────────────────────────────────────

def _vault() -> "FileVault | dict":
    if not HOST_VAULT_PATH.parts:
        return {"error": "host_vault_path_not_configured"}
    return FileVault(HOST_VAULT_PATH)


def _resolve_safe(source: str) -> "pathlib.Path | dict":
    """
    Resolve HOST_VAULT_PATH / source and assert the result stays within
    HOST_VAULT_PATH.  Returns the resolved Path on success, or an error dict
    when source escapes the vault root via directory traversal.
    """
    if not HOST_VAULT_PATH.parts:
        return {"error": "host_vault_path_not_configured"}
    try:
        resolved = (HOST_VAULT_PATH / source).resolve()
        resolved.relative_to(HOST_VAULT_PATH.resolve())
        return resolved
    except ValueError:
        return {"error": "path_traversal", "source": source}


# ── tools ─────────────────────────────────────────────────────────────────────

@mcp.tool()
def list_notes(folder: str = "") -> "list[str] | dict":
    """
    List note paths in the vault, optionally scoped to a subfolder.
    Paths are vault-relative and can be passed to flatten_note / export_note.
    """
    vault = _vault()
    if isinstance(vault, dict):
        return vault
    base = _resolve_safe(folder)
    if isinstance(base, dict):
        return base
    if not base.is_dir():
        return {"error": "not_a_directory", "source": folder}
    prefix = folder.strip("/")
    notes = vault.list_notes()
    if not prefix:
        return notes
    return [n for n in notes if n.startswith(prefix + "/")]


@mcp.tool()
async def flatten_note(source: str) -> "str | dict":
    """
    Return the exported form of a note: front matter removed and every
    ![[embed]] replaced by the referenced file, heading section or block.
    source may be a vault-relative path or a wikilink-style note name.
    """
    vault = _vault()
    if isinstance(vault, dict):
        return vault
    if isinstance(_resolve_safe(source), dict):
        return {"error": "path_traversal", "source": source}
    ref = await vault.resolve_link(source)
    if ref is None:
        return {"error": "not_found", "source": source}
    try:
        return await _flatten_note(ref, vault)
    except (OSError, UnicodeDecodeError) as e:
        return {"error": "read_failed", "source": ref, "detail": str(e)}


@mcp.tool()
async def export_note(source: str, target: str = "") -> dict:
    """
    Flatten a note and save the result as a new note in the vault.
    Without a target the file is named with the configured prefix and
    saved at the vault root. Refuses to overwrite an existing file.
    """
    vault = _vault()
    if isinstance(vault, dict):
        return vault
    ref = await vault.resolve_link(source)
    if ref is None:
        return {"error": "not_found", "source": source}
    try:
        written = await _export_note(ref, vault, target or None)
    except FileExistsError as e:
        return {"error": "already_exists", "target": str(e)}
    except ExportPathError:
        return {"error": "path_traversal", "target": target}
    except (OSError, UnicodeDecodeError) as e:
        return {"error": "read_failed", "source": ref, "detail": str(e)}
    return {"ok": True, "source": ref, "target": written}


if __name__ == "__main__":
    mcp.run(transport="stdio")
