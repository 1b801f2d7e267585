from fastapi import FastAPI
from pydantic import BaseModel
from settings import settings
from vault import FileVault
from exporter import ExportPathError, flatten_text, flatten_note, export_note

app = FastAPI(title="Markdown Flatten")

_vault: FileVault | None = None
_vault_key: tuple | None = None

def get_vault() -> FileVault:
    """Shared vault so its index cache outlives a single request."""
    global _vault, _vault_key
    key = (settings.vault_path, settings.use_structure_index)
    if _vault is None or key != _vault_key:
        _vault = FileVault(settings.vault_path, use_index=settings.use_structure_index)
        _vault_key = key
    return _vault

def read_failed(e: Exception, source: str | None = None) -> dict:
    print(f"[EXPORT] read failed source={source}: {e}")
    out = {"error": "read_failed", "detail": str(e)}
    if source is not None:
        out["source"] = source
    return out

class FlattenText(BaseModel):
    text: str
    remove_metadata: bool | None = None
    remove_block_ids: bool | None = None

class FlattenNote(BaseModel):
    source: str
    remove_metadata: bool | None = None
    remove_block_ids: bool | None = None

class ExportNote(BaseModel):
    source: str
    target: str | None = None

@app.post("/flatten")
async def flatten(body: FlattenText):
    try:
        content = await flatten_text(
            body.text, get_vault(),
            remove_metadata=body.remove_metadata,
            remove_block_ids=body.remove_block_ids,
        )
    except (OSError, UnicodeDecodeError) as e:
        return read_failed(e)
    return {"content": content}

@app.post("/notes/flatten")
async def flatten_source(body: FlattenNote):
    vault = get_vault()
    source = await vault.resolve_link(body.source)
    if source is None:
        return {"error": "not_found", "source": body.source}
    try:
        content = await flatten_note(
            source, vault,
            remove_metadata=body.remove_metadata,
            remove_block_ids=body.remove_block_ids,
        )
    except (OSError, UnicodeDecodeError) as e:
        return read_failed(e, source)
    return {"source": source, "content": content}

@app.post("/export")
async def export(body: ExportNote):
    vault = get_vault()
    source = await vault.resolve_link(body.source)
    if source is None:
        return {"error": "not_found", "source": body.source}
    try:
        target = await export_note(source, vault, body.target)
    except FileExistsError as e:
        return {"error": "already_exists", "target": str(e)}
    except ExportPathError:
        return {"error": "path_traversal", "target": body.target}
    except (OSError, UnicodeDecodeError) as e:
        return read_failed(e, source)
    return {"ok": True, "source": source, "target": target}

@app.get("/health")
def health():
    vault = get_vault()
    if not vault.root.is_dir():
        return {"ok": False, "vault": settings.vault_path, "error": "vault_not_found"}
    return {"ok": True, "vault": settings.vault_path, "notes": len(vault.list_notes())}
