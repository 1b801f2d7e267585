from pydantic import BaseModel
import os

def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"

class Settings(BaseModel):
    vault_path: str = os.getenv("VAULT_PATH", "/vault")
    remove_metadata: bool = _flag("REMOVE_METADATA", "true")
    remove_block_ids: bool = _flag("REMOVE_BLOCK_IDS", "false")
    file_name_prefix: str = os.getenv("FILE_NAME_PREFIX", "(Plain) ")
    # Empty means the export name is derived from the note name
    default_save_location: str = os.getenv("DEFAULT_SAVE_LOCATION", "")
    use_structure_index: bool = _flag("USE_STRUCTURE_INDEX", "true")
    log_embeds: bool = _flag("LOG_EMBEDS", "false")

settings = Settings()
