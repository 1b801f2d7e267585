"""Root conftest: set env vars before any app module is imported."""
import os

# ── env vars (must be set before settings.py is imported) ────────────────────
os.environ.setdefault("VAULT_PATH", "/tmp/test-vault")
os.environ.setdefault("REMOVE_METADATA", "true")
os.environ.setdefault("REMOVE_BLOCK_IDS", "false")
os.environ.setdefault("FILE_NAME_PREFIX", "(Plain) ")
os.environ.setdefault("DEFAULT_SAVE_LOCATION", "")
os.environ.setdefault("USE_STRUCTURE_INDEX", "true")
os.environ.setdefault("LOG_EMBEDS", "false")
