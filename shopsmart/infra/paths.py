from pathlib import Path

from shopsmart.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
STORE_FILE = DATA_DIR / 'shopsmart.json'

__all__ = ['DATA_DIR', 'STORE_FILE']
