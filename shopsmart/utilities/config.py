"""Configuration management for the ShopSmart application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Persistence
STORAGE_BACKEND: Final[str] = os.getenv('STORAGE_BACKEND', 'json').strip().lower()
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('SHOPSMART_DATA_DIR', str(BASE_DIR / 'data')))
FIREBASE_DATABASE_URL: Final[str] = os.getenv('FIREBASE_DATABASE_URL', '')
FIREBASE_AUTH_TOKEN: Final[str] = os.getenv('FIREBASE_AUTH_TOKEN', '')
FIREBASE_TIMEOUT_SECONDS: Final[float] = float(os.getenv('FIREBASE_TIMEOUT_SECONDS', '10'))

# AI suggestions
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
OPENAI_TIMEOUT_SECONDS: Final[float] = float(os.getenv('OPENAI_TIMEOUT_SECONDS', '30'))
