"""Configuration management for the Lunch application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from lunch.infra.paths import SEED_FILE, db_path

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Storage
LUNCH_DB_PATH: Final[Path] = Path(os.getenv('LUNCH_DB_PATH', str(db_path()))).expanduser()
LUNCH_SEED_FILE: Final[Path] = Path(os.getenv('LUNCH_SEED_FILE', str(SEED_FILE))).expanduser()

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()
