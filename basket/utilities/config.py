"""Configuration management for the basket application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('BASKET_DATA_DIR', str(BASE_DIR / 'data')))
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'

# Uploads
MAX_IMAGE_BYTES: Final[int] = int(os.getenv('MAX_IMAGE_BYTES', str(5 * 1024 * 1024)))

# Backups
BACKUP_ON_SAVE: Final[bool] = os.getenv('BACKUP_ON_SAVE', 'True').lower() == 'true'
BACKUP_KEEP: Final[int] = int(os.getenv('BACKUP_KEEP', '10'))

# Fridge check view sessions kept in memory
MAX_VIEW_SESSIONS: Final[int] = int(os.getenv('MAX_VIEW_SESSIONS', '50'))
