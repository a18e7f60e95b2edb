"""Configuration management for the Consumables Tracker."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from consumables.utilities.constants import DEFAULT_DATABASE_FILE

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8080'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Database file (relative paths resolve against the process working directory)
DATABASE_FILE: Final[Path] = Path(os.getenv('CONSUMABLES_DATABASE', DEFAULT_DATABASE_FILE))

# Backups taken before the database file is overwritten
BACKUP_ON_SAVE: Final[bool] = os.getenv('BACKUP_ON_SAVE', 'False').lower() == 'true'
BACKUP_DIR: Final[Path] = Path(os.getenv('BACKUP_DIR', str(DATABASE_FILE.parent / 'backups')))
BACKUP_KEEP: Final[int] = int(os.getenv('BACKUP_KEEP', '10'))
