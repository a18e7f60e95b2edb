from pathlib import Path

from consumables.utilities.config import DATABASE_FILE, BACKUP_DIR

# Centralized paths for data files (single source of truth)
DATA_FILE: Path = DATABASE_FILE
BACKUPS_DIR: Path = BACKUP_DIR


def resolve_database_path(path=None) -> Path:
    """Return ``path`` as a Path, falling back to the configured database file."""
    return Path(path) if path is not None else DATA_FILE


__all__ = ['DATA_FILE', 'BACKUPS_DIR', 'resolve_database_path']
