"""
Backup utility for the consumables database file.
Copies the current file aside before it is overwritten by a save.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class BackupManager:
    """Keeps timestamped copies of a database file, pruning the oldest ones."""

    def __init__(self, backup_dir: Path, keep: int = 10):
        self.backup_dir = Path(backup_dir)
        self.keep = keep

    def create_backup(self, source: Path) -> Optional[Path]:
        """Copy ``source`` into the backup directory. Returns the copy, or None if nothing was copied."""
        source = Path(source)
        if not source.exists():
            logger.debug("No database file to back up at %s", source)
            return None
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            destination = self.backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, destination)
            logger.info("Backup created: %s", destination.name)
            self._cleanup_old_backups(source)
            return destination
        except OSError as e:
            logger.error("Backup failed for %s: %s", source, e)
            return None

    def _cleanup_old_backups(self, source: Path):
        """Remove old backups, keeping only the most recent ones."""
        for backup in self.list_backups(source)[self.keep:]:
            try:
                backup.unlink()
                logger.info("Removed old backup: %s", backup.name)
            except OSError as e:
                logger.error("Failed to remove old backup %s: %s", backup.name, e)

    def list_backups(self, source: Path) -> list:
        """Backups of ``source``, newest first."""
        source = Path(source)
        if not self.backup_dir.exists():
            return []
        pattern = f"{source.stem}_*{source.suffix}"
        # timestamped names sort chronologically
        return sorted(self.backup_dir.glob(pattern), key=lambda p: p.name, reverse=True)
