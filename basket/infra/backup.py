"""
Backup utility for basket record files.
Creates timestamped copies of a record before it is overwritten.
"""
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from basket.infra.paths import BACKUP_DIR_NAME
from basket.utilities.config import BACKUP_KEEP

logger = logging.getLogger(__name__)


class BackupManager:
    """Manages timestamped backups of record files."""

    def __init__(self, data_dir: Path, backup_dir: Optional[Path] = None, keep: int = BACKUP_KEEP):
        self.data_dir = Path(data_dir)
        self.backup_dir = Path(backup_dir) if backup_dir else self.data_dir / BACKUP_DIR_NAME
        self.keep = keep

    def create_backup(self, filename: str) -> bool:
        """Create a timestamped backup of a record file. Missing files are skipped."""
        source = self.data_dir / filename
        if not source.exists():
            logger.debug("No file to back up: %s", filename)
            return False
        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            backup_name = f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, self.backup_dir / backup_name)
            logger.info("Backup created: %s", backup_name)
            self._cleanup_old_backups(source.name)
            return True
        except OSError as e:
            logger.error("Backup failed for %s: %s", filename, e)
            return False

    def _backups_for(self, filename: str):
        pattern = f"{Path(filename).stem}_*{Path(filename).suffix}"
        # timestamped names sort chronologically
        return sorted(self.backup_dir.glob(pattern), key=lambda p: p.name)

    def _cleanup_old_backups(self, filename: str):
        """Remove old backups, keeping only the most recent ones."""
        backups = self._backups_for(filename)
        for backup in backups[:-self.keep] if self.keep > 0 else backups:
            try:
                backup.unlink()
                logger.info("Removed old backup: %s", backup.name)
            except OSError as e:
                logger.error("Failed to remove old backup %s: %s", backup.name, e)

    def list_backups(self, filename: Optional[str] = None) -> list:
        """List all backups, or the backups of one record file, newest first."""
        if not self.backup_dir.exists():
            return []
        if filename:
            backups = self._backups_for(filename)
        else:
            backups = sorted(self.backup_dir.glob("*.json"), key=lambda p: p.stat().st_mtime)
        return [
            {
                'name': b.name,
                'size': b.stat().st_size,
                'created': datetime.fromtimestamp(b.stat().st_mtime).strftime('%Y-%m-%d %H:%M:%S')
            }
            for b in reversed(backups)
        ]
