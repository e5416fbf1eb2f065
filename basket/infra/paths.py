from pathlib import Path

from basket.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
BACKUP_DIR_NAME = 'backups'


def record_file(data_dir: Path, record: str) -> Path:
    """JSON file holding one named record."""
    return Path(data_dir) / f"{record}.json"


__all__ = ['DATA_DIR', 'BACKUP_DIR_NAME', 'record_file']
