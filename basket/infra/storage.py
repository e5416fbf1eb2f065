"""Record store: the shopping list, recipe collection and archive as JSON blobs on disk."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel

from basket.domain.ArchiveEntry import ArchiveEntry
from basket.domain.Recipe import Recipe
from basket.domain.ShoppingList import ShoppingList
from basket.infra.backup import BackupManager
from basket.infra.paths import DATA_DIR, record_file
from basket.utilities.config import BACKUP_ON_SAVE
from basket.utilities.constants import ARCHIVE_RECORD, RECIPES_RECORD, SHOPPING_LIST_RECORD

logger = logging.getLogger(__name__)


class SaveResult(BaseModel):
    success: bool
    error: Optional[str] = None


class Storage:
    """Load/save of the three named records.

    Loads never raise: missing or unreadable records come back as the empty
    default. Saves report failure through :class:`SaveResult`.
    """

    def __init__(self, data_dir: Path = DATA_DIR, backups: Optional[BackupManager] = None,
                 backup_on_save: bool = BACKUP_ON_SAVE):
        self.data_dir = Path(data_dir)
        self.backups = backups or BackupManager(self.data_dir)
        self.backup_on_save = backup_on_save

    # --- raw blob helpers ---------------------------------------------------
    def _read(self, record: str) -> Any:
        path = record_file(self.data_dir, record)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Invalid JSON in %s: %s", path.name, e)
        except OSError as e:
            logger.error("Error reading %s: %s", path.name, e)
        return None

    def _atomic_write(self, record: str, data: Any) -> SaveResult:
        path = record_file(self.data_dir, record)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{record}_", suffix=".json")
        except OSError as e:
            logger.error("Failed to save %s: %s", record, e)
            return SaveResult(success=False, error=str(e))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %s: %s", record, e)
            return SaveResult(success=False, error=str(e))
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_path)
        return SaveResult(success=True)

    def _backup(self, record: str):
        if self.backup_on_save:
            self.backups.create_backup(record_file(self.data_dir, record).name)

    # --- shopping list ------------------------------------------------------
    def load_shopping_list(self) -> Optional[ShoppingList]:
        data = self._read(SHOPPING_LIST_RECORD)
        if not isinstance(data, dict):
            return None
        return ShoppingList.from_dict(data)

    def save_shopping_list(self, shopping_list: ShoppingList) -> SaveResult:
        return self._atomic_write(SHOPPING_LIST_RECORD, shopping_list.to_dict())

    def clear_shopping_list(self) -> SaveResult:
        path = record_file(self.data_dir, SHOPPING_LIST_RECORD)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to clear shopping list: %s", e)
            return SaveResult(success=False, error=str(e))
        return SaveResult(success=True)

    # --- archive ------------------------------------------------------------
    def load_archive(self) -> List[ArchiveEntry]:
        data = self._read(ARCHIVE_RECORD)
        if not isinstance(data, list):
            return []
        return [ArchiveEntry.from_dict(entry) for entry in data]

    def save_archive(self, entries: List[ArchiveEntry]) -> SaveResult:
        self._backup(ARCHIVE_RECORD)
        return self._atomic_write(ARCHIVE_RECORD, [entry.to_dict() for entry in entries])

    # --- recipes ------------------------------------------------------------
    def load_recipes(self) -> List[Recipe]:
        data = self._read(RECIPES_RECORD)
        if not isinstance(data, list):
            return []
        return [Recipe.from_dict(entry) for entry in data]

    def save_recipes(self, recipes: List[Recipe]) -> SaveResult:
        self._backup(RECIPES_RECORD)
        return self._atomic_write(RECIPES_RECORD, [recipe.to_dict() for recipe in recipes])
