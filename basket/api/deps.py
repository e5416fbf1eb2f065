"""FastAPI dependencies shared by the page and API routers."""
from functools import lru_cache
from typing import Optional

from fastapi import UploadFile

from basket.infra.paths import DATA_DIR
from basket.infra.storage import Storage
from basket.logic.fridge.sessions import FRIDGE_CHECKS, FridgeCheckSessions
from basket.utilities.config import MAX_IMAGE_BYTES


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    return Storage(DATA_DIR)


def get_fridge_checks() -> FridgeCheckSessions:
    return FRIDGE_CHECKS


async def read_upload(upload: UploadFile, limit: Optional[int] = None) -> bytes:
    """Read an uploaded image, at most one byte past the size limit.

    The extra byte lets the size check reject oversized files without
    loading them whole.
    """
    limit = MAX_IMAGE_BYTES if limit is None else limit
    return await upload.read(limit + 1)
