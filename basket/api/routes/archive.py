import logging
from datetime import date as _date
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from basket.api.deps import get_storage, read_upload
from basket.infra.pdf_utils import generate_pdf_for_entry
from basket.infra.storage import Storage
from basket.logic.archive.browse import archive_detail_view, archive_list_view
from basket.logic.archive.create import ArchiveCreator
from basket.logic.reporting.spending import SpendingStats

router = APIRouter(prefix="/api/archive", tags=["archive"])
logger = logging.getLogger(__name__)


@router.get("")
def list_archive(storage: Storage = Depends(get_storage)):
    """Archive grouped by month, newest month first."""
    return archive_list_view(storage.load_archive())


@router.get("/stats")
def archive_stats(storage: Storage = Depends(get_storage)):
    return SpendingStats(storage.load_archive()).summary()


@router.get("/{entry_id}")
def archive_entry(entry_id: str, storage: Storage = Depends(get_storage)):
    return archive_detail_view(storage.load_archive(), entry_id)


@router.get("/{entry_id}/pdf")
def archive_entry_pdf(entry_id: str, storage: Storage = Depends(get_storage)):
    pdf_bytes = generate_pdf_for_entry(storage.load_archive(), entry_id)
    headers = {"Content-Disposition": f'attachment; filename="einkauf_{entry_id}.pdf"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


@router.post("")
async def create_archive_entry(
    store_name: str = Form(""),
    amount: str = Form(""),
    date: Optional[str] = Form(None),
    receipt: Optional[UploadFile] = File(None),
    storage: Storage = Depends(get_storage),
):
    """Archive the current shopping list as a completed trip and clear it."""
    creator = ArchiveCreator.start(storage)
    if receipt is not None and receipt.filename:
        creator.select_receipt(receipt.filename, receipt.content_type, await read_upload(receipt))
    logger.info("Archive request store=%r amount=%r date=%r receipt=%s",
                store_name, amount, date, creator.receipt_image is not None)
    outcome = creator.submit(store_name, amount, date or _date.today().isoformat())
    return {
        "entry": outcome["entry"].to_dict(),
        "message": outcome["message"],
        "navigate": outcome["navigate"].to_dict(),
    }
