import pytest

from basket.api import deps
from basket.tests.samples import PNG_BYTES, sample_list
from basket.utilities import validators


class RecordingUpload:
    """Stands in for an UploadFile and remembers how much was asked for."""

    def __init__(self, data):
        self.data = data
        self.requested = None

    async def read(self, size=-1):
        self.requested = size
        return self.data if size < 0 else self.data[:size]


@pytest.mark.asyncio
async def test_read_upload_stops_after_limit():
    upload = RecordingUpload(b"x" * 100)
    data = await deps.read_upload(upload, limit=10)
    assert upload.requested == 11
    assert len(data) == 11


@pytest.mark.asyncio
async def test_read_upload_uses_configured_limit(monkeypatch):
    monkeypatch.setattr(deps, "MAX_IMAGE_BYTES", 4)
    upload = RecordingUpload(PNG_BYTES)
    await deps.read_upload(upload)
    assert upload.requested == 5


def test_oversized_receipt_rejected(client, storage, monkeypatch):
    monkeypatch.setattr(deps, "MAX_IMAGE_BYTES", 8)
    monkeypatch.setattr(validators, "MAX_IMAGE_BYTES", 8)
    storage.save_shopping_list(sample_list())
    resp = client.post('/api/archive', data={"store_name": "Rewe", "amount": "10", "date": "2024-01-05"},
                       files={"receipt": ("beleg.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 400
    assert "zu groß" in resp.json()["error"]
    assert storage.load_archive() == []
