# backend/routers/upload.py

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import PlainTextResponse

from config import Settings
from routers.deps import get_settings, get_store
from services.ingestion import ingest_upload
from utils.data_store import DatasetStore

router = APIRouter(prefix="/upload", tags=["Upload"])


@router.post("", response_class=PlainTextResponse)
async def upload_csv(
    file: Optional[UploadFile] = File(None),
    store: DatasetStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Accepts a text/csv multipart upload in the `file` field and stores it
    under its original filename. Same name overwrites.
    """
    await ingest_upload(store, file, settings.max_upload_bytes)
    return "File uploaded successfully"
