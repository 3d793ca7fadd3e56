# backend/services/ingestion.py

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from services.errors import ValidationError
from utils.data_store import DatasetStore, validate_dataset_name

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"
CHUNK_SIZE = 64 * 1024


@dataclass
class Upload:
    media_type: Optional[str]
    filename: Optional[str]
    payload: bytes


def check_media_type(media_type: Optional[str]) -> None:
    # Declared type only; content is never sniffed.
    if media_type != CSV_MEDIA_TYPE:
        raise ValidationError("Uploaded file is not a CSV file")


def check_filename(filename: Optional[str]) -> str:
    if not filename:
        raise ValidationError("Uploaded file has no filename")
    return validate_dataset_name(filename)


async def read_limited(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read an already-spooled upload in chunks and stop once it grows past
    max_bytes, so an oversize body never reaches the store. The multipart
    parser has received the whole part before this runs.
    """
    buf = bytearray()
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise ValidationError(f"Uploaded file exceeds the {max_bytes} byte limit")
    return bytes(buf)


def ingest(store: DatasetStore, upload: Upload, max_bytes: int) -> str:
    """
    Validate an upload and persist it under its filename.
    Returns the dataset name.
    """
    check_media_type(upload.media_type)
    name = check_filename(upload.filename)
    if len(upload.payload) > max_bytes:
        raise ValidationError(f"Uploaded file exceeds the {max_bytes} byte limit")

    store.put(name, upload.payload)
    logger.info("Stored dataset %s (%d bytes)", name, len(upload.payload))
    return name


async def ingest_upload(store: DatasetStore, file: Optional[UploadFile], max_bytes: int) -> str:
    """Boundary entry point for multipart uploads."""
    if file is None:
        raise ValidationError("Failed to read file from request")

    # Reject on headers alone before touching the body.
    check_media_type(file.content_type)
    check_filename(file.filename)

    payload = await read_limited(file, max_bytes)
    upload = Upload(media_type=file.content_type, filename=file.filename, payload=payload)
    return await run_in_threadpool(ingest, store, upload, max_bytes)
