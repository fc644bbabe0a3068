import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile
from config import UPLOAD_DIR

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = [".xlsx", ".xls"]


def save_uploaded_file(file: UploadFile) -> str:
    """
    Store the upload under a fresh name in UPLOAD_DIR and return its path.
    Every upload gets its own copy, even when the filename was seen before.
    """
    ext = os.path.splitext(file.filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValueError("Only Excel files (.xlsx, .xls) are supported.")

    file_path = os.path.join(UPLOAD_DIR, f"{uuid.uuid4().hex}{ext}")
    with open(file_path, "wb") as out:
        out.write(file.file.read())

    logger.info("Stored %s as %s", file.filename, file_path)
    return file_path


def delete_uploaded_file(file_path: Optional[str]) -> None:
    if file_path and os.path.exists(file_path):
        os.remove(file_path)
