"""Local filesystem storage for resume files."""

import asyncio
import os
from pathlib import Path
from typing import Optional

from loguru import logger

from ....core.exceptions import InvalidResumeFileError

# Extension -> accepted MIME types
ALLOWED_FILE_TYPES = {
    ".pdf": {"application/pdf"},
    ".doc": {"application/msword"},
    ".docx": {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"},
}


class LocalResumeStorage:
    """Writes resume files under a single upload directory."""

    def __init__(self, upload_dir: str, max_size: int = 10 * 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size

    def validate(self, filename: str, content_type: Optional[str], size: int) -> str:
        extension = os.path.splitext(filename or "")[1].lower()
        allowed_types = ALLOWED_FILE_TYPES.get(extension)
        if allowed_types is None or (content_type and content_type not in allowed_types):
            raise InvalidResumeFileError(
                "Only PDF, DOC, DOCX files are allowed",
                details={"filename": filename, "content_type": content_type},
            )
        if size == 0:
            raise InvalidResumeFileError("Uploaded file is empty")
        if size > self.max_size:
            raise InvalidResumeFileError(
                f"File is too large. Maximum size is {self.max_size // (1024 * 1024)}MB.",
                details={"size": size, "max_size": self.max_size},
            )
        return extension

    async def save(self, resume_id: str, extension: str, data: bytes) -> str:
        target = self.upload_dir / f"{resume_id}{extension}"

        def _write() -> None:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        await asyncio.to_thread(_write)
        return str(target)

    async def delete(self, path: str) -> None:
        try:
            await asyncio.to_thread(Path(path).unlink, True)
        except OSError as e:
            logger.warning(f"Failed to delete resume file {path}: {e}")
