# domain/uploaded_file.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict

from domain.exceptions import UnexpectedTypeError, UploadedFileNotFoundError


class UploadError(IntEnum):
    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


_ERROR_MESSAGES = {
    UploadError.INI_SIZE: 'The file "%s" exceeds the server upload limit.',
    UploadError.FORM_SIZE: 'The file "%s" exceeds the upload limit defined in your form.',
    UploadError.PARTIAL: 'The file "%s" was only partially uploaded.',
    UploadError.NO_FILE: "No file was uploaded.",
    UploadError.NO_TMP_DIR: "File could not be uploaded: missing temporary directory.",
    UploadError.CANT_WRITE: 'The file "%s" could not be written on disk.',
    UploadError.EXTENSION: "File upload was stopped by an extension.",
}


@dataclass(frozen=True)
class UploadedFile:
    """
    A file uploaded through a form.

    Wraps the five attributes a client upload carries: the temporary storage
    path, the original (client-side) filename, the MIME type, the size and
    the upload error code.
    """

    path: str
    original_name: str
    mime_type: str = "application/octet-stream"
    size: int = 0
    error: UploadError = UploadError.OK
    check_path: bool = field(default=True, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", str(self.path))
        object.__setattr__(self, "size", int(self.size or 0))
        try:
            object.__setattr__(self, "error", UploadError(int(self.error)))
        except ValueError:
            raise UnexpectedTypeError(self.error, "UploadError") from None
        if self.check_path and self.error == UploadError.OK and not Path(self.path).is_file():
            raise UploadedFileNotFoundError(self.path)

    def is_valid(self) -> bool:
        return self.error == UploadError.OK

    @property
    def client_extension(self) -> str:
        return Path(self.original_name).suffix.lstrip(".")

    def error_message(self) -> str:
        template = _ERROR_MESSAGES.get(self.error)
        if template is None:
            return "The file could not be uploaded." if self.error else ""
        return template % self.original_name if "%s" in template else template

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "original_name": self.original_name,
            "mime_type": self.mime_type,
            "size": self.size,
            "error": int(self.error),
        }
