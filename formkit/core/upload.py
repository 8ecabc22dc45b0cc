"""
Formkit Uploads
===============

Upload descriptors for ``<input type="file">`` controls.

Only the error code of an upload is interpreted here; reading and
storing the file is left to the transport layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional


class UploadErrorCode(IntEnum):
    """Upload error codes, as reported by the upload transport."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass
class Upload:
    """
    A single uploaded file.

    Example:
        Upload(name="avatar.png", type="image/png", size=1024)
        Upload(error=UploadErrorCode.PARTIAL)
    """

    name: str = ""
    type: str = ""
    tmp_name: str = ""
    size: int = 0
    error: int = UploadErrorCode.OK

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Upload":
        """Build from a ``{"name": ..., "error": ...}`` style mapping."""
        return cls(
            name=data.get("name", ""),
            type=data.get("type", ""),
            tmp_name=data.get("tmp_name", ""),
            size=int(data.get("size") or 0),
            error=int(data.get("error") or 0),
        )


def upload_error_code(payload: Any) -> Optional[int]:
    """
    Error code reported by an upload payload.

    Returns None when the payload is not an upload descriptor or
    reports no error.
    """
    if isinstance(payload, Mapping):
        payload = Upload.from_mapping(payload)
    elif not isinstance(payload, Upload):
        return None

    code = int(payload.error or 0)
    return code or None
