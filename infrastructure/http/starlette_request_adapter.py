# infrastructure/http/starlette_request_adapter.py
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple

from starlette.datastructures import UploadFile
from starlette.requests import Request

from application.services.field_name_parser import build_tree
from domain.request import HttpRequest
from domain.uploaded_file import UploadError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_CHUNK_SIZE = 64 * 1024


class StarletteRequestAdapter:
    """
    Starlette Request -> HttpRequest

    - bracket field names ("author[name]") become nested dicts
    - uploads are spooled into upload_dir and recorded per field as
      {error, name, size, tmp_name, type}
    - a file input submitted without a file becomes a NO_FILE record

    Spooled files belong to the adapter; call cleanup() once the bound data
    is no longer needed.
    """

    def __init__(self, upload_dir: Path, method_override: bool = True):
        self._upload_dir = Path(upload_dir)
        self._method_override = method_override
        self.spooled: List[Path] = []

    async def build(self, request: Request) -> HttpRequest:
        query = build_tree(request.query_params.multi_items())

        fields: List[Tuple[str, Any]] = []
        uploads: List[Tuple[str, Any]] = []
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            for key, value in form.multi_items():
                if isinstance(value, UploadFile):
                    uploads.append((key, await self._spool(value)))
                else:
                    fields.append((key, value))

        return HttpRequest(
            query=query,
            request=build_tree(fields),
            files=build_tree(uploads),
            headers=dict(request.headers),
            server=self._server_params(request),
            method_override=self._method_override,
        )

    def cleanup(self) -> None:
        for path in self.spooled:
            path.unlink(missing_ok=True)
        self.spooled.clear()

    async def _spool(self, upload: UploadFile) -> Dict[str, Any]:
        if not upload.filename:
            return {
                "error": int(UploadError.NO_FILE),
                "name": "",
                "size": 0,
                "tmp_name": "",
                "type": "",
            }

        self._upload_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix="formbind_", dir=self._upload_dir)
        path = Path(tmp_name)
        self.spooled.append(path)

        size = 0
        await upload.seek(0)
        with os.fdopen(fd, "wb") as handle:
            while True:
                chunk = await upload.read(_CHUNK_SIZE)
                if not chunk:
                    break
                handle.write(chunk)
                size += len(chunk)

        return {
            "error": int(UploadError.OK),
            "name": upload.filename,
            "size": size,
            "tmp_name": str(path),
            "type": upload.content_type or "application/octet-stream",
        }

    def _server_params(self, request: Request) -> Dict[str, Any]:
        server: Dict[str, Any] = {
            "REQUEST_METHOD": request.method,
            "QUERY_STRING": request.url.query,
            "SERVER_NAME": request.url.hostname or "",
            "SERVER_PORT": request.url.port,
            "REQUEST_URI": request.url.path,
        }
        if request.client is not None:
            server["REMOTE_ADDR"] = request.client.host
        return server
