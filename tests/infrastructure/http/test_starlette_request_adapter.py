from __future__ import annotations

import asyncio
from io import BytesIO
from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from domain.request import HttpRequest
from domain.uploaded_file import UploadedFile, UploadError
from infrastructure.http.starlette_request_adapter import StarletteRequestAdapter


def _dump(value):
    if isinstance(value, UploadedFile):
        data = value.to_dict()
        data["content"] = Path(value.path).read_text(encoding="utf-8")
        return data
    if isinstance(value, dict):
        return {k: _dump(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def client(upload_dir: Path) -> TestClient:
    async def echo(request: Request) -> JSONResponse:
        adapter = StarletteRequestAdapter(upload_dir)
        http_request = await adapter.build(request)
        try:
            return JSONResponse({
                "method": http_request.method,
                "query": http_request.query.all(),
                "request": http_request.request.all(),
                "files": _dump(http_request.files.all()),
                "server": {k: v for k, v in http_request.server.items() if k == "REQUEST_METHOD"},
            })
        finally:
            adapter.cleanup()

    app = Starlette(routes=[Route("/echo", echo, methods=["GET", "POST", "PUT", "DELETE", "PATCH"])])
    return TestClient(app)


class TestStarletteRequestAdapter:
    def test_query_parameters_are_nested(self, client):
        response = client.get("/echo", params=[("author[name]", "Bernhard"), ("author[tags][]", "a"), ("author[tags][]", "b")])

        assert response.status_code == 200
        data = response.json()
        assert data["method"] == "GET"
        assert data["query"] == {"author": {"name": "Bernhard", "tags": ["a", "b"]}}
        assert data["request"] == {}
        assert data["files"] == {}

    def test_urlencoded_body(self, client):
        response = client.post("/echo", data={"author[name]": "Bernhard", "author[image][filename]": "foobar.png"})

        data = response.json()
        assert data["method"] == "POST"
        assert data["request"] == {"author": {"name": "Bernhard", "image": {"filename": "foobar.png"}}}

    def test_multipart_upload_is_spooled(self, client, upload_dir):
        response = client.put(
            "/echo",
            data={"author[name]": "Bernhard"},
            files={"author[image]": ("upload.png", b"content", "image/png")},
        )

        data = response.json()
        assert data["method"] == "PUT"
        assert data["request"] == {"author": {"name": "Bernhard"}}
        image = data["files"]["author"]["image"]
        assert image["original_name"] == "upload.png"
        assert image["mime_type"] == "image/png"
        assert image["size"] == 7
        assert image["error"] == 0
        assert image["content"] == "content"
        assert Path(image["path"]).parent == upload_dir
        # removed by cleanup()
        assert not Path(image["path"]).exists()

    def test_empty_file_input_becomes_no_file_record(self, upload_dir):
        adapter = StarletteRequestAdapter(upload_dir)
        upload = UploadFile(file=BytesIO(b""), filename="")

        record = asyncio.run(adapter._spool(upload))

        assert record["error"] == UploadError.NO_FILE
        assert adapter.spooled == []
        assert HttpRequest(files={"image": record}).files.get("image") is None

    def test_method_override_from_body(self, client):
        response = client.post("/echo", data={"_method": "PATCH", "q": "x"})

        data = response.json()
        assert data["method"] == "PATCH"
        assert data["server"] == {"REQUEST_METHOD": "POST"}

    def test_method_override_from_header(self, client):
        response = client.post("/echo", data={"q": "x"}, headers={"X-HTTP-Method-Override": "DELETE"})

        assert response.json()["method"] == "DELETE"

    def test_json_body_is_not_parsed_as_form(self, client):
        response = client.post("/echo", json={"author": {"name": "Bernhard"}})

        assert response.json()["request"] == {}
