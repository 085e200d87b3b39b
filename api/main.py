"""FastAPI アプリケーション - フォームバインド REST API"""
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

import sys

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from application.services.form_factory import FormFactory
from domain.exceptions import FormBindError
from domain.form_definition import FormDefinition
from domain.uploaded_file import UploadedFile
from infrastructure.config.settings import Settings
from infrastructure.forms import FormDefinitionFinder, FormDefinitionLoadError, YamlFormDefinitionLoader
from infrastructure.http.starlette_request_adapter import StarletteRequestAdapter
from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger


class BindFormResponse(BaseModel):
    """フォームバインド結果"""
    form: str = Field(description="Form name (may be empty)")
    compound: bool = Field(description="Whether the form has children")
    method: str = Field(description="Effective request method")
    description: str = Field(default="", description="Form definition description")
    data: Any = Field(default=None, description="Bound data")


# 設定
SETTINGS = Settings.load()
setup_console_logging(SETTINGS.log_level)

app = FastAPI(
    title="FormBind",
    description="HTTPリクエストのデータをフォームにバインドする",
    version="1.0.0",
)


@app.get("/")
def read_root():
    """ヘルスチェック"""
    return {"status": "ok", "service": "formbind"}


def _load_definition(form_id: str, logger: LoguruLogger) -> FormDefinition:
    finder = FormDefinitionFinder(SETTINGS.forms_dir)
    path = finder.find_by_id(form_id)
    if path is None:
        logger.warning("form.definition_missing", forms_dir=str(SETTINGS.forms_dir))
        raise HTTPException(status_code=404, detail=f"Form definition not found: {form_id}")
    try:
        return YamlFormDefinitionLoader().load_from_file(path)
    except FormDefinitionLoadError as e:
        logger.error("form.definition_invalid", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))


def to_jsonable(value: Any) -> Any:
    if isinstance(value, UploadedFile):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_jsonable(v) for v in value]
    return value


@app.api_route(
    "/forms/{form_id}",
    methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    response_model=BindFormResponse,
)
async def bind_form(form_id: str, request: Request) -> BindFormResponse:
    """
    リクエストを指定フォームにバインドし、バインド後のデータを返す

    Args:
        form_id: フォーム定義ID（例: "author"）
    """
    logger = LoguruLogger().bind(form_id=form_id)
    definition = _load_definition(form_id, logger)
    adapter = StarletteRequestAdapter(SETTINGS.upload_dir, SETTINGS.method_override)

    try:
        http_request = await adapter.build(request)
        form = FormFactory(logger=logger).create(definition)
        form.bind(http_request)
        logger.info("form.bound", method=http_request.method, compound=form.config.compound)
        return BindFormResponse(
            form=form.name,
            compound=form.config.compound,
            method=http_request.method,
            description=definition.description,
            data=to_jsonable(form.data),
        )
    except FormBindError as e:
        logger.error("form.bind_failed", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        adapter.cleanup()
