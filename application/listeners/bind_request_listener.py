# application/listeners/bind_request_listener.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from application.ports.logger import LoggerPort
from application.services.data_merge import replace_recursive
from domain.form import FormEvent, FormEvents
from domain.request import HttpRequest


class BindRequestListener:
    """
    Replace an HttpRequest submitted to a form with the data it carries.

    - POST/PUT/DELETE/PATCH: body parameters merged with uploaded files
      (files win on the same path)
    - any other method: query parameters only, never files
    - the form name selects a sub-tree; an empty name takes the whole payload
    - missing data defaults to {} for compound forms and None otherwise
    """

    def __init__(self, logger: Optional[LoggerPort] = None):
        self._logger = logger

    def subscribed_events(self) -> Dict[str, str]:
        return {FormEvents.PRE_BIND: "pre_bind"}

    def pre_bind(self, event: FormEvent) -> None:
        request = event.data
        if not isinstance(request, HttpRequest):
            return

        config = event.form.config
        name = config.name
        default: Any = {} if config.compound else None

        if request.is_mutating():
            data, source = self._from_body(request, name, default)
        else:
            data, source = self._from_query(request, name, default)

        if data is None:
            data = default

        if self._logger is not None:
            self._logger.debug(
                "form.bind_request",
                form=name,
                method=request.method,
                source=source,
            )

        event.data = data

    def _from_body(self, request: HttpRequest, name: str, default: Any) -> Tuple[Any, str]:
        if name == "":
            params: Any = request.request.all()
            files: Any = request.files.all()
        else:
            params = request.request.get(name, default)
            files = request.files.get(name, default)

        if isinstance(params, dict) and isinstance(files, dict):
            return replace_recursive(params, files), "body+files"
        return (params or files), "body+files"

    def _from_query(self, request: HttpRequest, name: str, default: Any) -> Tuple[Any, str]:
        if name == "":
            return request.query.all(), "query"
        return request.query.get(name, default), "query"
