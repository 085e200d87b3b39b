# domain/request.py
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

from domain.exceptions import UnexpectedTypeError
from domain.uploaded_file import UploadedFile, UploadError

MUTATING_METHODS = ("POST", "PUT", "DELETE", "PATCH")

FILE_KEYS = frozenset({"error", "name", "size", "tmp_name", "type"})


class ParameterBag:
    """Ordered container for request parameters."""

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        self._parameters: Dict[str, Any] = {}
        for key, value in (parameters or {}).items():
            self.set(key, value)

    def all(self) -> Dict[str, Any]:
        return dict(self._parameters)

    def keys(self) -> List[str]:
        return list(self._parameters.keys())

    def get(self, key: str, default: Any = None) -> Any:
        return self._parameters.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._parameters[key] = value

    def has(self, key: str) -> bool:
        return key in self._parameters

    def __contains__(self, key: object) -> bool:
        return key in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)


class FileBag(ParameterBag):
    """
    Uploaded files of a request, normalized into UploadedFile objects.

    Accepts files keyed by field (`{field: {error, name, size, tmp_name, type}}`)
    as well as the attribute-first layout where every attribute holds a tree
    mirroring the field names (`{field: {name: {sub: ...}, size: {sub: ...}}}`).
    Records whose error is NO_FILE become None.
    """

    def set(self, key: str, value: Any) -> None:
        if not isinstance(value, (Mapping, list, UploadedFile)):
            raise UnexpectedTypeError(value, "Mapping, list or UploadedFile")
        super().set(key, _convert_file_information(value))


def _convert_file_information(value: Any) -> Any:
    if isinstance(value, UploadedFile):
        return value

    if isinstance(value, Mapping):
        value = _fix_attribute_first(value)
        if isinstance(value, list):
            return [_convert_file_information(v) for v in value]
        if set(value.keys()) == FILE_KEYS:
            if int(value["error"]) == UploadError.NO_FILE:
                return None
            return UploadedFile(
                path=value["tmp_name"],
                original_name=value["name"],
                mime_type=value["type"],
                size=value["size"],
                error=value["error"],
            )
        return {k: _convert_file_information(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_convert_file_information(v) for v in value]

    return value


def _fix_attribute_first(data: Mapping[str, Any]) -> Any:
    # {name: {a: x}, size: {a: 1}, ...} => {a: {name: x, size: 1, ...}}
    if set(data.keys()) != FILE_KEYS:
        return data

    names = data["name"]
    if isinstance(names, Mapping):
        return {
            key: _fix_attribute_first({attr: data[attr][key] for attr in FILE_KEYS})
            for key in names.keys()
        }
    if isinstance(names, list):
        return [
            _fix_attribute_first({attr: data[attr][index] for attr in FILE_KEYS})
            for index in range(len(names))
        ]
    return data


class HttpRequest:
    """
    Already-materialized HTTP request data.

    `server` follows the CGI naming (REQUEST_METHOD, ...). Header names are
    case-insensitive.
    """

    def __init__(
        self,
        query: Optional[Mapping[str, Any]] = None,
        request: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        server: Optional[Mapping[str, Any]] = None,
        method_override: bool = True,
    ):
        self.query = ParameterBag(query)
        self.request = ParameterBag(request)
        self.files = FileBag(files)
        self.headers = {k.lower(): v for k, v in (headers or {}).items()}
        self.server = dict(server or {})
        self._method_override = method_override
        self._method: Optional[str] = None

    @property
    def method(self) -> str:
        if self._method is None:
            method = str(self.server.get("REQUEST_METHOD", "GET")).upper()
            if method == "POST" and self._method_override:
                override = self.headers.get("x-http-method-override")
                if not override:
                    override = self.request.get("_method")
                if override:
                    method = str(override).upper()
            self._method = method
        return self._method

    def is_method(self, method: str) -> bool:
        return self.method == method.upper()

    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS

    def __repr__(self) -> str:
        return f"HttpRequest(method={self.method!r}, query={self.query.keys()!r}, request={self.request.keys()!r}, files={self.files.keys()!r})"
