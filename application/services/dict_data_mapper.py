# application/services/dict_data_mapper.py
from __future__ import annotations

from typing import Any, Iterable, Mapping, MutableMapping

from application.ports.data_mapper import DataMapperPort
from domain.exceptions import UnexpectedTypeError
from domain.form import Form


class DictDataMapper(DataMapperPort):
    """Maps dict keys to child forms of the same name."""

    def map_data_to_forms(self, data: Any, forms: Iterable[Form]) -> None:
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise UnexpectedTypeError(data, "Mapping")
        for form in forms:
            if form.name in data:
                form.set_data(data[form.name])

    def map_forms_to_data(self, forms: Iterable[Form], data: Any) -> None:
        if not isinstance(data, MutableMapping):
            raise UnexpectedTypeError(data, "MutableMapping")
        for form in forms:
            if form.is_bound:
                data[form.name] = form.data
