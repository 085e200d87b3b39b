# application/ports/data_mapper.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from domain.form import Form


class DataMapperPort(ABC):
    @abstractmethod
    def map_data_to_forms(self, data: Any, forms: Iterable["Form"]) -> None:
        """
        Push the compound form's data down into its children.
        """
        ...

    @abstractmethod
    def map_forms_to_data(self, forms: Iterable["Form"], data: Any) -> None:
        """
        Collect the children's data into the compound form's data (in place).
        """
        ...
