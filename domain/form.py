# domain/form.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Protocol

from domain.exceptions import AlreadyBoundError, FormError, InvalidFormNameError, UnexpectedTypeError

if TYPE_CHECKING:
    from application.ports.data_mapper import DataMapperPort

_VALID_NAME = re.compile(r"^[a-zA-Z0-9_][a-zA-Z0-9_\-:]*$")


class FormEvents:
    PRE_BIND = "form.pre_bind"
    BIND = "form.bind"
    POST_BIND = "form.post_bind"


class EventDispatcherPort(Protocol):
    def dispatch(self, event_name: str, event: Any) -> Any:
        ...


@dataclass
class FormEvent:
    form: "Form"
    data: Any = None


@dataclass
class FormConfig:
    name: str
    dispatcher: EventDispatcherPort
    compound: bool = False
    data_mapper: Optional["DataMapperPort"] = None

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = ""
        if not isinstance(self.name, str):
            raise UnexpectedTypeError(self.name, "str")
        if self.name and not _VALID_NAME.match(self.name):
            raise InvalidFormNameError(
                f'The name "{self.name}" contains illegal characters. Names should start with a letter, '
                'digit or underscore and only contain letters, digits, numbers, underscores ("_"), '
                'hyphens ("-") and colons (":").'
            )


class Form:
    """
    A node of a form tree.

    Binding dispatches PRE_BIND first so listeners can replace the submitted
    value (e.g. turn an HTTP request into plain data), then binds children
    with their sub-values and lets the data mapper collect their data.
    """

    def __init__(self, config: FormConfig):
        if config.compound and config.data_mapper is None:
            raise FormError("Compound forms need a data mapper")
        self._config = config
        self._children: Dict[str, Form] = {}
        self._parent: Optional[Form] = None
        self._data: Any = None
        self._bound = False

    @property
    def config(self) -> FormConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def parent(self) -> Optional["Form"]:
        return self._parent

    @property
    def data(self) -> Any:
        return self._data

    @property
    def is_bound(self) -> bool:
        return self._bound

    @property
    def children(self) -> List["Form"]:
        return list(self._children.values())

    def has(self, name: str) -> bool:
        return name in self._children

    def get(self, name: str) -> "Form":
        try:
            return self._children[name]
        except KeyError:
            raise FormError(f'Child "{name}" does not exist') from None

    def add(self, child: "Form") -> "Form":
        if self._bound:
            raise AlreadyBoundError("You cannot add children to a bound form")
        if not self._config.compound:
            raise FormError("You cannot add children to a simple form. Maybe you should set the option \"compound\" to true?")
        child._parent = self
        self._children[child.name] = child
        return self

    def set_data(self, data: Any) -> "Form":
        if self._bound:
            raise AlreadyBoundError("You cannot change the data of a bound form")
        self._data = data
        if self._config.compound and self._children:
            self._config.data_mapper.map_data_to_forms(data, self.children)
        return self

    def bind(self, submitted: Any) -> "Form":
        if self._bound:
            raise AlreadyBoundError("A form can only be bound once")

        dispatcher = self._config.dispatcher
        event = FormEvent(self, submitted)
        dispatcher.dispatch(FormEvents.PRE_BIND, event)
        submitted = event.data

        if self._config.compound:
            if submitted is None:
                submitted = {}
            if not isinstance(submitted, Mapping):
                raise UnexpectedTypeError(submitted, "Mapping")
            for name, child in self._children.items():
                child.bind(submitted.get(name))
            data: Any = dict(submitted)
            self._config.data_mapper.map_forms_to_data(self.children, data)
        else:
            data = submitted

        event = FormEvent(self, data)
        dispatcher.dispatch(FormEvents.BIND, event)
        self._data = event.data
        self._bound = True

        dispatcher.dispatch(FormEvents.POST_BIND, FormEvent(self, self._data))
        return self

    def __repr__(self) -> str:
        return f"Form(name={self.name!r}, compound={self._config.compound}, bound={self._bound})"
