# application/services/form_factory.py
from __future__ import annotations

from typing import Callable, Optional

from application.events.event_dispatcher import EventDispatcher
from application.listeners.bind_request_listener import BindRequestListener
from application.ports.data_mapper import DataMapperPort
from application.ports.logger import LoggerPort
from application.services.dict_data_mapper import DictDataMapper
from domain.form import Form, FormConfig
from domain.form_definition import FormDefinition


class FormFactory:
    """
    Build Form trees from FormDefinitions.

    Every form gets its own dispatcher with the request binding listener
    subscribed, so any node can be bound directly with an HttpRequest.
    """

    def __init__(
        self,
        logger: Optional[LoggerPort] = None,
        data_mapper: Optional[DataMapperPort] = None,
        dispatcher_factory: Callable[[], EventDispatcher] = EventDispatcher,
    ):
        self._logger = logger
        self._data_mapper = data_mapper or DictDataMapper()
        self._dispatcher_factory = dispatcher_factory

    def create(self, definition: FormDefinition, name: Optional[str] = None) -> Form:
        dispatcher = self._dispatcher_factory()
        dispatcher.add_subscriber(BindRequestListener(self._logger))

        compound = definition.compound or bool(definition.children)
        config = FormConfig(
            name=definition.name if name is None else name,
            dispatcher=dispatcher,
            compound=compound,
            data_mapper=self._data_mapper if compound else None,
        )
        form = Form(config)
        for child in definition.children:
            form.add(self.create(child))
        return form
