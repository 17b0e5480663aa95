# selection.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from catalog import Catalog, FacilityRecord

logger = logging.getLogger(__name__)

Listener = Callable[[FacilityRecord], None]


class UnknownFacility(LookupError):
    def __init__(self, facility_id):
        super().__init__(f"no facility with id {facility_id!r}")
        self.facility_id = facility_id


class SelectionStore:
    """
    Holds the id of the facility the operator is looking at.

    `select` is the only way to change it. The new id is committed before
    any listener runs, and listeners run synchronously, so by the time
    `select` returns every view has seen the new selection.
    """

    def __init__(self, catalog: Catalog, initial_id: Optional[str] = None):
        self._catalog = catalog
        if initial_id is None:
            initial_id = catalog.first().id
        elif initial_id not in catalog:
            raise UnknownFacility(initial_id)
        self._current_id = initial_id
        self._listeners: List[Listener] = []

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def current_id(self) -> str:
        return self._current_id

    def current(self) -> FacilityRecord:
        return self._catalog.get(self._current_id)

    def select(self, facility_id: str) -> FacilityRecord:
        record = self._catalog.get(facility_id)
        if record is None:
            raise UnknownFacility(facility_id)

        previous = self._current_id
        self._current_id = record.id
        logger.debug("Selection %s -> %s", previous, record.id)

        for listener in list(self._listeners):
            listener(record)
        return record

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
