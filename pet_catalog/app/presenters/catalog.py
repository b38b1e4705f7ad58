"""
Catalog presenter: the list of all pets.

The presenter lives on an asyncio event loop (the interactive thread).
Loading the list runs the store query in a worker thread and hands the
filled cursor back to the loop, where it replaces the previous one and
is rendered.  A content observer on the pets collection restarts the
load whenever the gateway reports a change, so the list refreshes
without an explicit call.  ``stop`` unregisters the observer and
cancels a load in flight; nothing reaches the view after that.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from typing import Any, Dict, List, Optional, Protocol

from pet_catalog.app.core.contract import Gender, ItemAddress, PetEntry
from pet_catalog.app.core.errors import PetCatalogError
from pet_catalog.app.services.pet_provider import PetProvider, pet_provider
from pet_catalog.app.services.pet_store import PetCursor


logger = logging.getLogger(__name__)

LOAD_FAILED = "Could not load pets"
INSERT_FAILED = "Error with inserting dummy pet"

DUMMY_PET = {
    PetEntry.COLUMN_PET_NAME: "Toto",
    PetEntry.COLUMN_PET_BREED: "Terrier",
    PetEntry.COLUMN_PET_GENDER: int(Gender.MALE),
    PetEntry.COLUMN_PET_WEIGHT: 7,
}


class CatalogView(Protocol):
    def show_pets(self, pets: List[Dict[str, Any]]) -> None: ...

    def show_empty(self) -> None: ...

    def show_message(self, message: str) -> None: ...

    def clear(self) -> None: ...


class CatalogPresenter:
    """Keeps a view in sync with every pet in the store."""

    PROJECTION = (
        PetEntry.COLUMN_ID,
        PetEntry.COLUMN_PET_NAME,
        PetEntry.COLUMN_PET_GENDER,
    )

    def __init__(self, view: CatalogView, provider: Optional[PetProvider] = None) -> None:
        self.view = view
        self.provider = provider if provider is not None else pet_provider
        self.cursor: Optional[PetCursor] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._observer: Optional[int] = None
        self._task: Optional[asyncio.Task] = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    async def start(self) -> None:
        """Subscribe to pet changes and kick off the first load."""
        if self._active:
            return
        self._loop = asyncio.get_running_loop()
        self._active = True
        self._observer = self.provider.register_content_observer(PetEntry.CONTENT_URI, self._on_change)
        self._restart_load()

    def stop(self) -> None:
        """Unsubscribe, cancel a pending load and release the cursor."""
        if not self._active:
            return
        self._active = False
        if self._observer is not None:
            self.provider.unregister_content_observer(self._observer)
            self._observer = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._swap_cursor(None)
        self.view.clear()

    async def wait_idle(self) -> None:
        """Wait until no load is pending, including ones queued by observers."""
        await asyncio.sleep(0)
        while self._task is not None and not self._task.done():
            await asyncio.gather(self._task, return_exceptions=True)
            await asyncio.sleep(0)

    def _on_change(self, address) -> None:
        # Called on whichever thread performed the write.
        loop = self._loop
        if not self._active or loop is None or loop.is_closed():
            return
        logger.debug("Change in %s, reloading catalog", address)
        loop.call_soon_threadsafe(self._restart_load)

    def _restart_load(self) -> None:
        if not self._active:
            return
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = self._loop.create_task(self._load())

    async def _load(self) -> None:
        try:
            cursor = self.provider.query(PetEntry.CONTENT_URI, projection=self.PROJECTION)
        except PetCatalogError as exc:
            self._report(exc)
            return
        try:
            await asyncio.to_thread(cursor.get_count)
        except asyncio.CancelledError:
            cursor.close()
            raise
        except (PetCatalogError, sqlite3.Error) as exc:
            cursor.close()
            self._report(exc)
            return
        if not self._active:
            cursor.close()
            return
        self._swap_cursor(cursor)
        self._render()

    def _report(self, exc: Exception) -> None:
        logger.warning("Loading pets failed: %s", exc)
        if self._active:
            self.view.show_message(LOAD_FAILED)

    def _swap_cursor(self, cursor: Optional[PetCursor]) -> None:
        old, self.cursor = self.cursor, cursor
        if old is not None and old is not cursor:
            old.close()

    def _render(self) -> None:
        rows = list(self.cursor)
        if rows:
            self.view.show_pets(rows)
        else:
            self.view.show_empty()

    def insert_dummy_pet(self) -> Optional[ItemAddress]:
        """Insert the sample pet (Toto the terrier)."""
        try:
            address = self.provider.insert(PetEntry.CONTENT_URI, DUMMY_PET)
        except (PetCatalogError, sqlite3.Error) as exc:
            logger.warning("Inserting dummy pet failed: %s", exc)
            self.view.show_message(INSERT_FAILED)
            return None
        logger.info("New row ID %s", address.id)
        return address

    def delete_all_pets(self) -> None:
        # Recognized menu action, intentionally not implemented.
        logger.info("Delete all entries requested; not supported")
