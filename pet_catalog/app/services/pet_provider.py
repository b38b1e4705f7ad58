"""
Query/update gateway for pets.

``PetProvider`` presents a uniform addressing scheme so callers never
talk to :class:`~pet_catalog.app.services.pet_store.PetStore`
directly.  Every operation takes an address (a URI string or an
address object from :mod:`pet_catalog.app.core.contract`): collection
addresses act on all matching rows, item addresses on one row.

Successful writes notify the change notifier so that results obtained
for the affected address can be reloaded.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from pet_catalog.app.core.contract import (
    Address,
    CollectionAddress,
    ItemAddress,
    PetEntry,
    parse_address,
    with_appended_id,
)
from pet_catalog.app.core.errors import InvalidAddressError
from pet_catalog.app.services.change_notifier import ChangeNotifier, Observer, change_notifier
from pet_catalog.app.services.pet_store import PetCursor, PetStore


logger = logging.getLogger(__name__)

AddressLike = Union[str, Address]


class PetProvider:
    """Address-resolving facade between presenters and the record store."""

    def __init__(self, store=PetStore, notifier: Optional[ChangeNotifier] = None) -> None:
        self.store = store
        self.notifier = notifier if notifier is not None else change_notifier

    def resolve(self, address: AddressLike) -> Address:
        """Parse ``address`` into a collection or item address."""
        return parse_address(address)

    def get_type(self, address: AddressLike) -> str:
        """Return the content type: a list of pets or a single pet."""
        if isinstance(self.resolve(address), ItemAddress):
            return PetEntry.CONTENT_ITEM_TYPE
        return PetEntry.CONTENT_LIST_TYPE

    def query(
        self,
        address: AddressLike,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> PetCursor:
        """Query the rows behind ``address``.

        An item address yields the single matching row (or nothing);
        its id is combined with any ``selection`` given.
        """
        resolved = self.resolve(address)
        pet_id = resolved.id if isinstance(resolved, ItemAddress) else None
        cursor = self.store.query(
            pet_id=pet_id,
            projection=projection,
            selection=selection,
            selection_args=selection_args,
            sort_order=sort_order,
        )
        cursor.set_notification_address(resolved)
        return cursor

    def insert(self, address: AddressLike, values: Mapping[str, Any]) -> ItemAddress:
        """Insert a pet into the collection and return its item address."""
        resolved = self.resolve(address)
        if not isinstance(resolved, CollectionAddress):
            raise InvalidAddressError(f"Insertion is not supported for {resolved}")
        pet_id = self.store.insert(values)
        item = with_appended_id(resolved, pet_id)
        logger.debug("Inserted %s", item)
        self.notifier.notify_change(resolved)
        return item

    def update(
        self,
        address: AddressLike,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """Update the pet(s) behind ``address``; returns rows affected."""
        resolved = self.resolve(address)
        if isinstance(resolved, ItemAddress):
            if selection:
                # the item id already pins the row; a selection narrows it further
                affected = self.store.update_where(
                    values,
                    f"{PetEntry.COLUMN_ID} = ? AND ({selection})",
                    (resolved.id, *(selection_args or ())),
                )
            else:
                affected = self.store.update(resolved.id, values)
        else:
            affected = self.store.update_where(values, selection, selection_args)
        if affected:
            self.notifier.notify_change(resolved)
        return affected

    def delete(
        self,
        address: AddressLike,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        """Delete the pet(s) behind ``address``; returns rows affected."""
        resolved = self.resolve(address)
        if isinstance(resolved, ItemAddress):
            if selection:
                affected = self.store.delete_where(
                    f"{PetEntry.COLUMN_ID} = ? AND ({selection})",
                    (resolved.id, *(selection_args or ())),
                )
            else:
                affected = self.store.delete(resolved.id)
        else:
            affected = self.store.delete_where(selection, selection_args)
        if affected:
            self.notifier.notify_change(resolved)
        return affected

    def register_content_observer(
        self,
        address: AddressLike,
        callback: Observer,
        notify_for_descendants: bool = True,
    ) -> int:
        return self.notifier.register_observer(address, callback, notify_for_descendants)

    def unregister_content_observer(self, handle: int) -> bool:
        return self.notifier.unregister_observer(handle)


pet_provider = PetProvider()
