"""
Content observers for pet addresses.

The gateway calls :meth:`ChangeNotifier.notify_change` after every
successful write; anything holding results for an address (the
catalog presenter, for instance) registers an observer and reloads
when it fires.

Routing follows the address hierarchy.  A change to
``content://pet_catalog/pets/3`` reaches observers of that item and
observers of ``content://pet_catalog/pets`` registered with
``notify_for_descendants``.  A change to the collection reaches every
observer of the collection and of its items.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Union

from pet_catalog.app.core.contract import Address, CollectionAddress, ItemAddress, parse_address


logger = logging.getLogger(__name__)

Observer = Callable[[Address], None]


@dataclass(frozen=True)
class _Registration:
    address: Address
    callback: Observer
    notify_for_descendants: bool


class ChangeNotifier:
    """Thread-safe registry of content observers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._observers: Dict[int, _Registration] = {}
        self._handles = itertools.count(1)

    def register_observer(
        self,
        address: Union[str, Address],
        callback: Observer,
        notify_for_descendants: bool = True,
    ) -> int:
        """Register ``callback`` for changes to ``address``; returns a handle."""
        registration = _Registration(parse_address(address), callback, notify_for_descendants)
        with self._lock:
            handle = next(self._handles)
            self._observers[handle] = registration
        logger.debug("Registered observer %s for %s", handle, registration.address)
        return handle

    def unregister_observer(self, handle: int) -> bool:
        """Remove an observer.  Returns ``False`` if the handle was unknown."""
        with self._lock:
            removed = self._observers.pop(handle, None)
        return removed is not None

    def observer_count(self) -> int:
        with self._lock:
            return len(self._observers)

    @staticmethod
    def _matches(registration: _Registration, changed: Address) -> bool:
        observed = registration.address
        if observed.collection != changed.collection:
            return False
        if isinstance(changed, CollectionAddress):
            return True
        if isinstance(observed, ItemAddress):
            return observed.id == changed.id
        return registration.notify_for_descendants

    def notify_change(self, address: Union[str, Address]) -> int:
        """Call every observer interested in ``address``.

        Callbacks run on the calling thread, outside the registry lock.
        A failing callback is logged and does not stop the others.
        Returns the number of observers notified.
        """
        changed = parse_address(address)
        with self._lock:
            targets: List[_Registration] = [r for r in self._observers.values() if self._matches(r, changed)]
        for registration in targets:
            try:
                registration.callback(changed)
            except Exception:
                logger.exception("Content observer for %s failed", registration.address)
        return len(targets)


# Shared notifier used by the default gateway instance.
change_notifier = ChangeNotifier()
