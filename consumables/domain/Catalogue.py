"""Catalogue aggregate: the in-memory, expiry-ordered collection of Consumable items.

Every public method runs under one lock and returns copies, so the HTTP layer
can hand results straight to the serializer while other requests mutate the
catalogue.
"""
import copy
import logging
from datetime import date
from pathlib import Path
from threading import Lock
from typing import Callable, Iterable, List, Optional, Union

from consumables.domain.Consumable import Consumable
from consumables.domain.exceptions import OutOfRangeError
from consumables.infra.Consumables_Repository import load_consumables, parse_consumable, save_consumables
from consumables.utilities.backup import BackupManager
from consumables.utilities.constants import DAYS_IN_WEEK

logger = logging.getLogger(__name__)


class Catalogue:
    def __init__(self, today: Callable[[], date] = date.today, backup: Optional[BackupManager] = None):
        self._items: List[Consumable] = []
        self._next_id = 0
        self._lock = Lock()
        self._today = today
        self._backup = backup

    # --- Internal helpers (caller holds the lock) -----------------------------
    def _assign_id(self, item: Consumable) -> Consumable:
        self._next_id += 1
        item.id = self._next_id
        return item

    def _sort(self):
        # list.sort is stable: equal expiry dates keep insertion order
        self._items.sort(key=lambda item: item.expiry_date)

    @staticmethod
    def _snapshot(items: Iterable[Consumable]) -> List[Consumable]:
        return [copy.copy(item) for item in items]

    def _select(self, predicate: Callable[[Consumable], bool]) -> List[Consumable]:
        with self._lock:
            return self._snapshot(item for item in self._items if predicate(item))

    # --- Persistence ---------------------------------------------------------
    def load_from(self, path: Union[str, Path]) -> List[Consumable]:
        '''
        Replaces the catalogue with the items stored at path.
        Loaded items get fresh ids; ids in the file are ignored.
        '''
        with self._lock:
            loaded = load_consumables(path)
            for item in loaded:
                self._assign_id(item)
            self._items = loaded
            self._sort()
            logger.info("Loaded %d consumables from %s", len(self._items), path)
            return self._snapshot(self._items)

    def save_to(self, path: Union[str, Path]) -> None:
        with self._lock:
            save_consumables(path, self._items, backup=self._backup)
            logger.info("Saved %d consumables to %s", len(self._items), path)

    # --- Mutations -----------------------------------------------------------
    def add(self, item: Consumable) -> List[Consumable]:
        '''
        Adds an item under a newly assigned id and returns the whole catalogue.
        '''
        with self._lock:
            self._items.append(self._assign_id(item))
            self._sort()
            logger.info("Added consumable %s", item)
            return self._snapshot(self._items)

    def add_json(self, text: Union[str, bytes]) -> List[Consumable]:
        '''
        Decodes one JSON item object and adds it. Raises ParseError, leaving the catalogue untouched.
        '''
        item = parse_consumable(text)
        return self.add(item)

    def remove(self, item_id: int) -> List[Consumable]:
        '''
        Removes every item with the given id. Unknown ids are ignored.
        '''
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            removed = len(self._items) - len(remaining)
            self._items = remaining
            self._sort()
            if removed:
                logger.info("Removed consumable #%s", item_id)
            else:
                logger.info("No consumable #%s to remove", item_id)
            return self._snapshot(self._items)

    # --- Accessors -----------------------------------------------------------
    def list_all(self) -> List[Consumable]:
        with self._lock:
            return self._snapshot(self._items)

    def get(self, index: int) -> Consumable:
        with self._lock:
            if index < 0 or index >= len(self._items):
                raise OutOfRangeError(f"Index {index} out of range for catalogue of size {len(self._items)}")
            return copy.copy(self._items[index])

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def is_empty(self) -> bool:
        return self.size() == 0

    __len__ = size

    # --- Date buckets --------------------------------------------------------
    def expired(self) -> List[Consumable]:
        '''Items whose expiry date is before today. Items expiring today are not expired.'''
        today = self._today()
        return self._select(lambda item: item.expiry_date < today)

    def non_expired(self) -> List[Consumable]:
        '''Items expiring today or later.'''
        today = self._today()
        return self._select(lambda item: item.expiry_date >= today)

    def expiring_within_7_days(self) -> List[Consumable]:
        '''Items expiring between today and seven days from now, both ends included.'''
        today = self._today()
        return self._select(lambda item: 0 <= item.days_until_expiry(today) <= DAYS_IN_WEEK)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.list_all())
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()
