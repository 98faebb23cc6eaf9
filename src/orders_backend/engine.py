# orders_backend/engine.py
from __future__ import annotations

import os
import logging
from typing import Any, Dict, List, Optional

from . import config as CFG
from .bank import BankCache
from .models import AutocompletePreset, Dataset, OrderItem, Suggestion, SuggestionBank, new_id
from .orders import generate_item_text, generate_text
from .search import compute_suggestions
from .session import AutocompleteSession, Cancel, Schedule
from .DB.api import DataStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the key-value store (memory or JSON file) holding presets and orders,
      - the suggestion bank, memoized per dataset version,
      - one AutocompleteSession per editable field.

    Public API (used by CLI/Flask/GUI):
      * open(db_dsn):       attach a store and load the dataset
      * complete(text, k):  ranked suggestions for a text
      * session(field_id):  per-field selection state
      * preset/order CRUD:  every mutation persists and refreshes sessions
      * generate_text():    the full order text
      * shutdown():         close underlying resources

    Storage DSNs (via orders_backend.DB.api.make_store):
      - "json:///path/to/data.json"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._store: Optional[DataStore] = None
        self._dataset = Dataset()
        self._version = 0
        self._bank = BankCache()
        self._sessions: Dict[str, AutocompleteSession] = {}

    # /* ~~~ Attach a store and read presets + orders from it ~~~ */
    def open(self, db_dsn: Optional[str] = None, *, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["ORDERS_VERBOSE"] = "1"

        dsn = db_dsn or CFG.DEFAULT_DSN
        log.info("Initializing data store: %s", dsn)
        self._store = make_store(dsn)

        presets = self._store.get(CFG.PRESETS_KEY, [])
        orders = self._store.get(CFG.ORDERS_KEY, [])
        self._dataset = Dataset(
            presets=[AutocompletePreset.from_dict(p) for p in presets] if isinstance(presets, list) else [],
            orders=[OrderItem.from_dict(o) for o in orders] if isinstance(orders, list) else [],
        )
        self._touch()
        log.info("Engine open() complete: presets=%d orders=%d",
                 len(self._dataset.presets), len(self._dataset.orders))

    # ------------- query -------------

    @property
    def version(self) -> int:
        return self._version

    @property
    def bank(self) -> SuggestionBank:
        self._require_open()
        return self._bank.get(self._version, self._dataset)

    # /* ~~~ Ranked completions for the text currently typed in a field ~~~ */
    def complete(self, text: Any, *, top_k: int = CFG.MAX_SUGGESTIONS) -> List[Suggestion]:
        return compute_suggestions(text, self.bank, limit=min(top_k, CFG.MAX_SUGGESTIONS))

    def session(
        self,
        field_id: str,
        *,
        on_accept=None,
        schedule: Optional[Schedule] = None,
        cancel: Optional[Cancel] = None,
    ) -> AutocompleteSession:
        """Return the session owned by field_id, creating it on first use."""
        self._require_open()
        sess = self._sessions.get(field_id)
        if sess is None:
            sess = AutocompleteSession(
                field_id,
                lambda: self.bank,
                on_accept=on_accept,
                schedule=schedule,
                cancel=cancel,
            )
            self._sessions[field_id] = sess
        return sess

    def drop_session(self, field_id: str) -> None:
        self._sessions.pop(field_id, None)

    # ------------- presets -------------

    def presets(self) -> List[AutocompletePreset]:
        self._require_open()
        return list(self._dataset.presets)

    def add_preset(self, text: str = "") -> AutocompletePreset:
        self._require_open()
        preset = AutocompletePreset(id=new_id(), text=text)
        self._commit(presets=[*self._dataset.presets, preset])
        return preset

    def update_preset(self, preset_id: str, text: str) -> AutocompletePreset:
        self._require_open()
        presets = list(self._dataset.presets)
        preset = AutocompletePreset(id=preset_id, text=text)
        presets[self._index_of(presets, preset_id)] = preset
        self._commit(presets=presets)
        return preset

    def remove_preset(self, preset_id: str) -> None:
        self._require_open()
        presets = list(self._dataset.presets)
        del presets[self._index_of(presets, preset_id)]
        self._commit(presets=presets)

    # ------------- orders -------------

    def orders(self) -> List[OrderItem]:
        self._require_open()
        return list(self._dataset.orders)

    def get_order(self, order_id: str) -> OrderItem:
        self._require_open()
        return self._dataset.orders[self._index_of(self._dataset.orders, order_id)]

    def add_order(self, item: Optional[OrderItem] = None) -> OrderItem:
        self._require_open()
        item = item or OrderItem.new()
        self._commit(orders=[*self._dataset.orders, item])
        return item

    def update_order(self, item: OrderItem) -> OrderItem:
        self._require_open()
        orders = list(self._dataset.orders)
        orders[self._index_of(orders, item.id)] = item
        self._commit(orders=orders)
        return item

    def remove_order(self, order_id: str) -> None:
        self._require_open()
        orders = list(self._dataset.orders)
        del orders[self._index_of(orders, order_id)]
        self._commit(orders=orders)

    def generate_text(self) -> str:
        return generate_text(self.orders())

    def order_text(self, order_id: str) -> str:
        return generate_item_text(self.get_order(order_id))

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._sessions.clear()
            self._bank.invalidate()
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_open(self) -> None:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call open() first.")

    @staticmethod
    def _index_of(items, item_id: str) -> int:
        for i, it in enumerate(items):
            if it.id == item_id:
                return i
        raise KeyError(item_id)

    def _touch(self) -> None:
        self._version += 1
        for sess in self._sessions.values():
            sess.refresh()

    def _commit(
        self,
        *,
        presets: Optional[List[AutocompletePreset]] = None,
        orders: Optional[List[OrderItem]] = None,
    ) -> None:
        """Persist the new lists, then install them; a failed write leaves the dataset as it was."""
        assert self._store is not None
        try:
            if presets is not None:
                self._store.set(CFG.PRESETS_KEY, [p.to_dict() for p in presets])
                self._dataset.presets = presets
            if orders is not None:
                self._store.set(CFG.ORDERS_KEY, [o.to_dict() for o in orders])
                self._dataset.orders = orders
        finally:
            self._touch()
