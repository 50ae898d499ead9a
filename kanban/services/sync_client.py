"""
Persistence Sync Client

Turns a resolved reorder into the minimum writes against a store:
one single-item update for a move, one atomic multi-item update for a
bulk reorder. Failures surface as PersistenceFailure and are never
retried here; callers resync from the store instead.
"""
from typing import Sequence

from ..utils.ordering import OrderedItem
from .base import BaseService
from .exceptions import KanbanException, PersistenceFailure
from .stores import CONTAINER, ORDER, BaseOrderStore


class PersistenceSyncClient(BaseService):
    """
    Usage:
        sync = PersistenceSyncClient(RestOrderStore('tasks'))
        sync.push_move(result.moved)
    """

    def __init__(self, store: BaseOrderStore):
        super().__init__()
        self.store = store

    def push_move(self, item: OrderedItem) -> OrderedItem:
        """Persist the moved item's new container and position only."""
        try:
            return self.store.update_item(
                item.id, {CONTAINER: item.container_id, ORDER: item.order}
            )
        except PersistenceFailure:
            raise
        except KanbanException as e:
            self.log_error(f"Move of {item.id} rejected by store: {e.message}")
            raise PersistenceFailure(f"Failed to save move: {e.message}", 'push_move') from e

    def push_reorder(self, items: Sequence[OrderedItem], container_id=None) -> None:
        """Persist ``{id, order}`` for every item in one all-or-nothing write."""
        updates = [{'id': item.id, 'fields': {ORDER: item.order}} for item in items]
        try:
            self.store.update_items_atomic(updates, container_id=container_id)
        except PersistenceFailure:
            raise
        except KanbanException as e:
            self.log_error(f"Reorder of {len(updates)} items rejected by store: {e.message}")
            raise PersistenceFailure(f"Failed to save order: {e.message}", 'push_reorder') from e
