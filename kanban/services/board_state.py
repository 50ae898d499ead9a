"""
Optimistic Board State

Client-side view of one or more ordered containers. A drag gesture is
handled in two stages:

    1. apply-local: resolve the move and replace the view immediately
    2. confirm-or-revert: push the write; on failure restore the
       pre-gesture view, then reload it from the store when reachable

Only one gesture may be in flight at a time.
"""
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..utils.ordering import (
    MoveStatus,
    OrderedItem,
    SortKey,
    container_members,
    resolve_move,
)
from .base import BaseService
from .exceptions import GestureInProgressError, NotFoundError, PersistenceFailure
from .stores import BaseOrderStore
from .sync_client import PersistenceSyncClient

ViewState = Dict[Any, List[OrderedItem]]


def apply_locally(
    view_state: ViewState,
    resolved_items: Iterable[OrderedItem],
    key: Optional[SortKey] = None
) -> ViewState:
    """
    Build the next view from resolved items.

    Every container of the view is rebuilt from ``resolved_items``; nothing
    of the previous lists is merged in, so stale and fresh orders never mix.
    """
    resolved = list(resolved_items)
    container_ids = list(view_state)
    for item in resolved:
        if item.container_id not in container_ids:
            container_ids.append(item.container_id)
    return {
        container_id: container_members(resolved, container_id, key)
        for container_id in container_ids
    }


class GestureStatus:
    APPLIED = 'applied'
    NOOP = MoveStatus.NOOP
    NOT_FOUND = MoveStatus.NOT_FOUND
    REVERTED = 'reverted'


@dataclass
class GestureResult:
    status: str
    view: ViewState
    moved: Optional[OrderedItem] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status in (GestureStatus.APPLIED, GestureStatus.NOOP)


class BoardState(BaseService):
    """
    Args:
        store: Store the containers are read from and written to
        container_ids: Containers shown by this view (e.g. a project's columns)
        key: Display order sort key (default: the store's ``sort_key``)
        sync_client: Optional PersistenceSyncClient (built from ``store``)

    Usage:
        board = BoardState(RestOrderStore('tasks'), column_ids)
        board.load()
        result = board.move(task_id, done_column_id, 0)
        if result.status == GestureStatus.REVERTED:
            notify('Could not save, board reloaded')
    """

    def __init__(
        self,
        store: BaseOrderStore,
        container_ids: Iterable[Any],
        key: Optional[SortKey] = None,
        sync_client: Optional[PersistenceSyncClient] = None
    ):
        super().__init__()
        self.store = store
        self.container_ids = list(container_ids)
        self.key = key if key is not None else store.sort_key
        self.sync = sync_client or PersistenceSyncClient(store)
        self.view: ViewState = {container_id: [] for container_id in self.container_ids}
        self._gesture_lock = threading.Lock()

    @property
    def items(self) -> List[OrderedItem]:
        return [item for members in self.view.values() for item in members]

    @property
    def busy(self) -> bool:
        return self._gesture_lock.locked()

    def members(self, container_id) -> List[OrderedItem]:
        return list(self.view.get(container_id, []))

    def load(self) -> ViewState:
        """Replace the whole view with authoritative state from the store."""
        items = self.store.list_items(self.container_ids)
        self.view = apply_locally(
            {container_id: [] for container_id in self.container_ids}, items, self.key
        )
        return self.view

    def move(self, item_id, destination_container_id, destination_index: int) -> GestureResult:
        """Drag one item to a position, possibly in another container."""
        with self._gesture():
            result = resolve_move(
                self.items, item_id, destination_container_id, destination_index, key=self.key
            )
            if not result.changed:
                if result.not_found:
                    self.log_warning(f"Move ignored, item {item_id} not found")
                return GestureResult(status=result.status, view=self.view, moved=result.moved)

            previous = self.view
            self.view = apply_locally(previous, result.items, self.key)

            try:
                self.sync.push_move(result.moved)
            except PersistenceFailure as e:
                return self._revert(previous, e)

            return GestureResult(status=GestureStatus.APPLIED, view=self.view, moved=result.moved)

    def reorder(self, container_id, source_index: int, destination_index: int) -> GestureResult:
        """Reorder inside one container and persist every member's order atomically."""
        with self._gesture():
            members = container_members(self.items, container_id, self.key)
            if not 0 <= source_index < len(members):
                return GestureResult(status=GestureStatus.NOT_FOUND, view=self.view)

            item_id = members[source_index].id
            result = resolve_move(self.items, item_id, container_id, destination_index, key=self.key)
            if not result.changed:
                return GestureResult(status=result.status, view=self.view, moved=result.moved)

            previous = self.view
            self.view = apply_locally(previous, result.items, self.key)

            try:
                self.sync.push_reorder(self.view[container_id], container_id=container_id)
            except PersistenceFailure as e:
                return self._revert(previous, e)

            return GestureResult(status=GestureStatus.APPLIED, view=self.view, moved=result.moved)

    def _revert(self, previous: ViewState, error: PersistenceFailure) -> GestureResult:
        self.log_warning(f"Write failed ({error.message}); reloading from store")
        self.view = previous
        try:
            self.load()
        except (PersistenceFailure, NotFoundError) as e:
            self.log_error(f"Reload after failed write also failed ({e.message}); kept pre-gesture view")
        return GestureResult(status=GestureStatus.REVERTED, view=self.view, error=error)

    @contextmanager
    def _gesture(self):
        if not self._gesture_lock.acquire(blocking=False):
            raise GestureInProgressError()
        try:
            yield
        finally:
            self._gesture_lock.release()
