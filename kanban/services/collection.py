"""
Ordered Collection Service

Server-side mutator shared by every ordered list. It loads the affected
containers from a ModelOrderStore, runs the pure helpers from
``kanban.utils.ordering`` and writes back only the rows that changed,
inside one transaction.
"""
from typing import Any, Dict, List, Optional, Sequence

from django.db import transaction

from ..utils.ordering import (
    OrderedItem,
    MoveResult,
    SortKey,
    changed_items,
    container_members,
    membership_mismatch,
    normalize_orders,
    reorder_by_ids,
    resolve_move,
)
from .base import BaseService
from .exceptions import ConstraintViolationError, NotFoundError
from .stores import CONTAINER, ORDER, ModelOrderStore


class OrderedCollectionService(BaseService):
    """
    Keeps one collection contiguous.

    Args:
        store: ModelOrderStore for the collection
        key: Sort key defining the display order (default: order field)
    """

    def __init__(self, store: ModelOrderStore, key: Optional[SortKey] = None):
        super().__init__()
        self.store = store
        self.key = key

    def _write(self, before: Sequence[OrderedItem], after: Sequence[OrderedItem]) -> int:
        changes = changed_items(before, after)
        if changes:
            self.store.update_items_atomic([
                {'id': item.id, 'fields': {CONTAINER: item.container_id, ORDER: item.order}}
                for item in changes
            ])
        return len(changes)

    def next_order(self, container_id) -> int:
        return self.store.next_order(container_id)

    def append(self, container_id, **fields):
        """Create a row at the end of ``container_id``; returns the model instance."""
        instance = self.store.create_instance(container_id, fields)
        self.log_debug(
            f"Appended {self.store.resource_type} {instance.pk} to {container_id} "
            f"at {getattr(instance, self.store.order_field)}"
        )
        return instance

    @transaction.atomic
    def move(self, item_id, destination_container_id, destination_index: int) -> MoveResult:
        """
        Move one item and persist the re-index of both affected containers.

        Raises:
            NotFoundError: the item is unknown (or not visible to the caller)
        """
        current = self.store.get_item(item_id)
        before = self.store.list_items([current.container_id, destination_container_id])

        result = resolve_move(
            before, item_id, destination_container_id, destination_index, key=self.key
        )
        if result.not_found:
            raise NotFoundError(self.store.resource_type, item_id)

        if result.changed:
            written = self._write(before, result.items)
            self.log_info(
                f"Moved {self.store.resource_type} {item_id} from {result.source_container_id} "
                f"to {destination_container_id}@{result.moved.order} ({written} rows)"
            )
        return result

    @transaction.atomic
    def reorder(self, container_id, ordered_ids: Sequence[Any]) -> List[OrderedItem]:
        """
        Re-index a container to follow ``ordered_ids`` exactly.

        Raises:
            NotFoundError: an id does not exist (nothing written)
            ConstraintViolationError: ids are not exactly the container's
                members (nothing written)
        """
        known = self.store.existing_ids(ordered_ids)
        unknown = [item_id for item_id in ordered_ids if item_id not in known]
        if unknown:
            raise NotFoundError(self.store.resource_type, unknown[0])

        before = self.store.list_items_by_container(container_id)
        mismatch = membership_mismatch(before, container_id, ordered_ids)
        if any(mismatch.values()):
            raise ConstraintViolationError(
                f"Reorder must list every {self.store.resource_type} of the container exactly once",
                rule='exact_membership',
                details=mismatch
            )

        after = reorder_by_ids(before, container_id, ordered_ids)
        written = self._write(before, after)
        self.log_info(
            f"Reordered {len(after)} {self.store.resource_type} rows in {container_id} ({written} changed)"
        )
        # Display order, so a done-last key is reflected in the response
        return container_members(after, container_id, self.key)

    def reorder_from_pairs(self, container_id, pairs: Sequence[Dict[str, Any]], order_key: str = 'order'):
        """
        Bulk reorder from ``[{'id': ..., order_key: n}, ...]`` payloads.

        Submitted order values only rank the ids; stored values are always
        re-stamped 0..n-1.
        """
        ranked = sorted(enumerate(pairs), key=lambda pair: (pair[1][order_key], pair[0]))
        return self.reorder(container_id, [pair['id'] for _, pair in ranked])

    @transaction.atomic
    def compact(self, container_id) -> int:
        """Close gaps left by removals in one container."""
        before = self.store.list_items_by_container(container_id)
        return self._write(before, normalize_orders(before, key=self.key))

    @transaction.atomic
    def remove(self, item_id) -> OrderedItem:
        """Delete an item and compact the container it left."""
        item = self.store.get_item(item_id)
        self.store.delete_item(item_id)
        self.compact(item.container_id)
        return item

    @transaction.atomic
    def normalize_all(self) -> int:
        """Repair contiguity in every container of the collection."""
        before = self.store.all_items()
        written = self._write(before, normalize_orders(before, key=self.key))
        if written:
            self.log_warning(f"Normalized {written} {self.store.resource_type} rows")
        return written
