"""
Utilities for managing display order of orderable items.

Every orderable list in the planner goes through these helpers: tasks in a
column, columns in a project, the today list and the sidebar project list.
A list is identified only by its container id, so the same code serves all
of them.

All functions here are pure. They never touch the database; callers decide
what to persist (see ``kanban.services.collection``).
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence


@dataclass(frozen=True)
class OrderedItem:
    """One entry of an ordered container."""
    id: Any
    container_id: Any
    order: int
    is_pinned: bool = False
    is_done: bool = False


SortKey = Callable[[OrderedItem], Any]


def default_sort_key(item: OrderedItem):
    return item.order


def done_last_sort_key(item: OrderedItem):
    """Today list display order: open items first, then by order"""
    return (item.is_done, item.order)


class MoveStatus:
    MOVED = 'moved'
    NOOP = 'noop'
    NOT_FOUND = 'not_found'


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of ``resolve_move``.

    ``items`` always holds the full item set (unchanged for a no-op or a
    missing item), so callers can publish it without checking ``status``.
    """
    items: List[OrderedItem]
    status: str
    moved: Optional[OrderedItem] = None
    source_container_id: Any = None

    @property
    def changed(self) -> bool:
        return self.status == MoveStatus.MOVED

    @property
    def not_found(self) -> bool:
        return self.status == MoveStatus.NOT_FOUND


def container_members(
    items: Iterable[OrderedItem],
    container_id: Any,
    key: Optional[SortKey] = None
) -> List[OrderedItem]:
    """
    Members of one container in display order.

    Sorting is stable, so members sharing a sort value keep the sequence
    they had in ``items``.
    """
    key = key or default_sort_key
    return sorted(
        (item for item in items if item.container_id == container_id),
        key=key
    )


def assign_sequential_order(items: Sequence[OrderedItem]) -> List[OrderedItem]:
    """
    Stamp contiguous zero-based order values onto a sequence.

    Args:
        items: Items already arranged in the desired display order

    Returns:
        New list where the i-th element has ``order == i``. Items whose order
        is already correct are returned as-is.

    Usage:
        column = container_members(items, column_id)
        column = assign_sequential_order(column)
    """
    return [
        item if item.order == index else replace(item, order=index)
        for index, item in enumerate(items)
    ]


def next_order(orders: Iterable[Optional[int]]) -> int:
    """Order for a new item appended to a container: max + 1, or 0 when empty."""
    present = [order for order in orders if order is not None]
    if not present:
        return 0
    return max(present) + 1


def resolve_move(
    items: Sequence[OrderedItem],
    item_id: Any,
    destination_container_id: Any,
    destination_index: int,
    key: Optional[SortKey] = None
) -> MoveResult:
    """
    Move one item to a position in a (possibly different) container.

    Args:
        items: Every known item across all containers
        item_id: Id of the item being moved
        destination_container_id: Container receiving the item
        destination_index: Position in the destination's current display
                           order. Out of range values are clamped (append).
        key: Sort key defining the display order (default: ``order``)

    Returns:
        MoveResult. The destination container is re-indexed and, for a
        cross-container move, so is the source container. Every other
        container keeps its order values.

    Usage:
        result = resolve_move(items, task_id, done_column_id, 0)
        if result.changed:
            publish(result.items)
    """
    target = next((item for item in items if item.id == item_id), None)
    if target is None:
        return MoveResult(items=list(items), status=MoveStatus.NOT_FOUND)

    source_container_id = target.container_id
    source_members = container_members(items, source_container_id, key)
    source_index = next(
        index for index, item in enumerate(source_members) if item.id == item_id
    )

    remaining = [item for item in items if item.id != item_id]
    destination_members = container_members(remaining, destination_container_id, key)
    index = max(0, min(destination_index, len(destination_members)))

    same_container = source_container_id == destination_container_id
    if same_container and index == source_index:
        return MoveResult(
            items=list(items),
            status=MoveStatus.NOOP,
            moved=target,
            source_container_id=source_container_id
        )

    destination_members.insert(index, replace(target, container_id=destination_container_id))
    updated: Dict[Any, OrderedItem] = {
        item.id: item for item in assign_sequential_order(destination_members)
    }

    if not same_container:
        source_remaining = container_members(remaining, source_container_id, key)
        updated.update(
            (item.id, item) for item in assign_sequential_order(source_remaining)
        )

    return MoveResult(
        items=[updated.get(item.id, item) for item in items],
        status=MoveStatus.MOVED,
        moved=updated[item_id],
        source_container_id=source_container_id
    )


def reorder_by_ids(
    items: Sequence[OrderedItem],
    container_id: Any,
    ordered_ids: Sequence[Any]
) -> List[OrderedItem]:
    """
    Re-index one container to follow an explicit id sequence.

    ``ordered_ids`` must name exactly the container's members; callers
    validate membership first (``membership_mismatch``).
    """
    by_id = {item.id: item for item in items if item.container_id == container_id}
    arranged = assign_sequential_order([by_id[item_id] for item_id in ordered_ids])
    updated = {item.id: item for item in arranged}
    return [updated.get(item.id, item) for item in items]


def membership_mismatch(
    items: Iterable[OrderedItem],
    container_id: Any,
    ordered_ids: Sequence[Any]
) -> Dict[str, List[Any]]:
    """
    Compare a submitted id sequence with a container's actual members.

    Returns:
        Dict with 'missing' (members not submitted), 'unexpected' (submitted
        ids that are not members) and 'duplicates'. All empty when the
        submission is an exact permutation of the membership.
    """
    members = {item.id for item in items if item.container_id == container_id}
    seen = set()
    duplicates = []
    for item_id in ordered_ids:
        if item_id in seen:
            duplicates.append(item_id)
        seen.add(item_id)

    return {
        'missing': sorted(members - seen, key=str),
        'unexpected': [item_id for item_id in ordered_ids if item_id not in members],
        'duplicates': duplicates,
    }


def normalize_orders(
    items: Sequence[OrderedItem],
    key: Optional[SortKey] = None
) -> List[OrderedItem]:
    """
    Re-stamp every container so its orders are contiguous again.

    Relative order inside each container is preserved. Used after deletions
    and by the periodic repair job.
    """
    updated: Dict[Any, OrderedItem] = {}
    container_ids = []
    for item in items:
        if item.container_id not in container_ids:
            container_ids.append(item.container_id)

    for container_id in container_ids:
        members = container_members(items, container_id, key)
        updated.update((item.id, item) for item in assign_sequential_order(members))

    return [updated[item.id] for item in items]


def changed_items(
    before: Iterable[OrderedItem],
    after: Iterable[OrderedItem]
) -> List[OrderedItem]:
    """Items of ``after`` whose container or order differs from ``before``."""
    previous = {item.id: item for item in before}
    changes = []
    for item in after:
        old = previous.get(item.id)
        if old is None or old.order != item.order or old.container_id != item.container_id:
            changes.append(item)
    return changes


def is_contiguous(items: Iterable[OrderedItem], container_id: Any) -> bool:
    """True when the container's orders are exactly {0, ..., n-1}."""
    orders = sorted(item.order for item in items if item.container_id == container_id)
    return orders == list(range(len(orders)))
