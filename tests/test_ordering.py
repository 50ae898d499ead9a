"""
Tests for the pure ordering helpers in kanban.utils.ordering
"""
import itertools

import pytest

from kanban.utils.ordering import (
    MoveStatus,
    OrderedItem,
    assign_sequential_order,
    changed_items,
    container_members,
    is_contiguous,
    membership_mismatch,
    next_order,
    normalize_orders,
    reorder_by_ids,
    resolve_move,
)


def board(**columns):
    """board(todo=['A', 'B'], done=['C']) -> contiguous items per column"""
    return [
        OrderedItem(id=item_id, container_id=column, order=index)
        for column, ids in columns.items()
        for index, item_id in enumerate(ids)
    ]


def ids_in(items, container_id):
    return [item.id for item in container_members(items, container_id)]


class TestAssignSequentialOrder:
    def test_stamps_positions(self):
        items = [
            OrderedItem('a', 'c', 7),
            OrderedItem('b', 'c', 3),
            OrderedItem('c', 'c', 3),
        ]
        result = assign_sequential_order(items)
        assert [(item.id, item.order) for item in result] == [('a', 0), ('b', 1), ('c', 2)]

    def test_empty(self):
        assert assign_sequential_order([]) == []

    def test_keeps_items_already_in_place(self):
        items = board(c=['a', 'b'])
        result = assign_sequential_order(items)
        assert result[0] is items[0]
        assert result[1] is items[1]


class TestNextOrder:
    def test_empty_container_starts_at_zero(self):
        assert next_order([]) == 0
        assert next_order([None]) == 0

    def test_max_plus_one(self):
        assert next_order([0, 4, 2]) == 5


class TestResolveMove:
    def test_cross_container_move_to_top(self):
        items = board(todo=['A', 'B'], done=['C'])

        result = resolve_move(items, 'B', 'done', 0)

        assert result.status == MoveStatus.MOVED
        assert ids_in(result.items, 'todo') == ['A']
        assert ids_in(result.items, 'done') == ['B', 'C']
        assert {item.id: item.order for item in result.items} == {'A': 0, 'B': 0, 'C': 1}
        assert result.moved == OrderedItem('B', 'done', 0)
        assert result.source_container_id == 'todo'

    def test_reorder_within_container(self):
        items = board(todo=['A', 'B', 'C'])

        result = resolve_move(items, 'C', 'todo', 0)

        assert ids_in(result.items, 'todo') == ['C', 'A', 'B']
        assert {item.id: item.order for item in result.items} == {'C': 0, 'A': 1, 'B': 2}

    def test_move_down_within_container(self):
        items = board(todo=['A', 'B', 'C'])
        result = resolve_move(items, 'A', 'todo', 2)
        assert ids_in(result.items, 'todo') == ['B', 'C', 'A']

    def test_same_position_is_noop(self):
        items = board(todo=['A', 'B', 'C'])

        result = resolve_move(items, 'B', 'todo', 1)

        assert result.status == MoveStatus.NOOP
        assert not result.changed
        assert result.items == items
        assert changed_items(items, result.items) == []

    def test_index_past_end_appends(self):
        items = board(todo=['A'], doing=['X', 'Y'])

        result = resolve_move(items, 'A', 'doing', 99)

        assert ids_in(result.items, 'doing') == ['X', 'Y', 'A']
        assert result.moved.order == 2

    def test_negative_index_clamps_to_top(self):
        items = board(todo=['A', 'B'])
        result = resolve_move(items, 'B', 'todo', -5)
        assert ids_in(result.items, 'todo') == ['B', 'A']

    def test_move_into_empty_container(self):
        items = board(todo=['A', 'B'])

        result = resolve_move(items, 'A', 'empty', 0)

        assert ids_in(result.items, 'empty') == ['A']
        assert ids_in(result.items, 'todo') == ['B']
        assert is_contiguous(result.items, 'todo')

    def test_unknown_item_is_reported_and_leaves_items(self):
        items = board(todo=['A'])

        result = resolve_move(items, 'missing', 'todo', 0)

        assert result.not_found
        assert result.items == items
        assert result.moved is None

    def test_other_containers_untouched(self):
        items = board(todo=['A', 'B'], doing=['C'], done=['D', 'E'])

        result = resolve_move(items, 'A', 'doing', 1)

        before = {item.id: item for item in items}
        for item in result.items:
            if item.container_id == 'done':
                assert item is before[item.id]

    def test_source_reindexed_after_cross_container_move(self):
        items = board(todo=['A', 'B', 'C'], done=[])

        result = resolve_move(items, 'A', 'done', 0)

        assert {item.id: item.order for item in result.items if item.container_id == 'todo'} == {
            'B': 0, 'C': 1,
        }

    def test_gapped_input_becomes_contiguous(self):
        items = [
            OrderedItem('A', 'todo', 0),
            OrderedItem('B', 'todo', 5),
            OrderedItem('C', 'todo', 9),
        ]
        result = resolve_move(items, 'C', 'todo', 1)
        assert [item.order for item in container_members(result.items, 'todo')] == [0, 1, 2]
        assert ids_in(result.items, 'todo') == ['A', 'C', 'B']

    def test_custom_sort_key(self):
        # Pinned items sort after the others regardless of order
        items = [
            OrderedItem('A', 'today', 0, is_pinned=True),
            OrderedItem('B', 'today', 1),
            OrderedItem('C', 'today', 2),
        ]

        def key(item):
            return (item.is_pinned, item.order)

        result = resolve_move(items, 'C', 'today', 0, key=key)

        assert [item.id for item in container_members(result.items, 'today', key)] == ['C', 'B', 'A']

    def test_preserves_input_positions(self):
        items = board(todo=['A', 'B'], done=['C'])
        result = resolve_move(items, 'A', 'done', 1)
        assert [item.id for item in result.items] == ['A', 'B', 'C']


class TestScenarios:
    def test_move_first_to_last_in_same_container(self):
        items = board(A=['T1', 'T2', 'T3'])

        result = resolve_move(items, 'T1', 'A', 2)

        assert {item.id: item.order for item in result.items} == {'T2': 0, 'T3': 1, 'T1': 2}

    def test_move_to_top_of_other_container(self):
        items = board(A=['T1', 'T2'], B=['T3'])

        result = resolve_move(items, 'T1', 'B', 0)

        assert [(item.id, item.order) for item in container_members(result.items, 'A')] == [('T2', 0)]
        assert [(item.id, item.order) for item in container_members(result.items, 'B')] == [
            ('T1', 0), ('T3', 1),
        ]

    def test_fourth_item_is_appended(self):
        items = board(A=['T1', 'T2', 'T3'])
        assert next_order(item.order for item in items) == 3


class TestResolveMoveProperties:
    """Exhaustive checks over a small board"""

    COLUMNS = {'todo': ['A', 'B', 'C'], 'doing': ['D'], 'done': []}

    @pytest.mark.parametrize('item_id, destination', list(itertools.product(
        ['A', 'B', 'C', 'D'], ['todo', 'doing', 'done']
    )))
    def test_every_move_keeps_lists_contiguous_and_complete(self, item_id, destination):
        items = board(**self.COLUMNS)

        for index in range(-1, 6):
            result = resolve_move(items, item_id, destination, index)

            assert sorted(item.id for item in result.items) == ['A', 'B', 'C', 'D']
            for column in self.COLUMNS:
                assert is_contiguous(result.items, column)

            moved = next(item for item in result.items if item.id == item_id)
            assert moved.container_id == destination

            # Everyone else keeps their container and relative order
            source = next(column for column, ids in self.COLUMNS.items() if item_id in ids)
            for column, ids in self.COLUMNS.items():
                expected = [i for i in ids if i != item_id]
                assert [i for i in ids_in(result.items, column) if i != item_id] == expected, column
            assert item_id not in ids_in(result.items, source) or source == destination


class TestReorderById:
    def test_follows_given_sequence(self):
        items = board(todo=['A', 'B', 'C'], done=['D'])

        result = reorder_by_ids(items, 'todo', ['C', 'A', 'B'])

        assert ids_in(result, 'todo') == ['C', 'A', 'B']
        assert ids_in(result, 'done') == ['D']
        assert [item.order for item in container_members(result, 'todo')] == [0, 1, 2]

    def test_identity_reorder_changes_nothing(self):
        items = board(todo=['A', 'B'])
        assert changed_items(items, reorder_by_ids(items, 'todo', ['A', 'B'])) == []


class TestMembershipMismatch:
    def test_exact_permutation(self):
        items = board(todo=['A', 'B'])
        assert membership_mismatch(items, 'todo', ['B', 'A']) == {
            'missing': [], 'unexpected': [], 'duplicates': [],
        }

    def test_subset_foreign_and_duplicates(self):
        items = board(todo=['A', 'B', 'C'], done=['D'])

        mismatch = membership_mismatch(items, 'todo', ['A', 'A', 'D'])

        assert mismatch['missing'] == ['B', 'C']
        assert mismatch['unexpected'] == ['D']
        assert mismatch['duplicates'] == ['A']


class TestNormalizeOrders:
    def test_closes_gaps_per_container(self):
        items = [
            OrderedItem('A', 'todo', 3),
            OrderedItem('B', 'todo', 10),
            OrderedItem('C', 'done', 2),
        ]

        result = normalize_orders(items)

        assert {item.id: item.order for item in result} == {'A': 0, 'B': 1, 'C': 0}

    def test_idempotent(self):
        items = board(todo=['A', 'B'], done=['C'])
        assert changed_items(items, normalize_orders(items)) == []


class TestChangedItems:
    def test_reports_container_and_order_changes(self):
        before = board(todo=['A', 'B'], done=['C'])
        after = resolve_move(before, 'B', 'done', 0).items

        changed = {item.id for item in changed_items(before, after)}

        assert changed == {'B', 'C'}
