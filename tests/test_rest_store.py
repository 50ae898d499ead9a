"""
Tests for RestOrderStore with a mocked requests session
"""
import json
from unittest import mock

import pytest
import requests

from kanban.services import BoardState, NotFoundError, PersistenceFailure, RestOrderStore
from kanban.services.stores import CONTAINER, ORDER
from kanban.utils.ordering import OrderedItem

BASE = 'http://planner.test/api/'


def make_response(status_code=200, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode() if payload is not None else b''
    return response


@pytest.fixture
def session():
    session = mock.MagicMock()
    session.headers = {}
    session.request.return_value = make_response(200, {})
    return session


def make_store(session, collection='tasks'):
    return RestOrderStore(collection, base_url=BASE, token='abc123', session=session, timeout=3)


def test_token_header(session):
    make_store(session)
    assert session.headers['Authorization'] == 'Token abc123'


def test_unknown_collection(session):
    with pytest.raises(ValueError):
        RestOrderStore('boards', base_url=BASE, session=session)


def test_update_item_patches_detail(session):
    session.request.return_value = make_response(200, {'id': 5, 'column': 2, 'order': 0, 'is_today': True})
    store = make_store(session)

    item = store.update_item(5, {CONTAINER: 2, ORDER: 0})

    session.request.assert_called_once_with(
        'PATCH', BASE + 'tasks/5/', timeout=3, json={'column': 2, 'order': 0}
    )
    assert item == OrderedItem(id=5, container_id=2, order=0, is_pinned=True)


def test_update_items_atomic_puts_reorder_payload(session):
    store = make_store(session, 'columns')

    store.update_items_atomic(
        [{'id': 7, 'fields': {ORDER: 0}}, {'id': 6, 'fields': {ORDER: 1}}],
        container_id=3,
    )

    session.request.assert_called_once_with(
        'PUT', BASE + 'projects/3/columns/reorder/', timeout=3,
        json={'column_orders': [{'id': 7, 'order': 0}, {'id': 6, 'order': 1}]},
    )


def test_update_items_atomic_empty_sends_nothing(session):
    make_store(session).update_items_atomic([])
    session.request.assert_not_called()


def test_list_reads_paginated_results(session):
    session.request.return_value = make_response(200, {
        'count': 2,
        'results': [
            {'id': 1, 'column': 4, 'order': 0},
            {'id': 2, 'column': 4, 'order': 1},
        ],
    })

    items = make_store(session).list_items_by_container(4)

    assert [(item.id, item.container_id, item.order) for item in items] == [(1, 4, 0), (2, 4, 1)]
    assert session.request.call_args[0][:2] == ('GET', BASE + 'columns/4/tasks/')


def test_sidebar_uses_sidebar_order(session):
    session.request.return_value = make_response(200, [
        {'id': 9, 'sidebar_order': 0},
        {'id': 8, 'sidebar_order': 1},
    ])

    items = make_store(session, 'projects').list_items_by_container('me')

    assert items == [OrderedItem(9, 'me', 0), OrderedItem(8, 'me', 1)]


def test_today_update_puts_toggle(session):
    session.request.return_value = make_response(200, {'id': 5, 'today_order': 2, 'is_today': True})
    store = make_store(session, 'today')

    item = store.update_item(5, {CONTAINER: 'me', ORDER: 2})

    session.request.assert_called_once_with(
        'PUT', BASE + 'tasks/5/today/', timeout=3, json={'today_order': 2, 'is_today': True}
    )
    assert item.order == 2


def test_today_view_lists_done_tasks_last(session):
    # Task 1 was pinned first and then finished
    session.request.return_value = make_response(200, [
        {'id': 1, 'today_order': 0, 'is_today': True, 'is_done': True},
        {'id': 2, 'today_order': 1, 'is_today': True, 'is_done': False},
    ])
    board = BoardState(make_store(session, 'today'), ['me'])

    view = board.load()

    assert [item.id for item in view['me']] == [2, 1]
    assert view['me'][1].is_done


def test_board_columns_keep_plain_order(session):
    session.request.return_value = make_response(200, [
        {'id': 1, 'column': 4, 'order': 0, 'is_done': True},
        {'id': 2, 'column': 4, 'order': 1, 'is_done': True},
    ])

    view = BoardState(make_store(session), [4]).load()

    assert [item.id for item in view[4]] == [1, 2]


def test_today_delete_removes_from_list(session):
    make_store(session, 'today').delete_item(5)

    session.request.assert_called_once_with(
        'PUT', BASE + 'tasks/5/today/', timeout=3, json={'is_today': False}
    )


def test_create_posts_with_container(session):
    session.request.return_value = make_response(201, {'id': 11, 'column': 4, 'order': 3})

    item = make_store(session).create_item(4, {'title': 'Write post', 'project': 1})

    session.request.assert_called_once_with(
        'POST', BASE + 'tasks/', timeout=3,
        json={'title': 'Write post', 'project': 1, 'column': 4},
    )
    assert item.order == 3


def test_delete(session):
    session.request.return_value = make_response(204)

    make_store(session).delete_item(11)

    session.request.assert_called_once_with('DELETE', BASE + 'tasks/11/', timeout=3)


def test_404_becomes_not_found(session):
    session.request.return_value = make_response(404, {'error': True})

    with pytest.raises(NotFoundError) as excinfo:
        make_store(session).update_item(5, {ORDER: 0})

    assert excinfo.value.resource_type == 'task'
    assert excinfo.value.resource_id == 5


def test_server_error_becomes_persistence_failure(session):
    session.request.return_value = make_response(500, {'error': True})

    with pytest.raises(PersistenceFailure):
        make_store(session).update_item(5, {ORDER: 0})


def test_network_error_becomes_persistence_failure(session):
    session.request.side_effect = requests.ConnectionError('refused')

    with pytest.raises(PersistenceFailure) as excinfo:
        make_store(session).list_items_by_container(4)

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
