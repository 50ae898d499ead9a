"""
REST Order Store

Store implementation that talks to the planner's HTTP API, for clients
running outside the Django process (scripts, terminal front-ends). Routes
per collection live in ``kanban.constants.REST_ROUTES``.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests
from django.conf import settings

from ..constants import REST_ROUTES, Collection
from ..utils.ordering import OrderedItem, done_last_sort_key
from .exceptions import NotFoundError, PersistenceFailure
from .stores import CONTAINER, ORDER, BaseOrderStore

RESOURCE_TYPES = {
    Collection.TASKS: 'task',
    Collection.COLUMNS: 'column',
    Collection.PROJECTS: 'project',
    Collection.TODAY: 'task',
}

# Container id used for collections scoped to the authenticated user
OWNER = 'me'


class RestOrderStore(BaseOrderStore):
    """
    Args:
        collection: One of Collection.ALL ('tasks', 'columns', 'projects', 'today')
        base_url: API root (default: settings.KANBAN_API_BASE_URL)
        token: DRF auth token, sent as ``Authorization: Token <token>``
        session: Optional requests.Session (shared connection pool, tests)
        timeout: Request timeout in seconds (default: settings.KANBAN_API_TIMEOUT)

    Usage:
        store = RestOrderStore('tasks', token=token)
        columns = store.list_items([todo_id, doing_id, done_id])
    """

    def __init__(
        self,
        collection: str,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[int] = None
    ):
        super().__init__()
        if collection not in REST_ROUTES:
            raise ValueError(f"Unknown collection: {collection}")

        self.collection = collection
        self.routes = REST_ROUTES[collection]
        self.resource_type = RESOURCE_TYPES[collection]
        if collection == Collection.TODAY:
            # Mirrors the server: tasks in a done column sink below open ones
            self.sort_key = done_last_sort_key
        self.base_url = base_url or getattr(settings, 'KANBAN_API_BASE_URL', 'http://localhost:8000/api/')
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.timeout = timeout or getattr(settings, 'KANBAN_API_TIMEOUT', 10)

        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if token:
            self.session.headers.update({'Authorization': f'Token {token}'})

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, route: str, **params) -> str:
        return urljoin(self.base_url, self.routes[route].format(**params))

    def _request(self, method: str, url: str, operation: str, item_id=None, **kwargs):
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            self.log_error(f"{operation} failed: {e}")
            raise PersistenceFailure(f"Could not reach the planner API: {e}", operation) from e

        if response.status_code == 404:
            raise NotFoundError(self.resource_type, item_id)

        if response.status_code >= 400:
            self.log_error(f"{operation} failed: HTTP {response.status_code} {response.text[:200]}")
            raise PersistenceFailure(
                f"{operation} failed (HTTP {response.status_code})", operation
            )

        if not response.content:
            return None
        return response.json()

    def _to_item(self, data: Dict[str, Any], container_id=None) -> OrderedItem:
        container_key = self.routes['container_key']
        return OrderedItem(
            id=data['id'],
            container_id=data[container_key] if container_key else (container_id or OWNER),
            order=data.get(self.routes['order_key']) or 0,
            is_pinned=bool(data.get('is_today', False)),
            is_done=bool(data.get('is_done', False)),
        )

    def _payload(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        payload = {}
        for key, value in fields.items():
            if key == CONTAINER:
                if self.routes['container_key']:
                    payload[self.routes['container_key']] = value
            elif key == ORDER:
                payload[self.routes['order_key']] = value
            else:
                payload[key] = value
        return payload

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    def update_item(self, item_id, fields: Dict[str, Any]) -> OrderedItem:
        payload = self._payload(fields)
        if self.collection == Collection.TODAY:
            payload['is_today'] = True
            data = self._request('PUT', self._url('detail', id=item_id), 'update today order',
                                 item_id=item_id, json=payload)
        else:
            data = self._request('PATCH', self._url('detail', id=item_id), f'update {self.resource_type}',
                                 item_id=item_id, json=payload)
        return self._to_item(data, fields.get(CONTAINER))

    def update_items_atomic(self, updates: List[Dict[str, Any]], container_id=None) -> None:
        if not updates:
            return
        order_key = self.routes['order_key']
        payload = {
            self.routes['payload_key']: [
                {'id': update['id'], order_key: update['fields'][ORDER]}
                for update in updates
            ]
        }
        self._request('PUT', self._url('reorder', container_id=container_id), f'reorder {self.collection}',
                      item_id=updates[0]['id'], json=payload)

    def list_items_by_container(self, container_id) -> List[OrderedItem]:
        data = self._request('GET', self._url('list', container_id=container_id), f'list {self.collection}',
                             item_id=container_id)
        if isinstance(data, dict):
            data = data.get('results', [])
        return [self._to_item(entry, container_id) for entry in data or []]

    def create_item(self, container_id, fields: Dict[str, Any]) -> OrderedItem:
        if self.collection == Collection.TODAY:
            task_id = fields['task_id']
            data = self._request('PUT', self._url('detail', id=task_id), 'add to today',
                                 item_id=task_id, json={'is_today': True})
            return self._to_item(data, container_id)

        payload = self._payload(fields)
        if self.routes['container_key']:
            payload[self.routes['container_key']] = container_id
        data = self._request('POST', self._url('create'), f'create {self.resource_type}',
                             item_id=container_id, json=payload)
        return self._to_item(data, container_id)

    def delete_item(self, item_id) -> None:
        if self.collection == Collection.TODAY:
            self._request('PUT', self._url('detail', id=item_id), 'remove from today',
                          item_id=item_id, json={'is_today': False})
            return
        self._request('DELETE', self._url('detail', id=item_id), f'delete {self.resource_type}',
                      item_id=item_id)
