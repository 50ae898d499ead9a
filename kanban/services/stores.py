"""
Order Stores

A store is the persistence side of an ordered collection. It knows how to
read and write items of one collection (tasks, columns, projects, today
entries) and speaks in ``OrderedItem`` values, never in view state.

Two implementations share the contract:
    ModelOrderStore  - Django ORM (used by the API itself)
    RestOrderStore   - HTTP client against the API (see rest_store.py)
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from django.db import DatabaseError, transaction
from django.db.models import Max, QuerySet

from ..utils.ordering import OrderedItem, next_order
from .base import BaseService
from .exceptions import NotFoundError, PersistenceFailure

# Generic field names used in update payloads; stores map them to real fields
CONTAINER = 'container_id'
ORDER = 'order'


class BaseOrderStore(BaseService, ABC):
    """
    Contract every store implements.

    ``fields`` dicts use the generic keys ``container_id`` and ``order``;
    any other key is passed through to the underlying record unchanged.
    """
    resource_type = 'item'
    # Display order for views built on this store (None: by order)
    sort_key = None

    @abstractmethod
    def update_item(self, item_id, fields: Dict[str, Any]) -> OrderedItem:
        """Update one item. Raises NotFoundError when it does not exist."""

    @abstractmethod
    def update_items_atomic(self, updates: List[Dict[str, Any]], container_id=None) -> None:
        """
        Apply ``[{'id': ..., 'fields': {...}}]`` all-or-nothing.
        Raises NotFoundError (nothing written) when any id is unknown.
        """

    @abstractmethod
    def list_items_by_container(self, container_id) -> List[OrderedItem]:
        """Members of one container in stored order."""

    @abstractmethod
    def create_item(self, container_id, fields: Dict[str, Any]) -> OrderedItem:
        """Create an item at the end of its container."""

    @abstractmethod
    def delete_item(self, item_id) -> None:
        """Delete one item. Raises NotFoundError when it does not exist."""

    def list_items(self, container_ids: Iterable[Any]) -> List[OrderedItem]:
        """Members of several containers, container by container."""
        items = []
        for container_id in dict.fromkeys(container_ids):
            items.extend(self.list_items_by_container(container_id))
        return items


class ModelOrderStore(BaseOrderStore):
    """
    ORM-backed store for any model with an integer order field.

    Args:
        queryset: Base queryset, already scoped to what the caller may touch
                  (e.g. ``Task.objects.filter(project__author=user)``).
                  Rows outside it behave as missing.
        container_field: Attribute holding the container id (e.g. 'column_id')
        order_field: Integer order field (default: 'order')
        pinned_field: Optional boolean attribute exposed as ``is_pinned``
        resource_type: Name used in NotFoundError messages

    Usage:
        store = ModelOrderStore(
            Task.objects.filter(project__author=user),
            container_field='column_id',
            resource_type='task',
        )
        store.list_items_by_container(column.id)
    """

    def __init__(
        self,
        queryset: QuerySet,
        container_field: str,
        order_field: str = 'order',
        pinned_field: Optional[str] = None,
        resource_type: str = 'item'
    ):
        super().__init__()
        self.queryset = queryset
        self.model = queryset.model
        self.container_field = container_field
        self.order_field = order_field
        self.pinned_field = pinned_field
        self.resource_type = resource_type

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def to_item(self, instance) -> OrderedItem:
        return OrderedItem(
            id=instance.pk,
            container_id=getattr(instance, self.container_field),
            order=getattr(instance, self.order_field),
            is_pinned=bool(getattr(instance, self.pinned_field)) if self.pinned_field else False,
        )

    def get_instance(self, item_id):
        instance = self.queryset.filter(pk=item_id).first()
        if instance is None:
            raise NotFoundError(self.resource_type, item_id)
        return instance

    def get_item(self, item_id) -> OrderedItem:
        return self.to_item(self.get_instance(item_id))

    def existing_ids(self, item_ids: Iterable[Any]) -> set:
        return set(self.queryset.filter(pk__in=list(item_ids)).values_list('pk', flat=True))

    def next_order(self, container_id) -> int:
        current = self.queryset.filter(**{self.container_field: container_id}).aggregate(
            max_value=Max(self.order_field)
        )['max_value']
        return next_order([current])

    def _apply_fields(self, instance, fields: Dict[str, Any]) -> List[str]:
        """Set ``fields`` on ``instance``; returns the model field names touched."""
        changed = []
        for key, value in fields.items():
            attr = {CONTAINER: self.container_field, ORDER: self.order_field}.get(key, key)
            setattr(instance, attr, value)
            # 'column_id' -> 'column'
            changed.append(self.model._meta.get_field(attr).name)
        return changed

    # ------------------------------------------------------------------
    # Store contract
    # ------------------------------------------------------------------

    def update_item(self, item_id, fields: Dict[str, Any]) -> OrderedItem:
        instance = self.get_instance(item_id)
        update_fields = self._apply_fields(instance, fields)
        try:
            instance.save(update_fields=update_fields)
        except DatabaseError as e:
            self.log_error(f"Update of {self.resource_type} {item_id} failed: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to update {self.resource_type}", 'update_item') from e
        return self.to_item(instance)

    def update_items_atomic(self, updates: List[Dict[str, Any]], container_id=None) -> None:
        if not updates:
            return

        ids = [update['id'] for update in updates]
        try:
            with transaction.atomic():
                instances = self.queryset.in_bulk(ids)
                missing = [item_id for item_id in ids if item_id not in instances]
                if missing:
                    raise NotFoundError(self.resource_type, missing[0])

                update_fields = set()
                for update in updates:
                    update_fields.update(
                        self._apply_fields(instances[update['id']], update['fields'])
                    )

                self.model.objects.bulk_update(
                    list(instances.values()),
                    sorted(update_fields),
                    batch_size=100
                )
        except DatabaseError as e:
            self.log_error(f"Bulk update of {len(updates)} {self.resource_type} rows failed: {e}", exc_info=True)
            raise PersistenceFailure(f"Failed to update {self.resource_type} order", 'update_items_atomic') from e

        self.log_debug(f"Updated {len(updates)} {self.resource_type} rows")

    def list_items_by_container(self, container_id) -> List[OrderedItem]:
        queryset = self.queryset.filter(**{self.container_field: container_id})
        return [self.to_item(instance) for instance in queryset.order_by(self.order_field, 'pk')]

    def list_items(self, container_ids: Iterable[Any]) -> List[OrderedItem]:
        queryset = self.queryset.filter(**{f"{self.container_field}__in": list(container_ids)})
        return [
            self.to_item(instance)
            for instance in queryset.order_by(self.container_field, self.order_field, 'pk')
        ]

    def all_items(self) -> List[OrderedItem]:
        return [
            self.to_item(instance)
            for instance in self.queryset.order_by(self.container_field, self.order_field, 'pk')
        ]

    def create_instance(self, container_id, fields: Dict[str, Any]):
        """Create a row at the end of its container and return the model instance."""
        with transaction.atomic():
            values = dict(fields)
            values[self.container_field] = container_id
            values[self.order_field] = self.next_order(container_id)
            return self.model.objects.create(**values)

    def create_item(self, container_id, fields: Dict[str, Any]) -> OrderedItem:
        return self.to_item(self.create_instance(container_id, fields))

    def delete_item(self, item_id) -> None:
        self.get_instance(item_id).delete()
