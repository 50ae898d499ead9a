"""
Kanban Services Package
"""
from .stores import BaseOrderStore, ModelOrderStore
from .rest_store import RestOrderStore
from .collection import OrderedCollectionService
from .board import KanbanService, list_owners
from .sync_client import PersistenceSyncClient
from .board_state import BoardState, GestureResult, GestureStatus, apply_locally

# Custom exceptions
from .exceptions import (
    KanbanException,
    NotFoundError,
    ValidationException,
    ConstraintViolationError,
    PersistenceFailure,
    GestureInProgressError,
)

__all__ = [
    # Stores
    'BaseOrderStore',
    'ModelOrderStore',
    'RestOrderStore',
    # Services
    'OrderedCollectionService',
    'KanbanService',
    'list_owners',
    # Client side
    'PersistenceSyncClient',
    'BoardState',
    'GestureResult',
    'GestureStatus',
    'apply_locally',
    # Exceptions
    'KanbanException',
    'NotFoundError',
    'ValidationException',
    'ConstraintViolationError',
    'PersistenceFailure',
    'GestureInProgressError',
]
