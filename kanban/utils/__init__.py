"""
Kanban Utilities
"""
from .ordering import (
    OrderedItem,
    MoveResult,
    MoveStatus,
    assign_sequential_order,
    resolve_move,
    reorder_by_ids,
    normalize_orders,
    next_order,
)
from .error_handlers import (
    handle_api_error,
    handle_validation_error,
    handle_constraint_error,
    handle_not_found_error,
)
from .decorators import handle_viewset_errors, require_parameters

__all__ = [
    'OrderedItem',
    'MoveResult',
    'MoveStatus',
    'assign_sequential_order',
    'resolve_move',
    'reorder_by_ids',
    'normalize_orders',
    'next_order',
    'handle_api_error',
    'handle_validation_error',
    'handle_constraint_error',
    'handle_not_found_error',
    'handle_viewset_errors',
    'require_parameters',
]
