"""
Custom Exceptions for Kanban Services

Provides a consistent exception hierarchy for error handling across services.
"""


class KanbanException(Exception):
    """Base exception for all planner errors"""
    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or 'KANBAN_ERROR'
        self.details = details or {}


class NotFoundError(KanbanException):
    """Raised when an item, container or project does not exist (or is not owned)"""
    def __init__(self, resource_type: str, resource_id=None, message: str = None):
        if message is None:
            message = f"{resource_type.capitalize()} not found"
            if resource_id is not None:
                message += f" (id={resource_id})"
        super().__init__(message, 'NOT_FOUND', {
            'resource_type': resource_type,
            'resource_id': resource_id,
        })
        self.resource_type = resource_type
        self.resource_id = resource_id


class ValidationException(KanbanException):
    """Raised when a required field is missing or malformed"""
    def __init__(self, message: str, field: str = None):
        super().__init__(message, 'VALIDATION_ERROR', {'field': field} if field else {})
        self.field = field


class ConstraintViolationError(KanbanException):
    """Raised when a structural rule would be broken; nothing is written"""
    def __init__(self, message: str, rule: str = None, details: dict = None):
        merged = {'rule': rule} if rule else {}
        merged.update(details or {})
        super().__init__(message, 'CONSTRAINT_VIOLATION', merged)
        self.rule = rule


class PersistenceFailure(KanbanException):
    """Raised when a write to the store fails. Never retried automatically."""
    def __init__(self, message: str, operation: str = None):
        super().__init__(message, 'PERSISTENCE_FAILURE', {'operation': operation})
        self.operation = operation


class GestureInProgressError(KanbanException):
    """Raised when a new drag gesture starts before the previous one resolved"""
    def __init__(self, message: str = "Another reorder is still being saved"):
        super().__init__(message, 'GESTURE_IN_PROGRESS')
