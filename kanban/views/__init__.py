"""
Kanban Views
"""
from .projects import ProjectViewSet
from .columns import ColumnViewSet
from .tasks import TaskViewSet

__all__ = [
    'ProjectViewSet',
    'ColumnViewSet',
    'TaskViewSet',
]
