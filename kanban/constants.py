"""
Kanban Constants

Centralized constants for projects, columns and ordered collections.
"""

# =============================================================================
# Columns
# =============================================================================
class ColumnNames:
    # Column names (case-insensitive) that mark finished work
    DONE_NAMES = ('done', 'completed', 'finished')

    # Name used when a done column has to be created on demand
    DONE_DEFAULT = 'Done'

    @classmethod
    def is_done(cls, name):
        return (name or '').strip().lower() in cls.DONE_NAMES


# =============================================================================
# Projects
# =============================================================================
class ProjectDefaults:
    COLOR = '#3b82f6'
    NAME_MAX_LENGTH = 200
    COLOR_MAX_LENGTH = 7


# =============================================================================
# Ordered collections
# =============================================================================
class Collection:
    """Names of the orderable lists and what identifies their container."""
    TASKS = 'tasks'        # tasks within a column
    COLUMNS = 'columns'    # columns within a project
    PROJECTS = 'projects'  # projects within an owner's sidebar
    TODAY = 'today'        # tasks pinned to an owner's today list

    ALL = [TASKS, COLUMNS, PROJECTS, TODAY]


# =============================================================================
# REST routes used by the HTTP store (relative to KANBAN_API_BASE_URL)
# =============================================================================
# list:          GET, returns the members of one container
# detail:        PATCH {container_key: ..., order_key: ...}
# reorder:       PUT {payload_key: [{'id': ..., order_key: ...}]}
# create/delete: POST / DELETE
REST_ROUTES = {
    Collection.TASKS: {
        'list': 'columns/{container_id}/tasks/',
        'create': 'tasks/',
        'detail': 'tasks/{id}/',
        'reorder': 'tasks/reorder/',
        'payload_key': 'task_orders',
        'container_key': 'column',
        'order_key': 'order',
    },
    Collection.COLUMNS: {
        'list': 'projects/{container_id}/columns/',
        'create': 'columns/',
        'detail': 'columns/{id}/',
        'reorder': 'projects/{container_id}/columns/reorder/',
        'payload_key': 'column_orders',
        'container_key': 'project',
        'order_key': 'order',
    },
    Collection.PROJECTS: {
        'list': 'projects/',
        'create': 'projects/',
        'detail': 'projects/{id}/',
        'reorder': 'projects/reorder/',
        'payload_key': 'project_orders',
        'container_key': None,
        'order_key': 'sidebar_order',
    },
    Collection.TODAY: {
        'list': 'tasks/today/',
        'create': 'tasks/{id}/today/',
        'detail': 'tasks/{id}/today/',
        'reorder': 'tasks/today/reorder/',
        'payload_key': 'task_orders',
        'container_key': None,
        'order_key': 'today_order',
    },
}
