"""
Kanban Board Service

Owner-scoped operations behind the REST API: projects in the sidebar,
columns in a project, tasks in a column and the today list. Every order
change goes through OrderedCollectionService so the four lists share one
implementation.
"""
from typing import Any, Dict, List, Optional, Sequence

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from ..constants import ColumnNames, ProjectDefaults
from ..models import Column, Project, Task, TodayEntry, done_column_q
from .base import BaseService
from .collection import OrderedCollectionService
from .exceptions import ConstraintViolationError, NotFoundError, ValidationException
from .stores import ModelOrderStore


def _required_text(value, field, label):
    text = (value or '').strip()
    if not text:
        raise ValidationException(f"{label} is required", field=field)
    return text


def _optional_text(value):
    text = (value or '').strip()
    return text or None


def list_owners():
    """Users owning at least one ordered list: a sidebar project or a today entry"""
    User = get_user_model()
    return User.objects.filter(
        Q(projects__isnull=False) | Q(today_entries__isnull=False)
    ).distinct().order_by('pk')


class KanbanService(BaseService):
    """
    Planner operations for one user.

    Every query is scoped to ``user``; rows owned by someone else raise
    NotFoundError exactly like missing rows.
    """

    def __init__(self, user):
        super().__init__()
        self.user = user

    # ------------------------------------------------------------------
    # Stores / collections
    # ------------------------------------------------------------------

    def project_store(self) -> ModelOrderStore:
        return ModelOrderStore(
            Project.objects.filter(author=self.user),
            container_field='author_id',
            order_field='sidebar_order',
            resource_type='project',
        )

    def column_store(self) -> ModelOrderStore:
        return ModelOrderStore(
            Column.objects.filter(project__author=self.user),
            container_field='project_id',
            resource_type='column',
        )

    def task_store(self) -> ModelOrderStore:
        return ModelOrderStore(
            Task.objects.filter(project__author=self.user).select_related('today_entry'),
            container_field='column_id',
            pinned_field='is_today',
            resource_type='task',
        )

    def today_store(self) -> ModelOrderStore:
        return ModelOrderStore(
            TodayEntry.objects.filter(owner=self.user, task__project__author=self.user),
            container_field='owner_id',
            resource_type='task',
        )

    def projects(self) -> OrderedCollectionService:
        return OrderedCollectionService(self.project_store())

    def columns(self) -> OrderedCollectionService:
        return OrderedCollectionService(self.column_store())

    def tasks(self) -> OrderedCollectionService:
        return OrderedCollectionService(self.task_store())

    def today(self) -> OrderedCollectionService:
        done_ids = set(
            TodayEntry.objects.filter(owner=self.user)
            .filter(done_column_q('task__column__'))
            .values_list('pk', flat=True)
        )
        # Tasks sitting in a done column sink below the open ones
        return OrderedCollectionService(
            self.today_store(),
            key=lambda item: (item.id in done_ids, item.order)
        )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_project(self, project_id) -> Project:
        project = Project.objects.filter(pk=project_id, author=self.user).first()
        if project is None:
            raise NotFoundError('project', project_id)
        return project

    def get_column(self, column_id) -> Column:
        column = Column.objects.filter(pk=column_id, project__author=self.user).first()
        if column is None:
            raise NotFoundError('column', column_id)
        return column

    def get_task(self, task_id) -> Task:
        task = (
            Task.objects.filter(pk=task_id, project__author=self.user)
            .select_related('project', 'column')
            .first()
        )
        if task is None:
            raise NotFoundError('task', task_id)
        return task

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_project(self, name, description=None, color=None) -> Project:
        """Create a project at the end of the sidebar with the default columns."""
        name = _required_text(name, 'name', 'Project name')
        project = self.projects().append(
            self.user.pk,
            name=name,
            description=_optional_text(description),
            color=color or ProjectDefaults.COLOR,
        )

        columns = self.columns()
        for column_name in getattr(settings, 'KANBAN_DEFAULT_COLUMNS', []):
            columns.append(project.pk, name=column_name)

        self.log_info(f"Created project {project.pk} '{project.name}' for user {self.user.pk}")
        return project

    @transaction.atomic
    def update_project(
        self,
        project_id,
        name=None,
        description=None,
        color=None,
        sidebar_order: Optional[int] = None,
        fields: Sequence[str] = ('name', 'description', 'color'),
    ) -> Project:
        """
        Edit a project and/or move it within the sidebar.
        Only the attributes named in ``fields`` are written (PATCH semantics).
        """
        project = self.get_project(project_id)

        update_fields = []
        if 'name' in fields:
            project.name = _required_text(name, 'name', 'Project name')
            update_fields.append('name')
        if 'description' in fields:
            project.description = _optional_text(description)
            update_fields.append('description')
        if 'color' in fields:
            project.color = color or ProjectDefaults.COLOR
            update_fields.append('color')
        if update_fields:
            project.save(update_fields=update_fields + ['updated_at'])

        if sidebar_order is not None:
            self.projects().move(project.pk, self.user.pk, sidebar_order)

        return self.get_project(project.pk)

    @transaction.atomic
    def delete_project(self, project_id) -> None:
        self.projects().remove(project_id)
        # Today entries of the project's tasks went with the cascade
        self.today().compact(self.user.pk)
        self.log_info(f"Deleted project {project_id}")

    def reorder_projects(self, pairs: Sequence[Dict[str, Any]]):
        return self.projects().reorder_from_pairs(self.user.pk, pairs, order_key='sidebar_order')

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def create_column(self, project_id, name) -> Column:
        name = _required_text(name, 'name', 'Column name')
        project = self.get_project(project_id)
        return self.columns().append(project.pk, name=name)

    @transaction.atomic
    def update_column(self, column_id, name=None, order: Optional[int] = None) -> Column:
        column = self.get_column(column_id)
        if name is not None:
            column.name = _required_text(name, 'name', 'Column name')
            column.save(update_fields=['name', 'updated_at'])
        if order is not None:
            self.columns().move(column.pk, column.project_id, order)
            column.refresh_from_db()
        return column

    @transaction.atomic
    def delete_column(self, column_id) -> None:
        column = self.get_column(column_id)

        if Column.objects.filter(project_id=column.project_id).count() <= 1:
            raise ConstraintViolationError("Cannot delete the last column", rule='last_column')

        if column.tasks.exists():
            raise ConstraintViolationError(
                "Cannot delete column with tasks. Move or delete tasks first.",
                rule='column_not_empty',
                details={'task_count': column.tasks.count()}
            )

        self.columns().remove(column.pk)

    def reorder_columns(self, project_id, pairs: Sequence[Dict[str, Any]]):
        project = self.get_project(project_id)
        return self.columns().reorder_from_pairs(project.pk, pairs)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def create_task(self, project_id, column_id, title, description=None) -> Task:
        title = _required_text(title, 'title', 'Task title')
        column = self.get_column(column_id)
        if column.project_id != int(project_id):
            raise NotFoundError('column', column_id, message="Column not found or unauthorized")

        return self.tasks().append(
            column.pk,
            project_id=column.project_id,
            title=title,
            description=_optional_text(description),
        )

    @transaction.atomic
    def update_task(
        self,
        task_id,
        title=None,
        description=None,
        column_id=None,
        order: Optional[int] = None,
        fields: Sequence[str] = (),
    ) -> Task:
        """
        Edit a task and/or move it.

        ``fields`` names the keys present in the request, so an explicit
        ``description: null`` clears the description.
        """
        task = self.get_task(task_id)

        update_fields = []
        if 'title' in fields:
            task.title = _required_text(title, 'title', 'Task title')
            update_fields.append('title')
        if 'description' in fields:
            task.description = _optional_text(description)
            update_fields.append('description')
        if update_fields:
            task.save(update_fields=update_fields + ['updated_at'])

        if column_id is not None or order is not None:
            destination = task.column_id
            if column_id is not None:
                column = Column.objects.filter(pk=column_id, project_id=task.project_id).first()
                if column is None:
                    raise ValidationException("Invalid column", field='column')
                destination = column.pk

            if order is None:
                # Column change without a position lands at the end
                order = Task.objects.filter(column_id=destination).count()
            self.tasks().move(task.pk, destination, order)

        return self.get_task(task.pk)

    def move_task(self, task_id, column_id, index: int) -> Task:
        return self.update_task(task_id, column_id=column_id, order=index)

    @transaction.atomic
    def delete_task(self, task_id) -> None:
        task = self.get_task(task_id)
        was_today = task.is_today
        self.tasks().remove(task.pk)
        if was_today:
            self.today().compact(self.user.pk)

    def reorder_tasks(self, pairs: Sequence[Dict[str, Any]]):
        """Bulk reorder inside one column; the column is taken from the first id."""
        if not pairs:
            raise ValidationException("task_orders must not be empty", field='task_orders')
        first = self.get_task(pairs[0]['id'])
        return self.tasks().reorder_from_pairs(first.column_id, pairs)

    @transaction.atomic
    def finish_task(self, task_id) -> Task:
        """
        Move a task to the top of its project's done column.
        A 'Done' column is appended to the project when none exists.
        """
        task = self.get_task(task_id)
        done_column = task.project.get_done_column()
        if done_column is None:
            done_column = self.columns().append(task.project_id, name=ColumnNames.DONE_DEFAULT)
            self.log_info(f"Created done column {done_column.pk} in project {task.project_id}")

        self.tasks().move(task.pk, done_column.pk, 0)
        return self.get_task(task.pk)

    # ------------------------------------------------------------------
    # Today list
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_today(self, task_id, is_today: bool, today_order: Optional[int] = None) -> Task:
        task = self.get_task(task_id)

        if is_today:
            if not task.is_today:
                self.today().append(self.user.pk, task=task)
            if today_order is not None:
                self.today().move(task.pk, self.user.pk, today_order)
        elif task.is_today:
            self.today().remove(task.pk)

        return self.get_task(task.pk)

    def today_tasks(self) -> List[Task]:
        """Today list in display order: open tasks first, then by today order."""
        entries = (
            TodayEntry.objects.filter(owner=self.user, task__project__author=self.user)
            .select_related('task', 'task__project', 'task__column')
        )
        ordered = sorted(entries, key=lambda entry: (entry.task.is_done, entry.order))
        return [entry.task for entry in ordered]

    def reorder_today(self, pairs: Sequence[Dict[str, Any]]):
        return self.today().reorder_from_pairs(self.user.pk, pairs, order_key='today_order')

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def normalize(self) -> Dict[str, int]:
        """Repair contiguity in every list owned by the user."""
        return {
            'projects': self.projects().normalize_all(),
            'columns': self.columns().normalize_all(),
            'tasks': self.tasks().normalize_all(),
            'today': self.today().normalize_all(),
        }
