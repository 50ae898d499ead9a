"""
Kanban Models

This module defines the database models for the project planner:
Project, Column, Task and TodayEntry. Every model here carries an integer
order field maintained by ``kanban.services.collection``.
"""
from django.db import models
from django.db.models import Q
from django.contrib.auth.models import User

from .constants import ColumnNames, ProjectDefaults


def done_column_q(prefix=''):
    """
    Q matching done columns, case-insensitively.

    Usage:
        Task.objects.filter(done_column_q('column__'))
    """
    query = Q()
    for name in ColumnNames.DONE_NAMES:
        query |= Q(**{f'{prefix}name__iexact': name})
    return query


class Project(models.Model):
    """
    A kanban board owned by one user.
    Projects are themselves ordered within the owner's sidebar.
    """
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name='projects')
    name = models.CharField(max_length=ProjectDefaults.NAME_MAX_LENGTH)
    description = models.TextField(null=True, blank=True)
    color = models.CharField(
        max_length=ProjectDefaults.COLOR_MAX_LENGTH,
        default=ProjectDefaults.COLOR,
        help_text="Hex color code (e.g., #3b82f6)"
    )
    sidebar_order = models.IntegerField(default=0, help_text="Display order in the sidebar")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'kanban_projects'
        ordering = ['sidebar_order', 'created_at']
        verbose_name_plural = 'Projects'

    def __str__(self):
        return self.name

    def get_done_column(self):
        """First done column in display order, or None"""
        for column in self.columns.all():
            if column.is_done:
                return column
        return None


class Column(models.Model):
    """
    A kanban column (lane) within a project.
    """
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='columns')
    name = models.CharField(max_length=100)
    order = models.IntegerField(default=0, help_text="Display order within the project")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'kanban_columns'
        ordering = ['order', 'created_at']
        verbose_name_plural = 'Columns'

    def __str__(self):
        return f"{self.project.name} / {self.name}"

    @property
    def is_done(self):
        return ColumnNames.is_done(self.name)


class Task(models.Model):
    """
    A card on the board. Ordered within its column.
    """
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='tasks')
    column = models.ForeignKey(Column, on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    order = models.IntegerField(default=0, help_text="Display order within the column")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'kanban_tasks'
        ordering = ['column__order', 'order', 'created_at']
        verbose_name_plural = 'Tasks'

    def __str__(self):
        return self.title

    @property
    def is_today(self):
        return hasattr(self, 'today_entry')

    @property
    def is_done(self):
        return self.column.is_done


class TodayEntry(models.Model):
    """
    Membership of a task in its owner's "today" list.

    The today list is a separate ordered view over a subset of tasks, so the
    task row itself carries no today-specific sort field.
    """
    task = models.OneToOneField(
        Task,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='today_entry'
    )
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='today_entries')
    order = models.IntegerField(default=0, help_text="Display order in the today list")
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'kanban_today_entries'
        ordering = ['order', 'added_at']
        verbose_name_plural = 'Today Entries'

    def __str__(self):
        return f"{self.owner} today #{self.order}: {self.task.title}"
