"""
Kanban Serializers
"""
import re

from rest_framework import serializers

from .constants import ProjectDefaults
from .models import Column, Project, Task

HEX_COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')


# =============================================================================
# Tasks
# =============================================================================
class TaskSerializer(serializers.ModelSerializer):
    """Serializer for a task card"""
    is_today = serializers.SerializerMethodField()
    today_order = serializers.SerializerMethodField()
    is_done = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            'id',
            'project',
            'column',
            'title',
            'description',
            'order',
            'is_today',
            'today_order',
            'is_done',
            'created_at',
            'updated_at',
        ]

    def get_is_today(self, obj):
        return obj.is_today

    def get_today_order(self, obj):
        return obj.today_entry.order if obj.is_today else None

    def get_is_done(self, obj):
        return obj.is_done


class TodayTaskSerializer(TaskSerializer):
    """Task as shown in the today list, with its project and column inlined"""
    project = serializers.SerializerMethodField()
    column = serializers.SerializerMethodField()

    class Meta(TaskSerializer.Meta):
        pass

    def get_project(self, obj):
        return {
            'id': obj.project_id,
            'name': obj.project.name,
            'color': obj.project.color,
        }

    def get_column(self, obj):
        return {'id': obj.column_id, 'name': obj.column.name}


class TaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(
        max_length=255,
        error_messages={'required': 'Task title is required', 'blank': 'Task title is required'}
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    project = serializers.IntegerField()
    column = serializers.IntegerField()


class TaskUpdateSerializer(serializers.Serializer):
    """
    Partial task update. ``column`` and ``order`` move the task; an order
    outside the column is clamped to its ends.
    """
    title = serializers.CharField(
        max_length=255,
        required=False,
        error_messages={'blank': 'Task title is required'}
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    column = serializers.IntegerField(required=False)
    order = serializers.IntegerField(required=False)


class TodayToggleSerializer(serializers.Serializer):
    is_today = serializers.BooleanField()
    today_order = serializers.IntegerField(required=False, allow_null=True)


# =============================================================================
# Columns
# =============================================================================
class ColumnSerializer(serializers.ModelSerializer):
    """Serializer for a column (without its tasks)"""
    is_done = serializers.SerializerMethodField()

    class Meta:
        model = Column
        fields = ['id', 'project', 'name', 'order', 'is_done', 'created_at', 'updated_at']

    def get_is_done(self, obj):
        return obj.is_done


class ColumnWithTasksSerializer(ColumnSerializer):
    tasks = serializers.SerializerMethodField()

    class Meta(ColumnSerializer.Meta):
        fields = ColumnSerializer.Meta.fields + ['tasks']

    def get_tasks(self, obj):
        tasks = obj.tasks.select_related('column', 'today_entry').order_by('order', 'pk')
        return TaskSerializer(tasks, many=True).data


class ColumnCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        error_messages={'required': 'Column name is required', 'blank': 'Column name is required'}
    )
    project = serializers.IntegerField()


class ColumnUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        required=False,
        error_messages={'blank': 'Column name is required'}
    )
    order = serializers.IntegerField(required=False)
    # Accepted so clients can echo the container back; columns never change project
    project = serializers.IntegerField(required=False)


# =============================================================================
# Projects
# =============================================================================
class ProjectListSerializer(serializers.ModelSerializer):
    """Sidebar entry with progress counts"""
    task_count = serializers.SerializerMethodField()
    completed_count = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            'id',
            'name',
            'description',
            'color',
            'sidebar_order',
            'task_count',
            'completed_count',
            'created_at',
            'updated_at',
        ]

    def get_task_count(self, obj):
        # Use annotated value if available, otherwise calculate
        if hasattr(obj, 'annotated_task_count'):
            return obj.annotated_task_count
        return obj.tasks.count()

    def get_completed_count(self, obj):
        if hasattr(obj, 'annotated_completed_count'):
            return obj.annotated_completed_count
        return sum(1 for task in obj.tasks.select_related('column') if task.is_done)


class ProjectDetailSerializer(ProjectListSerializer):
    """Project with its columns and their tasks, in display order"""
    columns = serializers.SerializerMethodField()

    class Meta(ProjectListSerializer.Meta):
        fields = ProjectListSerializer.Meta.fields + ['columns']

    def get_columns(self, obj):
        return ColumnWithTasksSerializer(obj.columns.order_by('order', 'pk'), many=True).data


class ProjectWriteSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=ProjectDefaults.NAME_MAX_LENGTH,
        error_messages={'required': 'Project name is required', 'blank': 'Project name is required'}
    )
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    sidebar_order = serializers.IntegerField(required=False)

    def validate_color(self, value):
        if value and not HEX_COLOR_RE.match(value):
            raise serializers.ValidationError("Color must be a hex code like #3b82f6")
        return value


# =============================================================================
# Bulk reorder payloads
# =============================================================================
class OrderEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order = serializers.IntegerField()


class SidebarOrderEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    sidebar_order = serializers.IntegerField()


class TodayOrderEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    today_order = serializers.IntegerField()


class TaskReorderSerializer(serializers.Serializer):
    task_orders = OrderEntrySerializer(many=True, allow_empty=False)


class ColumnReorderSerializer(serializers.Serializer):
    column_orders = OrderEntrySerializer(many=True, allow_empty=False)


class ProjectReorderSerializer(serializers.Serializer):
    project_orders = SidebarOrderEntrySerializer(many=True, allow_empty=False)


class TodayReorderSerializer(serializers.Serializer):
    task_orders = TodayOrderEntrySerializer(many=True, allow_empty=False)
