"""
Task ViewSet

Covers the board (tasks within columns) and the owner's today list.
"""
import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from ..models import Task
from ..serializers import (
    TaskCreateSerializer,
    TaskReorderSerializer,
    TaskSerializer,
    TaskUpdateSerializer,
    TodayReorderSerializer,
    TodayTaskSerializer,
    TodayToggleSerializer,
)
from ..services import KanbanService
from ..utils import handle_viewset_errors, require_parameters

logger = logging.getLogger(__name__)

TASK_FIELDS = ('title', 'description')


class TaskViewSet(viewsets.ModelViewSet):
    """
    ViewSet for tasks
    """
    logger = logger
    serializer_class = TaskSerializer
    # Keeps /tasks/today/ and /tasks/reorder/ apart from detail routes
    lookup_value_regex = r'\d+'
    filterset_fields = ['project', 'column']

    def get_queryset(self):
        return Task.objects.filter(
            project__author=self.request.user
        ).select_related('column', 'today_entry').order_by('column__order', 'order', 'pk')

    def get_service(self):
        return KanbanService(self.request.user)

    @handle_viewset_errors('create task')
    def create(self, request, *args, **kwargs):
        """
        Append a task to a column
        POST /api/tasks/
        """
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        task = self.get_service().create_task(
            data['project'],
            data['column'],
            data['title'],
            description=data.get('description'),
        )
        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)

    @handle_viewset_errors('update task')
    def update(self, request, *args, **kwargs):
        """
        Edit a task and/or move it (same or another column of its project)
        PUT/PATCH /api/tasks/{id}/
        Body: {"title": ..., "description": ..., "column": 4, "order": 0}
        """
        serializer = TaskUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        task = self.get_service().update_task(
            kwargs['pk'],
            title=data.get('title'),
            description=data.get('description'),
            column_id=data.get('column'),
            order=data.get('order'),
            fields=[name for name in TASK_FIELDS if name in data],
        )
        return Response(TaskSerializer(task).data)

    @handle_viewset_errors('delete task')
    def destroy(self, request, *args, **kwargs):
        """
        Delete a task
        DELETE /api/tasks/{id}/
        """
        self.get_service().delete_task(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['put'], url_path='reorder')
    @handle_viewset_errors('reorder tasks')
    @require_parameters('task_orders')
    def reorder(self, request):
        """
        Bulk reorder the tasks of one column
        PUT /api/tasks/reorder/
        Body: {"task_orders": [{"id": 12, "order": 0}, ...]}
        """
        serializer = TaskReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = self.get_service().reorder_tasks(serializer.validated_data['task_orders'])
        return Response({
            'message': 'Task order updated',
            'task_orders': [{'id': item.id, 'order': item.order} for item in items],
        })

    @action(detail=True, methods=['post'], url_path='finish')
    @handle_viewset_errors('finish task')
    def finish(self, request, pk=None):
        """
        Move a task to the top of its project's done column
        POST /api/tasks/{id}/finish/
        """
        task = self.get_service().finish_task(pk)
        logger.info(f"Task {task.pk} finished into column {task.column_id}")
        return Response(TaskSerializer(task).data)

    # ------------------------------------------------------------------
    # Today list
    # ------------------------------------------------------------------

    @action(detail=False, methods=['get'], url_path='today')
    @handle_viewset_errors('list today')
    def today(self, request):
        """
        Today list in display order (tasks in a done column last)
        GET /api/tasks/today/
        """
        tasks = self.get_service().today_tasks()
        return Response(TodayTaskSerializer(tasks, many=True).data)

    @action(detail=False, methods=['put'], url_path='today/reorder')
    @handle_viewset_errors('reorder today')
    @require_parameters('task_orders')
    def reorder_today(self, request):
        """
        Bulk reorder the today list
        PUT /api/tasks/today/reorder/
        Body: {"task_orders": [{"id": 12, "today_order": 0}, ...]}
        """
        serializer = TodayReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = self.get_service().reorder_today(serializer.validated_data['task_orders'])
        return Response({
            'message': 'Today order updated',
            'task_orders': [{'id': item.id, 'today_order': item.order} for item in items],
        })

    @action(detail=True, methods=['put'], url_path='today')
    @handle_viewset_errors('toggle today')
    @require_parameters('is_today')
    def set_today(self, request, pk=None):
        """
        Add a task to (or remove it from) the today list
        PUT /api/tasks/{id}/today/
        Body: {"is_today": true, "today_order": 0}
        """
        serializer = TodayToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        task = self.get_service().set_today(
            pk, data['is_today'], today_order=data.get('today_order')
        )
        return Response(TaskSerializer(task).data)
