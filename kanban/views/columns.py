"""
Column ViewSet
"""
import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response

from ..models import Column
from ..serializers import (
    ColumnCreateSerializer,
    ColumnSerializer,
    ColumnUpdateSerializer,
    TaskSerializer,
)
from ..services import KanbanService, ValidationException
from ..utils import handle_viewset_errors

logger = logging.getLogger(__name__)


class ColumnViewSet(viewsets.ModelViewSet):
    """
    ViewSet for kanban columns
    """
    logger = logger
    serializer_class = ColumnSerializer
    lookup_value_regex = r'\d+'
    filterset_fields = ['project']

    def get_queryset(self):
        return Column.objects.filter(
            project__author=self.request.user
        ).order_by('project_id', 'order', 'pk')

    def get_service(self):
        return KanbanService(self.request.user)

    @handle_viewset_errors('create column')
    def create(self, request, *args, **kwargs):
        """
        Append a column to a project
        POST /api/columns/
        """
        serializer = ColumnCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        column = self.get_service().create_column(data['project'], data['name'])
        return Response(ColumnSerializer(column).data, status=status.HTTP_201_CREATED)

    @handle_viewset_errors('update column')
    def update(self, request, *args, **kwargs):
        """
        Rename a column and/or move it to another position
        PUT/PATCH /api/columns/{id}/
        """
        serializer = ColumnUpdateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = self.get_service()
        column = service.get_column(kwargs['pk'])
        if 'project' in data and data['project'] != column.project_id:
            raise ValidationException("Columns cannot move between projects", field='project')

        column = service.update_column(column.pk, name=data.get('name'), order=data.get('order'))
        return Response(ColumnSerializer(column).data)

    @handle_viewset_errors('delete column')
    def destroy(self, request, *args, **kwargs):
        """
        Delete an empty column
        DELETE /api/columns/{id}/
        """
        self.get_service().delete_column(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'], url_path='tasks')
    @handle_viewset_errors('list column tasks')
    def tasks(self, request, pk=None):
        """
        Tasks of a column in display order
        GET /api/columns/{id}/tasks/
        """
        column = self.get_service().get_column(pk)
        tasks = column.tasks.select_related('column', 'today_entry').order_by('order', 'pk')
        return Response(TaskSerializer(tasks, many=True).data)
