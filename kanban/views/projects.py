"""
Project ViewSet
"""
import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db.models import Count

from ..models import Project, done_column_q
from ..serializers import (
    ColumnReorderSerializer,
    ColumnSerializer,
    ProjectDetailSerializer,
    ProjectListSerializer,
    ProjectReorderSerializer,
    ProjectWriteSerializer,
)
from ..services import KanbanService
from ..utils import handle_viewset_errors, require_parameters

logger = logging.getLogger(__name__)

PROJECT_FIELDS = ('name', 'description', 'color')


class ProjectViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the owner's projects (the sidebar)
    """
    logger = logger
    lookup_value_regex = r'\d+'
    # The sidebar is always shown whole
    pagination_class = None

    def get_queryset(self):
        """Owner's projects with annotated progress counts to avoid N+1 queries"""
        return Project.objects.filter(author=self.request.user).annotate(
            annotated_task_count=Count('tasks', distinct=True),
            annotated_completed_count=Count(
                'tasks', filter=done_column_q('tasks__column__'), distinct=True
            ),
        ).order_by('sidebar_order', 'created_at')

    def get_serializer_class(self):
        """Return appropriate serializer class"""
        if self.action == 'list':
            return ProjectListSerializer
        if self.action in ('create', 'update', 'partial_update'):
            return ProjectWriteSerializer
        return ProjectDetailSerializer

    def get_service(self):
        return KanbanService(self.request.user)

    def _detail_response(self, project_id, status_code=status.HTTP_200_OK):
        project = self.get_queryset().get(pk=project_id)
        return Response(ProjectDetailSerializer(project).data, status=status_code)

    @handle_viewset_errors('create project')
    def create(self, request, *args, **kwargs):
        """
        Create a project at the end of the sidebar, with the default columns
        POST /api/projects/
        """
        serializer = ProjectWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        project = self.get_service().create_project(
            data['name'],
            description=data.get('description'),
            color=data.get('color'),
        )
        return self._detail_response(project.pk, status.HTTP_201_CREATED)

    @handle_viewset_errors('update project')
    def update(self, request, *args, **kwargs):
        """
        Edit a project and/or move it in the sidebar
        PUT/PATCH /api/projects/{id}/
        """
        partial = kwargs.pop('partial', False)
        serializer = ProjectWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        fields = [name for name in PROJECT_FIELDS if name in data] if partial else PROJECT_FIELDS
        project = self.get_service().update_project(
            kwargs['pk'],
            name=data.get('name'),
            description=data.get('description'),
            color=data.get('color'),
            sidebar_order=data.get('sidebar_order'),
            fields=fields,
        )
        return self._detail_response(project.pk)

    @handle_viewset_errors('delete project')
    def destroy(self, request, *args, **kwargs):
        """
        Delete a project and close the gap it leaves in the sidebar
        DELETE /api/projects/{id}/
        """
        self.get_service().delete_project(kwargs['pk'])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['put'], url_path='reorder')
    @handle_viewset_errors('reorder projects')
    @require_parameters('project_orders')
    def reorder(self, request):
        """
        Bulk reorder the sidebar
        PUT /api/projects/reorder/
        Body: {"project_orders": [{"id": 3, "sidebar_order": 0}, ...]}
        """
        serializer = ProjectReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = self.get_service().reorder_projects(serializer.validated_data['project_orders'])
        return Response({
            'message': 'Project order updated',
            'project_orders': [{'id': item.id, 'sidebar_order': item.order} for item in items],
        })

    @action(detail=True, methods=['get'], url_path='columns')
    @handle_viewset_errors('list columns')
    def columns(self, request, pk=None):
        """
        Columns of a project in display order
        GET /api/projects/{id}/columns/
        """
        project = self.get_service().get_project(pk)
        columns = project.columns.order_by('order', 'pk')
        return Response(ColumnSerializer(columns, many=True).data)

    @action(detail=True, methods=['put'], url_path='columns/reorder')
    @handle_viewset_errors('reorder columns')
    @require_parameters('column_orders')
    def reorder_columns(self, request, pk=None):
        """
        Bulk reorder a project's columns
        PUT /api/projects/{id}/columns/reorder/
        Body: {"column_orders": [{"id": 7, "order": 0}, ...]}
        """
        serializer = ColumnReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        items = self.get_service().reorder_columns(pk, serializer.validated_data['column_orders'])
        return Response({
            'message': 'Column order updated',
            'column_orders': [{'id': item.id, 'order': item.order} for item in items],
        })
