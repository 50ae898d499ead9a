"""
Kanban URL Configuration
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ColumnViewSet, ProjectViewSet, TaskViewSet

# Create router and register viewsets
router = DefaultRouter()
router.register(r'projects', ProjectViewSet, basename='project')
router.register(r'columns', ColumnViewSet, basename='column')
router.register(r'tasks', TaskViewSet, basename='task')

urlpatterns = [
    path('', include(router.urls)),
]
