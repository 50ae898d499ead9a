"""
Blog URL Configuration
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PostViewSet, PublicPostViewSet

router = DefaultRouter()
router.register(r'posts', PostViewSet, basename='post')
router.register(r'public/posts', PublicPostViewSet, basename='publicpost')

urlpatterns = [
    path('', include(router.urls)),
]
