"""
Blog ViewSets
"""
import logging
from django.db import IntegrityError, transaction
from rest_framework import viewsets, mixins
from rest_framework.permissions import AllowAny

from .models import Post
from .serializers import PostSerializer, PublicPostSerializer

logger = logging.getLogger(__name__)

# Attempts at a free slug when concurrent saves race for the same one
SLUG_SAVE_ATTEMPTS = 3


def save_with_free_slug(serializer, **kwargs):
    """
    Save a PostSerializer, re-picking the slug when the unique constraint
    rejects it because a concurrent request took it first.
    """
    for attempt in range(1, SLUG_SAVE_ATTEMPTS + 1):
        try:
            with transaction.atomic():
                return serializer.save(**kwargs)
        except IntegrityError:
            if attempt == SLUG_SAVE_ATTEMPTS or not serializer.refresh_slug():
                raise
            logger.warning(f"Slug taken concurrently, retrying as '{serializer.validated_data['slug']}'")


class PostViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the author's posts (drafts included)
    """
    serializer_class = PostSerializer
    filterset_fields = ['published']
    search_fields = ['title', 'excerpt', 'content']
    ordering_fields = ['created_at', 'updated_at', 'title']

    def get_queryset(self):
        return Post.objects.filter(author=self.request.user).order_by('-created_at', '-pk')

    def perform_create(self, serializer):
        """Create post with owner"""
        post = save_with_free_slug(serializer, author=self.request.user)
        logger.info(f"Post {post.pk} '{post.slug}' created by user {self.request.user.pk}")

    def perform_update(self, serializer):
        save_with_free_slug(serializer)

    def perform_destroy(self, instance):
        logger.info(f"Post {instance.pk} '{instance.slug}' deleted")
        instance.delete()


class PublicPostViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Published posts, newest first. No authentication required.
    """
    serializer_class = PublicPostSerializer
    permission_classes = [AllowAny]
    lookup_field = 'slug'
    lookup_value_regex = r'[a-z0-9-]+'

    def get_queryset(self):
        return Post.objects.filter(published=True).select_related('author').order_by('-created_at', '-pk')
