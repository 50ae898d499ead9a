"""
Blog Models
"""
from django.db import models
from django.contrib.auth.models import User


class Post(models.Model):
    """
    A blog post. Drafts (published=False) are only visible to their author.
    """
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name='posts')
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True, help_text="URL path segment, generated from the title when empty")
    excerpt = models.TextField(null=True, blank=True)
    content = models.TextField(blank=True, default='')
    published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'blog_posts'
        ordering = ['-created_at']
        verbose_name_plural = 'Posts'
        indexes = [
            models.Index(fields=['published', '-created_at'], name='blog_posts_published_idx'),
        ]

    def __str__(self):
        return self.title
