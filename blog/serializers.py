"""
Blog Serializers
"""
from rest_framework import serializers
from .models import Post
from .utils import slugify_title, unique_slug


class PostSerializer(serializers.ModelSerializer):
    """Serializer for the author's own posts (drafts included)"""
    title = serializers.CharField(
        max_length=255,
        error_messages={'required': 'Post title is required', 'blank': 'Post title is required'}
    )
    slug = serializers.CharField(max_length=255, required=False, allow_blank=True)

    class Meta:
        model = Post
        fields = [
            'id',
            'title',
            'slug',
            'excerpt',
            'content',
            'published',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    slug_base = None

    def _other_posts(self):
        others = Post.objects.all()
        if self.instance is not None:
            others = others.exclude(pk=self.instance.pk)
        return others

    def validate(self, attrs):
        """Normalize the slug, derive it from the title when missing, and make it unique"""
        title = attrs.get('title', getattr(self.instance, 'title', ''))
        if 'slug' in attrs or self.instance is None:
            self.slug_base = slugify_title(attrs.get('slug') or '') or slugify_title(title)
            attrs['slug'] = unique_slug(self.slug_base, self._other_posts())
        return attrs

    def refresh_slug(self):
        """
        Pick the next free slug after another request saved ours first.
        Returns False when this save did not set a slug.
        """
        if self.slug_base is None:
            return False
        self.validated_data['slug'] = unique_slug(self.slug_base, self._other_posts())
        return True


class PublicPostSerializer(serializers.ModelSerializer):
    """Read-only serializer for published posts"""
    author_name = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = ['title', 'slug', 'excerpt', 'content', 'author_name', 'created_at', 'updated_at']

    def get_author_name(self, obj):
        return obj.author.get_full_name() or obj.author.username
