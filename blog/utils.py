"""
Blog Utilities
"""
import re

NON_SLUG_RE = re.compile(r'[^a-z0-9]+')


def slugify_title(title):
    """
    'Hello, World!' -> 'hello-world'

    Runs of anything outside [a-z0-9] collapse to one hyphen; hyphens at
    either end are stripped.
    """
    return NON_SLUG_RE.sub('-', (title or '').lower()).strip('-')


def unique_slug(base, queryset, fallback='post'):
    """
    First free slug among base, base-2, base-3, ... in ``queryset``.

    Args:
        base: Desired slug (empty falls back to ``fallback``)
        queryset: Rows the slug must not collide with (exclude the row being edited)
    """
    base = base or fallback
    taken = set(
        queryset.filter(slug__startswith=base).values_list('slug', flat=True)
    )
    if base not in taken:
        return base

    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
