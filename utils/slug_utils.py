from django.utils.text import slugify
import uuid


def unique_slugify(name, max_length=50):
    """Slug of ``name`` with a random suffix, cut so the suffix always survives."""
    base_slug = slugify(name)[:max_length - 7] or "category"
    return f"{base_slug}-{uuid.uuid4().hex[:6]}"
