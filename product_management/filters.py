import django_filters
from django.conf import settings

from .models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Discovery filters for the global listing. Both are optional; a missing
    value applies no filter.
    """
    keyword = django_filters.CharFilter(
        field_name="title",
        lookup_expr='icontains',
        max_length=settings.PRODUCT_KEYWORD_MAX_LENGTH,
    )
    category = django_filters.NumberFilter(field_name="category", min_value=1)

    class Meta:
        model = Product
        fields = ['keyword', 'category']
