"""
Product query engine.

Turns discovery parameters into one deterministic, cursor-bounded page of
products. Views parse the request into plain values and call in here; the
functions know nothing about HTTP.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import logging

from django.conf import settings
from django.db import transaction

from core.exceptions import InvalidArgument, NotFound
from .cursors import decode_cursor, encode_cursor
from .filters import ProductFilter
from .models import Product
from .sorting import SortKey, SORT_STRATEGIES, resolve_sort

logger = logging.getLogger("rest_framework")


@dataclass
class ProductPage:
    products: List[Product]
    size: int
    next_cursor: Optional[str] = None
    sort: str = field(default=SortKey.ID_DESC.value)

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def resolve_page_size(size: Optional[int]) -> int:
    """Absent means the default; an explicit value must be within bounds."""
    if size is None:
        return settings.PRODUCT_PAGE_SIZE_DEFAULT
    if size <= 0:
        raise InvalidArgument({"size": f"Page size must be positive, got {size}."})
    if size > settings.PRODUCT_PAGE_SIZE_MAX:
        raise InvalidArgument(
            {"size": f"Page size must not exceed {settings.PRODUCT_PAGE_SIZE_MAX}."}
        )
    return size


def base_queryset():
    return Product.objects.select_related('category').prefetch_related('media')


def paginate(queryset, strategy, last=None, size=None) -> ProductPage:
    """
    Cut one page out of ``queryset`` under ``strategy``.

    One row beyond ``size`` is fetched to tell whether another page exists,
    and the cursor handed back is that of the last product returned.
    """
    size = resolve_page_size(size)
    position = decode_cursor(last, strategy)

    if position is not None:
        queryset = queryset.filter(strategy.seek(position))

    rows = list(queryset.order_by(*strategy.ordering)[:size + 1])

    next_cursor = None
    if len(rows) > size:
        rows = rows[:size]
        next_cursor = encode_cursor(rows[-1], strategy)

    return ProductPage(products=rows, size=size, next_cursor=next_cursor, sort=strategy.key)


def list_products(keyword=None, category=None, last=None, size=None, sort=None) -> ProductPage:
    """Global discovery: optional title keyword and category, any sort order."""
    if category is not None and (isinstance(category, bool) or not isinstance(category, int) or category < 1):
        raise InvalidArgument({"category": f"Category must be a positive integer, got {category!r}."})

    filterset = ProductFilter(
        data={'keyword': keyword, 'category': category},
        queryset=base_queryset(),
    )
    if not filterset.is_valid():
        raise InvalidArgument({
            name: [error['message'] for error in errors]
            for name, errors in filterset.errors.get_json_data().items()
        })

    return paginate(filterset.qs, resolve_sort(sort), last=last, size=size)


def list_user_products(user_id, last=None, size=None, sort=None) -> ProductPage:
    """Everything one seller listed. Keyword and category do not apply here."""
    queryset = base_queryset().filter(seller_id=user_id)
    return paginate(queryset, resolve_sort(sort), last=last, size=size)


def list_wish_products(user_id, last=None, size=None) -> ProductPage:
    """Products ``user_id`` has wished for, newest product first."""
    queryset = base_queryset().filter(wishes__user_id=user_id)
    return paginate(queryset, SORT_STRATEGIES[SortKey.ID_DESC], last=last, size=size)


def get_product(product_id) -> Product:
    try:
        return base_queryset().select_related('seller').get(pk=product_id)
    except Product.DoesNotExist:
        raise NotFound(f"Product {product_id} not found.")


def delete_product(product):
    """
    Delete ``product`` with its media rows. Stored image files are removed by
    the ``post_delete`` receiver on ``ProductMedia``; wishes cascade.
    """
    product_id = product.pk
    with transaction.atomic():
        product.media.all().delete()
        product.delete()
    logger.info("Product %s deleted.", product_id)
