"""
Listing orders for products.

Each ``SortKey`` maps to one ``SortStrategy`` in a static table. Every
strategy ends on the product id, so two products never compare equal and a
cursor always points at exactly one place in the order.
"""
from dataclasses import dataclass
import logging

from django.db import models
from django.db.models import Q

logger = logging.getLogger("rest_framework")


class SortKey(models.TextChoices):
    PRICE = 'price', 'Price, low to high'
    PRICE_DESC = 'pricedesc', 'Price, high to low'
    ID = 'id', 'Oldest first'
    ID_DESC = 'iddesc', 'Newest first'


DEFAULT_SORT_KEY = SortKey.ID_DESC


@dataclass(frozen=True)
class SortStrategy:
    key: str
    by_price: bool
    descending: bool

    @property
    def ordering(self):
        """``order_by`` arguments, primary field first, id last."""
        prefix = '-' if self.descending else ''
        fields = ('price', 'id') if self.by_price else ('id',)
        return tuple(prefix + field for field in fields)

    def sort_key(self, product):
        """Key function matching ``ordering`` for products held in memory."""
        sign = -1 if self.descending else 1
        if self.by_price:
            return (sign * product.price, sign * product.id)
        return (sign * product.id,)

    def seek(self, position):
        """Filter keeping only products that come strictly after ``position``."""
        after = 'lt' if self.descending else 'gt'
        if self.by_price:
            return (
                Q(**{f'price__{after}': position.price})
                | Q(price=position.price, **{f'id__{after}': position.id})
            )
        return Q(**{f'id__{after}': position.id})


SORT_STRATEGIES = {
    SortKey.PRICE: SortStrategy(SortKey.PRICE, by_price=True, descending=False),
    SortKey.PRICE_DESC: SortStrategy(SortKey.PRICE_DESC, by_price=True, descending=True),
    SortKey.ID: SortStrategy(SortKey.ID, by_price=False, descending=False),
    SortKey.ID_DESC: SortStrategy(SortKey.ID_DESC, by_price=False, descending=True),
}


def resolve_sort(raw_key):
    """
    Return the strategy for ``raw_key``. Absent or unknown keys fall back to
    newest first.
    """
    if raw_key in SortKey.values:
        return SORT_STRATEGIES[SortKey(raw_key)]
    if raw_key:
        logger.debug("Unknown sort key %r, falling back to %s", raw_key, DEFAULT_SORT_KEY.value)
    return SORT_STRATEGIES[DEFAULT_SORT_KEY]
