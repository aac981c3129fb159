"""
Encoding of the ``last`` query parameter.

Id orders use the bare id (``"42"``). Price orders carry the price too
(``"1500:42"``) so the next page can be sought without looking the product
up again.
"""
from dataclasses import dataclass
from typing import Optional
import re

from core.exceptions import InvalidCursor
from utils.identifiers import MAX_ID, MAX_ID_DIGITS

_NUMBER = rf"[0-9]{{1,{MAX_ID_DIGITS}}}"
_ID_CURSOR = re.compile(_NUMBER)
_PRICE_CURSOR = re.compile(rf"({_NUMBER}):({_NUMBER})")


@dataclass(frozen=True)
class CursorPosition:
    id: int
    price: Optional[int] = None


def encode_cursor(product, strategy) -> str:
    if strategy.by_price:
        return f"{product.price}:{product.id}"
    return str(product.id)


def _numbers(match):
    """Integers captured by ``match``, or ``None`` when any of them is out of key range."""
    values = [int(group) for group in (match.groups() or (match.group(),))]
    return values if all(value <= MAX_ID for value in values) else None


def decode_cursor(raw: Optional[str], strategy) -> Optional[CursorPosition]:
    """
    Parse ``raw`` for ``strategy``. ``None`` means start from the beginning;
    anything else has to match the strategy's shape exactly.
    """
    if raw is None:
        return None

    pattern, shape = (_PRICE_CURSOR, "<price>:<id>") if strategy.by_price else (_ID_CURSOR, "<id>")
    match = pattern.fullmatch(raw)
    values = _numbers(match) if match else None
    if values is None:
        raise InvalidCursor(f"Cursor {raw!r} does not match '{shape}' for sort '{strategy.key}'.")

    if strategy.by_price:
        price, product_id = values
        return CursorPosition(id=product_id, price=price)
    return CursorPosition(id=values[0])
