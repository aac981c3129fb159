import uuid

from core.exceptions import InvalidArgument

# Largest value a BigAutoField primary key can hold.
MAX_ID = 2 ** 63 - 1
MAX_ID_DIGITS = len(str(MAX_ID))


def parse_product_id(raw):
    """Path product ids are positive integers that fit a 64-bit key; anything else is a 400."""
    value = str(raw)
    if (
        not value.isascii()
        or not value.isdigit()
        or len(value) > MAX_ID_DIGITS
        or not 1 <= int(value) <= MAX_ID
    ):
        raise InvalidArgument({"product_id": f"'{raw}' is not a valid product id."})
    return int(value)


def parse_user_id(raw):
    """User ids are UUIDs."""
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise InvalidArgument({"user_id": f"'{raw}' is not a valid user id."})
