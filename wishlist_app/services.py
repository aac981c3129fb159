"""
Wishlist toggling.

A (user, product) pair is either ABSENT or PRESENT. Adding an existing pair
is a normal outcome, not an error; removing an absent pair is ``NotFound``.
"""
from django.contrib.auth import get_user_model
from django.db import IntegrityError, models, transaction
import logging

from core.exceptions import NotFound
from product_management.models import Product
from .models import Wish

logger = logging.getLogger("rest_framework")


class WishOutcome(models.TextChoices):
    ADDED = 'added', 'Added'
    ALREADY_EXISTS = 'already_exists', 'Already exists'


def add_wish(user_id, product_id) -> WishOutcome:
    """
    Move the pair to PRESENT.

    The insert runs in a savepoint. When a concurrent request wins the race,
    the unique constraint rejects ours and the caller sees ``ALREADY_EXISTS``.
    """
    if not get_user_model().objects.filter(pk=user_id).exists():
        raise NotFound(f"User {user_id} not found.")
    if not Product.objects.filter(pk=product_id).exists():
        raise NotFound(f"Product {product_id} not found.")

    try:
        with transaction.atomic():
            Wish.objects.create(user_id=user_id, product_id=product_id)
    except IntegrityError:
        if Wish.objects.filter(user_id=user_id, product_id=product_id).exists():
            logger.info("Wish (%s, %s) already exists.", user_id, product_id)
            return WishOutcome.ALREADY_EXISTS
        # The product was deleted between the check and the insert.
        raise NotFound(f"Product {product_id} not found.")

    logger.info("Wish (%s, %s) added.", user_id, product_id)
    return WishOutcome.ADDED


def remove_wish(user_id, product_id):
    """Move the pair to ABSENT. Nothing to remove is ``NotFound``."""
    deleted, _ = Wish.objects.filter(user_id=user_id, product_id=product_id).delete()
    if not deleted:
        raise NotFound(f"Product {product_id} is not in the wishlist of user {user_id}.")
    logger.info("Wish (%s, %s) removed.", user_id, product_id)
