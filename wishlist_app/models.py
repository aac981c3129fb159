from django.conf import settings
from django.db import models
from product_management.models import Product


class Wish(models.Model):
    """
    A user's favorite. At most one row exists per (user, product); the
    database constraint is what settles concurrent duplicate requests.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='wishes',
        help_text="The user who wished for the product."
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='wishes',
        help_text="The product that was wished for."
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'product'],
                name='unique_user_product_wish'
            )
        ]
        indexes = [
            models.Index(fields=['product'], name='wish_product_idx'),
        ]

    def __str__(self):
        return f"{self.product_id} in {self.user_id}'s wishlist"
