from django.conf import settings
from django.db import models
from mptt.models import MPTTModel, TreeForeignKey
from utils.slug_utils import unique_slugify


class Category(MPTTModel):
    name = models.CharField(max_length=100)
    slug = models.SlugField(unique=True, db_index=True)
    parent = TreeForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name="Parent Category",
    )

    def save(self, *args, **kwargs):

        if not self.pk:
            self.slug = unique_slugify(self.name)

        super().save(*args, **kwargs)

    class MPTTMeta:
        order_insertion_by = ['name']

    class Meta:
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    A listing. ``seller`` is fixed at creation; the identifier doubles as the
    tie-break for every listing order, so it must stay unique and increasing.
    """
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='products'
    )
    title = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True, default='')
    price = models.PositiveIntegerField(db_index=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['price', 'id'], name='product_price_id_idx'),
            models.Index(fields=['seller', 'id'], name='product_seller_id_idx'),
        ]

    def __str__(self):
        return self.title


class ProductMedia(models.Model):
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name='media'
    )
    image = models.ImageField(upload_to="product_images/")
    position = models.PositiveSmallIntegerField(
        default=0,
        help_text="Display order; the first image is the thumbnail"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"Media for {self.product.title}"
