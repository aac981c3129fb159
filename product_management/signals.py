from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver
from .models import ProductMedia
import logging

logger = logging.getLogger("rest_framework")


@receiver(post_delete, sender=ProductMedia)
def delete_stored_image(sender, instance, **kwargs):
    """
    Remove the image file from storage once the media row is gone for good.
    Runs after commit so a rolled back delete keeps its file.
    """
    image = instance.image
    if not image:
        return
    storage, name = image.storage, image.name

    def _delete():
        try:
            storage.delete(name)
        except Exception as e:
            logger.warning(f"Failed to delete image file for ProductMedia ID {instance.id}: {str(e)}")

    transaction.on_commit(_delete)
