import logging

from rest_framework.permissions import BasePermission

from core.exceptions import Forbidden

logger = logging.getLogger("rest_framework")


def check_ownership(actor_id, owner_id):
    """
    Raise ``Forbidden`` unless ``actor_id`` is ``owner_id``.

    Ids are compared as strings so a UUID from the session matches the same
    id arriving as text in a request body.
    """
    if actor_id is None or owner_id is None or str(actor_id) != str(owner_id):
        logger.warning("Ownership check failed: actor %s, owner %s", actor_id, owner_id)
        raise Forbidden()


class IsProductOwner(BasePermission):
    """
    Restricts product modifications to the seller who listed it.

    Applied to update and delete. Missing products are reported as 404 before
    this runs, so a 403 here always means the product exists.
    """
    def has_object_permission(self, request, view, obj):
        actor = request.user if request.user and request.user.is_authenticated else None
        check_ownership(actor.pk if actor else None, obj.seller_id)
        return True
