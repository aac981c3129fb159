from rest_framework.authentication import BaseAuthentication
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.exceptions import TokenError, AuthenticationFailed
from rest_framework_simplejwt.settings import api_settings
from django.core.exceptions import ObjectDoesNotExist, ValidationError
import logging
from .models import User


logger = logging.getLogger("rest_framework")


class JWTAuthentication(BaseAuthentication):
    """
    Custom authentication using JWT stored in HTTP-only cookies.

    A request without an ``access_token`` cookie is anonymous; the view's
    permissions decide whether that is acceptable. A cookie that is present
    but expired, tampered with or pointing at a deleted user fails loudly.
    """
    def authenticate(self, request):
        access_token = request.COOKIES.get("access_token")

        if not access_token:
            return None

        try:
            # Decode the access token
            token = AccessToken(access_token)
        except TokenError:
            logger.debug("Access token expired.")
            raise AuthenticationFailed(
                detail={"code": "token_expired", "message": "Access token expired. Please refresh your session."}
            )

        user_id = token.get(api_settings.USER_ID_CLAIM)
        if not user_id:
            raise AuthenticationFailed(
                detail={"code": "token_expired", "message": "Access token expired. Please refresh your session."}
            )

        # Fetch user from database
        try:
            user = User.objects.get(id=user_id)
        except (ObjectDoesNotExist, ValidationError):
            raise AuthenticationFailed(
                detail={"code": "invalid_token", "message": "Invalid or expired token. Please log in again."}
            )

        if not user.is_active:
            raise AuthenticationFailed(
                detail={"code": "user_inactive", "message": "This account is disabled."}
            )

        return (user, token)  # User is authenticated
