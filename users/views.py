import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny

from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

from drf_spectacular.utils import extend_schema, OpenApiResponse

from .serializers import LoginUserSerializer
from .throttles import LoginRateThrottle
from utils import set_jwt_token

logger = logging.getLogger("rest_framework")


class LoginUser(APIView):
    """
    LoginUser

    Authenticates a user using email and password credentials. On successful authentication,
    issues JWT tokens as secure cookies. The access cookie is what identifies the
    actor on product mutations.

    **Request Body Parameters:**
      - **email (str):** User's email address.
      - **password (str):** User's password.

    **Responses:**
      - **200 OK:** Login successful with JWT tokens issued.
      - **400 Bad Request:** Invalid credentials or validation errors.
    """

    authentication_classes = []
    permission_classes = [AllowAny]
    serializer_class = LoginUserSerializer
    throttle_classes = [LoginRateThrottle]

    @extend_schema(
        request=LoginUserSerializer,
        responses={
            200: OpenApiResponse(description="Login successful, cookies set"),
            400: OpenApiResponse(description="Invalid credentials"),
        },
    )
    def post(self, request):
        serializer = self.serializer_class(data=request.data, context={'request': request})
        if serializer.is_valid():
            user = serializer.validated_data['user']
            access_token, refresh_token = set_jwt_token.generate_tokens_for_user(user)

            logger.info(f"User {user.email} logged in successfully.")

            response = Response({
                'message': 'Login successful',
                'user_id': str(user.id),
            }, status=status.HTTP_200_OK)

            set_jwt_token.set_secure_jwt_cookie(response, access_token, refresh_token)

            return response

        logger.warning(f"Login failed for email {request.data.get('email')}: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class LogoutUser(APIView):
    """
    LogoutUser

    Logs out the current user by blacklisting the refresh token (if available)
    and removing the JWT cookies.

    **Responses:**
      - **200 OK:** Logout successful.
      - **400 Bad Request:** The refresh token was invalid or already blacklisted.
    """

    authentication_classes = []
    serializer_class = None
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={200: OpenApiResponse(description="Cookies cleared")})
    def post(self, request):
        response = Response(
            {"message": "Logout successful"},
            status=status.HTTP_200_OK,
        )

        refresh_token = request.COOKIES.get("refresh_token")
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.warning(f"Logout failed: {e}")
                response.data = {
                    "error": "Invalid token or token already blacklisted.",
                    "details": str(e),
                }
                response.status_code = status.HTTP_400_BAD_REQUEST

        set_jwt_token.clear_jwt_cookies(response)
        return response
