"""Admin auth API views.

Token login for shop staff. Tokens are DRF auth tokens; verifying one is
just an authenticated request, logging out deletes it.
"""

from django.contrib.auth.models import update_last_login
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from core.responses import envelope
from orders.api.permissions import IsAdminStaff
from .serializers import AdminLoginSerializer, admin_payload


class AdminLoginView(APIView):
    """POST /api/auth/login/ -> validate staff credentials and return a token."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = AdminLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        update_last_login(None, user)
        token, _ = Token.objects.get_or_create(user=user)
        data = {"token": token.key, "admin": admin_payload(user)}
        return envelope(data, message="Login successful")


class AdminVerifyView(APIView):
    """GET /api/auth/verify/ -> confirm the presented token belongs to staff."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request, *args, **kwargs):
        return envelope({"admin": admin_payload(request.user)}, message="Token is valid")


class AdminLogoutView(APIView):
    """POST /api/auth/logout/ -> invalidate the presented token."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def post(self, request, *args, **kwargs):
        Token.objects.filter(user=request.user).delete()
        return envelope(message="Logged out successfully")
