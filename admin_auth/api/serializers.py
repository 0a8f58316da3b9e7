"""Admin auth API serializers."""

from django.contrib.auth import authenticate
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed


class AdminLoginSerializer(serializers.Serializer):
    """Authenticate a staff user and attach it to validated data."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        user = authenticate(
            username=attrs.get("username"),
            password=attrs.get("password"),
        )
        if not user or not user.is_staff:
            raise AuthenticationFailed("Invalid credentials")
        attrs["user"] = user
        return attrs


def admin_payload(user) -> dict:
    return {"id": user.id, "username": user.username, "lastLogin": user.last_login}
