from django.contrib.auth import authenticate
from rest_framework import serializers


class LoginUserSerializer(serializers.Serializer):
    """Checks the credentials; the matching active user ends up in ``validated_data['user']``."""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8, trim_whitespace=False)

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, attrs):
        user = authenticate(self.context.get('request'), email=attrs['email'], password=attrs['password'])
        if user is None:
            raise serializers.ValidationError(
                {"detail": "Invalid email or password."}, code='invalid_credentials'
            )
        attrs['user'] = user
        return attrs
