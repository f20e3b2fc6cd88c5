"""Serializers for the current user, sign-in, and admin user updates."""

from common.choices import UserRole
from rest_framework import serializers
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User


class UserMeSerializer(serializers.ModelSerializer):
    """Basic profile fields for the current user."""

    class Meta:
        model = User
        fields = ["id", "username", "email", "name", "role"]


class UpdateProfileSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=3, max_length=120)


class AdminUserUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=3, max_length=120)
    role = serializers.ChoiceField(choices=UserRole.choices)


class SignOutSerializer(serializers.Serializer):
    """Request body for signing out.

    `refresh` is the JWT refresh token to blacklist. The session cart token
    travels in the `X-Session-Cart-Id` header.
    """

    refresh = serializers.CharField()


class EmailTokenObtainPairSerializer(serializers.Serializer):
    """Obtain JWTs by authenticating with email and password."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)

    def validate(self, attrs):
        email = attrs["email"].strip().lower()
        user = User.objects.filter(email=email).first()
        if not user or not user.check_password(attrs["password"]) or not user.is_active:
            raise serializers.ValidationError({"detail": "Invalid email or password."})

        self.user = user
        refresh = RefreshToken.for_user(user)
        return {"access": str(refresh.access_token), "refresh": str(refresh)}
