"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile of the authenticated account."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "first_name",
            "last_name",
            "phone",
            "role",
            "is_email_verified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "role",
            "is_email_verified",
            "created_at",
            "updated_at",
        ]


class UserSummarySerializer(serializers.ModelSerializer):
    """Requester identity joined into owner and admin booking views."""

    name = serializers.ReadOnlyField(source="display_name")

    class Meta:
        model = User
        fields = ["id", "name", "email"]


class RegisterSerializer(serializers.ModelSerializer):
    """Self-service sign up as a renter or a vehicle owner."""

    password = serializers.CharField(write_only=True, min_length=8)
    phone = serializers.CharField(validators=[PHONE_VALIDATOR], required=False)
    role = serializers.ChoiceField(
        choices=[User.RoleChoices.USER, User.RoleChoices.OWNER],
        default=User.RoleChoices.USER,
    )

    class Meta:
        model = User
        fields = [
            "email",
            "password",
            "phone",
            "first_name",
            "last_name",
            "username",
            "role",
        ]
        extra_kwargs = {
            "first_name": {"required": False, "allow_blank": True},
            "last_name": {"required": False, "allow_blank": True},
            "username": {"required": False, "allow_blank": True},
        }

    def create(self, validated_data):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)
