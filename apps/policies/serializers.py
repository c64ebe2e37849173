from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import AppSetting


class AppSettingSerializer(serializers.ModelSerializer):
    updated_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = AppSetting
        fields = ['id', 'key', 'value', 'description', 'updated_by', 'created_at', 'updated_at']
        read_only_fields = fields


class AppSettingUpdateSerializer(serializers.Serializer):
    """Input for changing a setting value."""

    value = serializers.CharField(max_length=255)
