from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsAdmin
from .serializers import AppSettingSerializer, AppSettingUpdateSerializer
from .services import (
    get_setting,
    list_settings,
    update_setting,
    SettingNotFoundError,
    InvalidSettingValueError,
)


@extend_schema(
    responses={200: AppSettingSerializer(many=True)},
    description="List all application settings.",
    tags=['settings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def setting_list(request):
    """List all settings (admin only)."""
    serializer = AppSettingSerializer(list_settings(), many=True)
    return Response(serializer.data)


@extend_schema(
    methods=['GET'],
    responses={200: AppSettingSerializer},
    description="Get a single setting by key.",
    tags=['settings'],
)
@extend_schema(
    methods=['PATCH'],
    request=AppSettingUpdateSerializer,
    responses={200: AppSettingSerializer},
    description="Change a setting value. The franchise fee must be between 0 and 100.",
    tags=['settings'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdmin])
def setting_detail(request, key):
    """Get or update a setting (admin only)."""
    if request.method == 'GET':
        try:
            setting = get_setting(key=key)
        except SettingNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(AppSettingSerializer(setting).data)

    serializer = AppSettingUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        setting = update_setting(
            key=key,
            value=serializer.validated_data['value'],
            updated_by=request.user,
        )
    except SettingNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidSettingValueError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(AppSettingSerializer(setting).data)
