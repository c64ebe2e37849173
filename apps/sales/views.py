from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdmin, IsMember
from apps.accounts.services import get_member, MemberNotFoundError
from apps.vehicles.services import VehicleNotFoundError
from .serializers import (
    SettleSaleSerializer,
    SaleSettlementSerializer,
    MemberStatisticsSerializer,
    AnalyticsPeriodSerializer,
    PoolKPIsSerializer,
    MemberProfitSerializer,
)
from .services import (
    settle_sale,
    get_settlement,
    get_settlement_for_vehicle,
    list_settlements,
    get_member_statistics,
    get_pool_kpis,
    get_member_profit_breakdown,
    # Exceptions
    AlreadySettledError,
    SettlementNotFoundError,
    InvalidAmountError,
)


class SettlementPagination(PageNumberPagination):
    """Custom pagination for settlements."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    methods=['GET'],
    responses={200: SaleSettlementSerializer(many=True)},
    description="List sale settlements (members see their own, admins all).",
    tags=['sales'],
)
@extend_schema(
    methods=['POST'],
    request=SettleSaleSerializer,
    responses={201: SaleSettlementSerializer},
    description=(
        "Settle a vehicle sale. Computes profit and franchise fee, snapshots the "
        "vehicle and marks it sold. A vehicle can be settled only once."
    ),
    tags=['sales'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def settlement_list(request):
    """List settlements or settle a new sale."""
    if request.method == 'GET':
        queryset = list_settlements(actor=request.user)
        paginator = SettlementPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = SaleSettlementSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    serializer = SettleSaleSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        settlement = settle_sale(actor=request.user, **serializer.validated_data)
    except VehicleNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AlreadySettledError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(SaleSettlementSerializer(settlement).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={200: SaleSettlementSerializer}, tags=['sales'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def settlement_detail(request, settlement_id):
    """Get a single settlement."""
    try:
        settlement = get_settlement(settlement_id=settlement_id, actor=request.user)
    except SettlementNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(SaleSettlementSerializer(settlement).data)


@extend_schema(responses={200: SaleSettlementSerializer}, tags=['sales'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def vehicle_settlement(request, vehicle_id):
    """Get the settlement recorded for a vehicle."""
    try:
        settlement = get_settlement_for_vehicle(vehicle_id=vehicle_id, actor=request.user)
    except SettlementNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(SaleSettlementSerializer(settlement).data)


def _statistics_response(member):
    stats = get_member_statistics(member=member)
    stats['member'] = member
    return Response(MemberStatisticsSerializer(stats).data)


@extend_schema(
    responses={200: MemberStatisticsSerializer},
    description="Portfolio statistics for a member (admin only).",
    tags=['sales'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def member_statistics(request, member_id):
    """Get statistics for any member."""
    try:
        member = get_member(member_id=member_id)
    except MemberNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return _statistics_response(member)


@extend_schema(
    responses={200: MemberStatisticsSerializer},
    description="Portfolio statistics for the current member.",
    tags=['sales'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMember])
def my_statistics(request):
    """Get statistics for the current member."""
    return _statistics_response(request.user)


PERIOD_PARAMETERS = [
    OpenApiParameter('start_date', OpenApiTypes.DATE, description='Vehicles purchased on or after (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, description='Vehicles purchased on or before (YYYY-MM-DD)'),
]


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: PoolKPIsSerializer},
    description="Pool-wide investment, profit and franchise fee totals (admin only).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def pool_kpis(request):
    """Headline figures for the whole pool."""
    period = AnalyticsPeriodSerializer(data=request.query_params)
    period.is_valid(raise_exception=True)

    data = get_pool_kpis(**period.validated_data)
    return Response(PoolKPIsSerializer(data).data)


@extend_schema(
    parameters=PERIOD_PARAMETERS,
    responses={200: MemberProfitSerializer(many=True)},
    description="Net profit per member, highest first (admin only).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def member_profit(request):
    """Per-member profit breakdown."""
    period = AnalyticsPeriodSerializer(data=request.query_params)
    period.is_valid(raise_exception=True)

    breakdown = get_member_profit_breakdown(**period.validated_data)
    return Response(MemberProfitSerializer(breakdown, many=True).data)
