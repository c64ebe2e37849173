from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.permissions import IsAdmin, IsMember
from apps.accounts.services import get_member, MemberNotFoundError
from .serializers import (
    MovementFilterSerializer,
    DepositRequestSerializer,
    FundAdjustmentSerializer,
    ReviewDecisionSerializer,
    FundMovementSerializer,
    BalanceSummarySerializer,
    MovementStatsSerializer,
    FundAdjustmentResultSerializer,
)
from .services import (
    request_deposit,
    adjust_member_funds,
    review_fund_movement,
    get_available_balance,
    get_movement,
    list_movements,
    get_movement_stats,
    # Exceptions
    MovementNotFoundError,
    InvalidAmountError,
    InsufficientBalanceError,
    AlreadyReviewedError,
    InvalidReviewError,
    InvalidMovementKindError,
)


class MovementPagination(PageNumberPagination):
    """Custom pagination for fund movements."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('status', str, description='pending, approved or rejected'),
        OpenApiParameter('kind', str, description='deposit or withdrawal'),
        OpenApiParameter('member', str, description='Member ID (admins only)'),
    ],
    responses={200: FundMovementSerializer(many=True)},
    description="List fund movements (members see their own, admins all).",
    tags=['funds'],
)
@extend_schema(
    methods=['POST'],
    request=DepositRequestSerializer,
    responses={201: FundMovementSerializer},
    description="Request a deposit. It stays pending until an admin reviews it.",
    tags=['funds'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def movement_list(request):
    """List movements or request a deposit."""
    if request.method == 'GET':
        filters = MovementFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        queryset = list_movements(
            actor=request.user,
            status=filters.validated_data.get('status'),
            kind=filters.validated_data.get('kind'),
            member_id=filters.validated_data.get('member'),
        )
        paginator = MovementPagination()
        page = paginator.paginate_queryset(queryset, request)
        serializer = FundMovementSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    if not request.user.is_member:
        return Response(
            {'error': 'Only members can request deposits.'},
            status=status.HTTP_403_FORBIDDEN
        )

    serializer = DepositRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        movement = request_deposit(member=request.user, **serializer.validated_data)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FundMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


@extend_schema(responses={200: FundMovementSerializer}, tags=['funds'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def movement_detail(request, movement_id):
    """Get a single fund movement."""
    try:
        movement = get_movement(movement_id=movement_id, actor=request.user)
    except MovementNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(FundMovementSerializer(movement).data)


@extend_schema(
    request=ReviewDecisionSerializer,
    responses={200: FundMovementSerializer},
    description="Approve or reject a pending fund movement (admin only).",
    tags=['funds'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def movement_review(request, movement_id):
    """Review a pending movement."""
    serializer = ReviewDecisionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        movement = review_fund_movement(
            admin=request.user,
            movement_id=movement_id,
            decision=serializer.validated_data['decision'],
            reason=serializer.validated_data.get('reason', ''),
        )
    except MovementNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AlreadyReviewedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (InvalidReviewError, InsufficientBalanceError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FundMovementSerializer(movement).data)


@extend_schema(responses={200: MovementStatsSerializer}, tags=['funds'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def movement_stats(request):
    """Counts and totals of visible fund movements."""
    return Response(MovementStatsSerializer(get_movement_stats(actor=request.user)).data)


@extend_schema(responses={200: BalanceSummarySerializer}, tags=['funds'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsMember])
def my_balance(request):
    """Available balance of the current member."""
    summary = get_available_balance(member=request.user)
    return Response(BalanceSummarySerializer(summary).data)


@extend_schema(responses={200: BalanceSummarySerializer}, tags=['funds'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def member_balance(request, member_id):
    """Available balance of any member (admin only)."""
    try:
        member = get_member(member_id=member_id)
    except MemberNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    summary = get_available_balance(member=member)
    return Response(BalanceSummarySerializer(summary).data)


@extend_schema(
    request=FundAdjustmentSerializer,
    responses={201: FundAdjustmentResultSerializer},
    description=(
        "Add funds to or remove funds from a member account. "
        "The entry is approved immediately; removals cannot exceed the available balance."
    ),
    tags=['funds'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdmin])
def member_adjust(request, member_id):
    """Admin deposit or withdrawal for a member."""
    serializer = FundAdjustmentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        adjustment = adjust_member_funds(
            admin=request.user,
            member_id=member_id,
            **serializer.validated_data
        )
    except MemberNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (InvalidAmountError, InsufficientBalanceError, InvalidMovementKindError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    result = {
        'movement': adjustment.movement,
        'available_balance_before': adjustment.balance_before,
        'available_balance_after': adjustment.balance_after,
    }
    return Response(FundAdjustmentResultSerializer(result).data, status=status.HTTP_201_CREATED)
