from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.services import MemberNotFoundError
from .serializers import (
    VehicleSerializer,
    VehicleFilterSerializer,
    VehicleCreateSerializer,
    VehicleUpdateSerializer,
    AdditionalExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseUpdateSerializer,
    ExpenseTotalSerializer,
)
from .services import (
    create_vehicle,
    get_vehicle,
    list_vehicles,
    update_vehicle,
    delete_vehicle,
    add_expense,
    get_expense,
    list_expenses,
    update_expense,
    delete_expense,
    get_vehicle_expenses_total,
    # Exceptions
    VehicleNotFoundError,
    ExpenseNotFoundError,
    DuplicateVinError,
    VehicleAlreadySoldError,
    InvalidAmountError,
)


class VehiclePagination(PageNumberPagination):
    """Custom pagination for vehicles."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class VehicleViewSet(viewsets.ViewSet):
    """
    ViewSet for vehicle inventory.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Vehicles of the current member (admins see all)
    create: Add a vehicle (admins add on behalf of a member)
    retrieve: Get a vehicle
    partial_update: Edit purchase attributes
    destroy: Delete a vehicle and its expenses
    """

    permission_classes = [IsAuthenticated]
    pagination_class = VehiclePagination

    @extend_schema(
        parameters=[
            OpenApiParameter('status', str, description='in_stock or sold'),
            OpenApiParameter('search', str, description='Match on model or VIN'),
            OpenApiParameter('sort', str, description='Sort field'),
            OpenApiParameter('order', str, description='asc or desc'),
            OpenApiParameter('member', str, description='Owner ID (admins only)'),
        ],
        responses={200: VehicleSerializer(many=True)},
    )
    def list(self, request):
        filters = VehicleFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        data = filters.validated_data

        queryset = list_vehicles(
            actor=request.user,
            status=data.get('status'),
            search=data.get('search'),
            sort=data.get('sort'),
            order=data.get('order', 'desc'),
            member_id=data.get('member'),
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = VehicleSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(request=VehicleCreateSerializer, responses={201: VehicleSerializer})
    def create(self, request):
        serializer = VehicleCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            vehicle = create_vehicle(actor=request.user, **serializer.validated_data)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateVinError, InvalidAmountError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VehicleSerializer(vehicle).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: VehicleSerializer})
    def retrieve(self, request, pk=None):
        try:
            vehicle = get_vehicle(vehicle_id=pk, actor=request.user)
        except VehicleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(VehicleSerializer(vehicle).data)

    @extend_schema(request=VehicleUpdateSerializer, responses={200: VehicleSerializer})
    def partial_update(self, request, pk=None):
        serializer = VehicleUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            vehicle = update_vehicle(vehicle_id=pk, actor=request.user, **serializer.validated_data)
        except VehicleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidAmountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(VehicleSerializer(vehicle).data)

    def destroy(self, request, pk=None):
        try:
            delete_vehicle(vehicle_id=pk, actor=request.user)
        except VehicleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        methods=['GET'],
        responses={200: AdditionalExpenseSerializer(many=True)},
        description="List additional expenses of a vehicle.",
    )
    @extend_schema(
        methods=['POST'],
        request=ExpenseCreateSerializer,
        responses={201: AdditionalExpenseSerializer},
        description="Record an additional expense. Not allowed once the vehicle is sold.",
    )
    @action(detail=True, methods=['get', 'post'])
    def expenses(self, request, pk=None):
        """List or add expenses for a vehicle."""
        if request.method == 'GET':
            try:
                expenses = list_expenses(actor=request.user, vehicle_id=pk)
            except VehicleNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
            return Response(AdditionalExpenseSerializer(expenses, many=True).data)

        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = add_expense(actor=request.user, vehicle_id=pk, **serializer.validated_data)
        except VehicleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except VehicleAlreadySoldError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidAmountError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AdditionalExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: ExpenseTotalSerializer})
    @action(detail=True, methods=['get'], url_path='expenses/total')
    def expenses_total(self, request, pk=None):
        """Total of additional expenses for a vehicle."""
        try:
            vehicle = get_vehicle(vehicle_id=pk, actor=request.user)
        except VehicleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = {
            'vehicle_id': vehicle.id,
            'total': get_vehicle_expenses_total(vehicle_id=vehicle.id),
            'count': vehicle.expenses.count(),
        }
        return Response(ExpenseTotalSerializer(data).data)


@extend_schema(
    methods=['GET'],
    responses={200: AdditionalExpenseSerializer},
    tags=['vehicles'],
)
@extend_schema(
    methods=['PATCH'],
    request=ExpenseUpdateSerializer,
    responses={200: AdditionalExpenseSerializer},
    tags=['vehicles'],
)
@extend_schema(methods=['DELETE'], responses={204: None}, tags=['vehicles'])
@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def expense_detail(request, expense_id):
    """Get, edit or delete a single expense."""
    try:
        if request.method == 'GET':
            expense = get_expense(expense_id=expense_id, actor=request.user)
            return Response(AdditionalExpenseSerializer(expense).data)

        if request.method == 'DELETE':
            delete_expense(expense_id=expense_id, actor=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = ExpenseUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        expense = update_expense(expense_id=expense_id, actor=request.user, **serializer.validated_data)
        return Response(AdditionalExpenseSerializer(expense).data)

    except ExpenseNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except VehicleAlreadySoldError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
