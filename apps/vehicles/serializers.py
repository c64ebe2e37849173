from decimal import Decimal
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import Vehicle, VehicleStatus, AdditionalExpense


# =============================================================================
# Input Serializers
# =============================================================================

class VehicleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for vehicle listing.

    Query Parameters:
        status (str): Filter by status
        search (str): Match on model or VIN
        sort (str): purchase_date, year, model, purchase_price or created_at
        order (str): asc or desc
        member (UUID): Filter by owner (admins only)
    """

    status = serializers.ChoiceField(choices=VehicleStatus.choices, required=False)
    search = serializers.CharField(max_length=100, required=False)
    sort = serializers.ChoiceField(
        choices=['purchase_date', 'year', 'model', 'purchase_price', 'created_at'],
        required=False
    )
    order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')
    member = serializers.UUIDField(required=False)


class VehicleCreateSerializer(serializers.Serializer):
    """Input for adding a vehicle. Admins must name the member."""

    vin = serializers.CharField(max_length=32)
    make = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    model = serializers.CharField(max_length=100)
    year = serializers.IntegerField(min_value=1900, max_value=2100)
    purchase_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
    purchase_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    member_id = serializers.UUIDField(required=False)


class VehicleUpdateSerializer(serializers.Serializer):
    make = serializers.CharField(max_length=100, required=False, allow_blank=True)
    model = serializers.CharField(max_length=100, required=False)
    year = serializers.IntegerField(min_value=1900, max_value=2100, required=False)
    purchase_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'), required=False)
    purchase_date = serializers.DateField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)


class ExpenseCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    description = serializers.CharField(max_length=255)
    expense_date = serializers.DateField(required=False)


class ExpenseUpdateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    description = serializers.CharField(max_length=255, required=False)
    expense_date = serializers.DateField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class VehicleSerializer(serializers.ModelSerializer):
    member = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'member',
            'vin',
            'make',
            'model',
            'year',
            'purchase_price',
            'purchase_date',
            'status',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class AdditionalExpenseSerializer(serializers.ModelSerializer):

    class Meta:
        model = AdditionalExpense
        fields = [
            'id',
            'vehicle',
            'member',
            'amount',
            'description',
            'expense_date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ExpenseTotalSerializer(serializers.Serializer):
    vehicle_id = serializers.UUIDField()
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    count = serializers.IntegerField()
