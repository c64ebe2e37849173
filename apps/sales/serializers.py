from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import SaleSettlement


# =============================================================================
# Input Serializers
# =============================================================================

class SettleSaleSerializer(serializers.Serializer):
    """
    Validate input for settling a sale.

    Fields:
        vehicle_id (UUID): Vehicle being sold
        sold_price (Decimal): Sale price
        sold_date (date): Optional sale date, defaults to today
    """

    vehicle_id = serializers.UUIDField()
    sold_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    sold_date = serializers.DateField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class SaleSettlementSerializer(serializers.ModelSerializer):
    member = UserMinimalSerializer(read_only=True)
    settled_by = UserMinimalSerializer(read_only=True)
    total_cost = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = SaleSettlement
        fields = [
            'id',
            'vehicle',
            'member',
            'sold_price',
            'sold_date',
            'vin',
            'make',
            'model',
            'year',
            'purchase_price',
            'purchase_date',
            'additional_expenses',
            'total_cost',
            'profit',
            'franchise_fee_percentage',
            'franchise_fee_amount',
            'net_profit',
            'settled_by',
            'created_at',
        ]
        read_only_fields = fields


class RecentSaleSerializer(serializers.ModelSerializer):

    class Meta:
        model = SaleSettlement
        fields = [
            'id',
            'make',
            'model',
            'year',
            'sold_price',
            'sold_date',
            'profit',
            'net_profit',
            'franchise_fee_amount',
            'additional_expenses',
        ]
        read_only_fields = fields


class VehicleCountsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    in_stock = serializers.IntegerField()
    sold = serializers.IntegerField()


class FinancialsSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    gross_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    franchise_fees = serializers.DecimalField(max_digits=14, decimal_places=2)
    additional_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    profit_margin = serializers.DecimalField(max_digits=9, decimal_places=2)
    net_profit_margin = serializers.DecimalField(max_digits=9, decimal_places=2)


class BalanceSnapshotSerializer(serializers.Serializer):
    available_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    invested_capital = serializers.DecimalField(max_digits=14, decimal_places=2)


class MemberStatisticsSerializer(serializers.Serializer):
    """Serializer for member portfolio statistics."""

    member = UserMinimalSerializer()
    vehicles = VehicleCountsSerializer()
    financials = FinancialsSerializer()
    balance = BalanceSnapshotSerializer()
    recent_sales = RecentSaleSerializer(many=True)


class AnalyticsPeriodSerializer(serializers.Serializer):
    """Optional purchase-date window for pool analytics."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'end_date must not be before start_date'
            })
        return attrs


class PoolKPIsSerializer(serializers.Serializer):
    """Serializer for pool-wide headline figures."""

    total_invested = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    gross_profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_franchise_fees = serializers.DecimalField(max_digits=16, decimal_places=2)
    vehicles_bought = serializers.IntegerField()
    vehicles_in_stock = serializers.IntegerField()
    vehicles_sold = serializers.IntegerField()
    total_members = serializers.IntegerField()
    average_profit_ratio = serializers.DecimalField(max_digits=12, decimal_places=2)


class MemberProfitSerializer(serializers.Serializer):
    member = UserMinimalSerializer()
    total_invested = serializers.DecimalField(max_digits=16, decimal_places=2)
    net_profit = serializers.DecimalField(max_digits=16, decimal_places=2)
    franchise_fees = serializers.DecimalField(max_digits=16, decimal_places=2)
    vehicles_bought = serializers.IntegerField()
    vehicles_sold = serializers.IntegerField()
    profit_ratio = serializers.DecimalField(max_digits=12, decimal_places=2)
