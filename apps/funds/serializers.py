from decimal import Decimal
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import FundMovement, MovementKind, MovementStatus


# =============================================================================
# Input Serializers
# =============================================================================

class MovementFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for fund movement listing.

    Query Parameters:
        status (str): pending, approved or rejected
        kind (str): deposit or withdrawal
        member (UUID): Filter by member (admins only)
    """

    status = serializers.ChoiceField(choices=MovementStatus.choices, required=False)
    kind = serializers.ChoiceField(choices=MovementKind.choices, required=False)
    member = serializers.UUIDField(required=False)


class DepositRequestSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    note = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class FundAdjustmentSerializer(serializers.Serializer):
    """Admin input for adding or removing member funds."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.01'))
    direction = serializers.ChoiceField(choices=MovementKind.choices)
    note = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class ReviewDecisionSerializer(serializers.Serializer):
    decision = serializers.ChoiceField(
        choices=[MovementStatus.APPROVED, MovementStatus.REJECTED]
    )
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')

    def validate(self, attrs):
        """Rejections must say why."""
        if attrs['decision'] == MovementStatus.REJECTED and not attrs.get('reason', '').strip():
            raise serializers.ValidationError({
                'reason': 'A reason is required when rejecting'
            })
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class FundMovementSerializer(serializers.ModelSerializer):
    member = UserMinimalSerializer(read_only=True)
    created_by = UserMinimalSerializer(read_only=True)
    reviewed_by = UserMinimalSerializer(read_only=True)
    signed_amount = serializers.DecimalField(max_digits=13, decimal_places=2, read_only=True)

    class Meta:
        model = FundMovement
        fields = [
            'id',
            'member',
            'kind',
            'amount',
            'signed_amount',
            'status',
            'note',
            'rejection_reason',
            'created_by',
            'reviewed_by',
            'reviewed_at',
            'created_at',
        ]
        read_only_fields = fields


class BalanceSummarySerializer(serializers.Serializer):
    """Serializer for a member's derived balance."""

    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    invested_capital = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_deposits = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_approved_deposits = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_withdrawals = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_purchase_cost = serializers.DecimalField(max_digits=14, decimal_places=2)


class MovementStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    approved = serializers.IntegerField()
    rejected = serializers.IntegerField()
    total_amount_requested = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount_approved = serializers.DecimalField(max_digits=14, decimal_places=2)


class FundAdjustmentResultSerializer(serializers.Serializer):
    movement = FundMovementSerializer()
    available_balance_before = serializers.DecimalField(max_digits=14, decimal_places=2)
    available_balance_after = serializers.DecimalField(max_digits=14, decimal_places=2)
