from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from decimal import Decimal
import uuid


class MovementKind(models.TextChoices):
    DEPOSIT = 'deposit', 'Deposit'
    WITHDRAWAL = 'withdrawal', 'Withdrawal'


class MovementStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class FundMovement(models.Model):
    """
    Ledger entry moving money into or out of a member's pool account.

    Amount is always positive; kind gives the direction. Only the review
    transition pending -> approved/rejected ever changes a row.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='fund_movements'
    )
    kind = models.CharField(
        max_length=20,
        choices=MovementKind.choices,
        default=MovementKind.DEPOSIT,
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    status = models.CharField(
        max_length=20,
        choices=MovementStatus.choices,
        default=MovementStatus.PENDING,
    )
    note = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fund_movements_created'
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fund_movements_reviewed'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'fund_movements'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='fund_movement_amount_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['member', 'status'], name='fund_movem_member_status_idx'),
            models.Index(fields=['status', 'created_at'], name='fund_movem_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.get_kind_display()} {self.amount} ({self.status})"

    @property
    def signed_amount(self):
        """Amount with sign derived from kind."""
        return -self.amount if self.kind == MovementKind.WITHDRAWAL else self.amount

    @property
    def is_pending(self):
        return self.status == MovementStatus.PENDING
