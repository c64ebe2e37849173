from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone
from decimal import Decimal
import uuid


class VehicleStatus(models.TextChoices):
    IN_STOCK = 'in_stock', 'In stock'
    SOLD = 'sold', 'Sold'


class Vehicle(models.Model):
    """
    Vehicle bought with pooled member funds.

    Status moves one way, IN_STOCK -> SOLD, and only through a sale settlement.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vehicles'
    )
    vin = models.CharField(max_length=32)
    make = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1900), MaxValueValidator(2100)]
    )
    purchase_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    purchase_date = models.DateField(default=timezone.localdate)
    status = models.CharField(
        max_length=20,
        choices=VehicleStatus.choices,
        default=VehicleStatus.IN_STOCK,
    )
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicles'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['member', 'vin'],
                name='unique_vehicle_vin_per_member',
            ),
            models.CheckConstraint(
                condition=Q(purchase_price__gte=0),
                name='vehicle_purchase_price_non_negative',
            ),
        ]
        indexes = [
            models.Index(fields=['member', 'status'], name='vehicles_member_status_idx'),
        ]

    def __str__(self):
        return f"{self.year} {self.make} {self.model} ({self.vin})".replace('  ', ' ')

    @property
    def is_sold(self):
        return self.status == VehicleStatus.SOLD


class AdditionalExpense(models.Model):
    """Ad-hoc cost recorded against a vehicle (repairs, transport, fees)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vehicle = models.ForeignKey(
        Vehicle,
        on_delete=models.CASCADE,
        related_name='expenses'
    )
    # Owner of the vehicle when the expense was recorded
    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='vehicle_expenses'
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.CharField(max_length=255)
    expense_date = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vehicle_expenses'
        ordering = ['-expense_date', '-created_at']
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='vehicle_expense_amount_positive',
            ),
        ]

    def __str__(self):
        return f"{self.description}: {self.amount}"
