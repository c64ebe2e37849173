from django.conf import settings
from django.db import models
import uuid

from .exceptions import ImmutableSettlementError


class SaleSettlement(models.Model):
    """
    Financial outcome of a vehicle sale, frozen at the moment of sale.

    Vehicle attributes, expenses total and the franchise fee percentage are
    copied in, so later edits to the vehicle or the fee policy never change
    a recorded result. Rows are written once and never updated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    # Unique: at most one settlement per vehicle
    vehicle = models.OneToOneField(
        'vehicles.Vehicle',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='settlement'
    )
    member = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sale_settlements'
    )

    sold_price = models.DecimalField(max_digits=12, decimal_places=2)
    sold_date = models.DateField()

    # Snapshot of the vehicle at sale time
    vin = models.CharField(max_length=32)
    make = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100)
    year = models.PositiveSmallIntegerField()
    purchase_price = models.DecimalField(max_digits=12, decimal_places=2)
    purchase_date = models.DateField()
    additional_expenses = models.DecimalField(max_digits=12, decimal_places=2)

    # Results
    profit = models.DecimalField(max_digits=12, decimal_places=2)
    franchise_fee_percentage = models.DecimalField(max_digits=7, decimal_places=4)
    franchise_fee_amount = models.DecimalField(max_digits=12, decimal_places=2)
    net_profit = models.DecimalField(max_digits=12, decimal_places=2)

    settled_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='settlements_recorded'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'sale_settlements'
        ordering = ['-sold_date', '-created_at']
        indexes = [
            models.Index(fields=['member', 'sold_date'], name='sale_settl_member_date_idx'),
        ]

    def __str__(self):
        return f"{self.year} {self.model} ({self.vin}) sold for {self.sold_price}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableSettlementError("Sale settlements cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableSettlementError("Sale settlements cannot be deleted")

    @property
    def total_cost(self):
        return self.purchase_price + self.additional_expenses
