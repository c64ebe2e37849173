from django.contrib import admin
from .models import SaleSettlement


@admin.register(SaleSettlement)
class SaleSettlementAdmin(admin.ModelAdmin):
    """Settlements are immutable; the admin only displays them."""

    list_display = ['vin', 'model', 'member', 'sold_price', 'profit', 'franchise_fee_amount', 'net_profit', 'sold_date']
    list_filter = ['sold_date']
    search_fields = ['vin', 'model', 'member__email']
    date_hierarchy = 'sold_date'

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
