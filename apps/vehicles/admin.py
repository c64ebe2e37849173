from django.contrib import admin
from .models import Vehicle, AdditionalExpense


class AdditionalExpenseInline(admin.TabularInline):
    model = AdditionalExpense
    extra = 0
    fields = ['amount', 'description', 'expense_date']


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ['vin', 'make', 'model', 'year', 'member', 'purchase_price', 'status', 'purchase_date']
    list_filter = ['status', 'purchase_date']
    search_fields = ['vin', 'model', 'make', 'member__email']
    # Status changes only through sale settlement
    readonly_fields = ['status', 'created_at', 'updated_at']
    inlines = [AdditionalExpenseInline]
    date_hierarchy = 'purchase_date'


@admin.register(AdditionalExpense)
class AdditionalExpenseAdmin(admin.ModelAdmin):
    list_display = ['vehicle', 'member', 'amount', 'description', 'expense_date']
    list_filter = ['expense_date']
    search_fields = ['description', 'vehicle__vin']
