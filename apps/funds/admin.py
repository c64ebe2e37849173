from django.contrib import admin
from django.utils.html import format_html
from .models import FundMovement, MovementKind, MovementStatus


@admin.register(FundMovement)
class FundMovementAdmin(admin.ModelAdmin):
    """
    Ledger entries are append-only; reviews go through the API so that
    balance checks and audit logging apply.
    """

    list_display = ['member', 'kind_badge', 'amount', 'status_badge', 'created_at', 'reviewed_by']
    list_filter = ['kind', 'status', 'created_at']
    search_fields = ['member__email', 'note']
    date_hierarchy = 'created_at'

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def kind_badge(self, obj):
        color = '#6B8E5E' if obj.kind == MovementKind.DEPOSIT else '#B85C5C'
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_kind_display()
        )
    kind_badge.short_description = 'Kind'
    kind_badge.admin_order_field = 'kind'

    def status_badge(self, obj):
        colors = {
            MovementStatus.PENDING: '#D4A017',
            MovementStatus.APPROVED: '#6B8E5E',
            MovementStatus.REJECTED: '#B85C5C',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#ccc'), obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
