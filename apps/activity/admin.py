from django.contrib import admin
from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    """Read-only admin for the audit trail."""

    list_display = ['activity_type', 'resource_type', 'resource_id', 'actor', 'created_at']
    list_filter = ['activity_type', 'resource_type', 'created_at']
    search_fields = ['resource_id', 'actor__email']
    readonly_fields = ['actor', 'activity_type', 'resource_type', 'resource_id', 'metadata', 'created_at']
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
