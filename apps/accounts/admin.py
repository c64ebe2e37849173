from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count

from .models import User, UserRole


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Members and administrators of the pool, with vehicle counts."""

    list_display = [
        'email',
        'display_name',
        'role',
        'vehicle_count',
        'is_active',
        'created_at',
        'last_login',
    ]
    list_filter = ['role', 'is_active', 'is_staff']
    search_fields = ['email', 'display_name', 'phone']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    # Email replaces username
    fieldsets = (
        (None, {'fields': ('email', 'password', 'role')}),
        ('Profile', {'fields': ('display_name', 'phone', 'date_of_birth')}),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    actions = ['deactivate_members']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_vehicle_count=Count('vehicles'))

    @admin.display(description='Vehicles', ordering='_vehicle_count')
    def vehicle_count(self, obj):
        return obj._vehicle_count

    @admin.action(description='Deactivate selected members')
    def deactivate_members(self, request, queryset):
        """Admin accounts are left untouched."""
        count = queryset.filter(role=UserRole.MEMBER).update(is_active=False)
        self.message_user(request, f'Deactivated {count} member(s).')
