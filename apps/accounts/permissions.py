from rest_framework import permissions


class IsAdmin(permissions.BasePermission):
    """
    Permission: User must have the admin role.
    """

    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_admin)


class IsMember(permissions.BasePermission):
    """
    Permission: User must have the member role.
    """

    message = 'Only members can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_member)
