from rest_framework import permissions


class IsBusinessOwner(permissions.BasePermission):
    """
    Only the account owner (role "owner") may call the view. Staff users pass too
    so operators can act from an admin session.
    """
    message = "Only the business owner can perform this action."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, "role", None) == "owner" or user.is_superuser)


class IsOwnerOrReadOnly(permissions.BasePermission):
    """
    Read for every authenticated user; writes only for the business owner.
    """
    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return IsBusinessOwner().has_permission(request, view)
