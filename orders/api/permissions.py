"""Orders API permissions.

Order intake and lookup by order id are public; everything else on the
orders and stats endpoints is reserved for shop staff.
"""

from rest_framework.permissions import BasePermission


class IsAdminStaff(BasePermission):
    """Allows access only to authenticated staff (admin) users."""

    message = "Admin access required."

    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated and request.user.is_staff
        )
