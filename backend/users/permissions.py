from rest_framework import permissions


class IsKitchenStaff(permissions.BasePermission):
    """
    Allows access to kitchen staff and admins only.
    """

    message = "Kitchen staff access required."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_kitchen_staff)
