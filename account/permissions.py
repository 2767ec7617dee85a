from rest_framework.permissions import SAFE_METHODS, BasePermission

from account.roles import Role, role_at_least


class MinimumRolePermission(BasePermission):
    minimum_role = Role.ADMIN

    def has_permission(self, request, view):
        return role_at_least(request.user, self.minimum_role)


class IsStaffOrHigher(MinimumRolePermission):
    minimum_role = Role.STAFF


class IsManagerOrHigher(MinimumRolePermission):
    minimum_role = Role.MANAGER


class IsAdminRole(MinimumRolePermission):
    minimum_role = Role.ADMIN


class IsManagerOrReadOnly(BasePermission):
    """Anyone may read the catalog; managers and admins may change it."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return role_at_least(request.user, Role.MANAGER)
