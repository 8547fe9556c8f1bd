"""
Core App Permissions - role/module access checks
"""

from rest_framework import permissions


# HTTP method → module action
METHOD_ACTIONS = {
    'GET': 'view',
    'HEAD': 'view',
    'OPTIONS': 'view',
    'POST': 'create',
    'PUT': 'edit',
    'PATCH': 'edit',
    'DELETE': 'delete',
}


class IsAdminUser(permissions.BasePermission):
    """Permission for Super Admin users only."""

    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_super_admin


class HasModulePermission(permissions.BasePermission):
    """
    Grant access when the user's role allows the view's module.

    Views declare `module_name` and may map ViewSet actions to module
    actions through `module_actions` (e.g. {'export': 'download'}).
    """

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False

        module = getattr(view, 'module_name', None)
        if not module:
            return True

        action = getattr(view, 'module_actions', {}).get(getattr(view, 'action', None))
        if action is None:
            action = METHOD_ACTIONS.get(request.method, 'view')
        return request.user.has_module_access(module, action)
