"""
Core App Views - Console users, roles and notifications API
"""

from rest_framework import viewsets, status, permissions, mixins
from rest_framework.decorators import action
from rest_framework.response import Response
from django.contrib.auth import get_user_model

from .models import AppRole, Notification
from .permissions import IsAdminUser
from .serializers import AppUserSerializer, AppRoleSerializer, NotificationSerializer

User = get_user_model()


class AppUserViewSet(viewsets.ModelViewSet):
    """
    ViewSet for console users (owner / app-users admin).

    - List/Create/Update/Delete: Super Admin only
    - me, permissions: any authenticated user
    """

    queryset = User.objects.all()
    serializer_class = AppUserSerializer
    search_fields = ['name', 'email', 'phone', 'designation']
    filterset_fields = ['app_role', 'is_active']
    ordering_fields = ['name', 'email', 'date_joined']

    def get_permissions(self):
        if self.action in ('me', 'my_permissions'):
            return [permissions.IsAuthenticated()]
        return [IsAdminUser()]

    @action(detail=False, methods=['get'])
    def me(self, request):
        """Get current user profile."""
        serializer = self.get_serializer(request.user)
        return Response(serializer.data)

    @action(detail=False, methods=['get'], url_path='permissions')
    def my_permissions(self, request):
        """Role, raw role permissions and the console modules the caller can view."""
        user = request.user
        role = AppRole.objects.filter(name=user.app_role).first()
        return Response({
            'role': user.app_role,
            'is_super_admin': user.is_super_admin,
            'permissions': role.permissions if role else [],
            'modules': user.viewable_modules(),
        })

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response(
                {'error': 'You cannot delete your own account.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return super().destroy(request, *args, **kwargs)


class AppRoleViewSet(viewsets.ModelViewSet):
    """Roles and their module permissions (Super Admin only)."""

    queryset = AppRole.objects.all()
    serializer_class = AppRoleSerializer
    permission_classes = [IsAdminUser]
    pagination_class = None
    search_fields = ['name']


class NotificationViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          mixins.DestroyModelMixin,
                          viewsets.GenericViewSet):
    """Console notifications, newest first."""

    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    filterset_fields = ['read', 'type']

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        notification.read = True
        notification.save(update_fields=['read'])
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        updated = Notification.objects.filter(read=False).update(read=True)
        return Response({'updated': updated})

    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        return Response({'count': Notification.objects.filter(read=False).count()})
