"""
Core App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

from .views import AppUserViewSet, AppRoleViewSet, NotificationViewSet

router = DefaultRouter()
router.register(r'users', AppUserViewSet, basename='user')
router.register(r'roles', AppRoleViewSet, basename='role')
router.register(r'notifications', NotificationViewSet, basename='notification')

urlpatterns = [
    # JWT Authentication
    path('auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Router URLs
    path('', include(router.urls)),
]
