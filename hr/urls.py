"""
HR App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import EmployeeViewSet, EmployeeScheduleViewSet, PublicConfirmationView

router = DefaultRouter()
router.register(r'employees', EmployeeViewSet, basename='employee')
router.register(r'schedules', EmployeeScheduleViewSet, basename='schedule')

urlpatterns = [
    path('confirm/<str:token>/', PublicConfirmationView.as_view(), name='schedule-confirmation-public'),
    path('', include(router.urls)),
]
