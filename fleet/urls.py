"""
FLEET App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    VehicleViewSet, VehicleSlotViewSet, VehicleRepairViewSet, VehicleActivityLogViewSet,
    VehicleInspectionViewSet, VehicleRentalAgreementViewSet, FleetDashboardView,
)

router = DefaultRouter()
router.register(r'vehicles', VehicleViewSet, basename='vehicle')
router.register(r'slots', VehicleSlotViewSet, basename='vehicle-slot')
router.register(r'repairs', VehicleRepairViewSet, basename='vehicle-repair')
router.register(r'activity', VehicleActivityLogViewSet, basename='vehicle-activity')
router.register(r'inspections', VehicleInspectionViewSet, basename='vehicle-inspection')
router.register(r'rentals', VehicleRentalAgreementViewSet, basename='vehicle-rental')

urlpatterns = [
    path('dashboard/', FleetDashboardView.as_view(), name='fleet-dashboard'),
    path('', include(router.urls)),
]
