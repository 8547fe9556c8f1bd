"""
SHIPMENTS App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PurchaseOrderViewSet, TrackerView, ContainerRefreshView, RefreshAllView

router = DefaultRouter()
router.register(r'purchase-orders', PurchaseOrderViewSet, basename='purchase-order')

urlpatterns = [
    path('tracker/', TrackerView.as_view(), name='shipment-tracker'),
    path('refresh/', ContainerRefreshView.as_view(), name='shipment-refresh'),
    path('refresh-all/', RefreshAllView.as_view(), name='shipment-refresh-all'),
    path('', include(router.urls)),
]
