"""
INVENTORY App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import SupplierViewSet, CategoryViewSet, ProductViewSet

router = DefaultRouter()
router.register(r'suppliers', SupplierViewSet, basename='supplier')
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'products', ProductViewSet, basename='product')

urlpatterns = [
    path('', include(router.urls)),
]
