"""
INVENTORY App Views - Suppliers, categories and products
"""

import logging
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core.permissions import HasModulePermission
from .models import Supplier, Category, Product
from .serializers import SupplierSerializer, CategorySerializer, ProductSerializer

logger = logging.getLogger(__name__)


class SupplierViewSet(viewsets.ModelViewSet):
    queryset = Supplier.objects.prefetch_related('locations')
    serializer_class = SupplierSerializer
    permission_classes = [HasModulePermission]
    module_name = 'Suppliers'
    search_fields = ['name', 'vb_id']


class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.prefetch_related('subcategories')
    serializer_class = CategorySerializer
    permission_classes = [HasModulePermission]
    module_name = 'Categories'
    module_actions = {'toggle_website': 'edit'}
    search_fields = ['name']
    filterset_fields = ['is_on_website']

    @action(detail=True, methods=['post'])
    def toggle_website(self, request, pk=None):
        """Flip the category's website visibility."""
        category = self.get_object()
        category.is_on_website = not category.is_on_website
        category.save(update_fields=['is_on_website', 'updated_at'])
        logger.info(f"[INVENTORY] Category '{category.name}' on website: {category.is_on_website}")
        return Response(self.get_serializer(category).data)


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    permission_classes = [HasModulePermission]
    module_name = 'Products'
    search_fields = ['name', 'vb_id', 'category']
    filterset_fields = ['category', 'is_on_website']
