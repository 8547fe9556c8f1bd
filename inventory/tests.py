"""
SYMX Inventory Tests
=====================

Tests for:
1. Suppliers with nested locations (create, replace on update, duplicate vb_id)
2. Categories with subcategories and website toggle
3. Products (unique vb_id, search)
"""

from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AppUser
from inventory.models import Supplier, SupplierLocation, Category, Product


class InventoryAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = AppUser.objects.create_superuser(email='inventory@symx.test', password='pass12345')
        self.client.force_authenticate(user=self.user)


class TestSuppliers(InventoryAPITestCase):

    def create_supplier(self):
        return self.client.post('/api/inventory/suppliers/', {
            'vb_id': 'SUP-1',
            'name': 'Acme Foods',
            'locations': [
                {'vb_id': 'LOC-1', 'location_name': 'Plant A', 'city': 'Fresno'},
                {'vb_id': 'LOC-2', 'location_name': 'Plant B', 'city': 'Modesto'},
            ],
        }, format='json')

    def test_create_with_locations(self):
        response = self.create_supplier()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.json()['locations']), 2)
        self.assertEqual(SupplierLocation.objects.count(), 2)

    def test_update_replaces_locations(self):
        supplier_id = self.create_supplier().json()['id']

        response = self.client.patch(f'/api/inventory/suppliers/{supplier_id}/', {
            'locations': [{'vb_id': 'LOC-9', 'location_name': 'Warehouse'}],
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            list(SupplierLocation.objects.values_list('vb_id', flat=True)),
            ['LOC-9'],
        )

    def test_update_without_locations_keeps_them(self):
        supplier_id = self.create_supplier().json()['id']
        self.client.patch(f'/api/inventory/suppliers/{supplier_id}/', {'name': 'Acme'}, format='json')
        self.assertEqual(Supplier.objects.get().name, 'Acme')
        self.assertEqual(SupplierLocation.objects.count(), 2)

    def test_duplicate_vb_id_rejected(self):
        self.create_supplier()
        response = self.client.post('/api/inventory/suppliers/', {'vb_id': 'SUP-1', 'name': 'Other'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('vb_id', response.json())

    def test_search(self):
        self.create_supplier()
        Supplier.objects.create(vb_id='SUP-2', name='Zeta Farms')
        response = self.client.get('/api/inventory/suppliers/', {'search': 'zeta'})
        self.assertEqual(response.json()['count'], 1)


class TestCategories(InventoryAPITestCase):

    def test_create_with_subcategories(self):
        response = self.client.post('/api/inventory/categories/', {
            'name': 'Produce',
            'subcategories': [{'name': 'Citrus', 'icon': 'lemon'}],
        }, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['subcategories'][0]['name'], 'Citrus')

    def test_name_is_unique(self):
        Category.objects.create(name='Produce')
        response = self.client.post('/api/inventory/categories/', {'name': 'Produce'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_toggle_website(self):
        category = Category.objects.create(name='Dairy')

        response = self.client.post(f'/api/inventory/categories/{category.id}/toggle_website/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['is_on_website'])

        self.client.post(f'/api/inventory/categories/{category.id}/toggle_website/')
        category.refresh_from_db()
        self.assertFalse(category.is_on_website)


class TestProducts(InventoryAPITestCase):

    def create_product(self, vb_id='PRD-1', name='Navel Oranges', **extra):
        payload = {'vb_id': vb_id, 'name': name, 'category': 'Produce', 'sale_price': '4.50'}
        payload.update(extra)
        return self.client.post('/api/inventory/products/', payload, format='json')

    def test_create(self):
        response = self.create_product(tags=['citrus'])
        self.assertEqual(response.status_code, 201)
        product = Product.objects.get()
        self.assertEqual(product.vb_id, 'PRD-1')
        self.assertEqual(str(product.sale_price), '4.50')
        self.assertEqual(product.tags, ['citrus'])

    def test_duplicate_vb_id_rejected(self):
        self.create_product()
        response = self.create_product(name='Other')
        self.assertEqual(response.status_code, 400)
        self.assertIn('vb_id', response.json())
        self.assertEqual(Product.objects.count(), 1)

    def test_search_by_name_and_vb_id(self):
        self.create_product()
        self.create_product(vb_id='DRY-7', name='Whole Milk', category='Dairy')

        by_name = self.client.get('/api/inventory/products/', {'search': 'milk'}).json()
        self.assertEqual([p['vb_id'] for p in by_name['results']], ['DRY-7'])

        by_vb_id = self.client.get('/api/inventory/products/', {'search': 'PRD-1'}).json()
        self.assertEqual([p['name'] for p in by_vb_id['results']], ['Navel Oranges'])

    def test_filter_by_category(self):
        self.create_product()
        self.create_product(vb_id='DRY-7', name='Whole Milk', category='Dairy')
        response = self.client.get('/api/inventory/products/', {'category': 'Dairy'})
        self.assertEqual(response.json()['count'], 1)
