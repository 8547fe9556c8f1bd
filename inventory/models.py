"""
INVENTORY App - Suppliers, product categories and products
"""

import uuid
from django.db import models


class Supplier(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vb_id = models.CharField(max_length=50, unique=True, verbose_name="VB ID")
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.vb_id})"


class SupplierLocation(models.Model):
    """A supplier site; its vb_id is what shipping lines reference."""

    supplier = models.ForeignKey(Supplier, on_delete=models.CASCADE, related_name='locations')
    vb_id = models.CharField(max_length=50, blank=True, db_index=True, verbose_name="VB ID")
    location_name = models.CharField(max_length=200, blank=True)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)
    zip = models.CharField(max_length=20, blank=True)
    full_address = models.TextField(blank=True)
    website = models.CharField(max_length=255, blank=True)
    fda_reg = models.CharField(max_length=100, blank=True, verbose_name="FDA registration")

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.location_name or self.vb_id


class Category(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    is_on_website = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Categories"
        ordering = ['name']

    def __str__(self):
        return self.name


class Subcategory(models.Model):
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name='subcategories')
    name = models.CharField(max_length=100)
    icon = models.CharField(max_length=100, blank=True)
    is_on_website = models.BooleanField(default=False)

    class Meta:
        verbose_name_plural = "Subcategories"
        ordering = ['id']

    def __str__(self):
        return f"{self.category.name} / {self.name}"


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vb_id = models.CharField(max_length=50, unique=True, verbose_name="VB ID")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    subcategory = models.CharField(max_length=100, blank=True)
    tags = models.JSONField(default=list, blank=True)
    cost_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sale_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    is_on_website = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.vb_id})"
