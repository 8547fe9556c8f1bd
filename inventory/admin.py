"""
Django Admin configuration for INVENTORY app.
"""

from django.contrib import admin

from .models import Supplier, SupplierLocation, Category, Subcategory, Product


class SupplierLocationInline(admin.StackedInline):
    model = SupplierLocation
    extra = 0


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ('vb_id', 'name', 'created_at')
    search_fields = ('vb_id', 'name')
    inlines = [SupplierLocationInline]


class SubcategoryInline(admin.TabularInline):
    model = Subcategory
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_on_website')
    list_filter = ('is_on_website',)
    search_fields = ('name',)
    inlines = [SubcategoryInline]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('vb_id', 'name', 'category', 'sale_price', 'is_on_website')
    list_filter = ('is_on_website', 'category')
    search_fields = ('vb_id', 'name')
