"""
INVENTORY App Serializers
"""

from django.db import transaction
from rest_framework import serializers

from .models import Supplier, SupplierLocation, Category, Subcategory, Product


class SupplierLocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = SupplierLocation
        exclude = ['supplier']


class SupplierSerializer(serializers.ModelSerializer):
    """Supplier with nested locations; an update replaces the whole list."""

    locations = SupplierLocationSerializer(many=True, required=False)

    class Meta:
        model = Supplier
        fields = ['id', 'vb_id', 'name', 'locations', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    @transaction.atomic
    def create(self, validated_data):
        locations = validated_data.pop('locations', [])
        supplier = Supplier.objects.create(**validated_data)
        self._write_locations(supplier, locations)
        return supplier

    @transaction.atomic
    def update(self, instance, validated_data):
        locations = validated_data.pop('locations', None)
        instance = super().update(instance, validated_data)
        if locations is not None:
            instance.locations.all().delete()
            self._write_locations(instance, locations)
        return instance

    @staticmethod
    def _write_locations(supplier, locations):
        SupplierLocation.objects.bulk_create([
            SupplierLocation(supplier=supplier, **location) for location in locations
        ])


class SubcategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Subcategory
        fields = ['id', 'name', 'icon', 'is_on_website']


class CategorySerializer(serializers.ModelSerializer):
    subcategories = SubcategorySerializer(many=True, required=False)

    class Meta:
        model = Category
        fields = ['id', 'name', 'is_on_website', 'subcategories', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    @transaction.atomic
    def create(self, validated_data):
        subcategories = validated_data.pop('subcategories', [])
        category = Category.objects.create(**validated_data)
        Subcategory.objects.bulk_create([Subcategory(category=category, **s) for s in subcategories])
        return category

    @transaction.atomic
    def update(self, instance, validated_data):
        subcategories = validated_data.pop('subcategories', None)
        instance = super().update(instance, validated_data)
        if subcategories is not None:
            instance.subcategories.all().delete()
            Subcategory.objects.bulk_create([Subcategory(category=instance, **s) for s in subcategories])
        return instance


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']
