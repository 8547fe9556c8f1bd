"""
Django Admin configuration for SHIPMENTS app.
"""

from django.contrib import admin, messages

from .models import PurchaseOrder, CustomerPO, ShippingLine, TrackingRecord
from .services import TrackingError, refresh_container_tracking


class CustomerPOInline(admin.TabularInline):
    model = CustomerPO
    extra = 0
    fields = ('po_no', 'customer', 'customer_po_no', 'qty_ordered', 'warehouse')


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ('vbpo_no', 'order_type', 'created_at')
    search_fields = ('vbpo_no',)
    list_filter = ('order_type',)
    inlines = [CustomerPOInline]


class TrackingRecordInline(admin.TabularInline):
    model = TrackingRecord
    extra = 0
    readonly_fields = ('data', 'timestamp')
    can_delete = False


@admin.register(ShippingLine)
class ShippingLineAdmin(admin.ModelAdmin):
    list_display = ('spo_no', 'container_no', 'carrier', 'status', 'eta', 'updated_eta')
    list_filter = ('status', 'carrier', 'is_customs_status', 'all_documents_provided')
    search_fields = ('spo_no', 'container_no', 'bol_number', 'customer_po__po_no')
    inlines = [TrackingRecordInline]
    actions = ['refresh_tracking']

    @admin.action(description="Refresh container tracking")
    def refresh_tracking(self, request, queryset):
        containers = set(queryset.exclude(container_no='').values_list('container_no', flat=True))
        for container in sorted(containers):
            try:
                refresh_container_tracking(container)
            except TrackingError as e:
                self.message_user(request, f"{container}: {e}", messages.ERROR)
        self.message_user(request, f"{len(containers)} container(s) refreshed.")


admin.site.register(CustomerPO)
