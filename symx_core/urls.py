"""
SYMX Console Main URL Configuration
"""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.health import health_check, readiness_check


# ===========================================
# ADMIN SITE CUSTOMIZATION
# ===========================================
admin.site.site_header = "SYMX Operations Console"
admin.site.site_title = "SYMX Admin"
admin.site.index_title = "DSP Operations"


@api_view(['GET'])
def api_root(request):
    """API Root endpoint with available routes."""
    return Response({
        'name': 'SYMX Console API',
        'version': '1.0.0',
        'endpoints': {
            'auth': {
                'token': '/api/auth/token/',
                'refresh': '/api/auth/token/refresh/',
            },
            'users': '/api/users/',
            'permissions': '/api/users/permissions/',
            'roles': '/api/roles/',
            'notifications': '/api/notifications/',
            'hr': {
                'employees': '/api/hr/employees/',
                'import': '/api/hr/employees/import/',
                'schedules': '/api/hr/schedules/',
                'confirm': '/api/hr/confirm/<token>/',
            },
            'fleet': {
                'dashboard': '/api/fleet/dashboard/',
                'vehicles': '/api/fleet/vehicles/',
                'repairs': '/api/fleet/repairs/',
                'inspections': '/api/fleet/inspections/',
            },
            'inventory': {
                'suppliers': '/api/inventory/suppliers/',
                'categories': '/api/inventory/categories/',
                'products': '/api/inventory/products/',
            },
            'shipments': {
                'purchase_orders': '/api/shipments/purchase-orders/',
                'tracker': '/api/shipments/tracker/',
                'refresh': '/api/shipments/refresh/?container=',
            },
            'messaging': {
                'templates': '/api/messaging/templates/',
                'employees': '/api/messaging/employees/',
                'send': '/api/messaging/send/',
            },
            'scorecard': {
                'employee_performance': '/api/scorecard/employee-performance/',
                'import': '/api/scorecard/import/',
                'remarks': '/api/scorecard/remarks/',
            },
            'docs': '/api/docs/',
        }
    })


urlpatterns = [
    # Health checks (load balancers / Docker)
    path('health/', health_check, name='health'),
    path('health/ready/', readiness_check, name='health-ready'),

    # Admin
    path('admin/', admin.site.urls),

    # API documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='docs'),

    # API Root
    path('api/', api_root, name='api-root'),

    # App URLs
    path('api/', include('core.urls')),
    path('api/hr/', include('hr.urls')),
    path('api/fleet/', include('fleet.urls')),
    path('api/inventory/', include('inventory.urls')),
    path('api/shipments/', include('shipments.urls')),
    path('api/messaging/', include('messaging.urls')),
    path('api/scorecard/', include('scorecard.urls')),

    # PDF Reports
    path('reports/', include('reports.urls')),
]
