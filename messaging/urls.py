"""
MESSAGING App URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    TemplateListView, TemplateDetailView, PhoneNumbersView, RecipientsView,
    SendMessageView, MessageLogViewSet, OpenPhoneWebhookView,
)

router = DefaultRouter()
router.register(r'logs', MessageLogViewSet, basename='message-log')

urlpatterns = [
    path('templates/', TemplateListView.as_view(), name='messaging-templates'),
    path('templates/<str:template_type>/', TemplateDetailView.as_view(), name='messaging-template-detail'),
    path('phone-numbers/', PhoneNumbersView.as_view(), name='messaging-phone-numbers'),
    path('employees/', RecipientsView.as_view(), name='messaging-recipients'),
    path('send/', SendMessageView.as_view(), name='messaging-send'),
    path('webhook/', OpenPhoneWebhookView.as_view(), name='messaging-webhook'),
    path('', include(router.urls)),
]
