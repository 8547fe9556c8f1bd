"""
REPORTS App - URL Configuration
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('scorecard/<str:week>/<str:transporter_id>/',
         views.DriverScorecardReportView.as_view(),
         name='driver-scorecard'),
]
