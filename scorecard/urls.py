"""
SCORECARD App URLs
"""

from django.urls import path

from .views import EmployeePerformanceView, ScorecardImportView, ScoreCardRemarksView

urlpatterns = [
    path('employee-performance/', EmployeePerformanceView.as_view(), name='employee-performance'),
    path('import/', ScorecardImportView.as_view(), name='scorecard-import'),
    path('remarks/', ScoreCardRemarksView.as_view(), name='scorecard-remarks'),
]
