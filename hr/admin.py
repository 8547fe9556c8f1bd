"""
Django Admin configuration for HR app.
"""

import csv
from django.contrib import admin, messages
from django.http import HttpResponse
from django.shortcuts import render, redirect
from django.urls import path

from core.utils import read_csv_rows
from .models import Employee, EmployeeSchedule, ScheduleMessageStatus, ScheduleConfirmation
from .services import EmployeeImporter


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('first_name', 'last_name', 'email', 'transporter_id', 'type', 'status', 'hired_date')
    list_filter = ('status', 'type', 'gender')
    search_fields = ('first_name', 'last_name', 'email', 'transporter_id', 'phone_number')
    ordering = ('first_name',)
    actions = ['export_employees_csv']
    change_list_template = 'admin/hr/employee/change_list.html'

    def get_urls(self):
        urls = super().get_urls()
        custom_urls = [
            path('import-csv/', self.admin_site.admin_view(self.import_csv), name='hr_employee_import_csv'),
        ]
        return custom_urls + urls

    def import_csv(self, request):
        """Upsert employees from an uploaded CSV (keyed by email)."""
        if request.method == 'POST' and request.FILES.get('csv_file'):
            rows = read_csv_rows(request.FILES['csv_file'])
            result = EmployeeImporter().run(rows)
            messages.success(
                request,
                f"✅ Import done: {result['count']} written, {result['matched']} updated, "
                f"{result['skipped']} skipped (no email)."
            )
            return redirect('..')

        return render(request, 'admin/csv_import.html', {
            'title': 'Import employees from CSV',
            'opts': self.model._meta,
        })

    @admin.action(description="📥 Export selected employees to CSV")
    def export_employees_csv(self, request, queryset):
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="employees.csv"'
        response.write('\ufeff')  # BOM for Excel UTF-8

        writer = csv.writer(response)
        writer.writerow([
            'firstName', 'lastName', 'email', 'phoneNumber', 'transporterId',
            'badgeNumber', 'type', 'status', 'hiredDate'
        ])
        for employee in queryset:
            writer.writerow([
                employee.first_name,
                employee.last_name,
                employee.email,
                employee.phone_number,
                employee.transporter_id,
                employee.badge_number,
                employee.type,
                employee.status,
                employee.hired_date.isoformat() if employee.hired_date else '',
            ])
        return response


class ScheduleMessageStatusInline(admin.TabularInline):
    model = ScheduleMessageStatus
    extra = 0
    readonly_fields = ('channel', 'status', 'created_by', 'message_log', 'created_at')


@admin.register(EmployeeSchedule)
class EmployeeScheduleAdmin(admin.ModelAdmin):
    list_display = ('transporter_id', 'date', 'week_day', 'year_week', 'type', 'start_time', 'van')
    list_filter = ('year_week', 'type', 'week_day')
    search_fields = ('transporter_id',)
    inlines = [ScheduleMessageStatusInline]


@admin.register(ScheduleConfirmation)
class ScheduleConfirmationAdmin(admin.ModelAdmin):
    list_display = ('schedule', 'message_type', 'status', 'expires_at', 'confirmed_at', 'change_requested_at')
    list_filter = ('status', 'message_type')
    search_fields = ('schedule__transporter_id', 'token')
    readonly_fields = ('token', 'created_at')
    raw_id_fields = ('schedule', 'message_log')
