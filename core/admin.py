"""
Django Admin configuration for CORE app.
"""

import csv
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.http import HttpResponse

from .models import AppUser, AppRole, Notification


@admin.register(AppUser)
class AppUserAdmin(BaseUserAdmin):
    """Custom admin for AppUser with email-based auth."""

    list_display = ('email', 'name', 'app_role', 'designation', 'is_active', 'date_joined')
    list_filter = ('app_role', 'is_active', 'is_staff', 'is_on_website')
    search_fields = ('email', 'name', 'phone')
    ordering = ('name',)

    fieldsets = (
        (None, {
            'fields': ('email', 'password')
        }),
        ('Profile', {
            'fields': ('name', 'phone', 'address', 'designation', 'bio',
                       'serial_no', 'location', 'profile_picture', 'signature')
        }),
        ('Access', {
            'fields': ('app_role', 'is_on_website', 'is_active', 'is_staff', 'is_superuser')
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'app_role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('date_joined',)
    actions = ['export_users_csv']

    @admin.action(description="📥 Export selected users to CSV")
    def export_users_csv(self, request, queryset):
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="symx_users.csv"'
        response.write('\ufeff')  # BOM for Excel UTF-8

        writer = csv.writer(response)
        writer.writerow(['Email', 'Name', 'Role', 'Designation', 'Phone', 'Active', 'Joined'])
        for user in queryset:
            writer.writerow([
                user.email,
                user.name,
                user.app_role,
                user.designation,
                user.phone,
                'Yes' if user.is_active else 'No',
                user.date_joined.strftime('%m/%d/%Y %H:%M'),
            ])
        return response


@admin.register(AppRole)
class AppRoleAdmin(admin.ModelAdmin):
    list_display = ('name', 'description', 'updated_at')
    search_fields = ('name',)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('title', 'type', 'read', 'related_id', 'created_at')
    list_filter = ('type', 'read')
    search_fields = ('title', 'message', 'related_id')
    actions = ['mark_as_read']

    @admin.action(description="✅ Mark as read")
    def mark_as_read(self, request, queryset):
        updated = queryset.update(read=True)
        self.message_user(request, f"{updated} notification(s) marked as read.")
