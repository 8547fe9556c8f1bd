"""
CORE App - Console users, roles and notifications

Handles: AppUsers (email login), AppRoles (module permissions), Notifications
"""

import uuid
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


SUPER_ADMIN_ROLE = 'Super Admin'

MODULE_ACTIONS = ('view', 'create', 'edit', 'delete', 'approve', 'download')

# Console sections guarded by HasModulePermission (views' module_name)
CONSOLE_MODULES = (
    'HR', 'Schedules', 'Fleet', 'Suppliers', 'Categories', 'Products',
    'Shipments', 'Messaging', 'Scorecard',
)


class AppUserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('app_role', SUPER_ADMIN_ROLE)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class AppUser(AbstractBaseUser, PermissionsMixin):
    """
    Console user (owner, managers, dispatchers).

    Access to each console module is resolved through the role named in
    app_role; see AppRole.permissions.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, verbose_name="Email")
    name = models.CharField(max_length=150, blank=True, verbose_name="Full name")
    phone = models.CharField(max_length=30, blank=True, verbose_name="Phone")
    address = models.CharField(max_length=255, blank=True, verbose_name="Address")
    serial_no = models.CharField(max_length=50, blank=True, verbose_name="Serial number")
    signature = models.TextField(blank=True, verbose_name="Signature")
    app_role = models.CharField(max_length=100, default='Manager', verbose_name="Role")
    designation = models.CharField(max_length=100, blank=True, verbose_name="Designation")
    bio = models.TextField(blank=True, verbose_name="Bio")
    profile_picture = models.URLField(max_length=500, blank=True, verbose_name="Profile picture")
    location = models.CharField(max_length=150, blank=True, verbose_name="Location")
    is_on_website = models.BooleanField(default=False, verbose_name="Shown on website")

    is_active = models.BooleanField(default=True, verbose_name="Active")
    is_staff = models.BooleanField(default=False, verbose_name="Staff")
    date_joined = models.DateTimeField(default=timezone.now, verbose_name="Joined")

    objects = AppUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = "Console user"
        verbose_name_plural = "Console users"
        ordering = ['name', 'email']

    def __str__(self):
        return f"{self.name or self.email} ({self.app_role})"

    @property
    def is_super_admin(self) -> bool:
        return self.is_superuser or self.app_role == SUPER_ADMIN_ROLE

    def has_module_access(self, module: str, action: str = 'view') -> bool:
        """Check a module/action pair against the user's role."""
        if not self.is_active:
            return False
        if self.is_super_admin:
            return True
        role = AppRole.objects.filter(name=self.app_role).first()
        if role is None:
            return False
        return role.allows(module, action)

    def viewable_modules(self) -> list:
        """Console modules the user may open."""
        if not self.is_active:
            return []
        if self.is_super_admin:
            return list(CONSOLE_MODULES)
        role = AppRole.objects.filter(name=self.app_role).first()
        if role is None:
            return []
        return [module for module in CONSOLE_MODULES if role.allows(module, 'view')]


class AppRole(models.Model):
    """
    Named role with per-module permissions.

    permissions is a list of:
        {"module": "Fleet", "actions": {"view": true, "edit": false, ...},
         "field_scope": {...}}
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True, verbose_name="Name")
    description = models.TextField(blank=True, verbose_name="Description")
    permissions = models.JSONField(default=list, blank=True, verbose_name="Permissions")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Role"
        verbose_name_plural = "Roles"
        ordering = ['name']

    def __str__(self):
        return self.name

    def allows(self, module: str, action: str = 'view') -> bool:
        module_key = (module or '').strip().lower()
        for entry in self.permissions or []:
            if (entry.get('module') or '').strip().lower() != module_key:
                continue
            return bool((entry.get('actions') or {}).get(action, False))
        return False


class NotificationType(models.TextChoices):
    INFO = 'info', 'Info'
    SUCCESS = 'success', 'Success'
    WARNING = 'warning', 'Warning'
    ERROR = 'error', 'Error'


class Notification(models.Model):
    """Console-wide notification (shipment updates, import results...)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, verbose_name="Title")
    message = models.TextField(verbose_name="Message")
    type = models.CharField(
        max_length=10,
        choices=NotificationType.choices,
        default=NotificationType.INFO,
        verbose_name="Type"
    )
    read = models.BooleanField(default=False, verbose_name="Read")
    related_id = models.CharField(max_length=100, blank=True, verbose_name="Related id")
    link = models.CharField(max_length=255, blank=True, verbose_name="Link")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ['-created_at']

    def __str__(self):
        return self.title
