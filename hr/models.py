"""
HR App - Employees and weekly schedules

Handles: Employees (drivers, dispatchers), EmployeeSchedules (one row per
driver per day), ScheduleMessageStatus (SMS lifecycle per schedule row),
ScheduleConfirmation (public confirm / change-request links)
"""

import secrets
import uuid
from django.db import models
from django.utils import timezone


class EmployeeStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'
    TERMINATED = 'Terminated', 'Terminated'
    RESIGNED = 'Resigned', 'Resigned'


DAY_FIELDS = ('sunday', 'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday')


class Employee(models.Model):
    """
    Delivery associate or staff member.

    transporter_id links the employee to the weekly scorecard exports and
    to EmployeeSchedule rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Identity
    first_name = models.CharField(max_length=100, verbose_name="First name")
    last_name = models.CharField(max_length=100, blank=True, verbose_name="Last name")
    ee_code = models.CharField(max_length=50, blank=True, verbose_name="EE code")
    transporter_id = models.CharField(max_length=50, blank=True, db_index=True, verbose_name="Transporter ID")
    badge_number = models.CharField(max_length=50, blank=True, verbose_name="Badge number")
    gender = models.CharField(max_length=20, blank=True, verbose_name="Gender")
    type = models.CharField(max_length=50, blank=True, verbose_name="Employee type")
    email = models.EmailField(unique=True, verbose_name="Email")
    phone_number = models.CharField(max_length=30, blank=True, verbose_name="Phone number")

    # Address
    street_address = models.CharField(max_length=255, blank=True, verbose_name="Street address")
    city = models.CharField(max_length=100, blank=True, verbose_name="City")
    state = models.CharField(max_length=50, blank=True, verbose_name="State")
    zip_code = models.CharField(max_length=20, blank=True, verbose_name="ZIP code")

    # Employment
    hired_date = models.DateField(null=True, blank=True, verbose_name="Hired date")
    dob = models.DateField(null=True, blank=True, verbose_name="Date of birth")
    hourly_status = models.CharField(max_length=50, blank=True, verbose_name="Hourly status")
    rate = models.FloatField(null=True, blank=True, verbose_name="Hourly rate")
    gas_card_pin = models.CharField(max_length=20, blank=True, verbose_name="Gas card PIN")
    dl_expiration = models.DateField(null=True, blank=True, verbose_name="Driver license expiration")
    motor_vehicle_report_date = models.DateField(null=True, blank=True, verbose_name="MVR date")
    profile_image = models.URLField(max_length=500, blank=True, verbose_name="Profile image")
    status = models.CharField(max_length=20, default=EmployeeStatus.ACTIVE, db_index=True, verbose_name="Status")

    # Default weekly availability
    sunday = models.CharField(max_length=20, default='OFF')
    monday = models.CharField(max_length=20, default='OFF')
    tuesday = models.CharField(max_length=20, default='OFF')
    wednesday = models.CharField(max_length=20, default='OFF')
    thursday = models.CharField(max_length=20, default='OFF')
    friday = models.CharField(max_length=20, default='OFF')
    saturday = models.CharField(max_length=20, default='OFF')

    default_van_1 = models.CharField(max_length=50, blank=True, verbose_name="Default van 1")
    default_van_2 = models.CharField(max_length=50, blank=True, verbose_name="Default van 2")
    default_van_3 = models.CharField(max_length=50, blank=True, verbose_name="Default van 3")
    schedule_notes = models.TextField(blank=True, verbose_name="Schedule notes")

    # Offboarding
    termination_date = models.DateField(null=True, blank=True, verbose_name="Termination date")
    termination_reason = models.CharField(max_length=255, blank=True, verbose_name="Termination reason")
    resignation_date = models.DateField(null=True, blank=True, verbose_name="Resignation date")
    resignation_type = models.CharField(max_length=100, blank=True, verbose_name="Resignation type")
    eligibility = models.BooleanField(default=False, verbose_name="Eligible for rehire")
    last_date_worked = models.DateField(null=True, blank=True, verbose_name="Last date worked")
    final_check_issued = models.BooleanField(default=False, verbose_name="Final check issued")
    final_check = models.CharField(max_length=100, blank=True, verbose_name="Final check")
    paycom_offboarded = models.BooleanField(default=False, verbose_name="Offboarded in Paycom")
    amazon_offboarded = models.BooleanField(default=False, verbose_name="Offboarded in Amazon")

    # Documents (stored file URLs)
    offer_letter_file = models.URLField(max_length=500, blank=True)
    handbook_file = models.URLField(max_length=500, blank=True)
    drivers_license_file = models.URLField(max_length=500, blank=True)
    i9_file = models.URLField(max_length=500, blank=True)
    drug_test_file = models.URLField(max_length=500, blank=True)
    final_check_file = models.URLField(max_length=500, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Employee"
        verbose_name_plural = "Employees"
        ordering = ['first_name', 'last_name']

    def __str__(self):
        return f"{self.full_name} ({self.transporter_id or self.email})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class EmployeeSchedule(models.Model):
    """One schedule row per transporter per day (weeks run Sunday–Saturday)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    employee = models.ForeignKey(
        Employee,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='schedules'
    )
    transporter_id = models.CharField(max_length=50, db_index=True, verbose_name="Transporter ID")
    week_day = models.CharField(max_length=10, verbose_name="Day of week")
    year_week = models.CharField(max_length=8, db_index=True, verbose_name="Week (YYYY-Www)")
    date = models.DateField(verbose_name="Date")

    status = models.CharField(max_length=50, blank=True)
    type = models.CharField(max_length=50, blank=True, verbose_name="Shift type")
    sub_type = models.CharField(max_length=50, blank=True)
    training_day = models.CharField(max_length=50, blank=True)
    start_time = models.CharField(max_length=20, blank=True, verbose_name="Start time")
    day_before_confirmation = models.CharField(max_length=50, blank=True)
    day_of_confirmation = models.CharField(max_length=50, blank=True)
    week_confirmation = models.CharField(max_length=50, blank=True)
    van = models.CharField(max_length=50, blank=True)
    note = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Schedule entry"
        verbose_name_plural = "Schedule entries"
        ordering = ['date', 'transporter_id']
        constraints = [
            models.UniqueConstraint(fields=['transporter_id', 'date'], name='unique_schedule_per_day'),
        ]

    def __str__(self):
        return f"{self.transporter_id} {self.date} {self.type}"


class ScheduleChannel(models.TextChoices):
    """Messaging panel channels tracked on schedule rows."""
    FUTURE_SHIFT = 'future_shift', 'Future shift'
    SHIFT_NOTIFICATION = 'shift_notification', 'Shift notification'
    OFF_TODAY_SCHEDULE_TOM = 'off_today_schedule_tom', 'Off today, scheduled tomorrow'
    WEEK_SCHEDULE = 'week_schedule', 'Week schedule'
    ROUTE_ITINERARY = 'route_itinerary', 'Route itinerary'


class MessageStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SENT = 'sent', 'Sent'
    DELIVERED = 'delivered', 'Delivered'
    RECEIVED = 'received', 'Received'


class ScheduleMessageStatus(models.Model):
    """One entry per messaging lifecycle event on a schedule row."""

    schedule = models.ForeignKey(
        EmployeeSchedule,
        on_delete=models.CASCADE,
        related_name='message_statuses'
    )
    channel = models.CharField(max_length=30, choices=ScheduleChannel.choices)
    status = models.CharField(max_length=20, choices=MessageStatus.choices)
    created_by = models.CharField(max_length=255, default='system')
    message_log = models.ForeignKey(
        'messaging.MessageLog',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='schedule_statuses'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Schedule message status"
        verbose_name_plural = "Schedule message statuses"
        ordering = ['created_at']

    def __str__(self):
        return f"{self.schedule_id} {self.channel}: {self.status}"


def generate_confirmation_token() -> str:
    return secrets.token_hex(24)


class ConfirmationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    CHANGE_REQUESTED = 'change_requested', 'Change requested'


class ScheduleConfirmation(models.Model):
    """
    Public link a driver opens to confirm a shift or ask for a change.

    The token is the only credential; links stop working after expires_at.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    token = models.CharField(max_length=64, unique=True, default=generate_confirmation_token, editable=False)
    schedule = models.ForeignKey(
        EmployeeSchedule,
        on_delete=models.CASCADE,
        related_name='confirmations'
    )
    message_type = models.CharField(max_length=30, verbose_name="Message type")
    message_log = models.ForeignKey(
        'messaging.MessageLog',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='confirmations'
    )

    status = models.CharField(
        max_length=20, choices=ConfirmationStatus.choices, default=ConfirmationStatus.PENDING
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    change_requested_at = models.DateTimeField(null=True, blank=True)
    change_remarks = models.TextField(blank=True)

    expires_at = models.DateTimeField(db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Schedule confirmation"
        verbose_name_plural = "Schedule confirmations"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.schedule} {self.message_type}: {self.status}"

    @property
    def is_expired(self) -> bool:
        return timezone.now() > self.expires_at
