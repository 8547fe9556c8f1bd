"""
Core App Serializers - Console users, roles, notifications
"""

from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

from .models import AppRole, Notification, MODULE_ACTIONS

User = get_user_model()


class AppUserSerializer(serializers.ModelSerializer):
    """Serializer for AppUser (read/update)."""

    password = serializers.CharField(
        write_only=True,
        required=False,
        allow_blank=True,
        validators=[validate_password]
    )

    class Meta:
        model = User
        fields = [
            'id', 'email', 'password', 'name', 'phone', 'address', 'serial_no',
            'signature', 'app_role', 'designation', 'bio', 'profile_picture',
            'location', 'is_on_website', 'is_active', 'date_joined'
        ]
        read_only_fields = ['id', 'date_joined']

    def validate_email(self, value):
        value = value.lower()
        qs = User.objects.filter(email=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def create(self, validated_data):
        password = validated_data.pop('password', None)
        return User.objects.create_user(password=password or None, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class AppRoleSerializer(serializers.ModelSerializer):
    """Serializer for roles; validates the permissions structure."""

    user_count = serializers.SerializerMethodField()

    class Meta:
        model = AppRole
        fields = ['id', 'name', 'description', 'permissions', 'user_count', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_user_count(self, obj):
        return User.objects.filter(app_role=obj.name).count()

    def validate_permissions(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("permissions must be a list.")
        cleaned = []
        for entry in value:
            if not isinstance(entry, dict) or not entry.get('module'):
                raise serializers.ValidationError("Each permission needs a module.")
            actions = entry.get('actions') or {}
            cleaned.append({
                'module': entry['module'],
                'actions': {action: bool(actions.get(action, False)) for action in MODULE_ACTIONS},
                'field_scope': entry.get('field_scope') or {},
            })
        return cleaned


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ['id', 'title', 'message', 'type', 'read', 'related_id', 'link', 'created_at']
        read_only_fields = ['id', 'created_at']
