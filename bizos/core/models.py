import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Auth identity; everything user-facing hangs off the profile"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class Profile(models.Model):
    """Public profile of a user, keyed by the user's id"""
    ROLE_CHOICES = [
        ('business_owner', 'Business Owner'),
        ('business_manager', 'Business Manager'),
    ]

    user = models.OneToOneField(
        User, on_delete=models.CASCADE, primary_key=True, db_column='id', related_name='profile'
    )
    email = models.EmailField(blank=True, null=True)
    full_name = models.CharField(max_length=255, blank=True, null=True)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='business_manager')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.full_name or self.email or str(self.pk)

    class Meta:
        db_table = 'profiles'


class AuditLog(models.Model):
    """Audit log for membership, invitation and content changes"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('member_add', 'Member Added'),
        ('member_remove', 'Member Removed'),
        ('invitation_create', 'Invitation Created'),
        ('invitation_deactivate', 'Invitation Deactivated'),
        ('invitation_accept', 'Invitation Accepted'),
        ('image_generate', 'Image Generated'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Human-readable name of the object (e.g., group name, business name)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_logs_created_idx'),
            models.Index(fields=['action'], name='audit_logs_action_idx'),
            models.Index(fields=['model_name'], name='audit_logs_model_idx'),
        ]
