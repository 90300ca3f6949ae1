import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone
from bizos.core.models import Profile
from bizos.businesses.models import BusinessAccount


class ChatGroup(models.Model):
    """Team chat group inside a business"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    business = models.ForeignKey(BusinessAccount, on_delete=models.CASCADE, related_name='chat_groups')
    created_by = models.ForeignKey(Profile, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_chat_groups')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def is_member(self, profile):
        return self.members.filter(user=profile).exists()

    def is_admin(self, profile):
        return self.members.filter(user=profile, is_admin=True).exists()

    class Meta:
        db_table = 'chat_groups'
        ordering = ['created_at']


class GroupMember(models.Model):
    """Membership of a profile in a chat group"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(ChatGroup, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='group_memberships')
    joined_at = models.DateTimeField(auto_now_add=True)
    is_admin = models.BooleanField(default=False)

    def __str__(self):
        return f"{self.user} in {self.group}"

    class Meta:
        db_table = 'group_members'
        ordering = ['joined_at']
        constraints = [
            models.UniqueConstraint(fields=['group', 'user'], name='unique_group_member'),
        ]


class GroupInvitation(models.Model):
    """Shareable code granting membership, limited by expiry and use count"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(ChatGroup, on_delete=models.CASCADE, related_name='invitations')
    created_by = models.ForeignKey(Profile, on_delete=models.SET_NULL, null=True, blank=True, related_name='created_invitations')
    invitation_code = models.CharField(max_length=64, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    current_uses = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.invitation_code

    def invalid_reason(self, now=None):
        """Why the invitation cannot be used right now, or None when it can"""
        now = now or timezone.now()
        if not self.is_active:
            return 'This invitation link has been deactivated'
        if self.expires_at and self.expires_at < now:
            return 'This invitation link has expired'
        if self.max_uses and self.current_uses >= self.max_uses:
            return 'This invitation link has reached its usage limit'
        return None

    @property
    def is_valid(self):
        return self.invalid_reason() is None

    class Meta:
        db_table = 'group_invitations'
        ordering = ['-created_at']


class ChatMessage(models.Model):
    """Message posted to a chat group"""
    MESSAGE_TYPE_CHOICES = [
        ('text', 'Text'),
        ('image', 'Image'),
        ('file', 'File'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(ChatGroup, on_delete=models.CASCADE, related_name='messages')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='chat_messages')
    content = models.TextField()
    message_type = models.CharField(max_length=20, choices=MESSAGE_TYPE_CHOICES, default='text')
    file_url = models.URLField(max_length=1000, blank=True, null=True)
    file_name = models.CharField(max_length=255, blank=True, null=True)
    reply_to = models.ForeignKey('self', on_delete=models.SET_NULL, null=True, blank=True, related_name='replies')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user} - {self.content[:40]}"

    class Meta:
        db_table = 'chat_messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['group', '-created_at'], name='chat_msg_group_created_idx'),
        ]


class TypingIndicatorQuerySet(models.QuerySet):
    def active(self, now=None):
        """Rows refreshed within the typing TTL"""
        now = now or timezone.now()
        cutoff = now - timedelta(seconds=settings.TYPING_INDICATOR_TTL_SECONDS)
        return self.filter(last_typing__gte=cutoff)

    def stale(self, now=None):
        now = now or timezone.now()
        cutoff = now - timedelta(seconds=settings.TYPING_INDICATOR_TTL_SECONDS)
        return self.filter(last_typing__lt=cutoff)


class TypingIndicator(models.Model):
    """Last time a user typed in a group; recent rows mean "is typing" """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(ChatGroup, on_delete=models.CASCADE, related_name='typing_indicators')
    user = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='typing_indicators')
    last_typing = models.DateTimeField(default=timezone.now)

    objects = TypingIndicatorQuerySet.as_manager()

    def __str__(self):
        return f"{self.user} typing in {self.group}"

    class Meta:
        db_table = 'typing_indicators'
        ordering = ['-last_typing']
        constraints = [
            models.UniqueConstraint(fields=['group', 'user'], name='unique_typing_indicator'),
        ]
