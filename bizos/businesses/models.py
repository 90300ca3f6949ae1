import uuid

from django.db import models
from bizos.core.models import Profile


class BusinessAccount(models.Model):
    """Tenant: owns chat groups, generated images and module data"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    owner = models.ForeignKey(Profile, on_delete=models.CASCADE, related_name='business_accounts')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'business_accounts'
        ordering = ['-created_at']
