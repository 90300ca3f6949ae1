import uuid

from django.db import models
from bizos.core.models import Profile
from bizos.businesses.models import BusinessAccount


class Document(models.Model):
    """Knowledge base article"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(BusinessAccount, on_delete=models.CASCADE, related_name='documents')
    title = models.CharField(max_length=300)
    content = models.TextField(blank=True, default='')
    tags = models.JSONField(default=list, blank=True)
    created_by = models.ForeignKey(Profile, on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title

    class Meta:
        db_table = 'documents'
        ordering = ['-updated_at']
