import uuid

from django.db import models
from bizos.businesses.models import BusinessAccount


class Contact(models.Model):
    """Customer, lead or prospect tracked in the CRM"""
    STATUS_CHOICES = [
        ('lead', 'Lead'),
        ('customer', 'Customer'),
        ('prospect', 'Prospect'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(BusinessAccount, on_delete=models.CASCADE, related_name='contacts')
    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True, default='')
    company = models.CharField(max_length=200, blank=True, default='')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='lead')
    value = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.status})"

    class Meta:
        db_table = 'contacts'
        ordering = ['-created_at']
