import uuid

from django.db import models
from bizos.businesses.models import BusinessAccount


class Website(models.Model):
    """Website builder record; rendering the template happens client-side"""
    TEMPLATE_CHOICES = [
        ('business', 'Business'),
        ('portfolio', 'Portfolio'),
        ('restaurant', 'Restaurant'),
        ('ecommerce', 'E-commerce'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(BusinessAccount, on_delete=models.CASCADE, related_name='websites')
    name = models.CharField(max_length=200)
    template = models.CharField(max_length=20, choices=TEMPLATE_CHOICES, default='business')
    title = models.CharField(max_length=300, blank=True, default='')
    description = models.TextField(blank=True, default='')
    content = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'websites'
        ordering = ['-created_at']
