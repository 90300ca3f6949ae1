import uuid

from django.db import models
from bizos.businesses.models import BusinessAccount


class GeneratedImage(models.Model):
    """AI-generated marketing image kept in a business's studio gallery"""
    STYLE_CHOICES = [
        ('realistic', 'Realistic'),
        ('illustration', 'Illustration'),
        ('abstract', 'Abstract'),
        ('minimalist', 'Minimalist'),
        ('vintage', 'Vintage'),
        ('modern', 'Modern'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business = models.ForeignKey(BusinessAccount, on_delete=models.CASCADE, related_name='generated_images')
    prompt = models.TextField()
    style = models.CharField(max_length=50)
    image_url = models.CharField(max_length=1000)
    storage_path = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.style}: {self.prompt[:40]}"

    class Meta:
        db_table = 'generated_images'
        ordering = ['-created_at']
